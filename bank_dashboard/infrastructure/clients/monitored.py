"""Monitored fetch interceptor: times every upstream call and records its outcome"""

import time
from typing import Any, Awaitable, Callable

from bank_dashboard.domain.exceptions import BankAPIError
from bank_dashboard.domain.health import classify_log_event
from bank_dashboard.infrastructure.clients.bank import RelayResponse
from bank_dashboard.infrastructure.observability.logging import log_fetch
from bank_dashboard.infrastructure.observability.metrics import record_fetch
from bank_dashboard.infrastructure.storage.log_store import LogStore

Relay = Callable[[str], Awaitable[RelayResponse]]

SUCCESS_STATUS = 200
FALLBACK_ERROR_STATUS = 500


class MonitoredFetcher:
    """Wraps the proxy relay so that every call leaves exactly one LogEvent behind"""

    def __init__(self, relay: Relay, log_store: LogStore):
        self.relay = relay
        self.log_store = log_store

    async def fetch(self, endpoint: str) -> Any:
        """
        Fetch endpoint through the relay and return the decoded body.

        Flow:
        1. Start the clock
        2. Relay the request; a status >= 400 becomes BankAPIError
        3. On any failure keep the known status, or fall back to 500
        4. Always append one LogEvent with the elapsed latency
        5. Re-raise the failure after logging

        Raises:
            BankAPIError: On non-success upstream status
        """
        start = time.perf_counter()
        status = SUCCESS_STATUS
        message = "OK"

        try:
            response = await self.relay(endpoint)
            status = response.status
            if status >= 400:
                raise BankAPIError(status)
            return response.body

        except Exception as e:
            status = FALLBACK_ERROR_STATUS if status == SUCCESS_STATUS else status
            message = str(e) or e.__class__.__name__
            raise

        finally:
            latency = round((time.perf_counter() - start) * 1000)
            event_type = classify_log_event(status, latency)
            self.log_store.append(
                endpoint=endpoint,
                status=status,
                latency=latency,
                type=event_type,
                message=message,
            )
            record_fetch(event_type.value, latency)
            log_fetch(endpoint, status, latency, event_type.value, message)
