"""Dashboard load sequence: balance, then movements, then analytics"""

import logging
from typing import List, Optional

from bank_dashboard.domain.analytics import InvalidRecordPolicy, parse_amount, process_financials
from bank_dashboard.domain.models import FinancialStats, LogEventType, Movement
from bank_dashboard.infrastructure.clients.monitored import MonitoredFetcher
from bank_dashboard.infrastructure.observability.logging import log_analytics
from bank_dashboard.infrastructure.observability.metrics import record_analytics


class DashboardView:
    """
    State of one account's dashboard.

    Holds the last successfully loaded balance, ledger and stats. A failed
    load leaves them untouched.
    """

    def __init__(
        self,
        fetcher: MonitoredFetcher,
        account_id: str,
        policy: InvalidRecordPolicy = InvalidRecordPolicy.DROP,
    ):
        self.fetcher = fetcher
        self.account_id = account_id
        self.policy = policy

        self.loading = False
        self.balance: float = 0.0
        self.movements: List[Movement] = []
        self.stats: Optional[FinancialStats] = None
        self.last_error: Optional[str] = None

    @property
    def balance_endpoint(self) -> str:
        return f"/api/accounts/{self.account_id}/balance"

    @property
    def movements_endpoint(self) -> str:
        return f"/api/accounts/{self.account_id}/movements"

    async def load(self) -> None:
        """
        Run the two startup fetches in order under one failure handler.

        A failure in the balance fetch skips the movements fetch; the error is
        logged and kept in last_error, and previously loaded data stays.
        """
        self.loading = True
        self.last_error = None
        try:
            balance_data = await self.fetcher.fetch(self.balance_endpoint)
            if isinstance(balance_data, dict) and "balance" in balance_data:
                self._set_balance(balance_data["balance"])

            movements_data = await self.fetcher.fetch(self.movements_endpoint)
            if movements_data is not None:
                result = process_financials(movements_data, self.policy)
                self.movements = result.ledger
                self.stats = result.stats
                self._record(result.stats)

        except Exception as e:
            self.last_error = str(e) or e.__class__.__name__
            logging.error(f"Initial dashboard load failed: {e}", extra={"account_id": self.account_id})

        finally:
            self.loading = False

    def _set_balance(self, value) -> None:
        try:
            self.balance = parse_amount(value)
        except ValueError:
            logging.warning(f"Ignoring unparsable balance {value!r}", extra={"account_id": self.account_id})

    def _record(self, stats: FinancialStats) -> None:
        record_analytics(
            high_value_count=stats.high_value_count,
            duplicate_count=stats.duplicate_count,
            rejected_count=len(stats.rejected),
        )
        log_analytics(self.account_id, len(self.movements), len(stats.rejected), len(stats.risks))

    def simulate_error(self) -> None:
        """Inject a synthetic critical failure into the monitoring log"""
        self.fetcher.log_store.append(
            endpoint="/api/simulated-crash",
            status=500,
            latency=4500,
            type=LogEventType.ERROR,
            message="Simulated Critical Failure",
        )
