"""GET /api/proxy - Relay a request to the upstream bank API"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from bank_dashboard.api.dependencies import get_bank_client
from bank_dashboard.infrastructure.clients.bank import BankClient

router = APIRouter()


@router.get("/proxy")
async def proxy(
    endpoint: Optional[str] = Query(None, description="Upstream path, e.g. /api/accounts/999/balance"),
    bank_client: BankClient = Depends(get_bank_client),
):
    """
    Forward a GET to the bank API with the configured API key.

    Returns:
        Upstream JSON body and status verbatim; 400 without endpoint,
        502 when the upstream cannot be reached
    """
    if not endpoint:
        return JSONResponse({"error": "Endpoint required"}, status_code=400)

    response = await bank_client.relay(endpoint)
    return JSONResponse(response.body, status_code=response.status)
