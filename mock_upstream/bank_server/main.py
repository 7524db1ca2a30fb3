from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Bank Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/bank_stub") if os.path.exists("/bank_stub") else Path(__file__).resolve().parents[1] / "bank_stub"
API_KEY = os.getenv("MOCK_BANK_API_KEY", "test-key")


def _load(name: str):
    file = DATA_DIR / name
    if not file.exists():
        raise HTTPException(status_code=404, detail="account not found")
    return JSONResponse(content=json.loads(file.read_text()))


def _check_key(x_api_key: str | None):
    if x_api_key != API_KEY:
        raise HTTPException(status_code=401, detail="invalid api key")


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/api/accounts/{account_id}/balance")
def get_balance(account_id: str, x_api_key: str | None = Header(None)):
    _check_key(x_api_key)
    return _load(f"balance_{account_id}.json")

@app.get("/api/accounts/{account_id}/movements")
def get_movements(account_id: str, x_api_key: str | None = Header(None)):
    _check_key(x_api_key)
    return _load(f"movements_{account_id}.json")
