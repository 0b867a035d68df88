# dashboard/main.py

import logging

from fastapi import FastAPI

from dashboard.api.auth import router as auth_router
from dashboard.api.invoices import router as invoices_router
from dashboard.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

app = FastAPI(
    title="Invoice Dashboard",
    version="0.1.0",
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(invoices_router)
