# dashboard/api/auth.py

from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.actions.auth import authenticate
from dashboard.auth.providers import CredentialsProvider, DatabaseCredentialsProvider
from dashboard.db.engine import get_engine

router = APIRouter(tags=["auth"])


def get_credentials_provider(engine: Engine = Depends(get_engine)) -> CredentialsProvider:
    return DatabaseCredentialsProvider(engine)


@router.post("/login")
def login(
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    redirect_to: str = Form("/dashboard", alias="redirectTo"),
    provider: CredentialsProvider = Depends(get_credentials_provider),
):
    """
    Sign in with email and password. Redirects on success, otherwise
    returns the error message for the form.
    """
    # Only same-site paths are followed
    if not redirect_to.startswith("/") or redirect_to.startswith("//"):
        redirect_to = "/dashboard"

    message = authenticate(provider, {"email": email, "password": password})
    if message is not None:
        return JSONResponse(status_code=401, content={"message": message})

    return RedirectResponse(redirect_to, status_code=303)
