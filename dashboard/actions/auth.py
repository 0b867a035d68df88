# dashboard/actions/auth.py

import logging
from typing import Any, Mapping, Optional

from dashboard.auth.providers import AuthError, CredentialsProvider, CredentialsSignin

logger = logging.getLogger(__name__)


def authenticate(
    provider: CredentialsProvider,
    form_data: Mapping[str, Any],
    prev_state: Optional[str] = None,
) -> Optional[str]:
    """
    Forward submitted credentials to `provider`.

    Returns None when the provider accepts them, otherwise a short
    message for the sign-in form. Errors outside the AuthError family
    propagate.
    """
    try:
        provider.sign_in(form_data)
    except CredentialsSignin:
        return "Invalid credentials."
    except AuthError as e:
        logger.warning(f"Sign-in failed: {e}")
        return "Something went wrong."
    return None
