"""
Catalog Backend: Admin Authorization
====================================

What:  Shared-secret admin check and the login exchange.
How:   One process-wide admin token and one admin password, both taken from
       Settings. `check()` compares a candidate token; `login()` trades the
       password for the token. Nothing is stored, nothing expires.
Who:   `require_admin` (catalog.dependencies) calls `check()` for every
       mutating route; POST /api/login calls `login()`.

Swapping in real per-user credentials later only means providing another
object with the same `check()` signature on `app.state.authorizer`.
"""

import hmac
import logging
from typing import Optional

from catalog.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


class Authorizer:
    """
    Static shared-secret authorizer.

    Args:
        admin_token:    Token every authorized request must present.
        admin_password: Password accepted by `login()`.
    """

    def __init__(self, admin_token: str, admin_password: str):
        self._admin_token = admin_token
        self._admin_password = admin_password

    def check(self, candidate: Optional[str]) -> bool:
        """True only when `candidate` is exactly the admin token."""
        if not candidate or not self._admin_token:
            return False
        return hmac.compare_digest(candidate.encode(), self._admin_token.encode())

    def login(self, password: Optional[str]) -> str:
        """
        Exchange the admin password for the admin token.

        Returns:
            The configured admin token, identical for every successful login.

        Raises:
            ValidationError: no password supplied (→ 400)
            AuthorizationError: wrong password (→ 401)
        """
        if not password:
            raise ValidationError(message="Missing password", field="password")

        if not self._admin_password or not hmac.compare_digest(
            password.encode(), self._admin_password.encode()
        ):
            logger.warning("Admin login rejected: wrong password")
            raise AuthorizationError(message="Wrong password")

        logger.info("Admin login succeeded")
        return self._admin_token
