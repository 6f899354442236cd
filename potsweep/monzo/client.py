"""
MonzoClient utility for handling token refresh and Monzo API calls using monzo_apy.
"""

import logging
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

from monzo import MonzoAuthenticationError
from monzo import MonzoClient as MonzoApyClient

from potsweep.errors import ClientError

logger = logging.getLogger(__name__)

TOKEN_ERROR_TERMS = ("unauthorized", "token", "expired", "invalid")
REFRESH_EXPIRED_TERMS = ("invalid_grant", "refresh_token", "expired")


class MonzoClient:
    """
    Wrapper for monzo_apy MonzoClient handling token refresh and error translation.

    Calls may come from several threads at once; a refresh triggered by one of
    them is shared with the others.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        tokens: Optional[Dict[str, Any]] = None,
        redirect_uri: str = None,
        on_tokens_refreshed: Optional[Callable[[Dict[str, Any]], None]] = None,
    ):
        if not client_id or not client_secret:
            raise ValueError("MonzoClient requires client_id and client_secret")
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri or ""
        self.tokens = dict(tokens or {})
        self.on_tokens_refreshed = on_tokens_refreshed
        self._refresh_lock = threading.Lock()

        self.client = MonzoApyClient(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            access_token=self.tokens.get("access_token"),
            refresh_token=self.tokens.get("refresh_token"),
        )

    def refresh_access_token(self) -> Dict[str, Any]:
        """
        Refreshes the access token using the refresh token.
        """
        try:
            logger.info("Attempting to refresh access token")
            tokens = self.client.refresh_access_token()
        except Exception as e:
            error_msg = str(e).lower()
            logger.error(f"Token refresh failed: {error_msg}")
            if any(term in error_msg for term in REFRESH_EXPIRED_TERMS):
                raise ClientError("refresh token has expired, please reauthenticate") from e
            raise ClientError(f"token refresh failed: {e}") from e

        self.tokens.update(tokens or {})
        if hasattr(self.client, "access_token"):
            self.client.access_token = self.tokens.get("access_token")
        if hasattr(self.client, "refresh_token"):
            self.client.refresh_token = self.tokens.get("refresh_token")
        logger.info("Access token refreshed successfully")

        if self.on_tokens_refreshed is not None:
            self.on_tokens_refreshed(dict(self.tokens))
        return self.tokens

    @staticmethod
    def _is_token_error(error: Exception) -> bool:
        if isinstance(error, MonzoAuthenticationError):
            return True
        response = getattr(error, "response", None)
        if response is not None and getattr(response, "status_code", None) == 401:
            return True
        return any(term in str(error).lower() for term in TOKEN_ERROR_TERMS)

    def _with_token_refresh(self, identifier: Optional[str], func, *args, **kwargs):
        """
        Call ``func`` and, on an authorization error, refresh the token once and retry.

        Every failure is raised as ClientError annotated with ``identifier``.
        """
        access_token = self.tokens.get("access_token")
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not self._is_token_error(e):
                raise ClientError(str(e), identifier) from e
            logger.warning(f"Token refresh needed due to error: {e}")

        with self._refresh_lock:
            # another call may already have refreshed while this one was failing
            if self.tokens.get("access_token") == access_token:
                self.refresh_access_token()

        try:
            return func(*args, **kwargs)
        except Exception as e:
            raise ClientError(str(e), identifier) from e

    def get_accounts(self) -> List[Any]:
        return self._with_token_refresh(None, self.client.get_accounts)

    def get_pots(self, account_id: str) -> List[Any]:
        return self._with_token_refresh(account_id, self.client.get_pots, account_id)

    def get_balance(self, account_id: str) -> Any:
        return self._with_token_refresh(account_id, self.client.get_balance, account_id)

    def deposit_to_pot(self, pot_id: str, account_id: str, amount: int) -> Any:
        """
        Deposits money from an account into a pot.
        """
        return self._with_token_refresh(
            pot_id,
            self.client.deposit_to_pot,
            pot_id,
            account_id,
            amount,
            dedupe_id=f"potsweep_{uuid.uuid4()}",
        )

    def withdraw_from_pot(self, pot_id: str, account_id: str, amount: int) -> Any:
        """
        Withdraws money from a pot into an account.
        """
        return self._with_token_refresh(
            pot_id,
            self.client.withdraw_from_pot,
            pot_id,
            account_id,
            amount,
            dedupe_id=f"potsweep_{uuid.uuid4()}",
        )
