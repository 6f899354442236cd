"""
Auth service for Monzo OAuth token persistence.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from potsweep.db import get_db_session
from potsweep.models import User

logger = logging.getLogger(__name__)


def save_monzo_tokens_to_user(
    db,
    tokens: Dict[str, Any],
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
) -> User:
    """
    Create or update a User with Monzo OAuth tokens and metadata.

    Args:
        db: SQLAlchemy session
        tokens: Token dict as returned by a Monzo token exchange or refresh
        client_id: The Monzo client ID, if known
        client_secret: The Monzo client secret, if known

    Returns:
        The User object (created or updated)
    """
    user_id = tokens.get("user_id")
    if not user_id:
        raise ValueError("tokens must include the Monzo user_id")

    user = db.query(User).filter_by(monzo_user_id=user_id).first()
    if not user:
        user = User(monzo_user_id=user_id)
        db.add(user)
    user.monzo_access_token = str(tokens.get("access_token") or "INVALID")
    refresh_token = tokens.get("refresh_token")
    if refresh_token is not None:
        user.monzo_refresh_token = str(refresh_token)
    token_type = tokens.get("token_type")
    if token_type is not None:
        user.monzo_token_type = str(token_type)
    expires_in = tokens.get("expires_in")
    if expires_in is not None:
        user.monzo_token_expires_in = int(expires_in)
    if client_id is not None:
        user.monzo_client_id = str(client_id)
    if client_secret is not None:
        user.monzo_client_secret = str(client_secret)
    user.monzo_token_obtained_at = datetime.now(timezone.utc)
    db.commit()
    return user


def get_user(db, user_id: Optional[str] = None) -> Optional[User]:
    """The user with ``user_id``, or the most recently stored user."""
    if user_id:
        return db.query(User).filter_by(monzo_user_id=user_id).first()
    return db.query(User).order_by(User.id.desc()).first()


def persist_refreshed_tokens(tokens: Dict[str, Any]) -> None:
    """Write refreshed tokens back to the database in a fresh session."""
    if not tokens.get("user_id"):
        logger.warning("Refreshed tokens carry no user_id, not persisting them")
        return
    with next(get_db_session()) as db:
        save_monzo_tokens_to_user(db, tokens)
    logger.info(f"Stored refreshed tokens for user {tokens['user_id']}")


def get_authenticated_monzo_client(db, user_id: Optional[str] = None):
    """
    Get an authenticated MonzoClient instance for a user.

    Args:
        db: SQLAlchemy session
        user_id: Optional Monzo user ID. If None, uses the most recent user.

    Returns:
        MonzoClient, or None if no user with complete credentials exists
    """
    user = get_user(db, user_id)
    if not user:
        return None

    if not (user.monzo_client_id and user.monzo_client_secret and user.monzo_access_token):
        logger.warning(f"Stored credentials for {user.monzo_user_id} are incomplete")
        return None

    from potsweep.monzo.client import MonzoClient  # Lazy import

    return MonzoClient(
        client_id=str(user.monzo_client_id),
        client_secret=str(user.monzo_client_secret),
        redirect_uri=str(user.monzo_redirect_uri) if user.monzo_redirect_uri else "",
        tokens={
            "access_token": str(user.monzo_access_token),
            "refresh_token": (
                str(user.monzo_refresh_token) if user.monzo_refresh_token else ""
            ),
            "user_id": str(user.monzo_user_id),
        },
        on_tokens_refreshed=persist_refreshed_tokens,
    )
