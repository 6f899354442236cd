"""
SQLAlchemy models for stored Monzo OAuth credentials.
"""

from sqlalchemy import Column, DateTime, Integer, String, func

from potsweep.db import Base


class User(Base):
    """
    User model for storing Monzo OAuth credentials.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    monzo_user_id = Column(String, unique=True, nullable=False, index=True)
    monzo_access_token = Column(String, nullable=False)
    monzo_refresh_token = Column(String, nullable=True)
    monzo_token_type = Column(
        String, nullable=True, doc="OAuth2 token type (usually 'Bearer')"
    )
    monzo_token_expires_in = Column(
        Integer, nullable=True, doc="Lifetime of the access token in seconds"
    )
    monzo_client_id = Column(
        String, nullable=True, doc="Monzo client ID associated with the token"
    )
    monzo_client_secret = Column(
        String, nullable=True, doc="Monzo client secret used for OAuth (sensitive)"
    )
    monzo_redirect_uri = Column(
        String, nullable=True, doc="Monzo redirect URI used for OAuth"
    )
    monzo_token_obtained_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        doc="Timestamp when the token was obtained",
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<User monzo_user_id={self.monzo_user_id}>"
