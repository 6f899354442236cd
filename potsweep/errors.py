"""
Exception types raised while resolving, computing and applying operations.
"""

from typing import Optional


class PotSweepError(Exception):
    """Base class for every error the tool raises on purpose."""


class NotFound(PotSweepError):
    """A configured account id or pot name has no match in the live state."""

    def __init__(self, identifier: str, kind: str = "pot"):
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"not found: {kind} {identifier!r}")


class NoPotGoal(PotSweepError):
    """A candidate pot has no goal amount set."""

    def __init__(self, pot_name: str):
        self.pot_name = pot_name
        super().__init__(f"pot {pot_name!r} has no goal amount set")


class ClientError(PotSweepError):
    """
    Any failure surfaced by the Monzo API (transport, auth, rate limit, validation).

    ``identifier`` names the pot or account the failing call concerned, when known.
    """

    def __init__(self, message: str, identifier: Optional[str] = None):
        self.identifier = identifier
        if identifier:
            message = f"{identifier}: {message}"
        super().__init__(message)


class ConfigError(PotSweepError):
    """The operations file or stored credentials are missing or invalid."""
