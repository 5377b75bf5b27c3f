"""Opaque refresh token generation."""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

from warden_auth.schemas import IssuedRefreshToken


class RefreshTokenService:
    """Generates opaque refresh tokens and their expiry.

    Refresh tokens carry no claims: they are 32 random bytes, hex encoded,
    and only mean something through the record stored for them. Persisting
    that record is up to the caller.
    """

    DEFAULT_REFRESH_EXPIRE_DAYS = 7
    TOKEN_BYTES = 32

    def __init__(self, refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS):
        if refresh_token_expire_days <= 0:
            msg = "Refresh token lifetime must be positive"
            raise ValueError(msg)
        self._refresh_expire = timedelta(days=refresh_token_expire_days)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return self._refresh_expire

    def issue(self, account_id: UUID) -> IssuedRefreshToken:  # noqa: ARG002
        """Generate a new refresh token for an account.

        Parameters
        ----------
        account_id
            Owner of the token; the value is not encoded into the token

        Returns
        -------
        IssuedRefreshToken with the token string and its expiry
        """
        return IssuedRefreshToken(
            token=secrets.token_hex(self.TOKEN_BYTES),
            expires_at=datetime.now(tz=timezone.utc) + self._refresh_expire,
        )
