"""Authentication service for account registration, login and sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from warden.domain.shared.time import utc_now
from warden_auth import (
    AccessTokenClaims,
    InvalidCredentialsError,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    RefreshTokenService,
    TokenExpiredError,
    TokenRevokedError,
    WeakPasswordError,
)
from warden_identity.domain.account import (
    Account,
    AccountAlreadyExistsError,
    AccountNotFoundError,
)

if TYPE_CHECKING:
    from warden_auth.repositories import RefreshTokenRepository
    from warden_identity.domain.account import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """Token pair handed out after register, login or refresh."""

    access_token: str
    refresh_token: str
    expires_in: int
    account: Account
    token_type: str = "Bearer"


class AuthenticationService:
    """
    Application service for account authentication.

    Orchestrates warden_auth infrastructure (password hashing, access
    tokens, refresh tokens) with the Account aggregate to provide:
    - Registration and login
    - Refresh-token rotation
    - Logout of one session or of every session of an account
    - Access-token validation

    The service never commits. Every call runs inside the caller's
    transaction, which makes "revoke old token, store new token" during
    a refresh atomic.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        refresh_token_repository: RefreshTokenRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        refresh_token_service: RefreshTokenService,
    ):
        self._account_repo = account_repository
        self._refresh_repo = refresh_token_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._refresh_service = refresh_token_service

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """Create an account and open its first session.

        Raises
        ------
        AccountAlreadyExistsError
            If the email is already registered
        WeakPasswordError
            If the password does not meet requirements
        """
        existing = await self._account_repo.find_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError(email)

        password_hash = self._password_service.hash(password)
        account = await self._account_repo.create(
            Account.create(email=email, password_hash=password_hash, name=name),
        )

        logger.info("Account registered: %s (%s)", email, account.id)
        return await self._issue_token_pair(account)

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and open a new session.

        Unknown emails and wrong passwords are indistinguishable to the
        caller: same error, same bcrypt cost.

        Raises
        ------
        InvalidCredentialsError
            If email or password is wrong
        """
        account = await self._account_repo.find_by_email(email)
        if account is None:
            self._password_service.verify_dummy(password)
            raise InvalidCredentialsError

        if not self._password_service.verify(password, account.password_hash):
            logger.info("Failed login for account: %s", account.id)
            raise InvalidCredentialsError

        if self._password_service.needs_rehash(account.password_hash):
            account = await self._rehash_password(account, password)

        logger.info("Account logged in: %s", email)
        return await self._issue_token_pair(account)

    async def refresh_token(self, refresh_token: str) -> AuthResult:
        """Redeem a refresh token for a brand-new token pair.

        Each refresh token can be redeemed exactly once.

        Raises
        ------
        InvalidTokenError
            If the token is unknown
        TokenRevokedError
            If the token was revoked or already redeemed
        TokenExpiredError
            If the token is past its expiry
        AccountNotFoundError
            If the owning account no longer exists
        """
        record = await self._refresh_repo.find_by_token(refresh_token)
        if record is None:
            msg = "Invalid refresh token"
            raise InvalidTokenError(msg)

        if record.is_revoked:
            logger.warning(
                "Revoked refresh token presented for account: %s",
                record.account_id,
            )
            raise TokenRevokedError

        if record.is_expired(utc_now()):
            raise TokenExpiredError

        if not await self._refresh_repo.revoke(refresh_token):
            # Another request redeemed it between our read and our update
            logger.warning(
                "Concurrent refresh lost for account: %s",
                record.account_id,
            )
            raise TokenRevokedError

        account = await self._account_repo.find_by_id(record.account_id)
        if account is None:
            raise AccountNotFoundError(record.account_id)

        logger.debug("Tokens refreshed for account: %s", account.id)
        return await self._issue_token_pair(account)

    async def logout(self, refresh_token: str) -> None:
        """Revoke one refresh token. Unknown or revoked tokens are ignored."""
        if await self._refresh_repo.revoke(refresh_token):
            logger.info("Refresh token revoked on logout")

    async def logout_all(self, account_id: UUID) -> int:
        """Revoke every active refresh token of an account.

        Returns
        -------
        Number of tokens revoked
        """
        revoked = await self._refresh_repo.revoke_all_by_account_id(account_id)
        logger.info("Logged out everywhere: %s (%d sessions)", account_id, revoked)
        return revoked

    def validate_access_token(self, token: str) -> AccessTokenClaims:
        """Verify an access token and return its claims.

        Raises
        ------
        InvalidTokenError
            For every kind of failure; the precise reason is only logged
        """
        try:
            return self._jwt_service.verify_token(token)
        except InvalidTokenError as e:
            reason = e.reason.value if e.reason else "unknown"
            logger.warning("Access token rejected: %s", reason)
            raise

    async def get_account(self, account_id: UUID) -> Account:
        """Load an active account.

        Raises
        ------
        AccountNotFoundError
            If the account does not exist or was deleted
        """
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def purge_expired_tokens(self) -> int:
        """Delete expired refresh-token records. Returns the number removed."""
        deleted = await self._refresh_repo.delete_expired()
        logger.info("Purged %d expired refresh tokens", deleted)
        return deleted

    async def _rehash_password(self, account: Account, password: str) -> Account:
        try:
            new_hash = self._password_service.hash(password)
        except WeakPasswordError:
            # Predates the current policy; keep the old hash
            logger.debug("Skipping rehash for account: %s", account.id)
            return account

        account.change_password_hash(new_hash)
        logger.info("Rehashed password for account: %s", account.id)
        return await self._account_repo.update(account)

    async def _issue_token_pair(self, account: Account) -> AuthResult:
        access_token = self._jwt_service.create_access_token(
            account_id=account.id,
            email=account.email,
        )
        issued = self._refresh_service.issue(account.id)
        await self._refresh_repo.create(
            account_id=account.id,
            token=issued.token,
            expires_at=issued.expires_at,
        )
        return AuthResult(
            access_token=access_token,
            refresh_token=issued.token,
            expires_in=self._jwt_service.access_token_expires_in,
            account=account,
        )
