"""Unit tests for AuthenticationService."""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from warden.domain.shared.time import utc_now
from warden_auth import (
    AccessTokenClaims,
    InvalidCredentialsError,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    RefreshTokenData,
    RefreshTokenService,
    TokenExpiredError,
    TokenFailureReason,
    TokenRevokedError,
    WeakPasswordError,
)
from warden_identity import (
    Account,
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AuthenticationService,
)

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "secure_password_123"
TEST_HASH = "$2b$04$storedhashstoredhashstoredhashstoredhashstoredhash012"
TEST_ACCESS_TOKEN = "header.payload.signature"
TEST_REFRESH_TOKEN = "a" * 64


def _refresh_record(
    account_id,
    token: str = TEST_REFRESH_TOKEN,
    expires_in: timedelta = timedelta(days=7),
    is_revoked: bool = False,
) -> RefreshTokenData:
    now = utc_now()
    return RefreshTokenData(
        id=1,
        account_id=account_id,
        token=token,
        expires_at=now + expires_in,
        is_revoked=is_revoked,
        created_at=now,
        updated_at=now,
    )


class _ServiceTestBase:
    def setup_method(self):
        """Set up test fixtures."""
        self.account_repo = AsyncMock()
        self.account_repo.create.side_effect = lambda account: account
        self.account_repo.update.side_effect = lambda account: account
        self.refresh_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = TEST_HASH
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.jwt_service = Mock(spec=JWTService)
        self.jwt_service.create_access_token.return_value = TEST_ACCESS_TOKEN
        self.jwt_service.access_token_expires_in = 900

        self.service = AuthenticationService(
            account_repository=self.account_repo,
            refresh_token_repository=self.refresh_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
            refresh_token_service=RefreshTokenService(),
        )

        self.account = Account.create(TEST_EMAIL, TEST_HASH, "Ada")


class TestRegister(_ServiceTestBase):
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_register_success(self):
        self.account_repo.find_by_email.return_value = None

        result = await self.service.register(TEST_EMAIL, TEST_PASSWORD, "Ada")

        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.account_repo.create.assert_called_once()
        created = self.account_repo.create.call_args[0][0]
        assert created.email == TEST_EMAIL
        assert created.name == "Ada"
        assert created.password_hash == TEST_HASH

        assert result.access_token == TEST_ACCESS_TOKEN
        assert result.expires_in == 900
        assert result.token_type == "Bearer"
        assert result.account == created
        assert len(result.refresh_token) == 64

    @pytest.mark.asyncio
    async def test_register_persists_refresh_token(self):
        self.account_repo.find_by_email.return_value = None

        result = await self.service.register(TEST_EMAIL, TEST_PASSWORD, "Ada")

        kwargs = self.refresh_repo.create.call_args.kwargs
        assert kwargs["account_id"] == result.account.id
        assert kwargs["token"] == result.refresh_token
        lifetime = kwargs["expires_at"] - utc_now()
        assert timedelta(days=6, hours=23) < lifetime <= timedelta(days=7)

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self):
        self.account_repo.find_by_email.return_value = self.account

        with pytest.raises(AccountAlreadyExistsError):
            await self.service.register(TEST_EMAIL, TEST_PASSWORD, "Ada")

        self.password_service.hash.assert_not_called()
        self.account_repo.create.assert_not_called()
        self.refresh_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_weak_password(self):
        self.account_repo.find_by_email.return_value = None
        self.password_service.hash.side_effect = WeakPasswordError("too short")

        with pytest.raises(WeakPasswordError):
            await self.service.register(TEST_EMAIL, "short", "Ada")

        self.account_repo.create.assert_not_called()
        self.refresh_repo.create.assert_not_called()


class TestLogin(_ServiceTestBase):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_success(self):
        self.account_repo.find_by_email.return_value = self.account

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        self.password_service.verify.assert_called_once_with(TEST_PASSWORD, TEST_HASH)
        self.jwt_service.create_access_token.assert_called_once_with(
            account_id=self.account.id,
            email=TEST_EMAIL,
        )
        assert result.account == self.account
        self.refresh_repo.create.assert_called_once()

    @pytest.mark.asyncio
    async def test_login_unknown_email_runs_dummy_verification(self):
        self.account_repo.find_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.password_service.verify_dummy.assert_called_once_with(TEST_PASSWORD)
        self.refresh_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self):
        self.account_repo.find_by_email.return_value = self.account
        self.password_service.verify.return_value = False

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(TEST_EMAIL, "wrong_password")

        self.refresh_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_alike(self):
        self.account_repo.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.account_repo.find_by_email.return_value = self.account
        self.password_service.verify.return_value = False
        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login(TEST_EMAIL, "wrong_password")

        assert unknown.value.message == wrong.value.message
        assert unknown.value.code == wrong.value.code

    @pytest.mark.asyncio
    async def test_login_rehashes_outdated_hash(self):
        self.account_repo.find_by_email.return_value = self.account
        self.password_service.needs_rehash.return_value = True
        self.password_service.hash.return_value = "new-hash"

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        self.account_repo.update.assert_called_once()
        assert result.account.password_hash == "new-hash"

    @pytest.mark.asyncio
    async def test_login_keeps_hash_when_password_predates_policy(self):
        self.account_repo.find_by_email.return_value = self.account
        self.password_service.needs_rehash.return_value = True
        self.password_service.hash.side_effect = WeakPasswordError

        result = await self.service.login(TEST_EMAIL, "short")

        self.account_repo.update.assert_not_called()
        assert result.account.password_hash == TEST_HASH


class TestRefreshToken(_ServiceTestBase):
    """Tests for refresh-token rotation."""

    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self):
        self.refresh_repo.find_by_token.return_value = _refresh_record(self.account.id)
        self.refresh_repo.revoke.return_value = True
        self.account_repo.find_by_id.return_value = self.account

        result = await self.service.refresh_token(TEST_REFRESH_TOKEN)

        self.refresh_repo.revoke.assert_called_once_with(TEST_REFRESH_TOKEN)
        assert result.refresh_token != TEST_REFRESH_TOKEN
        assert result.account == self.account
        assert self.refresh_repo.create.call_args.kwargs["token"] == (
            result.refresh_token
        )

    @pytest.mark.asyncio
    async def test_refresh_unknown_token(self):
        self.refresh_repo.find_by_token.return_value = None

        with pytest.raises(InvalidTokenError):
            await self.service.refresh_token("unknown")

        self.refresh_repo.revoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_revoked_token(self):
        self.refresh_repo.find_by_token.return_value = _refresh_record(
            self.account.id,
            is_revoked=True,
        )

        with pytest.raises(TokenRevokedError):
            await self.service.refresh_token(TEST_REFRESH_TOKEN)

        self.refresh_repo.revoke.assert_not_called()
        self.refresh_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_expired_token(self):
        self.refresh_repo.find_by_token.return_value = _refresh_record(
            self.account.id,
            expires_in=timedelta(seconds=-1),
        )

        with pytest.raises(TokenExpiredError):
            await self.service.refresh_token(TEST_REFRESH_TOKEN)

        self.refresh_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_lost_race(self):
        """The conditional revoke found the token already revoked."""
        self.refresh_repo.find_by_token.return_value = _refresh_record(self.account.id)
        self.refresh_repo.revoke.return_value = False

        with pytest.raises(TokenRevokedError):
            await self.service.refresh_token(TEST_REFRESH_TOKEN)

        self.account_repo.find_by_id.assert_not_called()
        self.refresh_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_for_deleted_account(self):
        self.refresh_repo.find_by_token.return_value = _refresh_record(self.account.id)
        self.refresh_repo.revoke.return_value = True
        self.account_repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.refresh_token(TEST_REFRESH_TOKEN)

        self.refresh_repo.create.assert_not_called()


class TestLogout(_ServiceTestBase):
    """Tests for logout and logout_all."""

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self):
        self.refresh_repo.revoke.return_value = True

        await self.service.logout(TEST_REFRESH_TOKEN)

        self.refresh_repo.revoke.assert_called_once_with(TEST_REFRESH_TOKEN)

    @pytest.mark.asyncio
    async def test_logout_unknown_token_is_silent(self):
        self.refresh_repo.revoke.return_value = False

        await self.service.logout("unknown")

    @pytest.mark.asyncio
    async def test_logout_all(self):
        self.refresh_repo.revoke_all_by_account_id.return_value = 3

        revoked = await self.service.logout_all(self.account.id)

        assert revoked == 3
        self.refresh_repo.revoke_all_by_account_id.assert_called_once_with(
            self.account.id,
        )


class TestValidateAccessToken(_ServiceTestBase):
    """Tests for validate_access_token and get_account."""

    def test_valid_token_returns_claims(self):
        now = utc_now()
        claims = AccessTokenClaims(
            account_id=self.account.id,
            email=TEST_EMAIL,
            issuer="warden",
            subject=str(self.account.id),
            issued_at=now,
            not_before=now,
            expires_at=now + timedelta(minutes=15),
        )
        self.jwt_service.verify_token.return_value = claims

        assert self.service.validate_access_token(TEST_ACCESS_TOKEN) == claims

    def test_invalid_token_propagates(self):
        self.jwt_service.verify_token.side_effect = InvalidTokenError(
            reason=TokenFailureReason.EXPIRED,
        )

        with pytest.raises(InvalidTokenError) as exc_info:
            self.service.validate_access_token(TEST_ACCESS_TOKEN)

        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_get_account(self):
        self.account_repo.find_by_id.return_value = self.account

        assert await self.service.get_account(self.account.id) == self.account

    @pytest.mark.asyncio
    async def test_get_missing_account(self):
        self.account_repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.get_account(uuid4())


class TestPurgeExpiredTokens(_ServiceTestBase):
    @pytest.mark.asyncio
    async def test_purge_delegates_to_repository(self):
        self.refresh_repo.delete_expired.return_value = 5

        assert await self.service.purge_expired_tokens() == 5
