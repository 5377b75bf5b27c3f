"""Concurrent redemption of one refresh token against PostgreSQL.

SQLite serializes everything through one connection, so the race between
two transactions can only be shown on a real server.
"""

import asyncio
from datetime import timedelta

import pytest

from warden.domain.shared.time import utc_now
from warden_auth import (
    JWTService,
    PasswordHashingService,
    RefreshTokenService,
    TokenRevokedError,
)
from warden_auth.persistence.sqlalchemy import RefreshTokenRepositorySQLAlchemy
from warden_identity import Account, AuthenticationService
from warden_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

pytestmark = pytest.mark.integration

TEST_TOKEN = "c" * 64


@pytest.fixture
async def account(db_session):
    account = Account.create("race@example.com", "$2b$04$placeholder", "Race")
    await AccountRepositorySQLAlchemy(db_session).create(account)
    await RefreshTokenRepositorySQLAlchemy(db_session).create(
        account_id=account.id,
        token=TEST_TOKEN,
        expires_at=utc_now() + timedelta(days=7),
    )
    await db_session.commit()
    return account


class TestConcurrentRevoke:
    @pytest.mark.asyncio
    async def test_exactly_one_revoke_wins(self, account, pg_session_maker):
        async def attempt() -> bool:
            async with pg_session_maker() as session:
                won = await RefreshTokenRepositorySQLAlchemy(session).revoke(TEST_TOKEN)
                await session.commit()
                return won

        results = await asyncio.gather(attempt(), attempt())

        assert sorted(results) == [False, True]

    @pytest.mark.asyncio
    async def test_exactly_one_refresh_succeeds(
        self, account, pg_session_maker, rsa_key_pair
    ):
        jwt_service = JWTService(rsa_key_pair.private_key, rsa_key_pair.public_key)

        async def attempt():
            async with pg_session_maker() as session:
                service = AuthenticationService(
                    account_repository=AccountRepositorySQLAlchemy(session),
                    refresh_token_repository=RefreshTokenRepositorySQLAlchemy(session),
                    password_service=PasswordHashingService(rounds=4),
                    jwt_service=jwt_service,
                    refresh_token_service=RefreshTokenService(),
                )
                try:
                    result = await service.refresh_token(TEST_TOKEN)
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
                return result

        outcomes = await asyncio.gather(attempt(), attempt(), return_exceptions=True)

        winners = [o for o in outcomes if not isinstance(o, BaseException)]
        losers = [o for o in outcomes if isinstance(o, BaseException)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert isinstance(losers[0], TokenRevokedError)
        assert winners[0].account.id == account.id

        async with pg_session_maker() as session:
            active = await RefreshTokenRepositorySQLAlchemy(
                session,
            ).find_by_account_id(account.id)
        assert [record.token for record in active] == [winners[0].refresh_token]
