"""JWT token service.

Issues RS256-signed access tokens and verifies them against the matching
public key. The public key is also published as a JWKS document so other
services can verify tokens without sharing a secret.
"""

import copy
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from uuid import UUID

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.utils import to_base64url_uint

from warden_auth.exceptions import InvalidTokenError, TokenFailureReason
from warden_auth.schemas import AccessTokenClaims
from warden_auth.services.signing_keys import (
    ensure_key_pair,
    load_private_key,
    load_public_key,
)

logger = logging.getLogger(__name__)


def build_jwks(public_key: rsa.RSAPublicKey) -> dict[str, Any]:
    """Build a JSON Web Key Set holding a single RS256 verification key.

    ``n`` and ``e`` are the unpadded base64url encodings of the big-endian
    modulus and exponent.
    """
    numbers = public_key.public_numbers()
    return {
        "keys": [
            {
                "kty": "RSA",
                "use": "sig",
                "alg": "RS256",
                "n": to_base64url_uint(numbers.n).decode("ascii"),
                "e": to_base64url_uint(numbers.e).decode("ascii"),
            },
        ],
    }


class JWTService:
    """Service for access token creation and verification.

    Examples
    --------
    >>> service = JWTService.from_pem_files(
    ...     "keys/private_key.pem", "keys/public_key.pem"
    ... )
    >>> token = service.create_access_token(account_id, "user@example.com")
    >>> claims = service.verify_token(token)
    >>> print(claims.account_id)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    DEFAULT_ISSUER = "warden"
    ALGORITHM = "RS256"

    def __init__(
        self,
        private_key: rsa.RSAPrivateKey,
        public_key: rsa.RSAPublicKey,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        issuer: str = DEFAULT_ISSUER,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        private_key
            RSA key used to sign access tokens
        public_key
            RSA key used to verify access tokens and published via JWKS
        access_token_expire_minutes
            Minutes until an access token expires (default 15)
        issuer
            Value of the ``iss`` claim, checked on verification
        """
        if access_token_expire_minutes <= 0:
            msg = "Access token lifetime must be positive"
            raise ValueError(msg)
        if not issuer:
            msg = "JWT issuer cannot be empty"
            raise ValueError(msg)

        ensure_key_pair(private_key, public_key)

        self._private_key = private_key
        self._public_key = public_key
        self._issuer = issuer
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        self._jwks = build_jwks(public_key)

    @classmethod
    def from_pem_files(
        cls,
        private_key_path: Path | str,
        public_key_path: Path | str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        issuer: str = DEFAULT_ISSUER,
    ) -> "JWTService":
        """Build the service from PEM files on disk.

        Raises
        ------
        KeyMaterialError
            If either file is missing or malformed, a key is not RSA, or
            the public key does not belong to the private key
        """
        private_key = load_private_key(Path(private_key_path))
        public_key = load_public_key(Path(public_key_path))
        service = cls(
            private_key=private_key,
            public_key=public_key,
            access_token_expire_minutes=access_token_expire_minutes,
            issuer=issuer,
        )
        logger.info(
            "Loaded RS256 signing keys (%d bits), issuer=%s",
            private_key.key_size,
            issuer,
        )
        return service

    @property
    def access_token_expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return int(self._access_expire.total_seconds())

    @property
    def issuer(self) -> str:
        return self._issuer

    def create_access_token(
        self,
        account_id: UUID,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token.

        Parameters
        ----------
        account_id
            The account's unique identifier
        email
            The account's email address
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._access_expire)

        payload = {
            "account_id": str(account_id),
            "email": email,
            "iss": self._issuer,
            "sub": str(account_id),
            "iat": now,
            "nbf": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._private_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> AccessTokenClaims:
        """Verify and decode an access token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        AccessTokenClaims containing the decoded data

        Raises
        ------
        InvalidTokenError
            If the token is malformed, signed with another algorithm or key,
            expired, not yet valid, or carries unexpected claims
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(reason=TokenFailureReason.MALFORMED) from e

        if header.get("alg") != self.ALGORITHM:
            raise InvalidTokenError(reason=TokenFailureReason.ALGORITHM)

        try:
            payload = jwt.decode(
                token,
                self._public_key,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "nbf", "iss", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError(reason=TokenFailureReason.EXPIRED) from e
        except jwt.ImmatureSignatureError as e:
            raise InvalidTokenError(reason=TokenFailureReason.NOT_YET_VALID) from e
        except jwt.InvalidSignatureError as e:
            raise InvalidTokenError(reason=TokenFailureReason.SIGNATURE) from e
        except jwt.InvalidAlgorithmError as e:
            raise InvalidTokenError(reason=TokenFailureReason.ALGORITHM) from e
        except jwt.DecodeError as e:
            raise InvalidTokenError(reason=TokenFailureReason.MALFORMED) from e
        except jwt.InvalidTokenError as e:
            # issuer mismatch, missing required claim, ...
            raise InvalidTokenError(reason=TokenFailureReason.CLAIMS) from e

        try:
            account_id = UUID(payload["account_id"])
            if payload["sub"] != str(account_id):
                msg = "sub does not match account_id"
                raise ValueError(msg)
            return AccessTokenClaims(
                account_id=account_id,
                email=payload["email"],
                issuer=payload["iss"],
                subject=payload["sub"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                not_before=datetime.fromtimestamp(payload["nbf"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(reason=TokenFailureReason.CLAIMS) from e

    def get_jwks(self) -> dict[str, Any]:
        """Return the public key as a JSON Web Key Set."""
        return copy.deepcopy(self._jwks)
