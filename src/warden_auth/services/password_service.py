"""Password hashing service using bcrypt.

Provides secure password hashing and verification with configurable
strength validation.
"""

import bcrypt

from warden_auth.exceptions import PasswordHashingError, WeakPasswordError


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Also provides password strength validation.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    # Password requirements
    MIN_LENGTH = 8
    # bcrypt only looks at the first 72 bytes of its input
    MAX_BYTES = 72

    _DUMMY_PASSWORD = b"warden-timing-equalizer"

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        PasswordHashingError
            If bcrypt itself fails
        """
        self.validate_strength(password)
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        except ValueError as e:
            msg = "Failed to hash password"
            raise PasswordHashingError(msg) from e
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise

        Raises
        ------
        PasswordHashingError
            If the stored hash is malformed
        """
        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_BYTES or b"\x00" in encoded:
            # hash() never accepts such a password, so it cannot match;
            # still pay one bcrypt check like the unknown-email path
            self.verify_dummy(password)
            return False

        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except (ValueError, TypeError) as e:
            msg = "Stored password hash is malformed"
            raise PasswordHashingError(msg) from e

    def verify_dummy(self, password: str) -> None:
        """Burn the same CPU time as a real verification.

        Used when no account matches the login email, so that a missing
        account and a wrong password take equally long to reject.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                self._DUMMY_PASSWORD,
                bcrypt.gensalt(rounds=self._rounds),
            )
        encoded = password.encode("utf-8").replace(b"\x00", b"")[: self.MAX_BYTES]
        bcrypt.checkpw(encoded, self._dummy_hash)

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Current requirements:
        - Minimum 8 characters
        - Maximum 72 bytes once UTF-8 encoded

        Parameters
        ----------
        password
            The password to validate

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

        if "\x00" in password:
            msg = "Password cannot contain NUL characters"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash needs to be rehashed.

        This is useful when upgrading the work factor. After changing
        the rounds setting, existing hashes can be identified for
        rehashing on next login.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError):
            pass
        return True
