"""Password hashing service using bcrypt.

Provides password hashing and verification together with the
password policy applied on create and update.
"""

import bcrypt

from userhub.domain.user.exceptions import WeakPasswordError

DEFAULT_ROUNDS = 10


class PasswordHashingService:
    """Service for password hashing and verification.

    Uses bcrypt with a configurable work factor and enforces
    the password length policy before hashing.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    MIN_LENGTH = 8
    # bcrypt only reads the first 72 bytes and newer releases reject longer input
    MAX_BYTES = 72

    def __init__(self, rounds: int = DEFAULT_ROUNDS, min_length: int = MIN_LENGTH):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 10.
        min_length
            Minimum accepted password length.
        """
        self._rounds = rounds
        self._min_length = min_length

    @property
    def rounds(self) -> int:
        return self._rounds

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
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets the policy.

        Raises
        ------
        WeakPasswordError
            If password is empty, too short or too long
        """
        if not isinstance(password, str) or not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self._min_length:
            msg = f"Password must be at least {self._min_length} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a hash was produced with a different work factor.

        Parameters
        ----------
        password_hash
            The existing hash to check (bcrypt format: $2b$XX$...)
        """
        try:
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, IndexError, AttributeError):
            pass
        return True
