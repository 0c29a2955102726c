"""Password hashing utility using bcrypt.

Provides salted, adaptive password hashing with a configurable work factor.
The default of 10 rounds keeps digests compatible with ``$2b$10$`` hashes
produced by other bcrypt implementations.
"""

import bcrypt

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Hashes and verifies passwords with a fixed bcrypt work factor.

    One instance is built at startup from settings and shared by every
    request; it holds no mutable state.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (log2 of the number of iterations).
        """
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt.

        Args:
            password: The plaintext password to hash.

        Returns:
            The bcrypt digest as a string.

        Example:
            >>> PasswordHasher(rounds=4).hash("secret").startswith("$2b$04$")
            True
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a digest.

        Malformed digests (for example plaintext left over from older
        records) never match.

        Args:
            password: The plaintext password to verify.
            hashed: The stored bcrypt digest.

        Returns:
            True if the password matches, False otherwise.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False
