from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError for an empty password or one whose UTF-8 encoding
    exceeds 72 bytes.
    """
    if not password:
        raise ValueError("password cannot be empty")
    if len(password.encode("utf-8")) > 72:
        # make the failure explicit and consistent
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a hash in constant time.

    If verification raises a ValueError (for example plain >72 bytes, or a
    malformed stored hash), return False so the caller responds with an
    authentication failure instead of an error.
    """
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def dummy_verify() -> None:
    """Burn the same time as a real verify, for lookups that found no user."""
    pwd_context.dummy_verify()
