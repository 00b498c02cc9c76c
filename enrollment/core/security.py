"""Security utilities for password handling."""

import hashlib
import hmac
import os

import bcrypt

HASH_ITERATIONS = 100_000

# Hashes written by earlier versions of the application are bcrypt
BCRYPT_PREFIX = "$2"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash, either salted PBKDF2 or bcrypt."""
    if hashed_password.startswith(BCRYPT_PREFIX):
        try:
            return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
        except ValueError:
            return False

    try:
        salt, _ = hashed_password.split(':', 1)
    except ValueError:
        return False
    return hmac.compare_digest(get_password_hash(plain_password, salt), hashed_password)


def needs_rehash(hashed_password: str) -> bool:
    """True when the hash is not in the current salt:digest format."""
    return hashed_password.startswith(BCRYPT_PREFIX)


def get_password_hash(password: str, salt: str = None) -> str:
    """Generate password hash using PBKDF2-SHA256 with salt."""
    if salt is None:
        salt = os.urandom(32).hex()
    digest = hashlib.pbkdf2_hmac('sha256', password.encode(), salt.encode(), HASH_ITERATIONS)
    return f"{salt}:{digest.hex()}"


# Compared against when the username is unknown, so both failures cost the same
DUMMY_PASSWORD_HASH = get_password_hash(os.urandom(16).hex())
