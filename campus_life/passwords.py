"""
Account password storage.
Only argon2id encodings are written to users.password_hash.
"""
import argon2

_hasher = argon2.PasswordHasher(type=argon2.Type.ID)


def hash_password(password: str) -> str:
    """Encode a plain password for storage (salt and parameters included)"""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a login attempt against the stored encoding.

    A wrong password and a corrupt or foreign hash both come back as False,
    so login answers "Invalid credentials" in either case.
    """
    try:
        return _hasher.verify(password_hash, password)
    except (argon2.exceptions.VerifyMismatchError, argon2.exceptions.InvalidHashError):
        return False
