"""
Password hashing shared by every UserRepository implementation.

bcrypt only accepts 72 bytes of input, so the password is first reduced to
the base64 of its SHA-256 digest (44 bytes). Any password length is accepted
and every byte of it affects the hash.
"""

import base64
import hashlib

import bcrypt

DEFAULT_BCRYPT_COST = 12


def prehash_password(password: str) -> bytes:
    """Reduce a password of any length to the fixed-size bcrypt input."""
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_COST) -> str:
    """Hash password using bcrypt with a per-password salt."""
    return bcrypt.hashpw(prehash_password(password), bcrypt.gensalt(rounds=rounds)).decode()
