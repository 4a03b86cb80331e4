# backend/questlms/security.py
import os

import bcrypt

# bcrypt only looks at the first 72 bytes of a secret
_BCRYPT_MAX_BYTES = 72
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_secret(password), password_hash.encode("ascii"))
    except ValueError:
        # not a bcrypt hash
        return False
