"""Password hashing utilities.

bcrypt salts automatically and is deliberately slow; the work factor is
PRESSROOM_BCRYPT_ROUNDS. bcrypt reads at most MAX_PASSWORD_BYTES of input;
registration rejects longer passwords, and login truncates to the same
limit before verifying.
"""

import bcrypt

from pressroom.config import settings

MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    pw_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash. Malformed hashes never verify."""
    try:
        pw_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False


# Verified against when a login email is unknown, so both failure paths
# pay for one bcrypt check.
_DUMMY_HASH = hash_password("pressroom-dummy-password")


def burn_verification(password: str) -> None:
    """Spend one bcrypt verification without a real hash to check."""
    verify_password(password, _DUMMY_HASH)
