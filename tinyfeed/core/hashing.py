import hashlib
import hmac
import secrets

from tinyfeed.core.config import settings

SCHEME = "scrypt"
SALT_BYTES = 16
DKLEN = 32



def _scrypt(key: str, salt: bytes, n: int, r: int, p: int) -> bytes:
    return hashlib.scrypt(
        key.encode(),
        salt=salt,
        n=n,
        r=r,
        p=p,
        maxmem=256 * n * r + 1024 * 1024,
        dklen=DKLEN,
    )

def hash_write_key(key: str, n: int | None = None, r: int | None = None, p: int | None = None) -> str:
    """
    Salted scrypt digest encoded as ``scrypt$N$r$p$<salt hex>$<hash hex>``.
    Cost parameters travel with the hash so they can be raised later.
    """
    n = n or settings.KDF_N
    r = r or settings.KDF_R
    p = p or settings.KDF_P
    salt = secrets.token_bytes(SALT_BYTES)
    digest = _scrypt(key, salt, n, r, p)
    return f"{SCHEME}${n}${r}${p}${salt.hex()}${digest.hex()}"

def verify_write_key(key: str, stored: str) -> bool:
    if not key or not stored:
        return False

    parts = stored.split("$")
    if len(parts) != 6 or parts[0] != SCHEME:
        return False

    try:
        n, r, p = int(parts[1]), int(parts[2]), int(parts[3])
        salt = bytes.fromhex(parts[4])
        expected = bytes.fromhex(parts[5])
        digest = _scrypt(key, salt, n, r, p)
    except ValueError:
        return False
    return hmac.compare_digest(digest, expected)
