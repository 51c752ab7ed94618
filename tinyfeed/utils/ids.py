import secrets
import time
from datetime import datetime, timezone

# No confusable characters (l, o, 0, 1)
ALPHABET = "abcdefghijkmnpqrstuvwxyz23456789"



def generate_id(length: int) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))

def now_ms() -> int:
    return int(time.time() * 1000)

def ms_to_datetime(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)

def ms_to_iso(ms: int) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return ms_to_datetime(ms).isoformat(timespec="milliseconds").replace("+00:00", "Z")
