import math
import time
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis() -> int:
    return int(time.time() * 1000)


def round_half_up(value: float) -> int:
    # halves go up (2.5 -> 3), unlike round()
    return int(math.floor(value + 0.5))
