"""
Scratch repository naming.
"""

import itertools
import secrets
import string
import time

_counter = itertools.count()
_DIGITS = string.digits + string.ascii_lowercase


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


def generate_repo_name(prefix: str = "packager-temp") -> str:
    """
    Return a repository name unique per call.

    Combines a millisecond timestamp, a process-local sequence number and a
    random suffix, so calls in a tight loop never collide and concurrent
    processes are unlikely to.
    """
    stamp = _base36(int(time.time() * 1000))
    seq = _base36(next(_counter))
    rand = secrets.token_hex(3)
    return f"{prefix}-{stamp}-{seq}-{rand}"
