"""
KSUID - K-Sortable Unique Identifier.

Used as request and error ids. 4 bytes of seconds since the KSUID epoch
followed by 16 random bytes, base62 encoded to 27 characters.
"""

import os
import time

KSUID_EPOCH = 1400000000  # 2014-05-13
KSUID_LENGTH = 27
BASE62 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def _encode(n):
    chars = []
    while n > 0:
        n, remainder = divmod(n, 62)
        chars.append(BASE62[remainder])
    return "".join(reversed(chars)).rjust(KSUID_LENGTH, "0")


def generate_ksuid(epoch_s=None):
    """Generate a 27-character sortable unique ID."""
    seconds = int(time.time() if epoch_s is None else epoch_s) - KSUID_EPOCH
    raw = seconds.to_bytes(4, "big") + os.urandom(16)
    return _encode(int.from_bytes(raw, "big"))


def ksuid_time(ksuid):
    """Unix seconds encoded in a KSUID."""
    if len(ksuid) != KSUID_LENGTH:
        raise ValueError(f"invalid ksuid: {ksuid!r}")
    n = 0
    for char in ksuid:
        n = n * 62 + BASE62.index(char)
    return (n >> 128) + KSUID_EPOCH
