"""Entity ID generation and lookup."""

import secrets
import time

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(n: int) -> str:
    """Encode a non-negative integer in base 36.

    0 → "0", 35 → "z", 36 → "10"
    """
    if n < 0:
        raise ValueError("negative value")
    digits = []
    while True:
        n, rem = divmod(n, 36)
        digits.append(ALPHABET[rem])
        if n == 0:
            break
    return "".join(reversed(digits))


def new_id(existing: set[str] | frozenset[str] = frozenset()) -> str:
    """Mint a new ID: millisecond timestamp plus random suffix, base 36.

    Retries in the (unlikely) event of a collision with ``existing``.
    """
    while True:
        stamp = to_base36(time.time_ns() // 1_000_000)
        suffix = "".join(secrets.choice(ALPHABET) for _ in range(8))
        candidate = stamp + suffix
        if candidate not in existing:
            return candidate


def normalize_id(s: str) -> str:
    """Strip whitespace and lowercase an ID typed by a user."""
    return s.strip().lower()


def match_ids(ids, prefix: str) -> list[str]:
    """Return the IDs that equal or start with prefix.

    An exact match wins over prefix matches.
    """
    prefix = normalize_id(prefix)
    if not prefix:
        return []
    ids = list(ids)
    if prefix in ids:
        return [prefix]
    return [id_ for id_ in ids if id_.startswith(prefix)]
