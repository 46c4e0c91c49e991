from __future__ import annotations

import math

"""Primality test by trial division."""

__all__ = [
    "is_prime",
]


def is_prime(n: int) -> bool:
    """Return True if ``n`` is prime.

    Trial division by every candidate from 2 up to and including isqrt(n).
    math.isqrt is exact for any int, so the root of a perfect square
    (25 -> 5, 49 -> 7) is always tried. After 2, only odd candidates are
    tested; an even divisor would imply 2 divides n.
    """
    if n <= 1:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    limit = math.isqrt(n)
    for i in range(3, limit + 1, 2):
        if n % i == 0:
            return False
    return True
