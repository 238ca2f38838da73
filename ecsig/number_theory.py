#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Number theory and modular arithmetic functions.

All functions return the canonical residue in [0, m),
whatever the sign or the magnitude of the operands.

Square root implementations originally from
https://codereview.stackexchange.com/questions/43210/tonelli-shanks-algorithm-implementation-of-prime-modular-square-root/43267
"""

from typing import Optional, Tuple

from ecsig.exceptions import EcsigValueError
from ecsig.utils import int_repr


def modulus(x: int, m: int) -> int:
    """Return the unique residue in [0, m) congruent to x.

    Python's floored remainder has the sign of the divisor,
    so a positive m already yields a non-negative residue
    for negative x too.
    """

    if m <= 0:
        raise EcsigValueError(f"non positive modulus: {m}")
    return x % m


def add_mod(x: int, y: int, m: int) -> int:
    "Return (x + y) mod m."
    return modulus(modulus(x, m) + modulus(y, m), m)


def sub_mod(x: int, y: int, m: int) -> int:
    "Return (x - y) mod m."
    return modulus(modulus(x, m) - modulus(y, m), m)


def mul_mod(x: int, y: int, m: int) -> int:
    "Return (x * y) mod m."
    return modulus(modulus(x, m) * modulus(y, m), m)


def pow_mod(x: int, e: int, m: int) -> int:
    """Return x^e mod m, for non-negative exponent e.

    It uses the 'right-to-left' binary square-and-multiply method.
    """

    if e < 0:
        raise EcsigValueError(f"negative exponent: {e}")
    base = modulus(x, m)
    # 1 mod 1 is 0
    result = 1 % m
    while e > 0:
        if e & 1:
            result = result * base % m
        base = base * base % m
        e >>= 1
    return result


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    based on Extended Euclidean Algorithm, see
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm

    a and b are non-negative;
    xgcd(0, b) is (b, 0, 1).
    """

    if a < 0 or b < 0:
        raise EcsigValueError(f"negative xgcd argument: {a}, {b}")

    # iterative unrolling of the recursion
    #   xgcd(0, b) = (b, 0, 1)
    #   xgcd(a, b) = (g, y - (b // a) * x, x) with (g, x, y) = xgcd(b % a, a)
    # b % a strictly decreases the first argument down to the base case
    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def try_mod_inv(a: int, m: int) -> Optional[int]:
    """Return the inverse of a (mod m), or None if it does not exist.

    m does not have to be a prime: the inverse exists
    if and only if gcd(a, m) = 1.
    """

    a = modulus(a, m)
    g, x, _ = xgcd(a, m)
    if g != 1:
        return None
    return modulus(x, m)


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a (mod m). m does not have to be a prime.

    Based on Extended Euclidean Algorithm, see:
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    inv = try_mod_inv(a, m)
    if inv is not None:
        return inv
    err_msg = f"No inverse for {int_repr(modulus(a, m))} mod {int_repr(m)}"
    raise EcsigValueError(err_msg)


def legendre_symbol(a: int, p: int) -> int:
    """Compute the Legendre symbol a|p using Euler's criterion.

    p is a prime, a is relatively prime to p (if p divides a,
    then a|p = 0).
    It returns 1 if a has a square root modulo p, -1 otherwise.
    """

    ls = pow_mod(a, p >> 1, p)
    return -1 if ls == p - 1 else ls


def mod_sqrt(a: int, p: int) -> int:
    """Return a quadratic residue (mod p) of a; p must be a prime.

    Solve the equation:
        x^2 = a mod p

    and return x. Note that p - x is also a root.

    If a simple solution is not available for p,
    then the Tonelli-Shanks algorithm is used.
    """

    a = modulus(a, p)

    if p % 4 == 3:  # secp256k1 case
        # inverse candidate is pow(a, (p + 1) // 4, p)
        r = pow_mod(a, (p >> 2) + 1, p)
    elif p % 8 == 5:
        # inverse candidate is pow(a, (p + 3) // 8, p)
        r = pow_mod(a, (p >> 3) + 1, p)
        if r * r % p == a:
            return r
        # another inverse candidate
        r = r * pow_mod(2, p >> 2, p) % p
    else:
        return tonelli(a, p)

    if r * r % p != a:
        raise EcsigValueError(f"no root for {int_repr(a)} mod {int_repr(p)}")
    return r


def tonelli(a: int, p: int) -> int:
    """Return a quadratic residue (mod p) of a; p must be a prime.

    The Tonelli-Shanks algorithm is used.
    """

    a = modulus(a, p)
    if a == 0 or p == 2:
        return a

    # Check solution existence for an odd prime p
    if legendre_symbol(a, p) != 1:
        raise EcsigValueError(f"no root for {int_repr(a)} mod {int_repr(p)}")

    # Factor p-1 on the form q * 2^s (with q odd)
    q, s = p - 1, 0
    while q & 1 == 0:
        s += 1
        q >>= 1
    if s == 1:
        return pow_mod(a, (p + 1) // 4, p)

    # Select a z which is a quadratic non residue modulo p
    z = 1
    while legendre_symbol(z, p) != -1:
        z += 1
    c = pow_mod(z, q, p)
    r = pow_mod(a, (q + 1) // 2, p)
    t = pow_mod(a, q, p)
    while t != 1:
        # Find the lowest i such that t^(2^i) = 1
        t2i = t
        for i in range(1, s):
            t2i = t2i * t2i % p
            if t2i == 1:
                # Update next value to iterate
                b = pow_mod(c, 1 << (s - i - 1), p)
                r = (r * b) % p
                c = (b * b) % p
                t = (t * c) % p
                s = i
                break

    return r
