#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ecsig.number_theory` module."

import math
import secrets

import pytest

from ecsig.exceptions import EcsigValueError
from ecsig.number_theory import (
    add_mod,
    legendre_symbol,
    mod_inv,
    mod_sqrt,
    modulus,
    mul_mod,
    pow_mod,
    sub_mod,
    tonelli,
    try_mod_inv,
    xgcd,
)

primes = [
    2,
    3,
    5,
    7,
    11,
    13,
    17,
    19,
    23,
    29,
    31,
    37,
    41,
    43,
    47,
    53,
    59,
    61,
    67,
    71,
    73,
    79,
    83,
    89,
    97,
    101,
    103,
    107,
    109,
    113,
    2 ** 160 - 2 ** 31 - 1,
    2 ** 192 - 2 ** 32 - 2 ** 12 - 2 ** 8 - 2 ** 7 - 2 ** 6 - 2 ** 3 - 1,
    2 ** 192 - 2 ** 64 - 1,
    2 ** 224 - 2 ** 32 - 2 ** 12 - 2 ** 11 - 2 ** 9 - 2 ** 7 - 2 ** 4 - 2 - 1,
    2 ** 224 - 2 ** 96 + 1,
    2 ** 256 - 2 ** 32 - 977,
    2 ** 256 - 2 ** 224 + 2 ** 192 + 2 ** 96 - 1,
    2 ** 384 - 2 ** 128 - 2 ** 96 + 2 ** 32 - 1,
    2 ** 521 - 1,
]


def test_modulus() -> None:
    test_vectors = [
        (3, 11, 3),
        (10, 17, 10),
        (22, 5, 2),
        (25, 7, 4),
        (100, 30, 10),
        (-15, 4, 1),
        (12345, 678, 141),
        (0, 5, 0),
        (19, 19, 0),
        (1, 1, 0),
        (-1, 2, 1),
        (6, 3, 0),
        (-(2 ** 300) - 1, 2 ** 256 - 2 ** 32 - 977, None),
    ]
    for x, m, expected in test_vectors:
        result = modulus(x, m)
        assert 0 <= result < m
        assert (result - x) % m == 0
        if expected is not None:
            assert result == expected

    for m in (0, -1, -7):
        with pytest.raises(EcsigValueError, match="non positive modulus: "):
            modulus(3, m)


def test_add_sub_mul_mod() -> None:
    for m in (1, 2, 7, 13, 2 ** 256 - 2 ** 32 - 977):
        for x in (-(3 * m) - 1, -m, -1, 0, 1, m - 1, m, 5 * m + 3):
            for y in (-(2 * m) + 1, -1, 0, 2, m + 1):
                assert add_mod(x, y, m) == (x + y) % m
                assert sub_mod(x, y, m) == (x - y) % m
                assert mul_mod(x, y, m) == (x * y) % m
                assert 0 <= add_mod(x, y, m) < m
                assert 0 <= sub_mod(x, y, m) < m
                assert 0 <= mul_mod(x, y, m) < m

    with pytest.raises(EcsigValueError, match="non positive modulus: "):
        add_mod(1, 2, 0)
    with pytest.raises(EcsigValueError, match="non positive modulus: "):
        sub_mod(1, 2, -3)
    with pytest.raises(EcsigValueError, match="non positive modulus: "):
        mul_mod(1, 2, 0)


def test_pow_mod() -> None:
    for m in (1, 2, 3, 10, 97, 2 ** 127 - 1):
        for x in (-5, -1, 0, 1, 2, 3, m - 1, m + 2):
            for e in (0, 1, 2, 3, 10, 65537):
                assert pow_mod(x, e, m) == pow(x, e, m)

    p = 2 ** 256 - 2 ** 32 - 977
    x = secrets.randbelow(p)
    # Fermat's little theorem
    assert pow_mod(x, p - 1, p) == (1 if x else 0)
    assert pow_mod(x, p, p) == x

    with pytest.raises(EcsigValueError, match="negative exponent: "):
        pow_mod(2, -1, 7)
    with pytest.raises(EcsigValueError, match="non positive modulus: "):
        pow_mod(2, 3, 0)


def test_xgcd() -> None:
    test_vectors = [
        (1, 1, 1),
        (48, 18, 6),
        (180, 48, 12),
        (270, 192, 6),
        (8, 3, 1),
        (21, 10, 1),
        (0, 48, 48),
        (48, 0, 48),
        (0, 0, 0),
        (987654, 123456, 6),
    ]
    for a, b, expected in test_vectors:
        g, u, v = xgcd(a, b)
        assert g == expected
        assert u * a + v * b == g
        g, u, v = xgcd(b, a)
        assert g == expected
        assert u * b + v * a == g

    assert xgcd(0, 5) == (5, 0, 1)

    for _ in range(20):
        a = secrets.randbits(256)
        b = secrets.randbits(256)
        g, u, v = xgcd(a, b)
        assert g == math.gcd(a, b)
        assert u * a + v * b == g

    with pytest.raises(EcsigValueError, match="negative xgcd argument: "):
        xgcd(-1, 5)


def test_mod_inv_prime() -> None:
    for p in primes:
        with pytest.raises(EcsigValueError, match="No inverse for 0 mod"):
            mod_inv(0, p)
        assert try_mod_inv(0, p) is None
        for a in range(1, min(p, 200)):  # exhausted only for small p
            inv = mod_inv(a, p)
            assert a * inv % p == 1
            inv = mod_inv(a + p, p)
            assert a * inv % p == 1
            inv = mod_inv(a - p, p)
            assert a * inv % p == 1


def test_mod_inv() -> None:
    max_m = 100
    for m in range(2, max_m):
        nums = list(range(m))
        for a in nums:
            mult = [a * i % m for i in nums]
            if 1 in mult:
                inv = mod_inv(a, m)
                assert 0 <= inv < m
                assert a * inv % m == 1
                inv = mod_inv(a + m, m)
                assert a * inv % m == 1
                assert try_mod_inv(a, m) == inv
            else:
                err_msg = "No inverse for "
                with pytest.raises(EcsigValueError, match=err_msg):
                    mod_inv(a, m)
                assert try_mod_inv(a, m) is None

    assert mod_inv(3, 11) == 4
    assert mod_inv(10, 17) == 12
    assert mod_inv(2, 5) == 3
    assert try_mod_inv(2, 4) is None
    assert try_mod_inv(1514511242, 123) == mod_inv(1514511242, 123)

    for _ in range(20):
        m = 2 + secrets.randbits(256)
        x = secrets.randbits(256)
        if math.gcd(x, m) == 1:
            assert x * mod_inv(x, m) % m == 1
        else:
            assert try_mod_inv(x, m) is None

    with pytest.raises(EcsigValueError, match="non positive modulus: "):
        try_mod_inv(3, 0)


def test_legendre_symbol() -> None:
    for p in primes[1:30]:
        has_root = {i * i % p for i in range(1, p)}
        assert legendre_symbol(0, p) == 0
        for i in range(1, p):
            assert legendre_symbol(i, p) == (1 if i in has_root else -1)


def test_mod_sqrt() -> None:
    for p in primes[:30]:  # exhaustable only for small p
        has_root = {0, 1}
        for i in range(2, p):
            has_root.add(i * i % p)
        for i in range(p):
            if i in has_root:
                root1 = mod_sqrt(i, p)
                assert i == (root1 * root1) % p
                root2 = p - root1
                assert i == (root2 * root2) % p
                root = mod_sqrt(i + p, p)
                assert i == (root * root) % p
                if p % 4 == 3 or p % 8 == 5:
                    assert tonelli(i, p) in (root1, root2)
            else:
                with pytest.raises(EcsigValueError, match="no root for "):
                    mod_sqrt(i, p)


def test_mod_sqrt2() -> None:
    # https://rosettacode.org/wiki/Tonelli-Shanks_algorithm#Python
    ttest = [
        (10, 13),
        (56, 101),
        (1030, 10009),
        (44402, 100049),
        (665820697, 1000000009),
        (881398088036, 1000000000039),
        (41660815127637347468140745042827704103445750172002, 10 ** 50 + 577),
    ]
    for i, p in ttest:
        root = tonelli(i, p)
        assert i == (root * root) % p


def test_minus_one_quadr_res() -> None:
    "Ensure that if p = 3 (mod 4) then p - 1 is not a quadratic residue"
    for p in primes:
        if (p % 4) == 3:
            with pytest.raises(EcsigValueError, match="no root for "):
                mod_sqrt(p - 1, p)
        else:
            assert p == 2 or p % 4 == 1, "something is badly broken"
            root = mod_sqrt(p - 1, p)
            assert p - 1 == root * root % p
