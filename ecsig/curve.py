#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve classes and the table of supported curves.

Curve domain parameters are read once, at import time,
from the json file in the data directory:

* SEC 2 v.2 curves
  http://www.secg.org/sec2-v2.pdf

Alternative curves (e.g. low cardinality ones for testing purposes)
are just other Curve instances, passed explicitly as ec argument.
"""

import json
import logging
from math import isqrt
from os import path
from typing import Dict, Sequence, Tuple

from ecsig.alias import INF, CurvePoint, Integer, Point
from ecsig.curve_group import CurveGroup, double_mult_aff, mult_aff
from ecsig.exceptions import EcsigValueError
from ecsig.utils import int_from_integer, int_repr

logger = logging.getLogger(__name__)


class CurveSubGroup(CurveGroup):
    "Subgroup of the points of an elliptic curve over Fp generated by G."

    def __init__(self, p: Integer, a: Integer, b: Integer, G: Sequence[Integer]) -> None:

        super().__init__(p, a, b)

        # 2. check that xG and yG are integers in the interval [0, p−1]
        # 4. Check that yG^2 = xG^3 + a*xG + b (mod p)
        if G is INF:
            raise EcsigValueError("INF point cannot be a generator")
        if len(G) != 2:
            raise EcsigValueError("Generator must a be a sequence[int, int]")
        self.G: Point = (int_from_integer(G[0]), int_from_integer(G[1]))
        if not self.is_on_curve(self.G):
            raise EcsigValueError("Generator is not on the curve")

    def _params(self) -> Tuple[int, ...]:
        return super()._params() + self.G

    def __str__(self) -> str:
        result = super().__str__()
        result += f"\n x_G = {int_repr(self.G[0])}"
        result += f"\n y_G = {int_repr(self.G[1])}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        result += f", ({int_repr(self.G[0])}, {int_repr(self.G[1])}))"
        return result


class Curve(CurveSubGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Sequence[Integer],
        n: Integer,
        h: int,
        weakness_check: bool = True,
    ) -> None:

        super().__init__(p, a, b, G)
        n = int_from_integer(n)

        # Security level is expressed in bits, where n-bit security
        # means that the attacker would have to perform 2^n operations
        # to break it. Security bits are half the key size for asymmetric
        # elliptic curve cryptography, i.e. half of the number of bits
        # required to express the group order n or, holding Hasse theorem,
        # to express the field prime p
        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8

        # 5. Check that n is prime.
        if n < 2 or n % 2 == 0 or pow(2, n - 1, n) != 1:
            raise EcsigValueError(f"n is not prime: {int_repr(n)}")
        # floor(2 * sqrt(p))
        delta = isqrt(4 * self.p)
        # also check n with Hasse Theorem
        if h < 2 and not self.p + 1 - delta <= n <= self.p + 1 + delta:
            raise EcsigValueError(f"n not in p+1-delta..p+1+delta: {int_repr(n)}")

        # 7. Check that G ≠ INF, nG = INF
        if mult_aff(n, self.G, self) is not INF:
            raise EcsigValueError(f"n is not the group order: {int_repr(n)}")

        # 6. Check cofactor
        exp_h = (1 + delta + self.p) // n
        if h != exp_h:
            raise EcsigValueError(f"invalid h: {h}, expected {exp_h}")
        self.h = h

        # 8. Check that n ≠ p
        if n == self.p:
            raise EcsigValueError(f"n=p weak curve: {int_repr(n)}")

        if weakness_check:
            # 8. Check that p^i % n ≠ 1 for all 1≤i<100
            for i in range(1, 100):
                if pow(self.p, i, n) == 1:
                    raise EcsigValueError("weak curve")

    def _params(self) -> Tuple[int, ...]:
        return super()._params() + (self.n, self.h)

    def __str__(self) -> str:
        result = super().__str__()
        result += f"\n n   = {int_repr(self.n)}"
        result += f"\n h = {self.h}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        result += f", {int_repr(self.n)}, {self.h})"
        return result


def _load_curves(filename: str) -> Dict[str, Curve]:
    with open(filename, "r", encoding="ascii") as file_:
        curves_params = json.load(file_)
    curves = {name: Curve(*params) for name, params in curves_params.items()}
    logger.debug("loaded %d curves from %s", len(curves), filename)
    return curves


datadir = path.join(path.dirname(__file__), "data")
CURVES = _load_curves(path.join(datadir, "curves.json"))

secp256k1 = CURVES["secp256k1"]


def curve_name(ec: Curve) -> str:
    "Return the name of a curve included in CURVES."
    for name, curve in CURVES.items():
        if curve == ec:
            return name
    raise EcsigValueError(f"unknown curve: {ec!r}")


def mult(m: Integer, Q: CurvePoint, ec: Curve = secp256k1) -> CurvePoint:
    """Elliptic curve scalar multiplication.

    The m coefficient is reduced mod n, then expanded
    as a fixed-width nlen-bit sequence.
    """
    m = int_from_integer(m) % ec.n
    ec.require_on_curve(Q)
    return mult_aff(m, Q, ec, ec.nlen)


def double_mult(
    u: Integer, H: CurvePoint, v: Integer, Q: CurvePoint, ec: Curve = secp256k1
) -> CurvePoint:
    "Double scalar multiplication (u*H + v*Q)."

    ec.require_on_curve(H)
    u = int_from_integer(u) % ec.n

    ec.require_on_curve(Q)
    v = int_from_integer(v) % ec.n

    return double_mult_aff(u, H, v, Q, ec)
