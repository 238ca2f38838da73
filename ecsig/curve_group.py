#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Note that CurveGroup does not have to be a cyclic subgroup.
For the cyclic subgroup class of prime order Curve,
see the ecsig.curve module.

Points are in affine coordinates; the point at infinity INF
has no coordinates (see ecsig.alias).
"""

from math import ceil
from typing import List, Tuple

from ecsig.alias import INF, CurvePoint, Integer
from ecsig.exceptions import EcsigTypeError, EcsigValueError
from ecsig.number_theory import mod_inv, mod_sqrt
from ecsig.utils import int_from_integer, int_repr


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is a prime
        # Fermat test will do as _probabilistic_ primality test...
        if p < 2 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise EcsigValueError(f"p is not prime: {int_repr(p)}")

        plen = p.bit_length()
        # byte-length
        self.p_size = ceil(plen / 8)
        self.p = p

        # 2. check that a and b are integers in the interval [0, p−1]
        if a < 0:
            raise EcsigValueError(f"negative a: {a}")
        if p <= a:
            raise EcsigValueError(f"p <= a: {int_repr(p)} <= {int_repr(a)}")
        if b < 0:
            raise EcsigValueError(f"negative b: {b}")
        if p <= b:
            raise EcsigValueError(f"p <= b: {int_repr(p)} <= {int_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise EcsigValueError("zero discriminant")
        self.a = a
        self.b = b

    def _params(self) -> Tuple[int, ...]:
        return self.p, self.a, self.b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurveGroup):
            return NotImplemented
        return type(self) is type(other) and self._params() == other._params()

    def __hash__(self) -> int:
        return hash(self._params())

    def __str__(self) -> str:
        result = "Curve"
        result += f"\n p   = {int_repr(self.p)}"
        result += f"\n a   = {int_repr(self.a)}"
        result += f"\n b   = {int_repr(self.b)}"
        return result

    def __repr__(self) -> str:
        return f"Curve({int_repr(self.p)}, {int_repr(self.a)}, {int_repr(self.b)})"

    # methods using p: they could become functions

    def negate(self, Q: CurvePoint) -> CurvePoint:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """
        if Q is INF:
            return INF
        if len(Q) == 2:
            return Q[0], (self.p - Q[1]) % self.p
        raise EcsigTypeError("not a point")

    # methods using a, b, p

    def add(self, Q1: CurvePoint, Q2: CurvePoint) -> CurvePoint:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        return self.add_aff(Q1, Q2)

    def double(self, Q: CurvePoint) -> CurvePoint:
        """Return the double of a point.

        The input point must be on the curve.
        """

        self.require_on_curve(Q)
        return self.double_aff(Q)

    def add_aff(self, Q: CurvePoint, R: CurvePoint) -> CurvePoint:
        # points are assumed to be on curve

        if Q == R:
            return self.double_aff(Q)
        if Q is INF:
            return R
        if R is INF:
            return Q

        if R[0] == Q[0]:
            # same x, different y: opposite points
            return INF

        lam = (R[1] - Q[1]) * mod_inv(R[0] - Q[0], self.p)
        x = (lam * lam - Q[0] - R[0]) % self.p
        y = (lam * (Q[0] - x) - Q[1]) % self.p
        return x, y

    def double_aff(self, Q: CurvePoint) -> CurvePoint:
        # point is assumed to be on curve

        if Q is INF:
            return INF

        # the tangent is vertical for points of order two
        if Q[1] % self.p == 0:
            return INF

        lam = (3 * Q[0] * Q[0] + self.a) * mod_inv(2 * Q[1], self.p)
        x = (lam * lam - Q[0] - Q[0]) % self.p
        y = (lam * (Q[0] - x) - Q[1]) % self.p
        return x, y

    def _y2(self, x: int) -> int:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return ((x * x + self.a) * x + self.b) % self.p

    def y(self, x: int) -> int:
        """Return the y coordinate from x, as in (x, y)."""
        if not 0 <= x < self.p:
            raise EcsigValueError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        y2 = self._y2(x)
        try:
            return mod_sqrt(y2, self.p)
        except EcsigValueError as e:
            raise EcsigValueError(f"invalid x-coordinate: {int_repr(x)}") from e

    def require_on_curve(self, Q: CurvePoint) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise EcsigValueError("point not on curve")

    def is_on_curve(self, Q: CurvePoint) -> bool:
        """Return True if the point is on the curve."""
        if Q is INF:
            return True
        if len(Q) != 2:
            raise EcsigValueError("point must be a tuple[int, int]")
        if not 0 <= Q[0] < self.p:
            raise EcsigValueError(f"x-coordinate not in 0..p-1: {int_repr(Q[0])}")
        if not 0 <= Q[1] < self.p:
            raise EcsigValueError(f"y-coordinate not in 0..p-1: {int_repr(Q[1])}")
        return self._y2(Q[0]) == (Q[1] * Q[1] % self.p)

    def y_even(self, x: int) -> int:
        """Return the even affine y-coordinate associated to x.

        The odd one is p minus the even one.
        """
        root = self.y(x)
        # switch even/odd root as needed
        return self.p - root if root % 2 else root


def bits_from_int(m: int, width: int = 0) -> List[int]:
    """Return the binary digits of m, most significant first.

    The expansion is left-padded with zeros up to width digits:
    leading zeros do not change the value of the represented integer.
    """

    if m < 0:
        raise EcsigValueError(f"negative m: {hex(m)}")
    return [int(i) for i in bin(m)[2:].zfill(width)]


def mult_aff(m: int, Q: CurvePoint, ec: CurveGroup, width: int = 0) -> CurvePoint:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses
    'double & add' algorithm,
    'left-to-right' binary decomposition of the m coefficient,
    affine coordinates.

    The running result starts from INF,
    so that a fixed-width expansion of m (see bits_from_int)
    leads to the same result of the minimal one.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n
    if appropriate (e.g. cyclic groups of order n).
    """

    R = INF
    for bit in bits_from_int(m, width):
        # the doubling part of 'double & add'
        R = ec.double_aff(R)
        if bit:
            R = ec.add_aff(R, Q)
    return R


def mult_recursive_aff(m: int, Q: CurvePoint, ec: CurveGroup) -> CurvePoint:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses
    a recursive version of 'double & add',
    affine coordinates.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n
    if appropriate (e.g. cyclic groups of order n).
    """

    if m < 0:
        raise EcsigValueError(f"negative m: {hex(m)}")

    if m == 0:
        return INF

    if m % 2 == 1:
        return ec.add_aff(Q, mult_recursive_aff((m - 1), Q, ec))

    return mult_recursive_aff((m // 2), ec.double_aff(Q), ec)


def double_mult_aff(
    u: int, H: CurvePoint, v: int, Q: CurvePoint, ec: CurveGroup
) -> CurvePoint:
    """Double scalar multiplication (u*H + v*Q).

    This implementation uses the Shamir-Strauss algorithm,
    'left-to-right' binary decomposition of the u and v coefficients,
    affine coordinates.

    Strauss algorithm consists of a single 'double & add' loop
    for the parallel calculation of u*H and v*Q, efficiently
    using a single 'doubling' for both scalar multiplications (see
    https://stackoverflow.com/questions/50993471/ec-scalar-multiplication-with-strauss-shamir-method).

    The Shamir trick adds the precomputation of H+Q,
    which is to be added in the loop when the binary digits
    of u and v are both equal to 1 (on average 1/4 of the cases).

    The input points are assumed to be on curve,
    the u and v coefficients are assumed to have been reduced mod n
    if appropriate (e.g. cyclic groups of order n).
    """

    if u < 0:
        raise EcsigValueError(f"negative first coefficient: {hex(u)}")
    if v < 0:
        raise EcsigValueError(f"negative second coefficient: {hex(v)}")

    # at each step one of the following points will be added
    T = [INF, H, Q, ec.add_aff(H, Q)]
    # which one depends on binary digit for that step
    width = max(u.bit_length(), v.bit_length())
    ui = bits_from_int(u, width)
    vi = bits_from_int(v, width)
    R = INF
    for j, k in zip(ui, vi):
        R = ec.double_aff(R)
        R = ec.add_aff(R, T[j + 2 * k])
    return R
