#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Functions for conversions between different public key formats."

from typing import Union

from ecsig.alias import INF, Octets, Point
from ecsig.curve import Curve, mult, secp256k1
from ecsig.exceptions import EcsigValueError
from ecsig.sec_point import point_from_octets
from ecsig.to_prv_key import PrvKey, int_from_prv_key

# public key inputs:
# elliptic curve point and corresponding SEC 1 Octets
Key = Union[Point, Octets]


def point_from_key(key: Key, ec: Curve = secp256k1) -> Point:
    """Return a verified-as-valid public key Point.

    It supports:

    - Point as tuple
    - SEC Octets (bytes or hex-string, with 02, 03, or 04 prefix)

    The point at infinity is not a valid public key.
    """

    if isinstance(key, tuple):
        if ec.is_on_curve(key) and key is not INF:
            return key
        raise EcsigValueError(f"not a valid public key: {key}")

    if key is INF:
        raise EcsigValueError("not a valid public key: INF")

    return point_from_octets(key, ec)


def pub_key_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> Point:
    "Return the public key Point q*G of the private key q."
    q = int_from_prv_key(prv_key, ec)
    Q = mult(q, ec.G, ec)
    # q in 1..n-1 and G of order n
    assert Q is not INF
    return Q
