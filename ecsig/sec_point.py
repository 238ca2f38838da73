#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC 1 v.2 octet encoding of curve points (sections 2.3.3, 2.3.4).

A prefix octet is followed by the p_size bytes of x,
then by the p_size bytes of y for the uncompressed format;
the compressed format only keeps the parity of y in the prefix.

INF has no encoding here: it is never a valid public key.
"""

from typing import Dict

from ecsig.alias import INF, CurvePoint, Octets, Point
from ecsig.curve import Curve, secp256k1
from ecsig.exceptions import EcsigValueError
from ecsig.utils import bytes_from_octets, int_repr

_EVEN_Y = 0x02
_ODD_Y = 0x03
_UNCOMPRESSED = 0x04


def _sizes(ec: Curve) -> Dict[int, int]:
    "Encoding size for each prefix."
    compressed_size = 1 + ec.p_size
    return {
        _EVEN_Y: compressed_size,
        _ODD_Y: compressed_size,
        _UNCOMPRESSED: 1 + 2 * ec.p_size,
    }


def bytes_from_point(
    Q: CurvePoint, ec: Curve = secp256k1, compressed: bool = True
) -> bytes:
    "Return the compressed or uncompressed encoding of a curve point."

    ec.require_on_curve(Q)
    if Q is INF:
        raise EcsigValueError("no bytes representation for infinity point")

    x_Q, y_Q = Q
    x_bytes = x_Q.to_bytes(ec.p_size, byteorder="big", signed=False)
    if compressed:
        prefix = _ODD_Y if y_Q % 2 else _EVEN_Y
        return bytes([prefix]) + x_bytes
    y_bytes = y_Q.to_bytes(ec.p_size, byteorder="big", signed=False)
    return bytes([_UNCOMPRESSED]) + x_bytes + y_bytes


def _point_from_x(x_Q: int, odd_y: bool, ec: Curve) -> Point:
    try:
        y_Q = ec.y_even(x_Q)
    except EcsigValueError as e:
        raise EcsigValueError(f"invalid x-coordinate: {int_repr(x_Q)}") from e
    if not odd_y:
        return x_Q, y_Q
    # zero has no odd root
    if y_Q == 0:
        raise EcsigValueError(f"invalid x-coordinate: {int_repr(x_Q)}")
    return x_Q, ec.p - y_Q


def point_from_octets(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    "Return the curve point of a compressed or uncompressed encoding."

    sizes = _sizes(ec)
    pub_key = bytes_from_octets(pub_key, set(sizes.values()))

    prefix = pub_key[0]
    if prefix not in sizes:
        raise EcsigValueError(f"not a point: {pub_key!r}")
    if len(pub_key) != sizes[prefix]:
        err_msg = f"invalid size for prefix {prefix:02x}: "
        err_msg += f"{len(pub_key)} bytes instead of {sizes[prefix]}"
        raise EcsigValueError(err_msg)

    x_Q = int.from_bytes(pub_key[1 : 1 + ec.p_size], byteorder="big", signed=False)
    if prefix != _UNCOMPRESSED:
        return _point_from_x(x_Q, prefix == _ODD_Y, ec)

    y_Q = int.from_bytes(pub_key[1 + ec.p_size :], byteorder="big", signed=False)
    Q = x_Q, y_Q
    if not ec.is_on_curve(Q):
        raise EcsigValueError(f"point not on curve: {Q}")
    return Q
