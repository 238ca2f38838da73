#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from io import BytesIO
from typing import Any, Callable, Optional, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "02 79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
#
# use ecsig.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for messages, message hashes,
# SEC 1 point encodings, DER signatures, private keys, etc.
Octets = Union[bytes, str]

# binary data, usually to be cosumed as byte stream,
# but possibily provided as Octets too
BinaryData = Union[BytesIO, Octets]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor, e.g. hashlib.sha256
HashF = Callable[[], Any]

# Randomness source: return a uniformly distributed int in [lo, hi)
RandRange = Callable[[int, int], int]

# Elliptic curve point in affine coordinates.
# Warning: to make Point a NamedTuple would slow down the code
Point = Tuple[int, int]

# A curve point is either an affine Point or the point at infinity,
# i.e. the identity element of the group, which has no coordinates.
CurvePoint = Optional[Point]
INF: CurvePoint = None
