#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Functions for conversions between different private key formats."

from typing import Union

from ecsig.curve import Curve, secp256k1
from ecsig.exceptions import EcsigValueError
from ecsig.utils import bytes_from_octets, int_repr

# private key inputs:
# integer as Union[int, Octets]
PrvKey = Union[int, bytes, str]


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - integer (native int)
    - n_size Octets (bytes or hex-string)
    """

    if isinstance(prv_key, int):
        q = prv_key
    else:
        try:
            prv_key = bytes_from_octets(prv_key, ec.n_size)
        except ValueError as e:
            raise EcsigValueError(f"not a private key: {prv_key!r}") from e
        q = int.from_bytes(prv_key, "big")

    if not 0 < q < ec.n:
        raise EcsigValueError(f"private key not in 1..n-1: {int_repr(q)}")

    return q
