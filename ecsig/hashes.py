#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

The message representative used by ECDSA is derived
from the fixed-size hash digest of the message,
never from the raw message bytes.
"""

import hashlib

from ecsig.alias import HashF, Octets
from ecsig.curve import Curve, secp256k1
from ecsig.utils import bytes_from_octets, int_from_bits


def reduce_to_hlen(msg: Octets, hf: HashF = hashlib.sha256) -> bytes:
    "Return the hf digest of the message."
    msg = bytes_from_octets(msg)
    # Step 4 of SEC 1 v.2 section 4.1.3
    h = hf()
    h.update(msg)
    return bytes(h.digest())


def challenge_(msg_hash: Octets, ec: Curve = secp256k1, hf: HashF = hashlib.sha256) -> int:
    "Return the message representative of a hf_len message hash."
    # the message msg_hash: a hf_len array
    hf_len = hf().digest_size
    msg_hash = bytes_from_octets(msg_hash, hf_len)

    # Step 5 of SEC 1 v.2 section 4.1.3
    # leftmost ec.nlen bits %= ec.n
    return int_from_bits(msg_hash, ec.nlen) % ec.n
