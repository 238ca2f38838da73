#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Input conversions, error message formatting, and randomness.

Octets may be given as bytes or as hex-strings (whitespace ignored);
integers also as 0x-prefixed hex-strings or big-endian bytes.
"""

import secrets
from io import BytesIO
from typing import Iterable, Optional, Union

from ecsig.alias import BinaryData, Integer, Octets
from ecsig.exceptions import EcsigValueError

Sizes = Optional[Union[int, Iterable[int]]]

# ints above this are shown as hex-strings in error messages
HEX_THRESHOLD = 0xFFFFFFFF


def bytes_from_octets(octets: Octets, out_size: Sizes = None) -> bytes:
    """Return the bytes of bytes or of a hex-string.

    If out_size is given, either a size or a collection of sizes,
    the result must have (one of) those sizes.
    """

    result = bytes.fromhex(octets) if isinstance(octets, str) else octets
    if out_size is None:
        return result

    allowed = (out_size,) if isinstance(out_size, int) else tuple(out_size)
    if len(result) not in allowed:
        err_msg = f"invalid size: {len(result)} bytes instead of {out_size}"
        raise EcsigValueError(err_msg)
    return result


def bytesio_from_binarydata(stream: BinaryData) -> BytesIO:
    "Return a readable stream; streams are returned untouched."
    if isinstance(stream, (bytes, str)):
        return BytesIO(bytes_from_octets(stream))
    return stream


def int_from_bits(octets: Octets, nlen: int) -> int:
    """Return the int of the leftmost nlen bits of octets.

    SEC 1 v.2 section 4.1.3 (5): the result is less than 2^nlen,
    a further reduction mod n is up to the caller.
    """

    octets = bytes_from_octets(octets)
    excess_bits = max(8 * len(octets) - nlen, 0)
    return int.from_bytes(octets, byteorder="big", signed=False) >> excess_bits


def int_from_integer(i: Integer) -> int:
    """Return an int from an Integer.

    A 0x-prefixed hex-string is read as a (possibly negative) number,
    e.g. "-0xdeadbeef"; any other string is read as hex octets,
    e.g. "dead beef", and bytes are read as big-endian unsigned.
    """

    if isinstance(i, int):
        return i

    if isinstance(i, str):
        digits = i.strip().lower()
        if digits.lstrip("-").startswith("0x"):
            return int(digits, 16)
        i = bytes.fromhex(digits)

    return int.from_bytes(i, byteorder="big", signed=False)


def hex_string(i: Integer) -> str:
    """Return the upper case hex-string of a non-negative Integer.

    Digits are padded to whole bytes and grouped by four bytes,
    counting from the least significant one: e.g. '01 DEADBEEF'.
    """

    value = int_from_integer(i)
    if value < 0:
        raise EcsigValueError(f"negative integer: {value}")

    digits = f"{value:X}"
    if len(digits) % 2:
        digits = "0" + digits
    head = len(digits) % 8 or 8
    groups = [digits[:head]]
    groups += [digits[j : j + 8] for j in range(head, len(digits), 8)]
    return " ".join(groups)


def int_repr(i: int) -> str:
    "Return the error message representation of an int."
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def secure_randrange(lo: int, hi: int) -> int:
    """Return a uniformly distributed random int in [lo, hi).

    It is the default randomness source,
    based on the cryptographically secure secrets module.
    """

    if hi <= lo:
        raise EcsigValueError(f"empty range: [{lo}, {hi})")
    return lo + secrets.randbelow(hi - lo)
