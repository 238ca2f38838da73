#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Implementation according to SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

The ephemeral nonce is drawn from the randomness source
at each signature and never leaves the signing function:
its disclosure, or its reuse for two different messages,
would reveal the private key (see crack_prv_key).
"""

import logging
from dataclasses import InitVar, dataclass, field
from hashlib import sha256
from io import BytesIO
from typing import Optional, Tuple, Type, TypeVar, Union

from dataclasses_json import DataClassJsonMixin, config

from ecsig.alias import INF, BinaryData, HashF, Octets, Point, RandRange
from ecsig.curve import CURVES, Curve, curve_name, mult, secp256k1
from ecsig.curve_group import double_mult_aff
from ecsig.exceptions import EcsigRuntimeError, EcsigValueError
from ecsig.hashes import challenge_, reduce_to_hlen
from ecsig.number_theory import mod_inv, try_mod_inv
from ecsig.to_prv_key import PrvKey, int_from_prv_key
from ecsig.to_pub_key import Key, point_from_key
from ecsig.utils import (
    bytes_from_octets,
    bytesio_from_binarydata,
    int_repr,
    secure_randrange,
)

logger = logging.getLogger(__name__)

# r = 0 and s = 0 have negligible probability:
# the cap only protects from a broken randomness source
MAX_SIGN_ATTEMPTS = 64

_DER_SCALAR_MARKER = b"\x02"
_DER_SIG_MARKER = b"\x30"
# only DER short form sizes are used
_DER_MAX_SIZE = 0x7F


def _serialize_sized(data: bytes) -> bytes:
    if len(data) > _DER_MAX_SIZE:
        raise EcsigValueError(f"too many bytes: {len(data)}")
    return len(data).to_bytes(1, byteorder="big", signed=False) + data


def _parse_sized(stream: BytesIO) -> bytes:
    size = stream.read(1)
    if not size:
        raise EcsigValueError("not enough binary data")
    i = size[0]
    if i == 0:
        raise EcsigValueError("zero size")
    if i > _DER_MAX_SIZE:
        raise EcsigValueError(f"invalid DER short form size: {i}")
    result = stream.read(i)
    if len(result) != i:
        raise EcsigValueError("not enough binary data")
    return result


def _serialize_scalar(scalar: int) -> bytes:
    # 'highest bit set' padding included here
    scalar_size = scalar.bit_length() // 8 + 1
    scalar_bytes = scalar.to_bytes(scalar_size, byteorder="big", signed=False)
    return _DER_SCALAR_MARKER + _serialize_sized(scalar_bytes)


def _deserialize_scalar(sig_data_stream: BytesIO) -> int:
    marker = sig_data_stream.read(1)
    if marker != _DER_SCALAR_MARKER:
        err_msg = f"invalid value header: {marker.hex()}"
        err_msg += f", instead of integer element {_DER_SCALAR_MARKER.hex()}"
        raise EcsigValueError(err_msg)

    r_bytes = _parse_sized(sig_data_stream)
    if len(r_bytes) > 1 and r_bytes[0] == 0 and r_bytes[1] < 0x80:
        raise EcsigValueError("invalid 'highest bit set' padding")
    if r_bytes[0] >= 0x80:
        raise EcsigValueError("invalid negative scalar")

    return int.from_bytes(r_bytes, byteorder="big", signed=False)


_Sig = TypeVar("_Sig", bound="Sig")


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """ECDSA signature with strict ASN.1 DER serialization.

    Format:
    [0x30] [data-size][0x02][r-size][r][0x02][s-size][s]

    * 0x30: header byte to indicate compound structure
    * data-size: 1-byte size descriptor of the following data
    * 0x02: header byte indicating an integer
    * r-size: 1-byte size descriptor of the r value that follows
    * r: arbitrary-size big-endian r value.
        It must use the shortest possible encoding for
        a positive integers: no null bytes at the start,
        except a single one when the next byte has its highest bit set
        (to avoid being interpreted as a negative number)
    * 0x02: header byte indicating an integer
    * s-size: 1-byte size descriptor of the s value that follows
    * s: arbitrary-size big-endian s value. Same rules as for r apply

    The json representation has r and s as hex-strings
    and the curve as its name in CURVES.
    """

    # scalar, 0 < r < ec.n (ec.n is the curve order)
    r: int = field(metadata=config(encoder=hex, decoder=lambda v: int(v, 16)))
    # scalar, 0 < s < ec.n (ec.n is the curve order)
    s: int = field(metadata=config(encoder=hex, decoder=lambda v: int(v, 16)))
    ec: Curve = field(
        default=secp256k1,
        metadata=config(encoder=curve_name, decoder=lambda name: CURVES[name]),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        # r is a scalar, fail if r is not in [1, n-1]
        if not 0 < self.r < self.ec.n:
            raise EcsigValueError(f"scalar r not in 1..n-1: {int_repr(self.r)}")

        # s is a scalar, fail if s is not in [1, n-1]
        if not 0 < self.s < self.ec.n:
            raise EcsigValueError(f"scalar s not in 1..n-1: {int_repr(self.s)}")

    def serialize(self, check_validity: bool = True) -> bytes:
        """Serialize an ECDSA signature to strict ASN.1 DER representation."""
        if check_validity:
            self.assert_valid()

        out = _serialize_scalar(self.r)
        out += _serialize_scalar(self.s)
        return _DER_SIG_MARKER + _serialize_sized(out)

    @classmethod
    def parse(
        cls: Type[_Sig],
        data: BinaryData,
        ec: Curve = secp256k1,
        check_validity: bool = True,
    ) -> _Sig:
        """Return a Sig by parsing binary data.

        Deserialize a strict ASN.1 DER representation of an ECDSA
        signature.
        """
        stream = bytesio_from_binarydata(data)

        # [0x30] [data-size][0x02][r-size][r][0x02][s-size][s]
        marker = stream.read(1)
        if marker != _DER_SIG_MARKER:
            err_msg = f"invalid compound header: {marker.hex()}"
            err_msg += f", instead of DER sequence tag {_DER_SIG_MARKER.hex()}"
            raise EcsigValueError(err_msg)

        # [data-size][0x02][r-size][r][0x02][s-size][s]
        sig_data = _parse_sized(stream)

        # [0x02][r-size][r][0x02][s-size][s]
        sig_data_substream = bytesio_from_binarydata(sig_data)
        r = _deserialize_scalar(sig_data_substream)
        s = _deserialize_scalar(sig_data_substream)

        # to prevent malleability
        # the sig_data_substream must have been consumed entirely
        if sig_data_substream.read(1) != b"":
            raise EcsigValueError("invalid DER sequence length")

        return cls(r, s, ec, check_validity)


def gen_keys(
    prv_key: Optional[PrvKey] = None,
    ec: Curve = secp256k1,
    rand: RandRange = secure_randrange,
) -> Tuple[int, Point]:
    """Return a private/public (int, Point) key-pair.

    If the private key is not provided,
    it is drawn from the randomness source in [1, n-1].
    """
    if prv_key is None:
        # q in the range [1, ec.n-1]
        prv_key = rand(1, ec.n)
    q = int_from_prv_key(prv_key, ec)

    Q = mult(q, ec.G, ec)
    # q in 1..n-1 and G of order n
    assert Q is not INF
    return q, Q


def _sign_(c: int, q: int, nonce: int, ec: Curve = secp256k1) -> Sig:
    # Private function for testing purposes: it allows to explore all
    # possible value of the challenge c (for low-cardinality curves)
    # and to set the nonce, which is never exposed by sign.
    # It assume that c is in [0, n-1], while q and nonce are in [1, n-1]
    # Steps numbering follows SEC 1 v.2 section 4.1.3
    K = mult(nonce, ec.G, ec)  # 1

    # affine x_K-coordinate of K (field element)
    # mod n makes it a scalar
    r = K[0] % ec.n  # 2, 3
    if r == 0:  # r≠0 required as it multiplies the public key
        raise EcsigRuntimeError("failed to sign: r = 0")

    s = mod_inv(nonce, ec.n) * (c + r * q) % ec.n  # 6
    if s == 0:  # s≠0 required as verify will need the inverse of s
        raise EcsigRuntimeError("failed to sign: s = 0")

    return Sig(r, s, ec)


def sign_(
    msg_hash: Octets,
    prv_key: PrvKey,
    ec: Curve = secp256k1,
    hf: HashF = sha256,
    rand: RandRange = secure_randrange,
) -> Sig:
    """Sign a hf_len bytes message according to ECDSA signature algorithm.

    A fresh nonce in [1, n-1] is drawn from the randomness source;
    in the unlikely case of r = 0 or s = 0, another one is drawn.
    """
    # the message msg_hash: a hf_len array
    hf_len = hf().digest_size
    msg_hash = bytes_from_octets(msg_hash, hf_len)

    # the secret key q: an integer in the range 1..n-1.
    # SEC 1 v.2 section 3.2.1
    q = int_from_prv_key(prv_key, ec)

    # the challenge
    c = challenge_(msg_hash, ec, hf)  # 4, 5

    for _ in range(MAX_SIGN_ATTEMPTS):
        # nonce: an integer in the range 1..n-1.
        nonce = int_from_prv_key(rand(1, ec.n), ec)  # 1
        try:
            # second part delegated to helper function
            return _sign_(c, q, nonce, ec)
        except EcsigRuntimeError as e:
            logger.debug("%s: retrying with a fresh nonce", e)

    raise EcsigRuntimeError(f"failed to sign: {MAX_SIGN_ATTEMPTS} nonces rejected")


def sign(
    msg: Octets,
    prv_key: PrvKey,
    ec: Curve = secp256k1,
    hf: HashF = sha256,
    rand: RandRange = secure_randrange,
) -> Sig:
    """ECDSA signature.

    Implemented according to SEC 1 v.2
    The message msg is first processed by hf, yielding the value

        msg_hash = hf(msg),

    a sequence of bits of length *hf_len*.

    Normally, hf is chosen such that its output length *hf_len* is
    roughly equal to *nlen*, the bit-length of the group order *n*,
    since the overall security of the signature scheme will depend on
    the smallest of *hf_len* and *nlen*; however, the ECDSA standard
    supports all combinations of *hf_len* and *nlen*.
    """
    msg_hash = reduce_to_hlen(msg, hf)
    return sign_(msg_hash, prv_key, ec, hf, rand)


def _assert_as_valid_(c: int, Q: Point, r: int, s: int, ec: Curve) -> None:
    # Private function for test/dev purposes
    # Steps numbering follows SEC 1 v.2 section 4.1.4

    w = try_mod_inv(s, ec.n)
    # s in 1..n-1 with n prime always has an inverse
    if w is None:
        raise EcsigRuntimeError(f"no inverse for s: {int_repr(s)}")
    u = c * w % ec.n
    v = r * w % ec.n  # 4
    # Let K = u*G + v*Q.
    K = double_mult_aff(v, Q, u, ec.G, ec)  # 5

    # Fail if infinite(K).
    if K is INF:  # 5
        raise EcsigRuntimeError("invalid (INF) key")

    # affine x_K-coordinate of K
    # Fail if r ≠ x_K %n.
    if r != K[0] % ec.n:  # 6, 7, 8
        raise EcsigRuntimeError("signature verification failed")


def _valid_sig(sig: Union[Sig, Octets], ec: Curve) -> Sig:
    # a Sig carries its own curve, DER octets are parsed on ec
    if isinstance(sig, Sig):
        sig.assert_valid()
        return sig
    return Sig.parse(sig, ec)


def assert_as_valid_(
    msg_hash: Octets,
    key: Key,
    sig: Union[Sig, Octets],
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> None:
    # Private function for test/dev purposes
    # It raises Errors, while verify should always return True or False
    sig = _valid_sig(sig, ec)  # 1

    c = challenge_(msg_hash, sig.ec, hf)  # 2, 3
    Q = point_from_key(key, sig.ec)
    # second part delegated to helper function
    _assert_as_valid_(c, Q, sig.r, sig.s, sig.ec)


def assert_as_valid(
    msg: Octets,
    key: Key,
    sig: Union[Sig, Octets],
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> None:
    # Private function for test/dev purposes
    # It raises Errors, while verify should always return True or False
    msg_hash = reduce_to_hlen(msg, hf)
    assert_as_valid_(msg_hash, key, sig, ec, hf)


def verify_(
    msg_hash: Octets,
    key: Key,
    sig: Union[Sig, Octets],
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4).

    A DER encoded signature is parsed on the ec curve.
    """
    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid_(msg_hash, key, sig, ec, hf)
    except Exception:  # pylint: disable=broad-except
        return False

    return True


def verify(
    msg: Octets,
    key: Key,
    sig: Union[Sig, Octets],
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4).

    A DER encoded signature is parsed on the ec curve.
    """
    # the message hashing is included too:
    # a malformed message is a failed verification
    try:
        assert_as_valid(msg, key, sig, ec, hf)
    except Exception:  # pylint: disable=broad-except
        return False

    return True


def crack_prv_key_(
    msg_hash1: Octets,
    sig1: Union[Sig, Octets],
    msg_hash2: Octets,
    sig2: Union[Sig, Octets],
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> Tuple[int, int]:
    """Return the (private key, nonce) pair from two signatures.

    The two signatures must share the same nonce,
    i.e. the same r, on different messages.
    """
    sig1 = _valid_sig(sig1, ec)
    sig2 = _valid_sig(sig2, ec)

    ec = sig2.ec
    if sig1.ec != ec:
        raise EcsigValueError("not the same curve in signatures")
    if sig1.r != sig2.r:
        raise EcsigValueError("not the same r in signatures")
    if sig1.s == sig2.s:
        raise EcsigValueError("identical signatures")

    c_1 = challenge_(msg_hash1, ec, hf)
    c_2 = challenge_(msg_hash2, ec, hf)

    nonce = (c_1 - c_2) * mod_inv(sig1.s - sig2.s, ec.n) % ec.n
    q = (sig2.s * nonce - c_2) * mod_inv(sig1.r, ec.n) % ec.n
    return q, nonce


def crack_prv_key(
    msg1: Octets,
    sig1: Union[Sig, Octets],
    msg2: Octets,
    sig2: Union[Sig, Octets],
    ec: Curve = secp256k1,
    hf: HashF = sha256,
) -> Tuple[int, int]:
    "Return the (private key, nonce) pair from two signatures sharing the nonce."
    msg_hash1 = reduce_to_hlen(msg1, hf)
    msg_hash2 = reduce_to_hlen(msg2, hf)

    return crack_prv_key_(msg_hash1, sig1, msg_hash2, sig2, ec, hf)
