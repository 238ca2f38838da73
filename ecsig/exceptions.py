#!/usr/bin/env python3

# Copyright (C) 2024-2026 The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are only meant to discriminate between Exceptions being raised
by ecsig from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the ecsig versions are derived:

* EcsigValueError: invalid input, e.g. a scalar out of 1..n-1,
  a point not on curve, a non positive modulus, a missing inverse
* EcsigTypeError: input of the wrong kind, e.g. not a point
* EcsigRuntimeError: a computation that failed on valid input,
  e.g. a signature that does not verify
"""


class EcsigValueError(ValueError):
    pass


class EcsigTypeError(TypeError):
    pass


class EcsigRuntimeError(RuntimeError):
    pass
