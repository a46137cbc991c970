"""Small helpers shared by the reader modules."""
from __future__ import annotations

from . import iterables as _iterables
from . import string_ops as _string_ops

from .iterables import *  # noqa: F401,F403
from .string_ops import *  # noqa: F401,F403

__all__ = sorted(set(_iterables.__all__ + _string_ops.__all__))
