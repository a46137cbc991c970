"""Helpers for working with Eclipse unformatted files."""

from .base import ENDSOL, unfmt_block, unfmt_file, unfmt_header

__all__ = ["ENDSOL", "unfmt_block", "unfmt_file", "unfmt_header"]
