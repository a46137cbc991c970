"""Global settings used across :mod:`ECLrestart`.

``DEBUG`` raises the package logger to DEBUG level when the package is
imported. ``STRICT`` is the default for the ``strict`` argument of the
restart extractors.
"""

DEBUG = False
ENDIAN = '>'  # Big-endian
STRICT = False

__all__ = ["DEBUG", "ENDIAN", "STRICT"]
