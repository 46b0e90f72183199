"""cspquery: look up Windows policy CSP support tables from Microsoft Learn.

The version shown by ``cspquery --version`` comes from the installed
distribution metadata. A source checkout without metadata reports
``0.0.0+unknown``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

UNKNOWN_VERSION = "0.0.0+unknown"

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = UNKNOWN_VERSION
