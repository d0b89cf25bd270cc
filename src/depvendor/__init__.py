"""
depvendor - offline vendoring of externally fetched dependencies

Fetches external repositories into a tool-managed cache and mirrors the
fresh ones into a persistent, checked-in vendor directory.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
