"""
Version information for the Zips catalog.

This file is the single source of truth for version numbers.
The Flask app reports it from /health.
"""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)
