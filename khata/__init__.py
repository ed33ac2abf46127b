"""Mini README: Core package initializer for the Khata ledger service.

This module exposes convenience imports so callers can reach the logging
helpers without knowing the module layout. The ledger itself lives in
``khata.ledger`` and the HTTP surface in ``khata.interface``; both are kept
out of this file so importing the package stays free of database and web
framework side effects.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
