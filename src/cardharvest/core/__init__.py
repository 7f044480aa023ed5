"""Core package initializer for cardharvest.

Downstream code imports the pieces it needs directly, e.g.:
    from cardharvest.core.settings import settings, get_logger
    from cardharvest.core.tree_search import find_terms_in_object
"""

from __future__ import annotations

__all__ = ["__doc__"]
