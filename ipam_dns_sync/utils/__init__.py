"""
Utility functions and helpers.

This package contains helpers for validation, configuration and
webhook signature checks.
"""

from .validators import classify_address, is_in_domain, normalize_name

__all__ = ["classify_address", "is_in_domain", "normalize_name"]
