"""
Command-line interface components.

This package contains CLI tools and entry points for IPAM DNS Sync.
"""

from .main import main

__all__ = ["main"]
