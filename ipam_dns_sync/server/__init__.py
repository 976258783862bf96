"""
HTTP server components.

This package contains the aiohttp application that receives IPAM webhooks.
"""

from .webhook_server import create_app, run_server

__all__ = ["create_app", "run_server"]
