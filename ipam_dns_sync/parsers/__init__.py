"""Payload parsers."""

from .webhook import WebhookParser

__all__ = ["WebhookParser"]
