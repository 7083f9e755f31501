"""Endpoint resolution through the JSON:API index."""

from .index import JSONAPIIndexRouter

__all__ = ["JSONAPIIndexRouter"]
