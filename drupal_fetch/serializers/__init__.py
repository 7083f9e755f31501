"""JSON:API document deserialization."""

from .base import JSONAPIDeserializer, Resource

__all__ = ["JSONAPIDeserializer", "Resource"]
