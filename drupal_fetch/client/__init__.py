"""The Drupal JSON:API client."""

from .base import DrupalFetch

__all__ = ["DrupalFetch"]
