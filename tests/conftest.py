"""Shared fixtures for the client tests."""

import httpx
import pytest

from .drupal_backend import create_app


@pytest.fixture
def backend_app():
    return create_app()


@pytest.fixture
def backend_transport(backend_app):
    return httpx.ASGITransport(app=backend_app)
