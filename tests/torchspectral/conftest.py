"""Shared fixtures for spectral tests."""

import pytest

from torchspectral import SpectralCache


@pytest.fixture
def cache():
    """A fresh, empty cache for each test."""
    return SpectralCache()
