"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from devenv.adapters.mock import MockShell
from devenv.core.models.package import Package
from devenv.core.models.settings import Settings
from tests.factories import make_package


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def abc_catalog() -> dict[str, Package]:
    """A (no deps), B (needs A), C (needs A and B)."""
    return {
        "A": make_package("A"),
        "B": make_package("B", "A"),
        "C": make_package("C", "A", "B"),
    }


@pytest.fixture
def cyclic_catalog() -> dict[str, Package]:
    """A ↔ B cycle plus an independent X."""
    return {
        "A": make_package("A", "B"),
        "B": make_package("B", "A"),
        "X": make_package("X"),
    }


@pytest.fixture
def mock_shell() -> MockShell:
    return MockShell()


@pytest.fixture
def settings() -> Settings:
    return Settings()
