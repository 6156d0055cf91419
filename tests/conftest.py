"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def login_page_html(fixtures_dir):
    """Login page as rendered for an anonymous visitor."""
    return (fixtures_dir / "login_page.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def dashboard_html(fixtures_dir):
    """Dashboard of a referee with two association memberships."""
    return (fixtures_dir / "dashboard.html").read_text(encoding="utf-8")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring backend access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
