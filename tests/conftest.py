"""
Pytest Configuration and Fixtures
"""

import pytest
from fastapi.testclient import TestClient
from main import app
from api.liquid_validations.validations import LiquidValidations


@pytest.fixture(scope="session")
def test_client():
    """Create test client for API testing"""
    return TestClient(app)


@pytest.fixture
def validations():
    """Empty rule registry"""
    return LiquidValidations()


class FakeParser:
    """Parser double returning canned errors or raising"""

    def __init__(self, errors=None, exception=None):
        self.errors = errors or []
        self.exception = exception
        self.seen = []

    def parse(self, text):
        self.seen.append(text)
        if self.exception is not None:
            raise self.exception
        return list(self.errors)


@pytest.fixture
def fake_parser():
    """Factory for parser doubles"""
    return FakeParser


@pytest.fixture
def sample_validation_request():
    """Sample validation request for API testing"""
    return {
        "content": "<footer>{{ unsubscribe_url }}</footer>{% include 'signature' %}",
        "attribute": "email_body",
        "record": {"state": "published"},
        "syntax": True,
        "variables": [{"variable": "unsubscribe_url", "container": "footer"}],
        "tags": [{"tag": "include", "max": 1}]
    }
