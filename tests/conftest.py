"""
Pytest configuration and shared fixtures for FastRules tests.
"""

import pytest
from faker import Faker

from fast_rules.core import lang
from fast_rules.core.rules import rules

fake = Faker()


@pytest.fixture
def sample_data():
    """Provide sample data for tests."""
    return {
        "name": fake.name(),
        "email": fake.email(),
        "company": fake.company(),
    }


@pytest.fixture(autouse=True)
def reset_validator_state():
    """Registrations and language changes are process-wide; start every test clean."""
    rules.reset()
    lang.reset()
    lang.set_fallback_lang("en")
    lang.use_lang("en")
    yield
    rules.reset()
    lang.reset()
