"""Shared fixtures: fake OpenAI-compatible clients and a recording store."""

import os
import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Rate limiting off and no real credentials before herbaverse.config is imported
os.environ["RATE_LIMIT_ENABLED"] = "0"
for _key in ("OPENAI_API_KEY", "LOVABLE_API_KEY", "SUPABASE_URL", "SUPABASE_KEY", "SUPABASE_SERVICE_ROLE_KEY"):
    os.environ[_key] = ""

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_completion(content):
    """Mimic an OpenAI ChatCompletion with a single choice"""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def _make_client(content=None, side_effect=None):
    client = MagicMock()
    if side_effect is not None:
        client.chat.completions.create = AsyncMock(side_effect=side_effect)
    else:
        client.chat.completions.create = AsyncMock(return_value=_make_completion(content))
    return client


class RecordingStore:
    """In-memory stand-in for RecommendationStore"""

    def __init__(self):
        self.records = []

    def save(self, record):
        self.records.append(record)
        return True


@pytest.fixture
def make_client():
    return _make_client


@pytest.fixture
def make_completion():
    return _make_completion


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def aloe_query():
    return "I have a burn on my hand, what gel can help?"
