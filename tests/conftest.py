"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from infra import InfraConfig  # noqa: E402


@pytest.fixture
def infra_config():
    """Bridge configuration with the stub backend and no reply wait."""
    return InfraConfig(
        wechat_token="test_token",
        completion_backend="stub",
        completion_api_url="http://completion.test/v1/chat/completions",
        completion_api_key="test_key",
        completion_model="test-model",
        completion_prompt="You are a test assistant.",
        completion_timeout_s=5.0,
        reply_wait_s=0.0,
        continue_keyword="继续",
        pending_ttl_s=0.0,
    )
