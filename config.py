"""
Configuration management for the WeChat bridge.

Loads environment variables from .env file and provides typed access to
process-level configuration. Bridge component settings live in
infra.config.InfraConfig.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Process-level configuration for the bridge."""

    # Server
    AGENT_PORT = int(os.getenv("AGENT_PORT", "80"))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


if __name__ == "__main__":
    # Test configuration loading
    from infra import get_config

    infra_config = get_config()
    print("Configuration loaded:")
    print(f"  Agent Port: {Config.AGENT_PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"  Log Level: {Config.LOG_LEVEL}")
    print(f"  WeChat Token: {'✓ Set' if infra_config.wechat_token else '✗ Missing'}")
    print(f"  Completion Backend: {infra_config.completion_backend}")
    print(f"  Completion URL: {infra_config.completion_api_url}")
    print(f"  Completion Key: {'✓ Set' if infra_config.completion_api_key else '✗ Missing'}")
    print(f"  Completion Model: {infra_config.completion_model}")
    print(f"\n  Validation: {'✓ PASSED' if infra_config.validate() else '✗ FAILED'}")
