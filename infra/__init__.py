"""
Infrastructure module exports.

Configuration and bootstrap for the bridge components.
"""

from .config import InfraConfig, get_config, CompletionBackendType
from .bootstrap import InfraBootstrap, bootstrap_infrastructure

__all__ = [
    "InfraConfig",
    "get_config",
    "CompletionBackendType",
    "InfraBootstrap",
    "bootstrap_infrastructure",
]
