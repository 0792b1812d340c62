"""
Core Libraries

Shared functionality and utilities for the RBAC Preflight tool.
"""

from .auth import KubernetesAuth
from .config import ConfigManager
from .constants import (
    KubernetesConstants, NetworkConstants, FileConstants,
    ErrorMessages, ExitCode, OutputFormat
)
from .exceptions import (
    PreflightError, AuthError, ConfigError, ParseError,
    ResourceNotFoundError, ProbeError
)
from .protocols import AuthProvider, ConfigProvider, HelpProvider
from .utils import (
    setup_logging, validate_namespace, validate_cluster_url,
    split_api_version, handle_api_error, mask_sensitive_info
)

__all__ = [
    # Main classes
    'KubernetesAuth',
    'ConfigManager',
    # Constants
    'KubernetesConstants',
    'NetworkConstants',
    'FileConstants',
    'ErrorMessages',
    'ExitCode',
    'OutputFormat',
    # Exceptions
    'PreflightError',
    'AuthError',
    'ConfigError',
    'ParseError',
    'ResourceNotFoundError',
    'ProbeError',
    # Protocols
    'AuthProvider',
    'ConfigProvider',
    'HelpProvider',
    # Utilities
    'setup_logging',
    'validate_namespace',
    'validate_cluster_url',
    'split_api_version',
    'handle_api_error',
    'mask_sensitive_info'
]
