"""
RBAC Preflight Library

Checks whether the current identity may apply or remove the resources of a
manifest before any of them is sent to the cluster.
"""

__version__ = "1.0.0"

# Core libraries
from .core import (
    KubernetesAuth, ConfigManager,
    PreflightError, AuthError, ConfigError, ParseError, ResourceNotFoundError, ProbeError,
    KubernetesConstants, NetworkConstants, FileConstants, ErrorMessages, ExitCode, OutputFormat
)

# Preflight libraries
from .preflight import (
    ManifestParser, ResourceResolver, DiscoveryCache, PermissionChecker,
    PermissionCapabilities, ClusterCapabilities, verbs_for_action,
    ResourceDescriptor, ResolvedResource, APIResource, ForbiddenAction
)

# Main application and help
from .help_manager import HelpManager
from .main_app import PreflightManager, main

__all__ = [
    # Core
    'KubernetesAuth',
    'ConfigManager',
    'PreflightError',
    'AuthError',
    'ConfigError',
    'ParseError',
    'ResourceNotFoundError',
    'ProbeError',
    'KubernetesConstants',
    'NetworkConstants',
    'FileConstants',
    'ErrorMessages',
    'ExitCode',
    'OutputFormat',
    # Preflight
    'ManifestParser',
    'ResourceResolver',
    'DiscoveryCache',
    'PermissionChecker',
    'PermissionCapabilities',
    'ClusterCapabilities',
    'verbs_for_action',
    'ResourceDescriptor',
    'ResolvedResource',
    'APIResource',
    'ForbiddenAction',
    # Main
    'HelpManager',
    'PreflightManager',
    'main'
]
