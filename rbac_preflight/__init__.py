"""
RBAC Preflight

Reports the actions the current identity may not perform for the resources
of a manifest, so an installer can abort before partially applying it.
"""

__version__ = "1.0.0"
__author__ = "RBAC Preflight Project"

from .libs import (
    # Core
    KubernetesAuth, ConfigManager,
    PreflightError, AuthError, ConfigError, ParseError, ResourceNotFoundError, ProbeError,
    # Preflight
    ManifestParser, ResourceResolver, DiscoveryCache, PermissionChecker,
    PermissionCapabilities, ClusterCapabilities, verbs_for_action,
    ResourceDescriptor, ResolvedResource, APIResource, ForbiddenAction,
    # Main
    PreflightManager, main
)

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
    'PreflightManager',
    'main'
]
