"""
Preflight Libraries

Permission preflight check: manifest parsing, kind resolution, action-verb
mapping and forbidden-action aggregation.
"""

from .actions import ACTION_VERBS, verbs_for_action
from .capabilities import PermissionCapabilities, ClusterCapabilities
from .checker import PermissionChecker
from .discovery import DiscoveryCache, ResourceResolver
from .manifest import ManifestParser, parse_manifest
from .models import ResourceDescriptor, ResolvedResource, APIResource, ForbiddenAction

__all__ = [
    'ACTION_VERBS',
    'verbs_for_action',
    'PermissionCapabilities',
    'ClusterCapabilities',
    'PermissionChecker',
    'DiscoveryCache',
    'ResourceResolver',
    'ManifestParser',
    'parse_manifest',
    'ResourceDescriptor',
    'ResolvedResource',
    'APIResource',
    'ForbiddenAction'
]
