"""
Resource Resolver

Maps a group/version and kind to the plural resource name the cluster serves,
fetching each group/version's discovery document at most once per check.
"""

import logging
from typing import Dict, List, Optional

from ..core.exceptions import PreflightError, ProbeError, ResourceNotFoundError
from .capabilities import PermissionCapabilities
from .models import APIResource

logger = logging.getLogger(__name__)


class DiscoveryCache:
    """In-memory discovery documents keyed by group/version, scoped to one check"""

    def __init__(self):
        self._resource_lists: Dict[str, List[APIResource]] = {}

    def get(self, group_version: str) -> Optional[List[APIResource]]:
        return self._resource_lists.get(group_version)

    def put(self, group_version: str, resources: List[APIResource]) -> None:
        self._resource_lists[group_version] = list(resources)

    def __contains__(self, group_version: str) -> bool:
        return group_version in self._resource_lists

    def __len__(self) -> int:
        return len(self._resource_lists)


class ResourceResolver:
    """Resolves manifest kinds to resource names through live discovery"""

    def __init__(self, capabilities: PermissionCapabilities, cache: Optional[DiscoveryCache] = None):
        """
        Args:
            capabilities: Capability set providing get_resource_list
            cache: Discovery cache (a fresh one per resolver by default)
        """
        self.capabilities = capabilities
        self.cache = cache if cache is not None else DiscoveryCache()

    def resolve(self, api_version: str, kind: str) -> str:
        """
        Resolve a kind to its plural resource name

        Args:
            api_version: Group/version of the kind, e.g. "apps/v1"
            kind: Declared kind, e.g. "Deployment"

        Returns:
            str: Resource name, e.g. "deployments"

        Raises:
            ResourceNotFoundError: If the group/version or the kind is not served
            ProbeError: If discovery fails
        """
        for resource in self._resources_for(api_version):
            # Subresources such as pods/status repeat their parent's kind
            if '/' in resource.name:
                continue
            if resource.kind == kind:
                return resource.name

        raise ResourceNotFoundError(api_version, kind)

    def _resources_for(self, api_version: str) -> List[APIResource]:
        """Get the discovery document of a group/version, fetching it on first use"""
        resources = self.cache.get(api_version)
        if resources is not None:
            logger.debug(f"Discovery cache hit for {api_version}")
            return resources

        try:
            resources = self.capabilities.get_resource_list(api_version)
        except PreflightError:
            raise
        except Exception as e:
            raise ProbeError(f"Discovery of {api_version} failed: {e}") from e

        if resources is None:
            raise ResourceNotFoundError(api_version)

        logger.debug(f"Discovered {len(resources)} resources for {api_version}")
        self.cache.put(api_version, resources)
        return self.cache.get(api_version)
