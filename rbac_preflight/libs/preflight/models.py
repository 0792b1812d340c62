"""
Preflight Data Model

Lightweight records passed between the manifest parser, the resource
resolver and the forbidden-action aggregator.
"""

from typing import Dict, Any, NamedTuple, Optional, Tuple


class ResourceDescriptor(NamedTuple):
    """One manifest document reduced to what a permission check needs"""
    api_version: str
    kind: str
    namespace: str
    name: Optional[str] = None


class ResolvedResource(NamedTuple):
    """A descriptor whose kind has been resolved to the server's resource name"""
    api_version: str
    resource_name: str
    namespace: str

    @property
    def key(self) -> Tuple[str, str, str]:
        """Aggregation key: permissions depend only on this triple"""
        return (self.api_version, self.resource_name, self.namespace)


class APIResource(NamedTuple):
    """One entry of a group/version's discovery document"""
    name: str
    kind: str
    namespaced: bool = True


class ForbiddenAction(NamedTuple):
    """Verbs the current identity may not perform on a resource in a namespace"""
    api_version: str
    resource: str
    namespace: str
    verbs: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize using the field names of Kubernetes manifests

        Returns:
            Dict with apiVersion, resource, namespace and verbs keys
        """
        return {
            'apiVersion': self.api_version,
            'resource': self.resource,
            'namespace': self.namespace,
            'verbs': list(self.verbs)
        }
