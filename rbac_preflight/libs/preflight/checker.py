"""
Permission Checker

Reports which verbs the current identity lacks for the resources a manifest
touches, before any of them is applied or removed.
"""

import logging
from typing import List, Set, Tuple

from ..core.exceptions import PreflightError, ProbeError
from ..core.utils import split_api_version
from .actions import verbs_for_action
from .capabilities import PermissionCapabilities
from .discovery import ResourceResolver
from .manifest import ManifestParser
from .models import ForbiddenAction, ResolvedResource

logger = logging.getLogger(__name__)


class PermissionChecker:
    """Aggregates per-verb permission probes into a forbidden-action report"""

    def __init__(self, capabilities: PermissionCapabilities, parser: ManifestParser = None):
        """
        Initialize the checker with dependency injection

        Args:
            capabilities: Cluster capability set (live client or test double)
            parser: Manifest parser (defaults to ManifestParser)
        """
        self.capabilities = capabilities
        self.parser = parser or ManifestParser()

    def validate(self) -> None:
        """
        Connectivity and identity pre-check, run once before any check

        Raises:
            AuthError: If the cluster or credentials are unreachable
        """
        self.capabilities.validate()

    def get_forbidden_actions(self, namespace: str, action: str, manifest: str) -> List[ForbiddenAction]:
        """
        Determine the forbidden actions for applying an action to a manifest

        Entries are unique by (apiVersion, resource, namespace) and ordered by
        the first document producing each key. Verbs keep the action's order.

        Args:
            namespace: Default namespace for documents without one
            action: Logical action (create, upgrade or delete)
            manifest: Raw multi-document manifest text

        Returns:
            List of ForbiddenAction, empty when every verb is allowed

        Raises:
            ConfigError: If the action is unknown (before any cluster call)
            ParseError: If the manifest is malformed
            ResourceNotFoundError: If a kind is not served by the cluster
            ProbeError: If discovery or a permission query fails
        """
        verbs = verbs_for_action(action)
        descriptors = self.parser.parse(manifest, namespace)

        # Discovery is cached per check only
        resolver = ResourceResolver(self.capabilities)
        probed_keys: Set[Tuple[str, str, str]] = set()
        forbidden_actions = []

        for descriptor in descriptors:
            resolved = ResolvedResource(
                api_version=descriptor.api_version,
                resource_name=resolver.resolve(descriptor.api_version, descriptor.kind),
                namespace=descriptor.namespace
            )
            if resolved.key in probed_keys:
                continue
            probed_keys.add(resolved.key)

            denied = self._denied_verbs(resolved, verbs)
            if denied:
                forbidden_actions.append(ForbiddenAction(
                    api_version=resolved.api_version,
                    resource=resolved.resource_name,
                    namespace=resolved.namespace,
                    verbs=denied
                ))

        logger.info(
            f"Checked {len(probed_keys)} resources for '{action}': "
            f"{len(forbidden_actions)} with forbidden actions"
        )
        return forbidden_actions

    def _denied_verbs(self, resolved: ResolvedResource, verbs: Tuple[str, ...]) -> Tuple[str, ...]:
        """
        Probe each verb in order and collect the denied ones

        Args:
            resolved: Resource to probe
            verbs: Ordered verb set of the action

        Returns:
            Tuple of denied verbs, in the order given
        """
        group, _ = split_api_version(resolved.api_version)
        denied = []
        for verb in verbs:
            try:
                allowed = self.capabilities.can_i(verb, group, resolved.resource_name, resolved.namespace)
            except PreflightError:
                raise
            except Exception as e:
                raise ProbeError(
                    f"Permission query for {verb} {resolved.resource_name} "
                    f"in {resolved.namespace} failed: {e}"
                ) from e

            logger.debug(
                f"can-i {verb} {resolved.resource_name} ({resolved.api_version}) "
                f"in {resolved.namespace}: {'yes' if allowed else 'no'}"
            )
            if not allowed and verb not in denied:
                denied.append(verb)
        return tuple(denied)
