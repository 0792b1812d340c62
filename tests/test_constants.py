#!/usr/bin/env python3
"""
Shared Test Constants

Common constants and test doubles used across all test suites.
"""

from typing import Callable, Dict, List, Optional, Tuple

from rbac_preflight.libs.core.exceptions import ResourceNotFoundError
from rbac_preflight.libs.preflight.models import APIResource


class PreflightTestConstants:
    """Constants shared across the preflight test suites"""

    DEFAULT_NAMESPACE = "foo"
    OTHER_NAMESPACE = "bar"

    EXAMPLE_URL = "https://api.example.com:6443"
    EXAMPLE_TOKEN = "sha256~abcdefghijklmnopqrstuvwxyz0123456789"
    MASKED_TOKEN = "***MASKED***"

    # Discovery documents served by the fake cluster
    RESOURCE_LISTS = {
        "v1": [
            APIResource(name="pods", kind="Pod"),
            APIResource(name="pods/status", kind="Pod"),
            APIResource(name="services", kind="Service"),
            APIResource(name="namespaces", kind="Namespace", namespaced=False),
        ],
        "apps/v1beta1": [
            APIResource(name="deployments", kind="Deployment"),
        ],
        "extensions/v1beta1": [
            APIResource(name="deployments", kind="Deployment"),
        ],
    }

    POD_MANIFEST = """---
apiVersion: v1
kind: Pod
"""

    DEPLOYMENT_MANIFEST = """---
apiVersion: apps/v1beta1
kind: Deployment
"""

    DEPLOYMENT_IN_BAR_MANIFEST = """---
apiVersion: apps/v1beta1
kind: Deployment
metadata:
  namespace: bar
"""

    TWO_GROUPS_MANIFEST = """---
apiVersion: apps/v1beta1
kind: Deployment
---
apiVersion: extensions/v1beta1
kind: Deployment
"""

    DUPLICATE_DEPLOYMENT_MANIFEST = """---
apiVersion: apps/v1beta1
kind: Deployment
metadata:
  name: frontend
---
apiVersion: apps/v1beta1
kind: Deployment
metadata:
  name: backend
"""

    UNKNOWN_KIND_MANIFEST = """---
apiVersion: apps/v1beta1
kind: StatefulSet
"""

    UNKNOWN_GROUP_MANIFEST = """---
apiVersion: example.com/v1
kind: Widget
"""


def only_pods_allowed(verb: str, group: str, resource: str, namespace: str) -> bool:
    """Grant every verb on pods and nothing else"""
    return resource == "pods"


class FakeCapabilities:
    """
    In-memory capability set with scripted discovery and permission answers.

    Records every call so tests can assert on the number and order of
    discovery and permission queries.
    """

    def __init__(self, resource_lists: Optional[Dict[str, List[APIResource]]] = None,
                 allowed: Callable[[str, str, str, str], bool] = only_pods_allowed,
                 validate_error: Optional[Exception] = None,
                 probe_error: Optional[Exception] = None):
        self.resource_lists = (
            PreflightTestConstants.RESOURCE_LISTS if resource_lists is None else resource_lists
        )
        self.allowed = allowed
        self.validate_error = validate_error
        self.probe_error = probe_error

        self.validate_calls = 0
        self.discovery_calls: List[str] = []
        self.probe_calls: List[Tuple[str, str, str, str]] = []

    def validate(self) -> None:
        self.validate_calls += 1
        if self.validate_error is not None:
            raise self.validate_error

    def get_resource_list(self, group_version: str) -> List[APIResource]:
        self.discovery_calls.append(group_version)
        if group_version not in self.resource_lists:
            raise ResourceNotFoundError(group_version)
        return self.resource_lists[group_version]

    def can_i(self, verb: str, group: str, resource: str, namespace: str) -> bool:
        self.probe_calls.append((verb, group, resource, namespace))
        if self.probe_error is not None:
            raise self.probe_error
        return self.allowed(verb, group, resource, namespace)

    @property
    def total_calls(self) -> int:
        return self.validate_calls + len(self.discovery_calls) + len(self.probe_calls)
