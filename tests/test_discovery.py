#!/usr/bin/env python3
"""
Resource Resolver Test Suite

Tests kind-to-resource resolution and the per-check discovery cache.
"""

import pytest

from rbac_preflight.libs.core.exceptions import ProbeError, ResourceNotFoundError
from rbac_preflight.libs.preflight.discovery import DiscoveryCache, ResourceResolver
from rbac_preflight.libs.preflight.models import APIResource
from test_constants import FakeCapabilities


def test_resolves_core_kind(fake_capabilities):
    resolver = ResourceResolver(fake_capabilities)

    assert resolver.resolve("v1", "Pod") == "pods"


def test_subresources_are_ignored():
    capabilities = FakeCapabilities(resource_lists={
        "v1": [APIResource("pods/status", "Pod"), APIResource("pods", "Pod")],
    })

    assert ResourceResolver(capabilities).resolve("v1", "Pod") == "pods"


def test_discovery_is_fetched_once_per_group_version(fake_capabilities):
    resolver = ResourceResolver(fake_capabilities)

    resolver.resolve("v1", "Pod")
    resolver.resolve("v1", "Service")
    resolver.resolve("apps/v1beta1", "Deployment")
    resolver.resolve("v1", "Pod")

    assert fake_capabilities.discovery_calls == ["v1", "apps/v1beta1"]
    assert len(resolver.cache) == 2
    assert "v1" in resolver.cache


def test_unknown_kind_raises(fake_capabilities):
    resolver = ResourceResolver(fake_capabilities)

    with pytest.raises(ResourceNotFoundError) as exc_info:
        resolver.resolve("apps/v1beta1", "StatefulSet")

    assert exc_info.value.api_version == "apps/v1beta1"
    assert exc_info.value.kind == "StatefulSet"


def test_unknown_group_version_raises(fake_capabilities):
    with pytest.raises(ResourceNotFoundError, match="example.com/v1"):
        ResourceResolver(fake_capabilities).resolve("example.com/v1", "Widget")


def test_kind_match_is_case_sensitive(fake_capabilities):
    with pytest.raises(ResourceNotFoundError):
        ResourceResolver(fake_capabilities).resolve("v1", "pod")


def test_unexpected_discovery_failure_is_wrapped():
    class BrokenCapabilities(FakeCapabilities):
        def get_resource_list(self, group_version):
            raise RuntimeError("boom")

    with pytest.raises(ProbeError, match="boom"):
        ResourceResolver(BrokenCapabilities()).resolve("v1", "Pod")


def test_shared_cache_is_reused(fake_capabilities):
    cache = DiscoveryCache()
    cache.put("v1", [APIResource("configmaps", "ConfigMap")])

    resolver = ResourceResolver(fake_capabilities, cache=cache)

    assert resolver.resolve("v1", "ConfigMap") == "configmaps"
    assert fake_capabilities.discovery_calls == []


def test_cache_get_misses_return_none():
    assert DiscoveryCache().get("v1") is None
