#!/usr/bin/env python3
"""
Action-Verb Mapping Test Suite
"""

import pytest

from rbac_preflight.libs.core.constants import KubernetesConstants
from rbac_preflight.libs.core.exceptions import ConfigError
from rbac_preflight.libs.preflight.actions import ACTION_VERBS, verbs_for_action


@pytest.mark.parametrize("action, expected", [
    ("create", ("create",)),
    ("upgrade", ("create", "update", "delete")),
    ("delete", ("delete",)),
])
def test_verbs_for_action(action, expected):
    assert verbs_for_action(action) == expected


def test_enum_members_are_accepted():
    assert verbs_for_action(KubernetesConstants.DeploymentAction.UPGRADE) == ("create", "update", "delete")


def test_every_action_has_verbs():
    assert set(ACTION_VERBS) == set(KubernetesConstants.DeploymentAction.choices())
    for verbs in ACTION_VERBS.values():
        assert verbs
        assert len(set(verbs)) == len(verbs)


@pytest.mark.parametrize("action", ["install", "", "CREATE"])
def test_unknown_action_raises_config_error(action):
    with pytest.raises(ConfigError, match="Unknown action"):
        verbs_for_action(action)


def test_table_is_read_only():
    with pytest.raises(TypeError):
        ACTION_VERBS["patch"] = ("patch",)
