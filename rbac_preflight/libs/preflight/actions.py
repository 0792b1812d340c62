"""
Action-Verb Mapping

Static table of the RBAC verbs each logical deployment action may exercise.
"""

from types import MappingProxyType
from typing import Tuple

from ..core.constants import ErrorMessages, KubernetesConstants
from ..core.exceptions import ConfigError

Action = KubernetesConstants.DeploymentAction
Verb = KubernetesConstants.RBACVerb

# A reconciling apply may create new objects, update existing ones and
# prune the ones removed from the manifest.
ACTION_VERBS = MappingProxyType({
    Action.CREATE.value: (Verb.CREATE.value,),
    Action.UPGRADE.value: (Verb.CREATE.value, Verb.UPDATE.value, Verb.DELETE.value),
    Action.DELETE.value: (Verb.DELETE.value,),
})


def verbs_for_action(action: str) -> Tuple[str, ...]:
    """
    Get the ordered verb set for a logical action

    Args:
        action: One of create, upgrade or delete

    Returns:
        Tuple of unique verbs in probing order

    Raises:
        ConfigError: If the action is not recognized
    """
    try:
        return ACTION_VERBS[str(action)]
    except KeyError:
        raise ConfigError(
            str(ErrorMessages.ConfigError.UNKNOWN_ACTION).format(
                action=action, choices=', '.join(ACTION_VERBS)
            )
        ) from None
