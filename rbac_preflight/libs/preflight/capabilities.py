"""
Cluster Capabilities

The small set of cluster queries a preflight check consumes, and their
implementation against a live cluster.
"""

import logging
from typing import List, Protocol

try:
    from kubernetes import client
    from kubernetes.client.rest import ApiException
except ImportError:
    raise ImportError("kubernetes library is required. Install with: pip install kubernetes")

from ..core.constants import ErrorMessages, KubernetesConstants, NetworkConstants
from ..core.exceptions import AuthError, ProbeError, ResourceNotFoundError
from ..core.protocols import AuthProvider
from ..core.utils import handle_api_error, split_api_version
from .models import APIResource

logger = logging.getLogger(__name__)


class PermissionCapabilities(Protocol):
    """Protocol for the cluster queries a permission check relies on"""

    def validate(self) -> None:
        """Check connectivity and credentials, raising AuthError on failure"""
        ...

    def get_resource_list(self, group_version: str) -> List[APIResource]:
        """List the resources served for a group/version"""
        ...

    def can_i(self, verb: str, group: str, resource: str, namespace: str) -> bool:
        """Ask whether the current identity may perform a verb on a resource"""
        ...


class ClusterCapabilities:
    """PermissionCapabilities backed by the Kubernetes API of a live cluster"""

    def __init__(self, auth: AuthProvider, request_timeout: int = NetworkConstants.DEFAULT_TIMEOUT):
        """
        Initialize capabilities from an authenticated provider

        Args:
            auth: Authentication provider holding a configured API client
            request_timeout: Timeout in seconds applied to every API call

        Raises:
            AuthError: If the provider has no API client
        """
        if not auth.is_authenticated():
            raise AuthError(str(ErrorMessages.AuthError.NOT_CONFIGURED))

        self.auth = auth
        self.request_timeout = request_timeout
        self.api_client = auth.get_api_client()
        self.authorization_api = client.AuthorizationV1Api(self.api_client)

    def validate(self) -> None:
        """
        Lightweight identity and connectivity check

        Raises:
            AuthError: If the cluster or credentials are unreachable
        """
        self.auth.test_connection()

    def get_resource_list(self, group_version: str) -> List[APIResource]:
        """
        Fetch the discovery document of a group/version

        Args:
            group_version: apiVersion such as "v1" or "apps/v1"

        Returns:
            List of APIResource served for the group/version

        Raises:
            ResourceNotFoundError: If the cluster does not serve the group/version
            ProbeError: If the discovery request fails
        """
        group, version = split_api_version(group_version)
        if group == KubernetesConstants.CORE_API_GROUP:
            path = f"/api/{version}"
        else:
            path = f"/apis/{group}/{version}"

        logger.debug(f"Fetching discovery document {path}")
        try:
            resource_list = self.api_client.call_api(
                path, 'GET',
                header_params={'Accept': 'application/json'},
                response_type='V1APIResourceList',
                auth_settings=['BearerToken'],
                _return_http_data_only=True,
                _request_timeout=self.request_timeout
            )
        except ApiException as e:
            if e.status == NetworkConstants.HTTPStatus.NOT_FOUND:
                raise ResourceNotFoundError(group_version) from e
            handle_api_error(e, f"Discovery of {group_version} failed", ProbeError)
        except Exception as e:
            handle_api_error(e, f"Discovery of {group_version} failed", ProbeError)

        return [
            APIResource(name=r.name, kind=r.kind, namespaced=bool(r.namespaced))
            for r in (resource_list.resources or [])
        ]

    def can_i(self, verb: str, group: str, resource: str, namespace: str) -> bool:
        """
        Submit a SelfSubjectAccessReview for one verb

        Args:
            verb: RBAC verb
            group: API group ("" for the core group)
            resource: Plural resource name
            namespace: Namespace the verb would act in

        Returns:
            bool: True if allowed, False if denied

        Raises:
            ProbeError: If the review cannot be completed
        """
        body = client.V1SelfSubjectAccessReview(
            spec=client.V1SelfSubjectAccessReviewSpec(
                resource_attributes=client.V1ResourceAttributes(
                    verb=verb,
                    group=group,
                    resource=resource,
                    namespace=namespace,
                )
            )
        )

        try:
            response = self.authorization_api.create_self_subject_access_review(
                body=body, _request_timeout=self.request_timeout
            )
        except ApiException as e:
            handle_api_error(e, f"Access review for {verb} {resource} failed", ProbeError)
        except Exception as e:
            handle_api_error(e, f"Access review for {verb} {resource} failed", ProbeError)

        status = response.status
        allowed = bool(status is not None and status.allowed)
        if not allowed and status is not None and status.evaluation_error:
            logger.debug(f"Access review evaluation error: {status.evaluation_error}")
        return allowed
