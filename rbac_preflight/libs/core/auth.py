"""
Authentication Module

Handles cluster authentication and context discovery.
"""

import functools
import logging
from typing import Optional

try:
    from kubernetes import client, config
    from kubernetes.client.rest import ApiException
except ImportError:
    raise ImportError("kubernetes library is required. Install with: pip install kubernetes")

import urllib3

from .constants import ErrorMessages, NetworkConstants
from .exceptions import AuthError, ConfigError
from .utils import validate_cluster_url, handle_api_error, mask_sensitive_info

logger = logging.getLogger(__name__)


class KubernetesAuth:
    """Handles cluster authentication and context discovery"""

    def __init__(self, skip_tls: bool = False, request_timeout: int = NetworkConstants.DEFAULT_TIMEOUT):
        """
        Initialize cluster authentication handler

        Args:
            skip_tls: Whether to skip TLS verification for requests
            request_timeout: Timeout in seconds applied to connectivity checks
        """
        self.skip_tls = skip_tls
        self.request_timeout = request_timeout
        self.cluster_url = None
        self.cluster_token = None
        self.api_client = None

    @staticmethod
    def _handle_auth_errors(func):
        """
        Decorator translating client initialization failures into AuthError

        Args:
            func: Function to wrap with error handling

        Returns:
            Wrapped function with standardized error handling
        """
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AuthError:
                raise
            except Exception as e:
                handle_api_error(e, "Kubernetes authentication failed", AuthError)
        return wrapper

    def configure_auth(self, cluster_url: str = None, cluster_token: str = None) -> bool:
        """
        Configure authentication with provided URL and token, or discover from context

        Args:
            cluster_url: Cluster API URL (optional)
            cluster_token: Bearer token (optional)

        Returns:
            bool: True if authentication was configured successfully

        Raises:
            AuthError: If authentication configuration fails
            ConfigError: If provided parameters are invalid
        """
        try:
            if cluster_url and cluster_token:
                validate_cluster_url(cluster_url)
                logger.info("Using provided cluster URL and token for authentication")
                self.cluster_url = cluster_url
                self.cluster_token = cluster_token
                return self._configure_client_with_token()

            return self._discover_from_context()

        except (ConfigError, AuthError):
            raise
        except Exception as e:
            raise AuthError(f"Failed to configure authentication: {e}") from e

    def _apply_tls_settings(self, configuration: client.Configuration) -> None:
        """
        Apply TLS settings to Kubernetes configuration

        Args:
            configuration: Kubernetes configuration object to modify
        """
        if self.skip_tls:
            configuration.verify_ssl = False
            configuration.ssl_ca_cert = None
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @_handle_auth_errors
    def _initialize_api_client(self, configuration: Optional[client.Configuration] = None) -> bool:
        """
        Initialize the Kubernetes API client and record the cluster URL

        Args:
            configuration: Optional Kubernetes configuration object

        Returns:
            bool: True if initialization successful
        """
        if configuration is None:
            configuration = client.Configuration.get_default_copy()
        self._apply_tls_settings(configuration)
        self.api_client = client.ApiClient(configuration)

        if configuration.host:
            self.cluster_url = configuration.host
            masked_url = mask_sensitive_info(self.cluster_url, self.cluster_url)
            logger.info(f"Successfully configured Kubernetes client for {masked_url}")

        return True

    def _configure_client_with_token(self) -> bool:
        """
        Configure Kubernetes client using URL and token

        Returns:
            bool: True if configuration successful
        """
        configuration = client.Configuration()
        configuration.host = self.cluster_url
        configuration.api_key = {"authorization": self.cluster_token}
        configuration.api_key_prefix = {"authorization": "Bearer"}
        return self._initialize_api_client(configuration)

    @_handle_auth_errors
    def _discover_from_context(self) -> bool:
        """
        Discover authentication from kubeconfig or in-cluster config

        Returns:
            bool: True if discovery successful

        Raises:
            AuthError: If neither kubeconfig nor in-cluster config is available
        """
        try:
            config.load_kube_config()
            logger.info("Successfully loaded kubeconfig")
        except Exception as kubeconfig_error:
            logger.warning(f"Failed to load kubeconfig: {kubeconfig_error}")
            try:
                config.load_incluster_config()
                logger.info("Successfully loaded in-cluster config")
            except Exception as incluster_error:
                logger.warning(f"Failed to load in-cluster config: {incluster_error}")
                raise AuthError(str(ErrorMessages.AuthError.NO_CREDENTIALS))

        return self._initialize_api_client()

    def get_api_client(self) -> Optional[client.ApiClient]:
        """
        Get the initialized Kubernetes API client

        Returns:
            client.ApiClient or None when not authenticated
        """
        return self.api_client

    def is_authenticated(self) -> bool:
        """
        Check if authentication is properly configured

        Returns:
            bool: True if authenticated
        """
        return self.api_client is not None

    def test_connection(self) -> bool:
        """
        Test the connection to the cluster by reading the server version

        Returns:
            bool: True if connection is successful

        Raises:
            AuthError: If connection test fails
        """
        if not self.is_authenticated():
            raise AuthError(str(ErrorMessages.AuthError.NOT_CONFIGURED))

        try:
            version = client.VersionApi(self.api_client).get_code(
                _request_timeout=self.request_timeout
            )
        except ApiException as e:
            handle_api_error(e, "Failed to connect to cluster", AuthError)
        except Exception as e:
            handle_api_error(e, "Unexpected error testing connection", AuthError)

        logger.info(f"Successfully connected to cluster (server version {version.git_version})")
        return True
