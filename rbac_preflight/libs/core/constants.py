"""
Constants Module

Centralized constants for the RBAC Preflight tool to eliminate magic strings
and improve maintainability.
"""

from enum import Enum, IntEnum


class BaseStrEnum(str, Enum):
    """Base enum class that inherits from str"""

    def __str__(self) -> str:
        """Return the enum value as string"""
        return self.value

    def __repr__(self) -> str:
        """Return a detailed representation of the enum"""
        return f"{self.__class__.__name__}.{self.name}"


class KubernetesConstants:
    """Kubernetes-related constants"""

    DEFAULT_NAMESPACE = "default"

    # Core API group is the empty string
    CORE_API_GROUP = ""

    # Wrapper kind emitted by `kubectl get -o yaml` for multiple objects
    LIST_KIND = "List"

    class RBACVerb(BaseStrEnum):
        """RBAC verbs probed by the preflight check"""
        CREATE = "create"
        UPDATE = "update"
        DELETE = "delete"

    class DeploymentAction(BaseStrEnum):
        """Logical deployment actions a manifest can be checked for"""
        CREATE = "create"
        UPGRADE = "upgrade"
        DELETE = "delete"

        @classmethod
        def choices(cls) -> list:
            """Get all action literals in declaration order"""
            return [action.value for action in cls]


class NetworkConstants:
    """Network-related constants"""

    # Timeout constants (seconds)
    DEFAULT_TIMEOUT = 30

    class HTTPStatus(IntEnum):
        """HTTP status codes the cluster API can answer with"""
        UNAUTHORIZED = 401
        FORBIDDEN = 403
        NOT_FOUND = 404


class ExitCode(IntEnum):
    """Process exit codes of the command-line tool"""
    SUCCESS = 0
    ERROR = 1
    FORBIDDEN = 3


class OutputFormat(BaseStrEnum):
    """Report formats supported by the check command"""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


class ErrorMessages:
    """Centralized error message templates"""

    class SSLError(BaseStrEnum):
        """SSL-related error message templates"""
        CERT_VERIFICATION_FAILED = (
            "SSL certificate verification failed. The cluster is using self-signed certificates.\n"
            "To resolve this issue, add the --skip-tls flag to your command.\n"
            "Example: rbac-preflight check --skip-tls [other options]"
        )

        CONNECTION_ERROR = (
            "SSL connection error occurred. If using self-signed certificates, add --skip-tls flag.\n"
            "Original error: {error}"
        )

        VERIFICATION_DISABLED_WARNING = (
            "SSL verification disabled - connections will not verify certificates. "
            "This is insecure and should only be used in development environments"
        )

    class AuthError(BaseStrEnum):
        """Authentication-related error message templates"""
        NOT_CONFIGURED = "Authentication not configured. Configure authentication first."
        TOKEN_EXPIRED = "Authentication token has expired or is invalid."
        INSUFFICIENT_PERMISSIONS = "Insufficient permissions to access the requested resource."
        NO_CREDENTIALS = (
            "No cluster credentials found. Provide --cluster-url and --cluster-token, "
            "or configure a kubeconfig context."
        )

    class NetworkError(BaseStrEnum):
        """Network-related error message templates"""
        CONNECTION_TIMEOUT = (
            "Connection timeout or network error occurred.\n"
            "Try:\n"
            "  • Checking cluster connectivity: kubectl version\n"
            "  • Raising --request-timeout\n"
            "  • Retrying the command with --debug for detailed logs"
        )

        CONNECTION_REFUSED = (
            "Connection refused by the cluster API server.\n"
            "Try:\n"
            "  • Verifying the cluster URL and port\n"
            "  • Checking that the API server is running\n"
            "  • Retrying with --debug for detailed logs"
        )

    class ConfigError(BaseStrEnum):
        """Configuration-related error message templates"""
        INVALID_NAMESPACE = "Invalid Kubernetes namespace format: {namespace}"
        INVALID_URL = "Invalid cluster URL format: {url}"
        UNKNOWN_ACTION = "Unknown action '{action}'. Valid actions: {choices}"
        CONFIG_FILE_NOT_FOUND = "Configuration file not found: {config_path}"
        MANIFEST_NOT_FOUND = "Manifest file not found: {manifest_path}"


class FileConstants:
    """File and directory related constants"""

    DEFAULT_CONFIG_FILE = "rbac-preflight-config.yaml"

    # Reads the manifest from standard input
    STDIN_PATH = "-"

