"""
Protocols and Interfaces

Defines protocols (interfaces) for dependency injection and type hints.
"""

from typing import Protocol, Dict, Any, Optional

try:
    from kubernetes import client
except ImportError:
    raise ImportError("kubernetes library is required. Install with: pip install kubernetes")


class AuthProvider(Protocol):
    """Protocol for authentication providers"""

    def configure_auth(self, cluster_url: str = None, cluster_token: str = None) -> bool:
        """Configure authentication with provided URL and token, or discover from context"""
        ...

    def get_api_client(self) -> Optional[client.ApiClient]:
        """Get the initialized Kubernetes API client"""
        ...

    def is_authenticated(self) -> bool:
        """Check if authentication is properly configured"""
        ...

    def test_connection(self) -> bool:
        """Test the connection to the cluster"""
        ...


class ConfigProvider(Protocol):
    """Protocol for configuration providers"""

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        ...

    def generate_config_template(self, output_dir: str = None) -> str:
        """Generate configuration template file"""
        ...

    def get_config_template_content(self) -> str:
        """Generate configuration template content as string without file I/O"""
        ...

    def get_value(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key"""
        ...


class HelpProvider(Protocol):
    """Protocol for help providers"""

    def show_help(self, topic: str = None) -> None:
        """Show help for a specific topic"""
        ...

    def show_examples(self, command: str) -> None:
        """Show usage examples for a command"""
        ...
