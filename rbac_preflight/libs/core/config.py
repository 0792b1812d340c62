"""
Configuration Management

Handles loading and managing configuration files for the RBAC Preflight tool.
"""

import logging
from io import StringIO
from pathlib import Path
from typing import Dict, Any

try:
    import yaml
except ImportError:
    raise ImportError("PyYAML is required. Install with: pip install PyYAML")

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from .exceptions import ConfigError
from .constants import ErrorMessages, KubernetesConstants, NetworkConstants, FileConstants

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and validation"""

    # Configuration schema - defines expected structure and types
    CONFIG_SCHEMA = {
        'cluster': {
            'type': dict,
            'required': False,
            'fields': {
                'url': {'type': str, 'required': False},
                'token': {'type': str, 'required': False},
                'skip_tls': {'type': bool, 'required': False},
                'request_timeout': {'type': int, 'required': False}
            }
        },
        'preflight': {
            'type': dict,
            'required': False,
            'fields': {
                'namespace': {'type': str, 'required': False},
                'action': {
                    'type': str,
                    'required': False,
                    'choices': KubernetesConstants.DeploymentAction.choices()
                },
                'manifest': {'type': str, 'required': False}
            }
        },
        'global': {
            'type': dict,
            'required': False,
            'fields': {
                'debug': {'type': bool, 'required': False}
            }
        },
    }

    # Section comments rendered into generated templates
    SECTION_COMMENTS = {
        'cluster': "Cluster connection; leave url/token empty to use kubeconfig or in-cluster config",
        'preflight': "Check defaults; command-line flags take precedence",
        'global': "Tool-wide settings",
    }

    def __init__(self):
        """Initialize configuration manager"""
        self.config_data = {}
        self.config_file_path = None

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file

        Args:
            config_path: Path to configuration file

        Returns:
            Dict containing configuration data

        Raises:
            ConfigError: If configuration file cannot be loaded or is invalid
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ConfigError(str(ErrorMessages.ConfigError.CONFIG_FILE_NOT_FOUND).format(config_path=config_path))

        if not config_file.is_file():
            raise ConfigError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_file, 'r') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration from {config_path}: {e}") from e

        self.config_file_path = config_path
        logger.info(f"Successfully loaded configuration from {config_path}")

        self._validate_config()

        return self.config_data

    def _validate_config(self) -> None:
        """
        Validate configuration structure and values

        Raises:
            ConfigError: If configuration is invalid
        """
        if not isinstance(self.config_data, dict):
            raise ConfigError("Configuration must be a dictionary")

        self._validate_against_schema(self.config_data, self.CONFIG_SCHEMA, "config")

    def _validate_against_schema(self, data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> None:
        """
        Validate data against schema definition

        Args:
            data: Data to validate
            schema: Schema definition
            path: Current path for error reporting

        Raises:
            ConfigError: If data doesn't match schema
        """
        for key, field_schema in schema.items():
            current_path = f"{path}.{key}" if path else key

            if key in data:
                value = data[key]

                # Skip None values for optional fields
                if value is None and not field_schema.get('required', False):
                    continue

                expected_type = field_schema['type']
                # bool is a subclass of int; reject it where a number is expected
                if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
                    raise ConfigError(f"{current_path} must be a {expected_type.__name__}")

                if 'choices' in field_schema and value not in field_schema['choices']:
                    choices_str = ', '.join(f"'{c}'" for c in field_schema['choices'])
                    raise ConfigError(f"{current_path} must be one of: {choices_str}")

                if expected_type == dict and 'fields' in field_schema:
                    self._validate_against_schema(value, field_schema['fields'], current_path)

            elif field_schema.get('required', False):
                raise ConfigError(f"Required field {current_path} is missing")

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get specific configuration section

        Args:
            section: Section name (e.g., 'cluster', 'preflight')

        Returns:
            Dict containing section data, empty dict if section doesn't exist
        """
        return self.config_data.get(section) or {}

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key

        Args:
            key: Configuration key (supports dot notation like 'cluster.skip_tls')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config_data

        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default
        return default if value is None else value

    def _create_config_template_structure(self) -> Dict[str, Any]:
        """
        Create the standard configuration template structure

        Returns:
            Dict: Configuration template structure
        """
        return {
            "cluster": {
                "url": "",
                "token": "",
                "skip_tls": False,
                "request_timeout": NetworkConstants.DEFAULT_TIMEOUT
            },
            "preflight": {
                "namespace": KubernetesConstants.DEFAULT_NAMESPACE,
                "action": str(KubernetesConstants.DeploymentAction.CREATE),
                "manifest": "./manifest.yaml"
            },
            "global": {
                "debug": False
            }
        }

    def get_config_template_content(self) -> str:
        """
        Generate configuration template content as string without file I/O

        Returns:
            str: YAML configuration template content with section comments
        """
        yaml_processor = YAML()
        yaml_processor.width = 4096  # Prevent line wrapping
        yaml_processor.indent(mapping=2, sequence=4, offset=2)

        commented_data = CommentedMap()
        for key, value in self._create_config_template_structure().items():
            commented_data[key] = CommentedMap(value)
            commented_data.yaml_set_comment_before_after_key(key, before=self.SECTION_COMMENTS[key])

        commented_data.yaml_set_start_comment(
            "RBAC Preflight Configuration File\n"
            "Template for checking manifest permissions before deployment"
        )

        stream = StringIO()
        yaml_processor.dump(commented_data, stream)
        return stream.getvalue()

    def generate_config_template(self, output_dir: str = None) -> str:
        """
        Generate configuration template file

        Args:
            output_dir: Directory to save template (optional)

        Returns:
            str: Path to generated template file

        Raises:
            ConfigError: If template generation fails
        """
        content = self.get_config_template_content()

        try:
            if output_dir:
                output_path = Path(output_dir)
                output_path.mkdir(parents=True, exist_ok=True)
                config_file = output_path / FileConstants.DEFAULT_CONFIG_FILE
            else:
                config_file = Path(FileConstants.DEFAULT_CONFIG_FILE)

            with open(config_file, 'w') as f:
                f.write(content)
        except OSError as e:
            raise ConfigError(f"Failed to write configuration file: {e}") from e

        logger.info(f"Configuration file written: {config_file}")
        return str(config_file)
