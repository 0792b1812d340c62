"""
Main Application

Orchestrates authentication, configuration and the permission preflight check
behind the command-line interface.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml

from .core import KubernetesAuth, ConfigManager, setup_logging
from .core.constants import (
    ErrorMessages, ExitCode, FileConstants, KubernetesConstants,
    NetworkConstants, OutputFormat
)
from .core.exceptions import ConfigError, PreflightError
from .core.protocols import AuthProvider, ConfigProvider, HelpProvider
from .core.utils import validate_namespace
from .help_manager import HelpManager
from .preflight import ClusterCapabilities, PermissionCapabilities, PermissionChecker, ForbiddenAction
from .preflight.actions import verbs_for_action

logger = logging.getLogger(__name__)


class PreflightManager:
    """Main application orchestrator for the RBAC Preflight tool"""

    def __init__(
        self,
        auth_provider: Optional[AuthProvider] = None,
        config_provider: Optional[ConfigProvider] = None,
        help_provider: Optional[HelpProvider] = None,
        capabilities: Optional[PermissionCapabilities] = None,
        skip_tls: bool = False,
        request_timeout: int = NetworkConstants.DEFAULT_TIMEOUT
    ):
        """
        Initialize Preflight Manager with dependency injection

        Args:
            auth_provider: Authentication provider (defaults to KubernetesAuth)
            config_provider: Configuration provider (defaults to ConfigManager)
            help_provider: Help manager (defaults to HelpManager)
            capabilities: Cluster capability set (built from auth_provider when omitted)
            skip_tls: Whether to skip TLS verification
            request_timeout: Timeout in seconds for every cluster API call
        """
        self.skip_tls = skip_tls
        self.request_timeout = request_timeout

        self.auth = auth_provider or KubernetesAuth(skip_tls=skip_tls, request_timeout=request_timeout)
        self.config_manager = config_provider or ConfigManager()
        self.help_manager = help_provider or HelpManager()

        # Configured with auth when needed
        self.capabilities = capabilities

    def configure_authentication(self, cluster_url: str = None, cluster_token: str = None) -> None:
        """
        Configure authentication and build the cluster capability set

        Args:
            cluster_url: Cluster API URL (optional)
            cluster_token: Bearer token (optional)

        Raises:
            AuthError: If authentication cannot be configured
            ConfigError: If the URL is invalid
        """
        if self.capabilities is not None:
            return

        self.auth.configure_auth(cluster_url, cluster_token)
        self.capabilities = ClusterCapabilities(self.auth, request_timeout=self.request_timeout)
        logger.debug("Successfully configured authentication and cluster capabilities")

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from file"""
        return self.config_manager.load_config(config_path)

    def generate_config(self, output_dir: str = None) -> str:
        """Generate configuration template, returning the written path"""
        return self.config_manager.generate_config_template(output_dir)

    def check_manifest(self, manifest: str, namespace: str, action: str) -> List[ForbiddenAction]:
        """
        Run the preflight check for a manifest

        Args:
            manifest: Raw manifest text
            namespace: Default namespace
            action: Logical action (create, upgrade or delete)

        Returns:
            List of ForbiddenAction, empty when fully authorized

        Raises:
            ConfigError: If the action is unknown or authentication is missing
            PreflightError: If validation, parsing, discovery or probing fails
        """
        # Reject unknown actions before touching the cluster
        verbs_for_action(action)

        if self.capabilities is None:
            raise ConfigError(str(ErrorMessages.AuthError.NOT_CONFIGURED))

        checker = PermissionChecker(self.capabilities)
        checker.validate()
        return checker.get_forbidden_actions(namespace, action, manifest)


def create_preflight_manager(skip_tls: bool = False,
                             request_timeout: int = NetworkConstants.DEFAULT_TIMEOUT) -> PreflightManager:
    """
    Factory function to create PreflightManager with default dependencies

    Args:
        skip_tls: Whether to skip TLS verification
        request_timeout: Timeout in seconds for cluster API calls

    Returns:
        PreflightManager: Configured PreflightManager instance
    """
    return PreflightManager(skip_tls=skip_tls, request_timeout=request_timeout)


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure argument parser with subcommands.

    Uses parent parsers to share argument groups across commands. Defaults
    are left as None so configuration file values can fill them in.
    """
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument(
        '--debug', action='store_true', help='Enable debug logging'
    )
    common_parser.add_argument(
        '--examples', action='store_true',
        help='Show usage examples for this command'
    )

    auth_parser = argparse.ArgumentParser(add_help=False)
    auth_parser.add_argument(
        '--skip-tls', action='store_true',
        help='Skip TLS verification for insecure requests'
    )
    auth_parser.add_argument('--cluster-url', help='Cluster API URL')
    auth_parser.add_argument('--cluster-token', help='Bearer token for the cluster API')
    auth_parser.add_argument(
        '--request-timeout', type=int,
        help=f'Timeout in seconds for each cluster API call (default: {NetworkConstants.DEFAULT_TIMEOUT})'
    )

    parser = argparse.ArgumentParser(
        prog='rbac-preflight',
        description='RBAC Preflight - report forbidden actions before applying a manifest',
        add_help=False
    )
    parser.add_argument(
        '-h', '--help',
        action='store_true',
        help='Show this help message and exit'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    check_parser = subparsers.add_parser(
        'check',
        parents=[common_parser, auth_parser],
        help='Check manifest permissions',
        description='Report the actions the current identity may not perform for a manifest'
    )
    check_parser.add_argument('--config', help='Configuration file path')
    check_parser.add_argument(
        '--manifest',
        help=f"Manifest file path, or '{FileConstants.STDIN_PATH}' for standard input"
    )
    check_parser.add_argument(
        '--namespace',
        help=f'Default namespace for resources without one (default: {KubernetesConstants.DEFAULT_NAMESPACE})'
    )
    check_parser.add_argument(
        '--action',
        choices=KubernetesConstants.DeploymentAction.choices(),
        help='Deployment action to check (default: create)'
    )
    check_parser.add_argument(
        '--format',
        dest='output_format',
        choices=[str(fmt) for fmt in OutputFormat],
        default=str(OutputFormat.TEXT),
        help='Report format'
    )

    generate_parser = subparsers.add_parser(
        'generate-config',
        parents=[common_parser],
        help='Generate configuration template',
        description='Generate a configuration template file for preflight checks'
    )
    generate_parser.add_argument('--output', help='Output directory for the template')

    return parser


def handle_examples(command_name: str, help_provider: HelpProvider) -> ExitCode:
    """Show the examples of a command"""
    help_provider.show_examples(command_name)
    return ExitCode.SUCCESS


def merge_config_with_args(args: argparse.Namespace, config: Optional[Dict[str, Any]]) -> None:
    """
    Merge configuration file values into command-line arguments.

    Only attributes left unset on the command line (None or False) are
    updated, so command-line arguments take precedence.

    Args:
        args: Parsed command-line arguments object
        config: Loaded configuration dictionary
    """
    if not config:
        return

    cluster_config = config.get('cluster') or {}
    preflight_config = config.get('preflight') or {}
    global_config = config.get('global') or {}

    mapping = [
        ('cluster_url', cluster_config.get('url')),
        ('cluster_token', cluster_config.get('token')),
        ('skip_tls', cluster_config.get('skip_tls')),
        ('request_timeout', cluster_config.get('request_timeout')),
        ('namespace', preflight_config.get('namespace')),
        ('action', preflight_config.get('action')),
        ('manifest', preflight_config.get('manifest')),
        ('debug', global_config.get('debug')),
    ]
    for attribute, config_value in mapping:
        if config_value is None or config_value == '' or not hasattr(args, attribute):
            continue
        current_value = getattr(args, attribute)
        if current_value is None or current_value is False:
            setattr(args, attribute, config_value)


def apply_defaults(args: argparse.Namespace) -> None:
    """Fill in defaults for check arguments left unset by flags and config"""
    if not args.namespace:
        args.namespace = KubernetesConstants.DEFAULT_NAMESPACE
    if not args.action:
        args.action = str(KubernetesConstants.DeploymentAction.CREATE)
    if args.request_timeout is None:
        args.request_timeout = NetworkConstants.DEFAULT_TIMEOUT


def read_manifest(manifest_path: str) -> str:
    """
    Read manifest text from a file or standard input

    Args:
        manifest_path: File path, or "-" for standard input

    Returns:
        str: Manifest text

    Raises:
        ConfigError: If the file cannot be read
    """
    if manifest_path == FileConstants.STDIN_PATH:
        return sys.stdin.read()

    manifest_file = Path(manifest_path)
    if not manifest_file.is_file():
        raise ConfigError(
            str(ErrorMessages.ConfigError.MANIFEST_NOT_FOUND).format(manifest_path=manifest_path)
        )
    try:
        with open(manifest_file, 'r') as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"Failed to read manifest {manifest_path}: {e}") from e


def format_report(forbidden_actions: List[ForbiddenAction], output_format: str = "text") -> str:
    """
    Render forbidden actions for display

    Args:
        forbidden_actions: Result of a preflight check
        output_format: One of text, json or yaml

    Returns:
        str: Rendered report
    """
    records = [action.to_dict() for action in forbidden_actions]

    if output_format == OutputFormat.JSON:
        return json.dumps(records, indent=2)
    if output_format == OutputFormat.YAML:
        return yaml.safe_dump(records, default_flow_style=False, sort_keys=False)

    if not forbidden_actions:
        return "✓ All actions are permitted for the resources in the manifest"

    lines = ["✗ The current identity is not allowed to perform the following actions:"]
    for action in forbidden_actions:
        lines.append(
            f"  - {', '.join(action.verbs)} {action.resource} "
            f"({action.api_version}) in namespace '{action.namespace}'"
        )
    return '\n'.join(lines)


def handle_check_command(args: argparse.Namespace, preflight_manager: PreflightManager) -> ExitCode:
    """Handle check command execution."""
    if not args.manifest:
        print(
            "Error: --manifest is required for check. "
            "Use 'rbac-preflight check --examples' to see usage examples.",
            file=sys.stderr
        )
        return ExitCode.ERROR

    validate_namespace(args.namespace)
    manifest = read_manifest(args.manifest)

    preflight_manager.configure_authentication(args.cluster_url, args.cluster_token)
    forbidden_actions = preflight_manager.check_manifest(manifest, args.namespace, args.action)

    print(format_report(forbidden_actions, args.output_format))
    if forbidden_actions:
        return ExitCode.FORBIDDEN
    return ExitCode.SUCCESS


def handle_generate_config_command(args: argparse.Namespace, preflight_manager: PreflightManager) -> ExitCode:
    """Handle generate-config command: stdout by default, a file with --output"""
    if not args.output:
        print(preflight_manager.config_manager.get_config_template_content())
        return ExitCode.SUCCESS

    config_file = preflight_manager.generate_config(args.output)
    print(f"✓ Configuration template generated: {config_file}")
    return ExitCode.SUCCESS


COMMAND_HANDLERS = {
    'check': handle_check_command,
    'generate-config': handle_generate_config_command,
}


def handle_early_exit_flags(args: argparse.Namespace, argv: List[str], help_provider: HelpProvider) -> bool:
    """Handle early-exit flags like --help and --examples"""
    if not argv or (args.help and not args.command):
        help_provider.show_help()
        return True

    if getattr(args, 'examples', False) and args.command:
        handle_examples(args.command, help_provider)
        return True

    return False


def configure_ssl_warnings(skip_tls: bool = False) -> None:
    """Log a one-time warning when TLS verification is disabled"""
    if skip_tls:
        logger.warning(ErrorMessages.SSLError.VERIFICATION_DISABLED_WARNING)


def run(argv: Optional[List[str]] = None,
        preflight_manager: Optional[PreflightManager] = None) -> int:
    """
    Parse arguments and execute a command

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        preflight_manager: Pre-built manager, used instead of the default factory

    Returns:
        int: Process exit code
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    help_provider = preflight_manager.help_manager if preflight_manager else HelpManager()
    if handle_early_exit_flags(args, argv, help_provider):
        return ExitCode.SUCCESS

    if not args.command:
        print("Error: No command specified. Use --help for usage information.", file=sys.stderr)
        return ExitCode.ERROR

    try:
        if args.command == 'check':
            if args.config:
                load_config = preflight_manager.load_config if preflight_manager else ConfigManager().load_config
                merge_config_with_args(args, load_config(args.config))
            apply_defaults(args)

        quiet = getattr(args, 'output_format', None) in (OutputFormat.JSON, OutputFormat.YAML)
        setup_logging(args.debug, quiet=quiet)
        configure_ssl_warnings(getattr(args, 'skip_tls', False))

        if preflight_manager is None:
            preflight_manager = create_preflight_manager(
                skip_tls=getattr(args, 'skip_tls', False),
                request_timeout=getattr(args, 'request_timeout', None) or NetworkConstants.DEFAULT_TIMEOUT
            )

        return COMMAND_HANDLERS[args.command](args, preflight_manager)

    except PreflightError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return ExitCode.ERROR


def main() -> None:
    """Main entry point"""
    sys.exit(int(run()))


if __name__ == "__main__":
    main()
