"""
Core Utilities

Common utility functions used across the RBAC Preflight tool.
"""

import logging
import re
import sys
from typing import Type, Optional, Tuple
from urllib.parse import urlparse
from .exceptions import ConfigError, PreflightError, AuthError, ProbeError
from .constants import ErrorMessages, KubernetesConstants, NetworkConstants


def setup_logging(debug: bool = False, quiet: bool = False) -> None:
    """
    Set up logging configuration for the application.
    Separates WARNING/INFO to stdout and ERROR to stderr. In quiet mode every
    record goes to stderr so stdout carries only command output.

    Args:
        debug: Enable debug logging level
        quiet: Keep stdout free of logs and only log warnings and errors
            (the level is still DEBUG when debug is set)
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # INFO, WARNING, DEBUG go to stdout unless it is reserved for output
    info_handler = logging.StreamHandler(sys.stderr if quiet else sys.stdout)
    info_handler.setLevel(level)
    info_handler.setFormatter(formatter)
    info_handler.addFilter(lambda record: record.levelno < logging.ERROR)

    # ERROR and CRITICAL go to stderr
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(formatter)

    root_logger.addHandler(info_handler)
    root_logger.addHandler(stderr_handler)

    if debug:
        logger = logging.getLogger(__name__)
        logger.debug("Debug mode enabled")


def mask_sensitive_info(text: str, url: Optional[str] = None, token: Optional[str] = None) -> str:
    """
    Mask sensitive information in text for logging and debug output.

    Args:
        text: Text to mask
        url: URL to mask (optional)
        token: Token to mask (optional)

    Returns:
        Text with sensitive information masked
    """
    if not text:
        return text

    masked_text = text

    if token and token in masked_text:
        # Keep a recognizable token prefix (e.g. "sha256~") and mask the rest
        if '~' in token:
            prefix = token.split('~')[0] + '~'
            masked_token = prefix + "***MASKED***"
        else:
            masked_token = "***MASKED***"
        masked_text = masked_text.replace(token, masked_token)

    if url and url in masked_text:
        parsed = urlparse(url)
        if parsed.hostname:
            hostname_parts = parsed.hostname.split('.')
            if len(hostname_parts) >= 3:
                # api.cluster.example.com -> api.****.com
                first_part = hostname_parts[0][:3]
                masked_hostname = f"{first_part}.****.{hostname_parts[-1]}"
            elif len(hostname_parts) == 2:
                masked_hostname = f"****.{hostname_parts[-1]}"
            else:
                masked_hostname = "****"
            masked_url = f"{parsed.scheme}://{masked_hostname}:***"
            masked_text = masked_text.replace(url, masked_url)
        else:
            masked_text = masked_text.replace(url, "https://****:***")

    # Bearer and basic auth headers
    masked_text = re.sub(r'Bearer [A-Za-z0-9+/=_.-]+', 'Bearer ***MASKED***', masked_text)
    masked_text = re.sub(r'Basic [A-Za-z0-9+/=]+', 'Basic ***MASKED***', masked_text)

    # OpenShift-style tokens (sha256~ prefix)
    masked_text = re.sub(r'sha256~[A-Za-z0-9_-]+', 'sha256~***MASKED***', masked_text)

    return masked_text


class ValidationConfig:
    """
    Configuration-driven validation patterns.

    Centralizes validation patterns, error messages, and constraints
    shared by the validation functions below.
    """

    NAMESPACE = {
        'pattern': r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?$',
        'error': ErrorMessages.ConfigError.INVALID_NAMESPACE,
        'name': 'Namespace',
        'max_length': 63,
    }

    CLUSTER_URL = {
        'pattern': r'^https?:\/\/[a-zA-Z0-9.-]+(?:\:[0-9]+)?(?:\/.*)?$',
        'error': ErrorMessages.ConfigError.INVALID_URL,
        'name': 'URL',
    }


def _validate_with_config(value: str, config: dict) -> bool:
    """
    Validate a value against one of the ValidationConfig entries.

    Args:
        value: The string to validate
        config: Validation configuration dictionary

    Returns:
        bool: True if validation passes

    Raises:
        ConfigError: If validation fails
    """
    name = config['name']
    if not value or not isinstance(value, str):
        raise ConfigError(f"{name} cannot be empty")

    if not re.match(config['pattern'], value):
        raise ConfigError(str(config['error']).format(**{name.lower(): value}))

    if 'max_length' in config and len(value) > config['max_length']:
        raise ConfigError(
            f"{name} too long (max {config['max_length']} chars): {value}"
        )

    return True


def validate_namespace(namespace: str) -> bool:
    """
    Validate if the provided string is a valid Kubernetes namespace.

    Raises:
        ConfigError: If namespace is invalid
    """
    return _validate_with_config(namespace, ValidationConfig.NAMESPACE)


def validate_cluster_url(url: str) -> bool:
    """
    Validate if the provided string is a valid cluster API URL.

    Raises:
        ConfigError: If URL is invalid
    """
    return _validate_with_config(url, ValidationConfig.CLUSTER_URL)


def split_api_version(api_version: str) -> Tuple[str, str]:
    """
    Split an apiVersion into its API group and version.

    The core group has no prefix, so "v1" yields ("", "v1") and
    "apps/v1" yields ("apps", "v1").

    Args:
        api_version: apiVersion string as found in a manifest

    Returns:
        Tuple of (group, version)
    """
    if '/' not in api_version:
        return KubernetesConstants.CORE_API_GROUP, api_version
    group, version = api_version.split('/', 1)
    return group, version


def _raise_for_status(
    error: Exception,
    status: int,
    context: str,
    exception_class: Optional[Type[PreflightError]]
) -> None:
    """Raise for an API error that carries an HTTP status, ignoring its message text"""
    if status == NetworkConstants.HTTPStatus.UNAUTHORIZED:
        raise (exception_class or AuthError)(str(ErrorMessages.AuthError.TOKEN_EXPIRED)) from error

    exception_class = exception_class or ProbeError
    if status == NetworkConstants.HTTPStatus.FORBIDDEN:
        raise exception_class(str(ErrorMessages.AuthError.INSUFFICIENT_PERMISSIONS)) from error

    context_msg = f"{context}: " if context else ""
    raise exception_class(f"{context_msg}{error}") from error


def handle_api_error(
    error: Exception,
    context: str = "",
    exception_class: Optional[Type[PreflightError]] = None
) -> None:
    """
    Inspect a Kubernetes client or transport exception and raise the matching
    preflight exception with a user-friendly message.

    API errors are classified by their HTTP status; message matching is only
    used for transport errors, which carry no status.

    Args:
        error: The caught exception to analyze and handle
        context: Optional context information for better error messages
        exception_class: The exception class to raise (defaults based on error type)

    Raises:
        PreflightError: Appropriate error type with user-friendly message from ErrorMessages constants
    """
    status = getattr(error, 'status', None)
    if isinstance(status, int) and status:
        _raise_for_status(error, status, context, exception_class)

    error_str = str(error).lower()

    if exception_class is None:
        if any(indicator in error_str for indicator in ["unauthorized", "401"]):
            exception_class = AuthError
        else:
            exception_class = ProbeError

    if any(indicator in error_str for indicator in ["ssl", "certificate", "tls"]):
        if "certificate verify failed" in error_str or "certificate_verify_failed" in error_str:
            raise exception_class(str(ErrorMessages.SSLError.CERT_VERIFICATION_FAILED)) from error
        raise exception_class(str(ErrorMessages.SSLError.CONNECTION_ERROR).format(error=error)) from error

    if "unauthorized" in error_str or "401" in error_str:
        raise exception_class(str(ErrorMessages.AuthError.TOKEN_EXPIRED)) from error

    if "forbidden" in error_str or "403" in error_str:
        raise exception_class(str(ErrorMessages.AuthError.INSUFFICIENT_PERMISSIONS)) from error

    context_msg = f"{context}\n" if context else ""

    if "timeout" in error_str or "timed out" in error_str:
        raise exception_class(f"{context_msg}{ErrorMessages.NetworkError.CONNECTION_TIMEOUT}") from error

    if "connection refused" in error_str:
        raise exception_class(f"{context_msg}{ErrorMessages.NetworkError.CONNECTION_REFUSED}") from error

    context_msg = f"{context}: " if context else ""
    raise exception_class(f"{context_msg}{error}") from error
