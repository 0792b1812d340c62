"""
Custom Exceptions

Defines the error taxonomy raised by the RBAC Preflight tool.
"""

from typing import Optional


class PreflightError(Exception):
    """Base exception class for RBAC Preflight errors"""
    pass


class AuthError(PreflightError):
    """Raised when the cluster or credentials are unreachable"""
    pass


class ConfigError(PreflightError):
    """Raised when configuration or an action literal is invalid"""
    pass


class ParseError(PreflightError):
    """Raised when a manifest document cannot be parsed"""

    def __init__(self, message: str, document_index: Optional[int] = None):
        """
        Args:
            message: Error description
            document_index: Zero-based index of the offending document
        """
        if document_index is not None:
            message = f"document {document_index}: {message}"
        super().__init__(message)
        self.document_index = document_index


class ResourceNotFoundError(PreflightError):
    """Raised when the cluster does not serve a kind for a group/version"""

    def __init__(self, api_version: str, kind: Optional[str] = None, message: Optional[str] = None):
        if message is None:
            if kind:
                message = f"Resource kind '{kind}' not found in group/version '{api_version}'"
            else:
                message = f"Group/version '{api_version}' is not served by the cluster"
        super().__init__(message)
        self.api_version = api_version
        self.kind = kind


class ProbeError(PreflightError):
    """Raised when a discovery or permission query fails to complete"""
    pass
