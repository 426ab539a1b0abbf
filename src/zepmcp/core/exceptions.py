"""
Zep MCP Domain-Specific Exceptions
==================================

This module defines the exceptions raised across the adapter.

Exception Hierarchy:
    ZepMCPError (base)
    ├── RecoverableError (transient, retry possible)
    │   └── ZepAPIError
    ├── IrrecoverableError (permanent, requires intervention)
    │   ├── ConfigurationError
    │   │   └── MissingCredentialError
    │   ├── UnsupportedTransportError
    │   ├── DependencyMissingError
    │   ├── ValidationError
    │   └── UnknownToolError
    └── MemoryOperationError

Usage Guidelines:
    - Startup errors (configuration, credentials) terminate the process
    - Per-call errors are flattened to their message at the dispatcher
    - Use error_code for machine-readable responses
"""

from typing import Optional, Any


class ZepMCPError(Exception):
    """
    Base exception for all adapter errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context about the error
        recoverable: Whether the error is potentially recoverable
    """

    error_code: str = "ZEP_MCP_ERROR"
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        context: Optional[dict] = None,
        error_code: Optional[str] = None,
        recoverable: Optional[bool] = None
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if error_code is not None:
            self.error_code = error_code
        if recoverable is not None:
            self.recoverable = recoverable

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON output."""
        result = {
            "error": self.message,
            "code": self.error_code,
            "recoverable": self.recoverable,
        }
        if self.context:
            result["context"] = self.context
        return result


class RecoverableError(ZepMCPError):
    """Transient errors that may succeed on retry (network, upstream 5xx)."""
    recoverable = True


class IrrecoverableError(ZepMCPError):
    """Permanent errors that require intervention (bad config, bad input)."""
    recoverable = False


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(IrrecoverableError):
    """Raised when configuration is invalid or missing."""
    error_code = "CONFIGURATION_ERROR"

    def __init__(self, config_key: str, reason: str, context: Optional[dict] = None):
        ctx = {"config_key": config_key}
        if context:
            ctx.update(context)
        super().__init__(f"Configuration error for '{config_key}': {reason}", ctx)
        self.config_key = config_key
        self.reason = reason


class MissingCredentialError(ConfigurationError):
    """Raised when the Zep API key is absent or blank."""
    error_code = "MISSING_CREDENTIAL_ERROR"

    def __init__(self, env_var: str, message: Optional[str] = None):
        # Bypasses ConfigurationError's "Configuration error for ..." prefix.
        IrrecoverableError.__init__(
            self, message or f"{env_var} environment variable is required"
        )
        self.config_key = env_var
        self.reason = self.message
        self.env_var = env_var


class UnsupportedTransportError(IrrecoverableError, ValueError):
    """Raised when an unsupported transport is requested."""
    error_code = "UNSUPPORTED_TRANSPORT_ERROR"

    def __init__(self, transport: str, supported_transports: Optional[list] = None, context: Optional[dict] = None):
        ctx = {"transport": transport}
        if supported_transports:
            ctx["supported_transports"] = supported_transports
        if context:
            ctx.update(context)
        msg = f"Unsupported transport: {transport}"
        if supported_transports:
            msg += f". Supported: {', '.join(supported_transports)}"
        super().__init__(msg, ctx)
        self.transport = transport


class DependencyMissingError(IrrecoverableError):
    """Raised when an optional transport dependency cannot be imported."""
    error_code = "DEPENDENCY_MISSING_ERROR"

    def __init__(self, dependency: str, message: str = "", context: Optional[dict] = None):
        ctx = {"dependency": dependency}
        if context:
            ctx.update(context)
        msg = f"Missing dependency: {dependency}"
        if message:
            msg += f". {message}"
        super().__init__(msg, ctx)
        self.dependency = dependency


# =============================================================================
# Tool Call Errors
# =============================================================================

class ValidationError(IrrecoverableError):
    """Raised when tool arguments cannot be decoded."""
    error_code = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str, value: Any = None, context: Optional[dict] = None):
        ctx = {"field": field}
        if value is not None:
            value_str = str(value)
            if len(value_str) > 100:
                value_str = value_str[:100] + "..."
            ctx["value"] = value_str
        if context:
            ctx.update(context)
        super().__init__(f"Validation error for '{field}': {reason}", ctx)
        self.field = field
        self.reason = reason


class UnknownToolError(IrrecoverableError):
    """Raised when a tool call names a tool that is not registered."""
    error_code = "UNKNOWN_TOOL_ERROR"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ZepAPIError(RecoverableError):
    """
    Raised when communication with the Zep API fails.

    Attributes:
        status_code: HTTP status code if available (None for network errors).
    """
    error_code = "ZEP_API_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None, context: Optional[dict] = None):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message, ctx)
        self.status_code = status_code


class MemoryOperationError(ZepMCPError):
    """Raised when a create, retrieve or search operation fails."""
    error_code = "MEMORY_OPERATION_ERROR"

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Failed to {operation} memory: {reason}")
        self.operation = operation
        self.reason = reason


__all__ = [
    "ZepMCPError",
    "RecoverableError",
    "IrrecoverableError",
    "ConfigurationError",
    "MissingCredentialError",
    "UnsupportedTransportError",
    "DependencyMissingError",
    "ValidationError",
    "UnknownToolError",
    "ZepAPIError",
    "MemoryOperationError",
]
