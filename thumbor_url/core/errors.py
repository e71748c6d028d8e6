from typing import Dict, Any, Optional, Sequence


# Define common HTTP status codes to avoid dependency on FastAPI
HTTP_400_BAD_REQUEST = 400
HTTP_500_INTERNAL_SERVER_ERROR = 500


class ThumborUrlError(Exception):
    """Base exception class for thumbor URL generation.

    This provides a standardized way to handle errors with detailed context.
    """
    def __init__(self,
                 message: str,
                 error_code: str = "internal_error",
                 http_status: int = HTTP_500_INTERNAL_SERVER_ERROR,
                 context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.http_status = http_status
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for API responses."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }

        # Include non-sensitive context information
        safe_context = {}
        for key, value in self.context.items():
            if key not in ["password", "token", "secret", "key"] and value is not None:
                safe_context[key] = value

        if safe_context:
            result["details"] = safe_context

        return result


class MethodNotFoundError(ThumborUrlError):
    """Error when an operation name does not resolve to a known CommandSet operation."""
    def __init__(self, method: str, target: str = "CommandSet", context: Optional[Dict[str, Any]] = None):
        context = context or {}
        context.update({"method": method, "target": target})
        self.method = method
        self.target = target
        super().__init__(
            message=f'Method "{method}" not found for {target}',
            error_code="method_not_found",
            http_status=HTTP_400_BAD_REQUEST,
            context=context
        )


class OperationArgumentsError(ThumborUrlError):
    """Error when arguments cannot be bound to a known operation."""
    def __init__(self, method: str, args: Sequence[Any], reason: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        context = context or {}
        context.update({"method": method, "args": list(args)})
        message = f'Invalid arguments for "{method}"'
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            error_code="invalid_arguments",
            http_status=HTTP_400_BAD_REQUEST,
            context=context
        )


class ConfigurationError(ThumborUrlError):
    """Error for missing or unusable configuration values."""
    def __init__(self, message: str, setting: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        if setting:
            context = context or {}
            context["setting"] = setting
        super().__init__(
            message=message,
            error_code="configuration_error",
            http_status=HTTP_500_INTERNAL_SERVER_ERROR,
            context=context
        )


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to a standardized API response.

    Args:
        error: The exception to convert

    Returns:
        A dictionary with error details suitable for API responses
    """
    if isinstance(error, ThumborUrlError):
        return error.to_dict()

    return ThumborUrlError(
        message=str(error),
        error_code="internal_error",
        context={"error_type": type(error).__name__}
    ).to_dict()
