# ABOUTME: Error taxonomy returned to tool callers and the boundary that normalizes failures.
# ABOUTME: Codes follow JSON-RPC as exposed by mcp.types so the server can forward them as-is.

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class ToolError(Exception):
    """Base class for failures reported to the caller as a structured error."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParams(ToolError):
    """A required argument is missing or malformed. Raised before any remote call."""

    code = INVALID_PARAMS


class MethodNotFound(ToolError):
    """The requested tool name is not in the tool table."""

    code = METHOD_NOT_FOUND


class InternalError(ToolError):
    """A remote fetch, payload validation or formatting step failed."""

    code = INTERNAL_ERROR


def normalize_error(exc: Exception, action: str) -> ToolError:
    """Map any failure raised while running a tool onto the caller-facing taxonomy.

    Errors that already belong to the taxonomy are returned unchanged. Everything
    else becomes an InternalError whose message keeps the original text.

    Args:
        exc: The exception raised by the tool pipeline.
        action: What the tool was doing, e.g. "obter previsão", used as message prefix.
    """
    if isinstance(exc, ToolError):
        return exc
    detail = str(exc) or type(exc).__name__
    return InternalError(f"Erro ao {action}: {detail}")
