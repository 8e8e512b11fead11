"""Standardized response envelopes for the plant layout MCP tools."""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

# Error codes used at the tool boundary
INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
UNKNOWN_TOOL = "UNKNOWN_TOOL"
TOOL_ERROR = "TOOL_ERROR"


def is_success(result: Dict[str, Any]) -> bool:
    """Check if a tool call succeeded."""
    return bool(result.get("ok"))


def success_response(
    data: Any,
    warnings: Optional[List[str]] = None,
    etag: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a successful response envelope.

    Args:
        data: The response data
        warnings: Optional list of warning messages
        etag: Optional content hash of the returned layout

    Returns:
        Standardized success response
    """
    response: Dict[str, Any] = {
        "ok": True,
        "data": data,
    }

    if warnings:
        response["warnings"] = warnings

    if etag:
        response["etag"] = etag

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create an error response envelope.

    Args:
        message: Error message
        code: Optional error code (INVALID_ARGUMENTS, UNKNOWN_TOOL, TOOL_ERROR)
        details: Optional error details

    Returns:
        Standardized error response
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details:
        error["details"] = details

    return {
        "ok": False,
        "error": error,
    }


def invalid_arguments_response(tool_name: str, exc: ValidationError) -> Dict[str, Any]:
    """Error envelope listing each pydantic validation failure by field path."""
    issues = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return error_response(
        f"Invalid arguments for {tool_name}",
        code=INVALID_ARGUMENTS,
        details={"issues": issues},
    )
