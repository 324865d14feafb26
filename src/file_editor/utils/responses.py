"""Shared response helper functions for toolsets.

Every tool returns one of two dict shapes so that the protocol layer can
render results uniformly: a success response whose ``message`` is the text
shown to the client, or an error response whose ``message`` explains what
went wrong and how to retry.
"""

from typing import Any


def create_success_response(result: Any, message: str = "") -> dict:
    """Create standardized success response.

    Args:
        result: Structured operation result (can be any JSON-compatible type)
        message: Text returned to the client as the tool output

    Returns:
        Structured response dict with success=True

    Example:
        >>> create_success_response(result={"deleted": 3}, message="Deleted 3 lines")
        {'success': True, 'result': {'deleted': 3}, 'message': 'Deleted 3 lines'}
    """
    return {
        "success": True,
        "result": result,
        "message": message,
    }


def create_error_response(error: str, message: str) -> dict:
    """Create standardized error response.

    Tools use this when they encounter errors rather than raising
    exceptions past the tool boundary.

    Args:
        error: Machine-readable error code (e.g., "content_mismatch")
        message: Human-friendly error message

    Returns:
        Structured response dict with success=False

    Example:
        >>> create_error_response(error="not_found", message='File not found: "/tmp/x"')
        {'success': False, 'error': 'not_found', 'message': 'File not found: "/tmp/x"'}
    """
    return {
        "success": False,
        "error": error,
        "message": message,
    }


def is_error_response(response: Any) -> bool:
    """Return True if ``response`` is an error response dict."""
    return isinstance(response, dict) and response.get("success") is False
