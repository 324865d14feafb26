"""Test helpers and utilities.

This module provides shared utilities for testing:
- assertions: Custom assertions for tool responses
- builders: Test data builders for files and edit requests
"""

from tests.helpers.assertions import (
    assert_error_response,
    assert_message_contains,
    assert_success_response,
    assert_tool_response_format,
)

__all__ = [
    "assert_success_response",
    "assert_error_response",
    "assert_tool_response_format",
    "assert_message_contains",
]
