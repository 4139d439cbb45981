"""Utility modules for dotviz.

This module exports commonly used utility functions.
"""

from dotviz.utils.formatting import (
    console,
    create_file_table,
    err_console,
    format_file_row,
    format_flags,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_file_table",
    "err_console",
    "format_file_row",
    "format_flags",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
