"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, pattern table, input)
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for medianame CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    CONFIG_ERROR = 11
    INPUT_ERROR = 12
    PATTERN_TABLE_ERROR = 13
