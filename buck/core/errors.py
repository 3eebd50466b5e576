"""Error codes for CLI exit status.

Findings reported by checks are never an error of the tool itself: a
completed audit always exits with OK.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1  # bad flags, invalid config, unknown check id
    ENV_ERROR = 2  # missing sysroot, missing log directory
    LOAD_ERROR = 3  # a check unit could not be constructed
    IO_ERROR = 4  # the log file could not be written
