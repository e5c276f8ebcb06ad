"""Core enums package.

Usage:
    from networth.core.enums import ErrorCode, Environment
"""

from networth.core.enums.environment import Environment
from networth.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
