"""Core types: results, exit codes and JSON narrowing helpers."""

from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
