"""Stores, process clients and analyses behind the multi-shop CLI."""

from core.context import ShopContext, create_context
from core.result import Err, ErrorKind, Ok, Result

__all__ = [
    "Err",
    "ErrorKind",
    "Ok",
    "Result",
    "ShopContext",
    "create_context",
]
