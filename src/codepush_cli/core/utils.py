"""Helpers shared by the command implementations."""

import asyncio
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from synchronous (typer) code."""
    return asyncio.run(coro)
