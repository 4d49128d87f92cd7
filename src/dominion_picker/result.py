"""Result type used by the CLI handlers.

Handlers report failures as data instead of raising, so the click layer
only has to decide how to print them.
"""

from typing import Any, Callable, Optional, TypedDict, TypeVar

T = TypeVar("T")


class Result(TypedDict):
    """Outcome of a handler call.

    Attributes:
        ok: True if the operation succeeded
        value: The returned value (None on failure)
        error: Error message (None on success)
    """

    ok: bool
    value: Optional[Any]
    error: Optional[str]


def success(value: Any) -> Result:
    return Result(ok=True, value=value, error=None)


def failure(error: str) -> Result:
    return Result(ok=False, value=None, error=error)


def from_exception(exc: Exception) -> Result:
    """Turn an exception into a failed Result named after its type."""
    return failure(f"{type(exc).__name__}: {exc}")


def try_operation(operation: Callable[[], T]) -> Result:
    """Run ``operation`` and capture its return value or exception."""
    try:
        return success(operation())
    except Exception as exc:
        return from_exception(exc)


def unwrap(result: Result) -> Any:
    """Return the value of a successful Result.

    Raises:
        ValueError: If the Result is a failure
    """
    if result["ok"]:
        return result["value"]
    raise ValueError(result["error"])


def unwrap_or(result: Result, default: Any) -> Any:
    if result["ok"]:
        return result["value"]
    return default
