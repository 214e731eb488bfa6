"""
Tagged repository results for the controller layer.

``run_operation`` calls a repository method and returns either the record or
the classified error, so callers can branch on ``kind`` without catching
exceptions or looking at driver internals.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

from ..utils.exceptions import ErrorKind, NewsboardError, handle_exception
from ..utils.logging import get_logger_for_component

T = TypeVar("T")

logger = get_logger_for_component("repository_results")


@dataclass(frozen=True)
class RepositoryResult(Generic[T]):
    """Success value or classified error of one repository operation."""
    value: Optional[T] = None
    error: Optional[NewsboardError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the error of a failed result."""
        if self.error is not None:
            raise self.error
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form; errors expose only the client-safe message."""
        if self.error is not None:
            return {"error": self.kind.value, "msg": self.error.user_message}
        return {"data": _dump(self.value)}


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return value


def run_operation(operation: Callable[..., T], *args: Any, **kwargs: Any) -> RepositoryResult[T]:
    """Run one repository operation and capture its outcome.

    Input errors are returned as-is. Any other failure is logged and
    surfaced as an infrastructure error.
    """
    try:
        return RepositoryResult(value=operation(*args, **kwargs))
    except Exception as e:
        name = getattr(operation, "__name__", repr(operation))
        return RepositoryResult(error=handle_exception(e, logger, name))
