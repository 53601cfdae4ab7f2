"""JSON serialisation of attribute object graphs backed by pydantic adapters."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(cls: type) -> TypeAdapter[Any]:
    return TypeAdapter(cls)


def to_json(obj: Any, cls: type | None = None, *, indent: int | None = 2) -> str:
    """Serialise ``obj`` (typically an attributes dataclass) to a JSON string."""
    adapter = _adapter(cls or type(obj))
    return adapter.dump_json(obj, indent=indent).decode("utf-8")


def from_json(data: str | bytes, cls: type[T]) -> T:
    """Parse a JSON document into an instance of ``cls``."""
    return _adapter(cls).validate_json(data)
