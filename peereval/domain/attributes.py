"""Base class for data transfer objects that wrap storage entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class EntityAttributes(ABC):
    """Common contract for attribute classes exchanged with the storage layer."""

    @abstractmethod
    def get_invalidity_info(self) -> list[str]:
        """Return one message per invalid field; empty when the object is valid."""

    def is_valid(self) -> bool:
        return not self.get_invalidity_info()

    @abstractmethod
    def to_entity(self) -> Any:
        """Convert into the matching storage entity."""

    @abstractmethod
    def sanitize_for_saving(self) -> None:
        """Escape field values in place before they are persisted."""

    @abstractmethod
    def get_identification_string(self) -> str: ...

    @abstractmethod
    def get_entity_type_as_string(self) -> str: ...

    @abstractmethod
    def get_backup_identifier(self) -> str: ...

    @abstractmethod
    def get_json_string(self) -> str: ...

    @staticmethod
    def add_non_empty_error(error: str, errors: list[str]) -> None:
        if error:
            errors.append(error)
