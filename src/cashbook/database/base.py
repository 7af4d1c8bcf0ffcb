"""Abstract key-value storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """Abstract device-local key-value storage for cashbook.

    Values are opaque strings; callers own their serialization.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create whatever the backend needs before first use."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value in one write."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        pass
