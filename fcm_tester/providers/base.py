from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseProvider(ABC):
    name: str

    @abstractmethod
    def send(self, message: dict[str, Any]) -> str:
        """Submit one message and return the provider-assigned message id."""
        raise NotImplementedError

    def close(self) -> None:
        return None
