"""Registry of tool providers, keyed by tool id."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .errors import RegistrationError
from .providers import TOOLS, Provider, ToolProvider


@dataclass(frozen=True)
class Registration:
    id: str
    name: str
    priority: int
    provider: Optional[Provider]


class Registry:
    """Thread-safe map of tool id to ``Registration``.

    Registrations are never overwritten: registering an id twice is an error.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, Registration] = {}

    def register(self, registration: Registration) -> None:
        if not registration.id:
            raise RegistrationError("registration id must not be empty")
        if registration.provider is None:
            raise RegistrationError(f"registration {registration.id!r} has no provider")
        with self._lock:
            if registration.id in self._entries:
                raise RegistrationError(f"tool {registration.id!r} is already registered")
            self._entries[registration.id] = registration

    def get(self, tool_id: str) -> Optional[Registration]:
        with self._lock:
            return self._entries.get(tool_id)

    def all(self) -> list[Registration]:
        with self._lock:
            entries = list(self._entries.values())
        return sorted(entries, key=lambda r: (r.priority, r.id))

    def ids(self) -> list[str]:
        return [r.id for r in self.all()]

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, tool_id: object) -> bool:
        with self._lock:
            return tool_id in self._entries

    def __len__(self) -> int:
        return self.count()


def build_registry(config: Config) -> Registry:
    registry = Registry()
    for descriptor in TOOLS:
        registry.register(Registration(
            id=descriptor.id,
            name=descriptor.name,
            priority=descriptor.priority,
            provider=ToolProvider(descriptor, config),
        ))
    return registry
