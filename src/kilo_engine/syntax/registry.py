"""Syntax registry responsible for storing profiles and picking one per file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from kilo_engine.runtime.telemetry import record_event, span

from .models import SyntaxProfile


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    profile_count: int
    names: tuple[str, ...]


class SyntaxRegistry:
    """Owns syntax profiles in registration order; first match wins."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._profiles: Dict[str, SyntaxProfile] = {}
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[SyntaxProfile]:
        return iter(tuple(self._profiles.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def get(self, name: str) -> SyntaxProfile:
        try:
            return self._profiles[name]
        except KeyError as exc:
            raise KeyError(f"Syntax profile '{name}' is not registered") from exc

    def register(self, profile: SyntaxProfile, *, replace: bool = False) -> SyntaxProfile:
        with span(
            "syntax::register",
            logger_name=self._logger_name,
            component="syntax",
            metadata={"profile": profile.name},
        ):
            if not replace and profile.name in self._profiles:
                raise ValueError(f"Syntax profile '{profile.name}' already registered")
            self._profiles[profile.name] = profile
            return profile

    def unregister(self, name: str) -> Optional[SyntaxProfile]:
        return self._profiles.pop(name, None)

    def select(self, filename: Optional[str]) -> Optional[SyntaxProfile]:
        """Return the first profile whose patterns match ``filename``, if any."""

        if not filename:
            return None
        for profile in self._profiles.values():
            if profile.matches(filename):
                record_event(
                    "syntax.selected",
                    level="debug",
                    data={"filename": filename, "profile": profile.name},
                    logger_name=self._logger_name,
                )
                return profile
        return None

    def stats(self) -> RegistryStats:
        return RegistryStats(
            profile_count=len(self._profiles),
            names=tuple(self._profiles),
        )


__all__ = ["SyntaxRegistry", "RegistryStats"]
