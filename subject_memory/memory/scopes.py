# subject_memory/memory/scopes.py
"""
Per-scope extraction settings.

A scope is any stream of records that subjects are extracted from (a chat,
a channel, a notebook). Extraction only runs for scopes that were enabled.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from subject_memory.store.models import utc_now


@dataclass
class ScopeSettings:
    """
    Extraction settings of one scope.

    Attributes:
        scope_id: Scope identifier
        enabled: Whether extraction may run for this scope
        auto_extract: Hint for hosts that trigger extraction on new records
        min_confidence: Overrides the configured threshold when set
        keywords: Keywords the host wants associated with every subject of the scope
        updated_at: Last change
    """

    scope_id: str
    enabled: bool = True
    auto_extract: bool = True
    min_confidence: Optional[float] = None
    keywords: list[str] = field(default_factory=list)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scope_id": self.scope_id,
            "enabled": self.enabled,
            "auto_extract": self.auto_extract,
            "min_confidence": self.min_confidence,
            "keywords": list(self.keywords),
            "updated_at": self.updated_at.isoformat(),
        }


class ScopeRegistry:
    """
    Thread-safe registry of scope settings.

    Usage:
        scopes = ScopeRegistry()
        scopes.enable("chat-1", min_confidence=0.3)
        if scopes.is_enabled("chat-1"):
            ...
    """

    def __init__(self) -> None:
        self._settings: dict[str, ScopeSettings] = {}
        self._lock = threading.Lock()

    def enable(self, scope_id: str, **overrides: Any) -> ScopeSettings:
        """
        Enable a scope, creating its settings on first use.

        Keyword overrides replace the matching ScopeSettings fields.

        Raises:
            TypeError: On an unknown settings field
        """
        for reserved in ("scope_id", "enabled", "updated_at"):
            overrides.pop(reserved, None)
        with self._lock:
            current = self._settings.get(scope_id) or ScopeSettings(scope_id=scope_id)
            updated = replace(current, **overrides, enabled=True, updated_at=utc_now())
            self._settings[scope_id] = updated
            return copy.deepcopy(updated)

    def disable(self, scope_id: str) -> bool:
        """Disable a scope. False if it was never configured."""
        with self._lock:
            current = self._settings.get(scope_id)
            if current is None:
                return False
            self._settings[scope_id] = replace(current, enabled=False, updated_at=utc_now())
            return True

    def is_enabled(self, scope_id: str) -> bool:
        with self._lock:
            settings = self._settings.get(scope_id)
            return settings is not None and settings.enabled

    def get(self, scope_id: str) -> Optional[ScopeSettings]:
        """A copy of the scope's settings, or None if never configured."""
        with self._lock:
            settings = self._settings.get(scope_id)
            return copy.deepcopy(settings) if settings is not None else None


__all__ = ["ScopeSettings", "ScopeRegistry"]
