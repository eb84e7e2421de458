# src/manuscript_kit/analysis/profiles.py

import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Persistence for the author's style profile."""

    def load(self) -> dict[str, Any] | None: ...

    def save(self, profile: dict[str, Any]) -> None: ...

    def clear(self) -> None: ...


class InMemoryProfileStore:
    def __init__(self, profile: dict[str, Any] | None = None) -> None:
        self._profile = profile

    def load(self) -> dict[str, Any] | None:
        return self._profile

    def save(self, profile: dict[str, Any]) -> None:
        self._profile = dict(profile)

    def clear(self) -> None:
        self._profile = None


class JsonFileProfileStore:
    """Stores the profile as a JSON document on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> dict[str, Any] | None:
        if not self._path.exists():
            return None
        try:
            with open(self._path, encoding="utf-8") as f:
                profile = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable style profile %s: %s", self._path, e)
            return None
        if not isinstance(profile, dict):
            logger.warning("Ignoring style profile %s: not a JSON object", self._path)
            return None
        return profile

    def save(self, profile: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(profile, f, ensure_ascii=False, indent=2)
        logger.debug("Saved style profile to %s", self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
