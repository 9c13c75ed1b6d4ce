"""Configuration handed to relup transformations."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelupConfig:
    """Release being upgraded plus free-form options for transformations.

    Unknown keys of the JSON document end up in ``options`` so that custom
    transformations can carry their own settings without changing this class.
    """

    name: Optional[str] = None
    from_version: Optional[str] = None
    to_version: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    @classmethod
    def from_json(cls, entry: Mapping[str, Any], path: Optional[Path] = None) -> "RelupConfig":
        if not isinstance(entry, Mapping):
            raise ValueError("relup configuration must be a JSON object")

        options: Dict[str, Any] = {}
        raw_options = entry.get("options")
        if isinstance(raw_options, Mapping):
            options.update(raw_options)
        elif raw_options is not None:
            raise ValueError("relup configuration 'options' must be a JSON object")
        options.update(
            {
                key: value
                for key, value in entry.items()
                if key not in {"name", "from_version", "to_version", "options"}
            }
        )

        return cls(
            name=_optional_str(entry.get("name")),
            from_version=_optional_str(entry.get("from_version")),
            to_version=_optional_str(entry.get("to_version")),
            options=options,
            path=path,
        )

    @classmethod
    def load(cls, path: Path) -> "RelupConfig":
        """Load a configuration file, returning defaults if it does not exist."""

        if not path.exists():
            logger.warning("relup configuration %s not found, using defaults", path)
            return cls(path=path)
        data = json.loads(path.read_text("utf-8"))
        return cls.from_json(data, path=path)

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for key in ("name", "from_version", "to_version"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        if self.options:
            payload["options"] = dict(self.options)
        return payload


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


__all__ = ["RelupConfig"]
