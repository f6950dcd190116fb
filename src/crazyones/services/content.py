from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    pass


def load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_number(obj: Mapping[str, object], key: str) -> float:
    v = obj.get(key)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ContentError(f"Expected number for {key}")
    return float(v)


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if isinstance(v, bool) or not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


@dataclass(frozen=True)
class Settings:
    ai_think_delay: float = 1.5
    window_width: int = 1024
    window_height: int = 768
    log_level: str = "INFO"
    stats_file: str = "stats.json"

    def with_overrides(self, **overrides: object) -> "Settings":
        """Return a copy with every non-None override applied (CLI flags)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_schema(self, name: str) -> object:
        return load_json(self._schema_dir / f"{name}.schema.json")

    def load_settings(self) -> Settings:
        path = self._data_dir / "settings.json"
        raw = load_json(path)
        validate_json(raw, self.load_schema("settings"), context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("settings.json must be an object")
        window = raw.get("window")
        if not isinstance(window, dict):
            raise ContentError("settings.json.window must be an object")

        settings = Settings(
            ai_think_delay=_require_number(raw, "ai_think_delay"),
            window_width=_require_int(window, "width"),
            window_height=_require_int(window, "height"),
            log_level=_require_str(raw, "log_level"),
            stats_file=_require_str(raw, "stats_file"),
        )
        logger.debug("Loaded settings from %s: %s", path, settings)
        return settings

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_settings()
        _ = self.load_schema("stats")
