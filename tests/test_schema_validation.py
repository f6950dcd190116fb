from __future__ import annotations

import json
from pathlib import Path

import pytest

from crazyones.paths import get_paths
from crazyones.services.content import ContentError, ContentService, Settings


def test_bundled_settings_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()
    settings = content.load_settings()
    assert settings.ai_think_delay == 1.5
    assert (settings.window_width, settings.window_height) == (1024, 768)


def test_overrides_skip_none() -> None:
    s = Settings().with_overrides(ai_think_delay=0.2, window_width=None)
    assert s.ai_think_delay == 0.2
    assert s.window_width == 1024


def test_invalid_settings_are_rejected(tmp_path: Path) -> None:
    paths = get_paths()
    (tmp_path / "settings.json").write_text(
        json.dumps({"ai_think_delay": -1, "window": {"width": 10, "height": 10}, "log_level": "LOUD", "stats_file": ""}),
        encoding="utf-8",
    )
    content = ContentService(tmp_path, paths.schema_dir)
    with pytest.raises(ContentError) as exc:
        content.load_settings()
    assert "Schema validation failed" in str(exc.value)


def test_missing_settings_file(tmp_path: Path) -> None:
    content = ContentService(tmp_path, get_paths().schema_dir)
    with pytest.raises(ContentError):
        content.load_settings()
