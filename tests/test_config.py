"""Tests for subtitle-linker configuration loading."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import pytest  # type: ignore[import-untyped]

import subtitle_linker


def _write_config(content: str) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(content)
        return f.name


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_config_uses_defaults(self) -> None:
        cfg = subtitle_linker.load_config(None)

        assert cfg.video_extensions == frozenset({"mp4", "mkv", "avi"})
        assert cfg.subtitle_extensions == frozenset({"srt", "vtt", "idx", "ass", "dts"})
        assert cfg.default_language.tag == "en"
        assert cfg.create_links is True
        assert cfg.relative_links is True
        assert cfg.log_dir == subtitle_linker.DEFAULT_LOG_DIR

    def test_missing_config_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            subtitle_linker.load_config(Path("/nonexistent/config.yaml"))

    def test_empty_file_uses_defaults(self) -> None:
        temp_path = _write_config("")
        try:
            cfg = subtitle_linker.load_config(Path(temp_path))
            assert cfg.default_language.tag == "en"
        finally:
            os.unlink(temp_path)

    def test_full_config(self) -> None:
        temp_path = _write_config(
            """
video_extensions: [MKV, .m4v]
subtitle_extensions: "srt, .sup"
default_language: French
create_links: off
relative_links: false
log_dir: /custom/logs
"""
        )
        try:
            cfg = subtitle_linker.load_config(Path(temp_path))

            assert cfg.video_extensions == frozenset({"mkv", "m4v"})
            assert cfg.subtitle_extensions == frozenset({"srt", "sup"})
            assert cfg.default_language.tag == "fr"
            assert cfg.create_links is False
            assert cfg.relative_links is False
            assert cfg.log_dir == Path("/custom/logs")
        finally:
            os.unlink(temp_path)

    def test_bool_coercion_handles_typo(self) -> None:
        temp_path = _write_config("create_links: ture\n")
        try:
            assert subtitle_linker.load_config(Path(temp_path)).create_links is True
        finally:
            os.unlink(temp_path)

    def test_log_dir_expands_home(self, monkeypatch) -> None:
        monkeypatch.setenv("HOME", "/home/tester")
        temp_path = _write_config("log_dir: ~/linker-logs\n")
        try:
            cfg = subtitle_linker.load_config(Path(temp_path))
            assert cfg.log_dir == Path("/home/tester/linker-logs")
        finally:
            os.unlink(temp_path)

    def test_empty_log_dir_disables_file_logging(self) -> None:
        temp_path = _write_config('log_dir: ""\n')
        try:
            assert subtitle_linker.load_config(Path(temp_path)).log_dir is None
        finally:
            os.unlink(temp_path)

    def test_unknown_default_language_raises(self) -> None:
        temp_path = _write_config("default_language: Klingon\n")
        try:
            with pytest.raises(ValueError, match="Klingon"):
                subtitle_linker.load_config(Path(temp_path))
        finally:
            os.unlink(temp_path)

    def test_non_mapping_root_raises(self) -> None:
        temp_path = _write_config("- just\n- a list\n")
        try:
            with pytest.raises(ValueError):
                subtitle_linker.load_config(Path(temp_path))
        finally:
            os.unlink(temp_path)

    def test_empty_extension_list_raises(self) -> None:
        temp_path = _write_config("video_extensions: []\n")
        try:
            with pytest.raises(ValueError):
                subtitle_linker.load_config(Path(temp_path))
        finally:
            os.unlink(temp_path)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def _added_handlers(self, log_dir: Path | None) -> tuple[Path | None, list[logging.Handler]]:
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            result = subtitle_linker.setup_logging(log_dir)
            added = [h for h in root.handlers if h not in before]
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
        return result, added

    def test_disabled_installs_null_handler(self) -> None:
        result, added = self._added_handlers(None)

        assert result is None
        assert [type(h) for h in added] == [logging.NullHandler]

    def test_unwritable_dir_installs_null_handler(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result, added = self._added_handlers(blocker / "logs")

        assert result is None
        assert [type(h) for h in added] == [logging.NullHandler]
