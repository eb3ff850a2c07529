from __future__ import annotations

from pathlib import Path

from barrage.debug import debug_enabled, set_debug_enabled
from barrage.debug_log import close_trace_log, init_trace_log, trace, trace_log_path


def test_trace_log_writes_key_value_events(tmp_path: Path) -> None:
    close_trace_log()
    log_path = init_trace_log(base_dir=tmp_path, seed=7)
    trace("monster_death", id=3, type="small", x=12.5)

    assert trace_log_path() == log_path
    text = log_path.read_text(encoding="utf-8")
    assert "event=init" in text
    assert "seed=7" in text
    assert "event=monster_death id=3 type=small x=12.500" in text

    close_trace_log()
    assert trace_log_path() is None


def test_trace_without_open_log_is_a_no_op(tmp_path: Path) -> None:
    close_trace_log()
    trace("ignored", value=1)

    assert trace_log_path() is None
    assert list(tmp_path.iterdir()) == []


def test_debug_toggle_prefers_override(monkeypatch) -> None:
    monkeypatch.setenv("BARRAGE_DEBUG", "1")
    assert debug_enabled() is True

    set_debug_enabled(False)
    assert debug_enabled() is False

    set_debug_enabled(None)
    monkeypatch.delenv("BARRAGE_DEBUG")
    assert debug_enabled() is False
