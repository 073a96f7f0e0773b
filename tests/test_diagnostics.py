from __future__ import annotations

from pathlib import Path

from runfolio.common.diagnostics import DiagnosticLog


def test_diagnostics_deduplicate_consecutive_same_error() -> None:
    log = DiagnosticLog(max_items=10)
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        log.exception(context="run.frame", exc=e)
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        log.exception(context="run.frame", exc=e)

    items = log.items()
    assert len(items) == 1
    assert items[0].count == 2
    assert items[0].summary_line().endswith("(x2)")
    assert items[0].tb is not None and "RuntimeError" in items[0].tb


def test_diagnostics_keep_tail_only() -> None:
    log = DiagnosticLog(max_items=3)
    for i in range(6):
        log.error(context="assets", message=f"missing {i}")
    items = log.items()
    assert [it.message for it in items] == ["missing 3", "missing 4", "missing 5"]
    assert log.latest() is items[-1]


def test_info_is_not_recorded_in_feed() -> None:
    log = DiagnosticLog()
    log.info(context="assets.character", message="Loaded model")
    assert log.items() == []
    assert log.latest() is None


def test_diagnostics_persist_each_new_entry(tmp_path: Path) -> None:
    out = tmp_path / "logs" / "diagnostics.log"
    log = DiagnosticLog(max_items=5, persist_path=out)
    log.error(context="assets.road", message="Missing texture: road.jpg")
    log.error(context="assets.road", message="Missing texture: road.jpg")
    log.error(context="assets.sky", message="Missing texture: sky.jpg")
    log.close()

    text = out.read_text(encoding="utf-8")
    assert text.count("assets.road: Missing texture: road.jpg") == 1
    assert "assets.sky: Missing texture: sky.jpg" in text


def test_clear_resets_dedupe() -> None:
    log = DiagnosticLog()
    log.error(context="x", message="y")
    log.clear()
    log.error(context="x", message="y")
    assert len(log.items()) == 1
    assert log.items()[0].count == 1
