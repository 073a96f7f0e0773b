from __future__ import annotations

import json
from pathlib import Path

from runfolio.game.checkpoints import (
    DEFAULT_CHECKPOINTS,
    KIND_ABOUT,
    KIND_CONTACT,
    KIND_SKILLS,
    CheckpointTracker,
    checkpoint_at,
    load_checkpoints,
)


def test_default_windows() -> None:
    assert [(cp.range_start, cp.range_end) for cp in DEFAULT_CHECKPOINTS] == [
        (100.0, 110.0),
        (300.0, 310.0),
        (600.0, 610.0),
        (900.0, 910.0),
    ]
    assert DEFAULT_CHECKPOINTS[-1].is_contact


def test_about_panel_at_105() -> None:
    cp = checkpoint_at(105.0)
    assert cp is not None
    assert cp.kind == KIND_ABOUT
    assert cp.title.startswith("Name")
    assert any("About Me" in line for line in cp.lines)


def test_window_endpoints_are_exclusive() -> None:
    assert checkpoint_at(300.0) is None
    assert checkpoint_at(310.0) is None
    cp = checkpoint_at(305.0)
    assert cp is not None and cp.kind == KIND_SKILLS


def test_outside_all_windows() -> None:
    for d in (0.0, 99.0, 110.5, 450.0, 915.0, 5000.0):
        assert checkpoint_at(d) is None


def test_tracker_fires_once_per_window_entry() -> None:
    tracker = CheckpointTracker()
    assert tracker.tick(99.9) is None
    first = tracker.tick(100.1)
    assert first is not None and first.kind == KIND_ABOUT
    for d in (101.0, 105.0, 109.9):
        assert tracker.tick(d) is None
    assert tracker.tick(110.1) is None

    tracker.reset()
    again = tracker.tick(100.5)
    assert again is not None and again.kind == KIND_ABOUT


def test_tracker_moves_between_windows() -> None:
    tracker = CheckpointTracker()
    kinds = []
    d = 0.0
    while d < 1000.0:
        cp = tracker.tick(d)
        if cp is not None:
            kinds.append(cp.kind)
        d += 0.37
    assert kinds == ["about", "skills", "projects", "contact"]


def test_load_checkpoints_from_json(tmp_path: Path) -> None:
    p = tmp_path / "panels.json"
    p.write_text(
        json.dumps(
            [
                {"start": 50, "end": 60, "kind": "contact", "title": "Reach me", "lines": ["hi@example.org"]},
                {"start": 10, "end": 20, "title": "Hello"},
            ]
        ),
        encoding="utf-8",
    )
    cps = load_checkpoints(p)
    assert [cp.title for cp in cps] == ["Hello", "Reach me"]
    assert cps[0].kind == KIND_ABOUT
    assert cps[1].kind == KIND_CONTACT
    assert cps[1].lines == ("hi@example.org",)


def test_load_checkpoints_falls_back_on_bad_input(tmp_path: Path) -> None:
    assert load_checkpoints(None) == DEFAULT_CHECKPOINTS
    assert load_checkpoints(tmp_path / "missing.json") == DEFAULT_CHECKPOINTS

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_checkpoints(bad) == DEFAULT_CHECKPOINTS

    inverted = tmp_path / "inverted.json"
    inverted.write_text(json.dumps([{"start": 20, "end": 10, "title": "x"}]), encoding="utf-8")
    assert load_checkpoints(inverted) == DEFAULT_CHECKPOINTS
