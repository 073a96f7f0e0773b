from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

KIND_ABOUT = "about"
KIND_SKILLS = "skills"
KIND_PROJECTS = "projects"
KIND_CONTACT = "contact"


@dataclass(frozen=True)
class Checkpoint:
    range_start: float
    range_end: float
    kind: str
    title: str
    lines: tuple[str, ...] = ()

    def contains(self, distance: float) -> bool:
        # Open window: both endpoints are outside.
        return self.range_start < distance < self.range_end

    @property
    def is_contact(self) -> bool:
        return self.kind == KIND_CONTACT


DEFAULT_CHECKPOINTS: tuple[Checkpoint, ...] = (
    Checkpoint(
        100.0,
        110.0,
        KIND_ABOUT,
        "Name: Vijay Bhatt",
        (
            "About Me:",
            "I enjoy exploring web development and networking, with a background in",
            "electronic science. I enjoy creating interactive projects and experimenting",
            "with new technologies. I believe in continuous learning and strive to",
            "improve my skills every day!",
        ),
    ),
    Checkpoint(
        300.0,
        310.0,
        KIND_SKILLS,
        "Skills:",
        ("JS, HTML, CSS, Webpack, Node.js, Jest, Three.js, Git, GitHub, Responsive Web Design.",),
    ),
    Checkpoint(
        600.0,
        610.0,
        KIND_PROJECTS,
        "Projects:",
        (
            "An interactive endless 3D obstacle game.",
            "A battleship game.",
            "Tic Tac Toe.",
        ),
    ),
    Checkpoint(
        900.0,
        910.0,
        KIND_CONTACT,
        "Contact:",
        (
            "Email: vijay.bhatt@iic.ac.in",
            "GitHub: hawkeye102",
        ),
    ),
)


def checkpoint_at(distance: float, checkpoints: tuple[Checkpoint, ...] = DEFAULT_CHECKPOINTS) -> Checkpoint | None:
    for cp in checkpoints:
        if cp.contains(distance):
            return cp
    return None


class CheckpointTracker:
    """
    Fires a checkpoint once per window entry.

    Staying inside a window for several frames keeps the panel up without re-presenting it;
    leaving and re-entering (e.g. after a reset) fires again.
    """

    def __init__(self, checkpoints: tuple[Checkpoint, ...] = DEFAULT_CHECKPOINTS) -> None:
        self.checkpoints = tuple(checkpoints)
        self._inside: Checkpoint | None = None

    def reset(self) -> None:
        self._inside = None

    def tick(self, distance: float) -> Checkpoint | None:
        cp = checkpoint_at(distance, self.checkpoints)
        fired = cp if (cp is not None and cp is not self._inside) else None
        self._inside = cp
        return fired


def _checkpoint_from_json(obj: object) -> Checkpoint | None:
    if not isinstance(obj, dict):
        return None
    start = obj.get("start")
    end = obj.get("end")
    title = obj.get("title")
    if not isinstance(start, (int, float)) or not isinstance(end, (int, float)) or float(end) <= float(start):
        return None
    if not isinstance(title, str) or not title.strip():
        return None
    raw_lines = obj.get("lines")
    lines = tuple(str(x) for x in raw_lines) if isinstance(raw_lines, list) else ()
    kind = obj.get("kind")
    return Checkpoint(
        range_start=float(start),
        range_end=float(end),
        kind=str(kind).strip().lower() if isinstance(kind, str) and kind.strip() else KIND_ABOUT,
        title=title.strip(),
        lines=lines,
    )


def load_checkpoints(path: Path | None) -> tuple[Checkpoint, ...]:
    """
    Load portfolio panels from a JSON list of
    `{"start", "end", "kind", "title", "lines"}` objects.

    Any malformed file falls back to the built-in panels.
    """

    if path is None:
        return DEFAULT_CHECKPOINTS
    p = Path(path)
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except Exception:
        logger.warning("Cannot read checkpoints from %s, using built-in panels.", p)
        return DEFAULT_CHECKPOINTS
    if not isinstance(payload, list):
        logger.warning("Checkpoint file %s must hold a JSON list.", p)
        return DEFAULT_CHECKPOINTS
    parsed = [_checkpoint_from_json(item) for item in payload]
    if not parsed or any(cp is None for cp in parsed):
        logger.warning("Checkpoint file %s has invalid entries, using built-in panels.", p)
        return DEFAULT_CHECKPOINTS
    return tuple(sorted((cp for cp in parsed if cp is not None), key=lambda cp: cp.range_start))
