from __future__ import annotations

import logging
import time
import traceback
from collections import deque
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("runfolio")


@dataclass
class Diagnostic:
    ts: float
    context: str
    message: str
    tb: str | None
    count: int = 1

    def matches(self, context: str, message: str) -> bool:
        return self.context == context and self.message == message

    def repeat(self) -> None:
        self.ts = time.time()
        self.count += 1

    def summary_line(self) -> str:
        line = f"{self.context}: {self.message}".strip()
        return f"{line} (x{self.count})" if self.count > 1 else line


class DiagnosticLog:
    """
    Where asset failures and callback exceptions go.

    The on-screen console reads the short feed kept here. A failure that repeats on
    consecutive calls (a broken per-frame callback, say) bumps the count of the newest
    entry instead of adding one. Every entry is forwarded to the `runfolio` logger, and
    new entries are also written to `persist_path` when one is given.
    """

    def __init__(self, *, max_items: int = 30, persist_path: Path | None = None) -> None:
        self.enabled: bool = True
        self._feed: deque[Diagnostic] = deque(maxlen=max(1, int(max_items)))
        self._file: logging.Handler | None = None
        if persist_path is not None:
            self._file = _open_file_handler(Path(persist_path))

    def items(self) -> list[Diagnostic]:
        return list(self._feed)

    def latest(self) -> Diagnostic | None:
        return self._feed[-1] if self._feed else None

    def clear(self) -> None:
        self._feed.clear()

    def info(self, *, context: str, message: str) -> None:
        if self.enabled:
            logger.info("%s: %s", context or "unknown", message)

    def error(self, *, context: str, message: str) -> None:
        if not self.enabled:
            return
        self._record(str(context or "unknown"), str(message or "").strip() or "Unknown error", None)

    def exception(self, *, context: str, exc: BaseException) -> None:
        if not self.enabled:
            return
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self._record(str(context or "unknown"), f"{type(exc).__name__}: {exc}".strip(), tb)

    def _record(self, context: str, message: str, tb: str | None) -> None:
        if tb:
            logger.error("%s: %s\n%s", context, message, tb.rstrip())
        else:
            logger.error("%s: %s", context, message)

        last = self.latest()
        if last is not None and last.matches(context, message):
            last.repeat()
            return
        self._feed.append(Diagnostic(ts=time.time(), context=context, message=message, tb=tb))
        if self._file is not None:
            text = f"{context}: {message}"
            if tb and tb.strip():
                text += "\n" + tb.rstrip()
            self._file.handle(logger.makeRecord(logger.name, logging.ERROR, __file__, 0, text, None, None))

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


def _open_file_handler(path: Path) -> logging.Handler | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.warning("Cannot create diagnostics directory for %s", path)
        return None
    handler = logging.FileHandler(path, encoding="utf-8", delay=True)
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def configure_logging(*, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
