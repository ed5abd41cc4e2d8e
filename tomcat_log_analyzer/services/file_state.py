import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple

from tomcat_log_analyzer.core.exceptions import LogWriteError

logger = logging.getLogger(__name__)


class FileState:
    """Pointer to the active log file, persisted as a one-line text record.

    The in-memory pointer is filled lazily from ``state_file`` and replaced
    wholesale by every upload. All access goes through one lock so that an
    analytics pass never reads the pointer and opens a different file.
    """

    def __init__(self, state_file: Path | str):
        self.state_file = Path(state_file)
        self._path: Optional[Path] = None
        self._lock = threading.Lock()

    def _load(self) -> Optional[Path]:
        if not self.state_file.exists():
            return None
        try:
            recorded = self.state_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            logger.warning("Could not read state file %s: %s", self.state_file, e)
            return None
        if not recorded:
            return None
        path = Path(recorded)
        if not path.exists():
            logger.info("Recorded log file %s no longer exists", path)
            return None
        logger.info("Restored last uploaded file: %s", path, extra={"file_name": path.name})
        return path

    def _current(self) -> Optional[Path]:
        if self._path is None:
            self._path = self._load()
        return self._path

    def current_path(self) -> Optional[Path]:
        with self._lock:
            return self._current()

    def set_current_path(self, path: Path | str) -> None:
        path = Path(path).resolve()
        with self._lock:
            try:
                self.state_file.parent.mkdir(parents=True, exist_ok=True)
                self.state_file.write_text(str(path), encoding="utf-8")
            except OSError as e:
                raise LogWriteError() from e
            self._path = path
        logger.info("Last uploaded file path saved: %s", path, extra={"file_name": path.name})

    @contextmanager
    def open_current(self) -> Iterator[Optional[Tuple[Path, TextIO]]]:
        """Yield ``(path, handle)`` for the active file, or None when there is none.

        OSError from opening the file propagates to the caller.
        """
        with self._lock:
            path = self._current()
            f = open(path, "r", encoding="utf-8", errors="replace") if path is not None else None
        if f is None:
            yield None
            return
        with f:
            yield path, f
