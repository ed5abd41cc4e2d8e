import logging
import os
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from tomcat_log_analyzer.core.exceptions import EmptyFileError, FileTooLargeError, LogWriteError
from tomcat_log_analyzer.services.file_state import FileState

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB


class LogStorage:
    """Writes uploaded log dumps under an operator-configured directory."""

    def __init__(self, directory: Path | str, prefix: str = "catalina_", extension: str = ".out"):
        self.directory = Path(directory)
        self.prefix = prefix
        self.extension = extension

    def target_path(self, now: datetime | None = None) -> Path:
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        return (self.directory / f"{self.prefix}{stamp}{self.extension}").resolve()

    def store(self, source: BinaryIO, max_bytes: int | None = None) -> Path:
        """Copy ``source`` to disk chunk by chunk and return the stored path.

        Nothing is left behind when the upload is empty, too large or the
        write fails.
        """
        stored_path = self.target_path()
        tmp_path = stored_path.with_name(stored_path.name + ".part")
        bytes_written = 0
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("wb") as f:
                while True:
                    chunk = source.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    bytes_written += len(chunk)
                    if max_bytes is not None and bytes_written > max_bytes:
                        raise FileTooLargeError()
                    f.write(chunk)
            if bytes_written == 0:
                raise EmptyFileError()
            # Same-second uploads replace the earlier file
            os.replace(tmp_path, stored_path)
        except (EmptyFileError, FileTooLargeError):
            tmp_path.unlink(missing_ok=True)
            raise
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise LogWriteError() from e

        logger.info(
            "File uploaded to: %s", stored_path,
            extra={"file_name": stored_path.name, "bytes_written": bytes_written},
        )
        return stored_path


def upload_log_file(
    storage: LogStorage,
    state: FileState,
    source: BinaryIO,
    max_bytes: int | None = None,
) -> Path:
    """Store an uploaded dump and make it the active file."""
    stored_path = storage.store(source, max_bytes=max_bytes)
    state.set_current_path(stored_path)
    return stored_path
