from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from tomcat_log_analyzer.core.config import settings
from tomcat_log_analyzer.services.file_state import FileState
from tomcat_log_analyzer.services.storage import LogStorage


@lru_cache
def get_file_state() -> FileState:
    # One process-wide pointer; tests swap it out via app.dependency_overrides
    return FileState(settings.STATE_FILE)


@lru_cache
def get_storage() -> LogStorage:
    return LogStorage(
        settings.LOG_DIR,
        prefix=settings.UPLOAD_FILE_PREFIX,
        extension=settings.UPLOAD_FILE_EXTENSION,
    )


ActiveFileState = Annotated[FileState, Depends(get_file_state)]
Storage = Annotated[LogStorage, Depends(get_storage)]
