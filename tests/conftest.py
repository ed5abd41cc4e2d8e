from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tomcat_log_analyzer.core.dependencies import get_file_state, get_storage
from tomcat_log_analyzer.services.file_state import FileState
from tomcat_log_analyzer.services.storage import LogStorage


@pytest.fixture()
def file_state(tmp_path):
    """Fresh pointer persisted under the test's temp dir."""
    return FileState(tmp_path / "state" / "last_uploaded_file.txt")


@pytest.fixture()
def storage(tmp_path):
    return LogStorage(tmp_path / "uploads")


@pytest.fixture()
def write_active_log(tmp_path, file_state):
    """Write lines to a log file and make it the active one."""
    def _write(lines, name="catalina_test.out"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        file_state.set_current_path(path)
        return path

    return _write


@pytest.fixture()
def sample_log_file():
    """Path to the catalina_sample.log fixture file."""
    return Path(__file__).parent / "fixtures" / "catalina_sample.log"


@pytest.fixture()
def client(file_state, storage):
    """TestClient with file state and storage pointed at temp dirs."""
    from tomcat_log_analyzer.main import app

    app.dependency_overrides[get_file_state] = lambda: file_state
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
