from typing import List

from fastapi import APIRouter, UploadFile, File, Depends, HTTPException, Query, Response

from tomcat_log_analyzer.core.config import settings
from tomcat_log_analyzer.core.dependencies import ActiveFileState, Storage
from tomcat_log_analyzer.schemas.log_entry import SearchMatch
from tomcat_log_analyzer.schemas.pagination import PageParams
from tomcat_log_analyzer.services.analytics import search_logs
from tomcat_log_analyzer.services.storage import upload_log_file

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.post("/upload")
def upload(
    state: ActiveFileState,
    storage: Storage,
    file: UploadFile = File(...),
):
    if not file.filename:
        raise HTTPException(status_code=400, detail="Missing filename")

    # The multipart parser has already spooled the body to a temp file
    stored_path = upload_log_file(
        storage, state, file.file, max_bytes=settings.MAX_UPLOAD_MB * 1024 * 1024,
    )

    return {
        "status": "success",
        "message": f"File '{stored_path.name}' uploaded and saved.",
        "file_name": stored_path.name,
    }


@router.get("/search", response_model=List[SearchMatch])
def search(
    response: Response,
    state: ActiveFileState,
    query: str = Query(..., description="Text or pattern to look for in messages"),
    case_sensitive: bool = Query(False, alias="caseSensitive"),
    regex: bool = Query(False, description="Treat query as a regular expression"),
    paging: PageParams = Depends(),
):
    result = search_logs(
        state,
        query,
        case_sensitive=case_sensitive,
        use_regex=regex,
        page=paging.page,
        size=paging.size,
    )
    if not result.items:
        return Response(status_code=204)
    response.headers["X-Total-Count"] = str(result.total)
    return result.items
