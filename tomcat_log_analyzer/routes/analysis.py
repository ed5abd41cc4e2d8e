from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from tomcat_log_analyzer.core.config import settings
from tomcat_log_analyzer.core.dependencies import ActiveFileState
from tomcat_log_analyzer.schemas.stats import RankedMessage, SummaryResult
from tomcat_log_analyzer.services.analytics import summarize, top_messages

router = APIRouter(prefix="/api/logs/analysis", tags=["analysis"])


@router.get("/summary", response_model=SummaryResult, response_model_exclude_none=True)
def get_summary(state: ActiveFileState):
    summary = summarize(state)
    if summary is None or not summary.level_counts:
        return Response(status_code=204)
    return summary


@router.get("/top-messages", response_model=List[RankedMessage])
def get_top_messages(
    state: ActiveFileState,
    limit: Optional[int] = Query(None, description="Number of messages to return"),
):
    if limit is not None and limit <= 0:
        raise HTTPException(status_code=400, detail="Limit must be greater than 0.")

    ranked = top_messages(state, limit or settings.TOP_MESSAGES_DEFAULT_LIMIT)
    if not ranked:
        return Response(status_code=204)
    return ranked
