import logging

from fastapi import APIRouter, Depends, HTTPException

from disha.db.session_store import Workspace
from disha.routers.deps import ensure_idle, get_workspace, require_fields
from disha.schemas import AnswerRequest, InterviewRequest

router = APIRouter(prefix="/interview", tags=["interview"])
logger = logging.getLogger(__name__)

@router.get("")
def get_drill(workspace: Workspace = Depends(get_workspace)):
    return workspace.interview.render()

@router.post("")
async def start_drill(request: InterviewRequest, workspace: Workspace = Depends(get_workspace)):
    """Fetches a fresh question set. Replaces any previous drill."""
    require_fields(topic=request.topic)
    ensure_idle(workspace.interview)

    logger.info(f"🧠 Drill requested: {request.topic} ({request.level}, {request.count} questions)")
    await workspace.interview.start(request.topic, request.level, request.count)
    return workspace.interview.render()

@router.put("/answers")
def select_answer(request: AnswerRequest, workspace: Workspace = Depends(get_workspace)):
    ensure_idle(workspace.interview)
    # Clicks after submission (or on unknown options) are no-ops, not errors
    workspace.interview.select(request.question_id, request.option_index)
    return workspace.interview.render()

@router.post("/submit")
def submit_drill(workspace: Workspace = Depends(get_workspace)):
    drill = workspace.interview
    ensure_idle(drill)
    if not drill.questions:
        raise HTTPException(status_code=400, detail="No drill in progress.")
    drill.submit()
    return drill.render()

@router.delete("")
def new_quiz(workspace: Workspace = Depends(get_workspace)):
    ensure_idle(workspace.interview)
    workspace.interview.reset()
    return workspace.interview.render()
