import logging

from fastapi import APIRouter, Depends

from disha.db.session_store import Workspace
from disha.routers.deps import ensure_idle, get_workspace, require_fields
from disha.schemas import CourseRequest

router = APIRouter(prefix="/courses", tags=["courses"])
logger = logging.getLogger(__name__)

@router.get("")
def get_courses(workspace: Workspace = Depends(get_workspace)):
    return workspace.courses.render()

@router.post("")
async def recommend_courses(request: CourseRequest, workspace: Workspace = Depends(get_workspace)):
    """Recommends courses for a learning goal; the weak area is optional."""
    require_fields(goal=request.goal)
    ensure_idle(workspace.courses)

    await workspace.courses.recommend(request.goal, request.gap or "")
    return workspace.courses.render()
