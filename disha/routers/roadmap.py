import logging

from fastapi import APIRouter, Depends

from disha.db.session_store import Workspace
from disha.routers.deps import ensure_idle, get_workspace, require_fields
from disha.schemas import RoadmapRequest

router = APIRouter(prefix="/roadmap", tags=["roadmap"])
logger = logging.getLogger(__name__)

@router.get("")
def get_roadmap(workspace: Workspace = Depends(get_workspace)):
    return workspace.roadmap.render()

@router.post("")
async def generate_roadmap(request: RoadmapRequest, workspace: Workspace = Depends(get_workspace)):
    """Builds a phased roadmap for the target role from the user's background."""
    require_fields(role=request.role, background=request.background)
    ensure_idle(workspace.roadmap)

    logger.info(f"🗺️ Roadmap requested for role: {request.role}")
    await workspace.roadmap.generate(request.role, request.background)
    return workspace.roadmap.render()
