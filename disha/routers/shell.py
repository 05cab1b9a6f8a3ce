from fastapi import APIRouter, Depends

from disha.db.session_store import Workspace
from disha.routers.deps import get_workspace
from disha.schemas import ViewRequest

router = APIRouter(prefix="/shell", tags=["shell"])

@router.get("")
def get_shell(workspace: Workspace = Depends(get_workspace)):
    return workspace.shell.render()

@router.put("/view")
def select_view(request: ViewRequest, workspace: Workspace = Depends(get_workspace)):
    workspace.shell.select(request.view)
    return workspace.shell.render()
