from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from disha.db.session_store import SessionStore, Workspace

def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions

def get_workspace(
    x_session_id: Optional[str] = Header(None),
    sessions: SessionStore = Depends(get_sessions),
) -> Workspace:
    """Resolves the caller's workspace from the X-Session-Id header."""
    return sessions.get(x_session_id)

def ensure_idle(panel):
    if panel.loading:
        raise HTTPException(status_code=409, detail="A request for this panel is already in flight.")

def require_fields(**fields):
    missing = [name for name, value in fields.items() if not (value and str(value).strip())]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required field(s): {', '.join(missing)}")
