import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from disha.db.session_store import Workspace
from disha.routers.deps import ensure_idle, get_workspace, require_fields
from disha.schemas import ChatRequest

router = APIRouter(prefix="/chat", tags=["chat"])
logger = logging.getLogger(__name__)

@router.get("")
def get_transcript(workspace: Workspace = Depends(get_workspace)):
    return workspace.chat.render()

@router.post("/messages")
async def send_message(request: ChatRequest, workspace: Workspace = Depends(get_workspace)):
    """
    Streams the mentor's reply as NDJSON.

    Every `partial_update` carries the reply message with the full text so
    far; the final `result` line carries the finished message.
    """
    chat = workspace.chat
    require_fields(message=request.message)
    ensure_idle(chat)

    user_msg_index = len(chat.messages)
    stream = chat.send(request.message)

    async def event_generator():
        reply = stream.reply
        try:
            yield json.dumps({"type": "message", "data": chat.messages[user_msg_index].model_dump()}) + "\n"
            async for reply in stream:
                yield json.dumps({"type": "partial_update", "data": reply.model_dump()}) + "\n"
        except Exception as e:
            logger.error(f"Stream Error in chat: {e}", exc_info=True)
            yield json.dumps({"type": "error", "message": str(e)}) + "\n"
            return
        finally:
            # Client may have gone away before the reply was drained
            await stream.aclose()
        yield json.dumps({"type": "result", "data": reply.model_dump()}) + "\n"

    # The background close covers a body that was never iterated at all
    return StreamingResponse(
        event_generator(),
        media_type="application/x-ndjson",
        background=BackgroundTask(stream.aclose),
    )
