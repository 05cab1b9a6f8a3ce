import logging

from typing import AsyncIterator, List, Optional

from disha.schemas import Message

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Hello! I'm your AI Career Mentor. How can I help you today? "
    "You can ask me about career paths, skill gaps, or resume tips."
)
APOLOGY_TEXT = "I'm sorry, I encountered an error. Please try again."

class ReplyStream:
    """
    Async iterator over the growing reply.

    `aclose()` always releases the session, even when iteration never
    started (an unstarted async generator skips its own `finally`).
    """

    def __init__(self, session: "ChatSession", reply: Message, agen):
        self.session = session
        self.reply = reply
        self._agen = agen

    def __aiter__(self):
        return self

    async def __anext__(self) -> Message:
        return await self._agen.__anext__()

    async def aclose(self):
        try:
            await self._agen.aclose()
        finally:
            self.session._release(self.reply)

class ChatSession:
    """
    Append-only transcript for one browser session.

    `send()` appends the user message and an empty model placeholder right
    away, then returns a ReplyStream. Draining it streams the reply into
    the placeholder: after every fragment the placeholder text is set to the
    whole buffer so far, and the placeholder is yielded.
    """

    def __init__(self, gateway):
        self.gateway = gateway
        self.messages: List[Message] = [Message.create("model", WELCOME_TEXT)]
        self.loading = False
        self._in_flight: Optional[Message] = None

    def can_send(self, text: str) -> bool:
        return bool(text and text.strip()) and not self.loading

    def send(self, text: str) -> Optional[ReplyStream]:
        if not self.can_send(text):
            return None

        history = list(self.messages)
        user_msg = Message.create("user", text)
        self.messages.append(user_msg)

        reply = Message.create("model", "")
        self.messages.append(reply)
        self.loading = True
        self._in_flight = reply

        return ReplyStream(self, reply, self._stream_reply(history, user_msg.text, reply))

    def _release(self, reply: Message):
        # A stale stream closing late must not free a newer send
        if self._in_flight is reply:
            self._in_flight = None
            self.loading = False

    async def _stream_reply(self, history: List[Message], text: str, reply: Message) -> AsyncIterator[Message]:
        buffer = ""
        try:
            async for fragment in self.gateway.stream_chat(history, text):
                buffer += fragment
                reply.text = buffer
                yield reply
        except Exception as e:
            logger.error(f"Chat error: {e}", exc_info=True)
            reply.text = APOLOGY_TEXT
            yield reply
        finally:
            self._release(reply)

    async def ask(self, text: str) -> Optional[Message]:
        """Sends and drains the stream; returns the finished reply."""
        stream = self.send(text)
        if stream is None:
            return None
        try:
            async for _ in stream:
                pass
        finally:
            await stream.aclose()
        return stream.reply

    def render(self) -> dict:
        return {
            "loading": self.loading,
            "messages": [m.model_dump() for m in self.messages],
        }
