# File: disha/db/session_store.py
import logging
import time

from cachetools import TTLCache

from disha.core.config import settings
from disha.features.chat import ChatSession
from disha.features.courses import CourseRecommender
from disha.features.interview import InterviewDrill
from disha.features.resume import ResumeScanner
from disha.features.roadmap import RoadmapBuilder
from disha.features.shell import NavigationShell

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"

class Workspace:
    """The shell plus one instance of every panel, for one browser session."""

    def __init__(self, gateway):
        self.shell = NavigationShell()
        self.chat = ChatSession(gateway)
        self.roadmap = RoadmapBuilder(gateway)
        self.interview = InterviewDrill(gateway)
        self.resume = ResumeScanner(gateway)
        self.courses = CourseRecommender(gateway)

class SessionStore:
    """
    In-memory only. A restart forgets everything.

    Bounded: a session idle for `ttl` seconds is dropped, and once `maxsize`
    sessions exist the least recently used one makes room for a new one.
    """

    def __init__(self, gateway, maxsize: int = settings.SESSION_MAX,
                 ttl: float = settings.SESSION_TTL_SECONDS, timer=time.monotonic):
        self.gateway = gateway
        self._workspaces = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def get(self, session_id: str = DEFAULT_SESSION) -> Workspace:
        session_id = session_id or DEFAULT_SESSION
        workspace = self._workspaces.get(session_id)
        if workspace is None:
            logger.info(f"🆕 New workspace for session {session_id[:8]}")
            workspace = Workspace(self.gateway)
        # Re-inserting restarts the idle clock
        self._workspaces[session_id] = workspace
        return workspace

    def __contains__(self, session_id):
        return session_id in self._workspaces

    def __len__(self):
        return len(self._workspaces)
