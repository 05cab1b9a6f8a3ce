import pytest

from fastapi.testclient import TestClient

from disha.db.session_store import SessionStore
from disha.main import app
from disha.routers.deps import get_sessions
from disha.schemas import CourseRecommendation, Question, ResumeAnalysis, RoadmapStep
from disha.services.gateway import GatewayError

class FakeGateway:
    """Stands in for ModelGateway; canned answers, records every call."""

    def __init__(self, fragments=None, roadmap=None, questions=None, courses=None,
                 analysis=None, fail=False, fail_after=None):
        self.fragments = fragments if fragments is not None else ["Hello", ", ", "world"]
        self.roadmap = roadmap if roadmap is not None else []
        self.questions = questions if questions is not None else []
        self.courses = courses if courses is not None else []
        self.analysis = analysis
        self.fail = fail
        self.fail_after = fail_after
        self.calls = []

    async def stream_chat(self, history, message):
        self.calls.append(("stream_chat", list(history), message))
        if self.fail:
            raise GatewayError("boom")
        for idx, fragment in enumerate(self.fragments):
            if self.fail_after is not None and idx == self.fail_after:
                raise GatewayError("stream dropped")
            yield fragment

    async def generate_roadmap(self, role, background):
        self.calls.append(("generate_roadmap", role, background))
        if self.fail:
            raise GatewayError("boom")
        return self.roadmap

    async def generate_interview_questions(self, topic, level, count=5):
        self.calls.append(("generate_interview_questions", topic, level, count))
        if self.fail:
            raise GatewayError("boom")
        return self.questions

    async def recommend_courses(self, goal, gap=""):
        self.calls.append(("recommend_courses", goal, gap))
        if self.fail:
            raise GatewayError("boom")
        return self.courses

    async def analyze_resume(self, text, role):
        self.calls.append(("analyze_resume", text, role))
        if self.fail:
            raise GatewayError("boom")
        return self.analysis

    @property
    def is_configured(self):
        return True

def make_questions(n=3):
    return [
        Question(
            id=i,
            question=f"Question {i}?",
            options=["A", "B", "C", "D"],
            correctAnswerIndex=i % 4,
            explanation=f"Because {i}.",
        )
        for i in range(1, n + 1)
    ]

def make_courses(n=5):
    return [
        CourseRecommendation(
            title=f"Course {i}",
            platform="YouTube" if i % 2 else "Coursera",
            level="Beginner",
            duration=f"{i} weeks",
            isFree=bool(i % 2),
            reason=f"Reason {i}",
        )
        for i in range(1, n + 1)
    ]

def make_roadmap(n=2):
    return [
        RoadmapStep(
            phase="Foundations" if i == 1 else "Advanced",
            title=f"Step {i}",
            duration="1 month",
            description=f"Learn thing {i}",
            skills=["Python", "SQL"],
            tools=["Git"],
        )
        for i in range(1, n + 1)
    ]

def make_analysis(score=87):
    return ResumeAnalysis(
        summary="Solid resume.",
        score=score,
        strengths=["Clear layout"],
        weaknesses=["No metrics"],
        improvements=[{"original": "Did stuff", "suggestion": "Cut costs by 20%", "reason": "Shows impact"}],
    )

@pytest.fixture
def gateway():
    return FakeGateway()

@pytest.fixture
def sessions(gateway):
    return SessionStore(gateway)

@pytest.fixture
def client(sessions):
    app.dependency_overrides[get_sessions] = lambda: sessions
    yield TestClient(app)
    app.dependency_overrides.clear()
