import time
import uuid

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- DOMAIN MODELS (what the model returns / what the panels hold) ---

class Message(BaseModel):
    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: int

    @classmethod
    def create(cls, role: str, text: str = "") -> "Message":
        return cls(
            id=uuid.uuid4().hex,
            role=role,
            text=text,
            timestamp=int(time.time() * 1000),
        )

class RoadmapStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: str
    title: str
    duration: str
    description: str
    skills: List[str]
    tools: List[str]

class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    question: str
    options: List[str]
    correct_answer_index: int = Field(alias="correctAnswerIndex")
    explanation: str

    @model_validator(mode="after")
    def check_answer_in_options(self):
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError(
                f"correctAnswerIndex {self.correct_answer_index} is outside {len(self.options)} options"
            )
        return self

class CourseRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    platform: str
    level: Literal["Beginner", "Intermediate", "Advanced"]
    duration: str
    is_free: bool = Field(alias="isFree")
    reason: str

class Improvement(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str
    suggestion: str
    reason: str

class ResumeAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    score: int = Field(ge=0, le=100)
    strengths: List[str]
    weaknesses: List[str]
    improvements: List[Improvement]

# --- REQUEST BODIES ---

class ChatRequest(BaseModel):
    message: str

class RoadmapRequest(BaseModel):
    role: str
    background: str

class InterviewRequest(BaseModel):
    topic: str
    level: Literal["Beginner", "Intermediate", "Advanced"] = "Beginner"
    count: int = Field(default=5, ge=1, le=20)

class AnswerRequest(BaseModel):
    question_id: int
    option_index: int

class ResumeRequest(BaseModel):
    resume_text: str
    target_role: str

class CourseRequest(BaseModel):
    goal: str
    gap: Optional[str] = ""

class ViewRequest(BaseModel):
    view: str
