import logging

from enum import Enum
from typing import Dict, List

from disha.core.config import settings
from disha.schemas import Question

logger = logging.getLogger(__name__)

LEVELS = ["Beginner", "Intermediate", "Advanced"]

class DrillState(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"

class InterviewDrill:
    """
    One mock-interview drill: IDLE -> IN_PROGRESS -> SUBMITTED -> (reset) IDLE.

    Selections live in a question-id -> option-index map, last write wins,
    and are frozen once the drill is submitted.
    """

    def __init__(self, gateway):
        self.gateway = gateway
        self.topic = ""
        self.level = "Beginner"
        self.questions: List[Question] = []
        self.answers: Dict[int, int] = {}
        self.state = DrillState.IDLE
        self.loading = False

    def can_start(self, topic: str) -> bool:
        return bool(topic and topic.strip()) and not self.loading

    async def start(self, topic: str, level: str = "Beginner",
                    count: int = settings.INTERVIEW_QUESTION_COUNT) -> DrillState:
        if not self.can_start(topic):
            return self.state

        self.loading = True
        try:
            questions = await self.gateway.generate_interview_questions(topic, level, count)
        except Exception as e:
            logger.error(f"Interview fetch failed: {e}", exc_info=True)
            questions = []
        finally:
            self.loading = False

        if len(questions) < count:
            logger.warning(f"Asked for {count} questions, got {len(questions)}.")

        # Old drill stays untouched until the new set lands
        self.topic = topic
        self.level = level
        self.questions = list(questions)
        self.answers = {}
        self.state = DrillState.IN_PROGRESS if self.questions else DrillState.IDLE
        return self.state

    def _question(self, question_id: int):
        return next((q for q in self.questions if q.id == question_id), None)

    def select(self, question_id: int, option_index: int) -> bool:
        """Records a choice. Returns False when the click is ignored."""
        if self.state != DrillState.IN_PROGRESS or self.loading:
            return False
        question = self._question(question_id)
        if question is None or not 0 <= option_index < len(question.options):
            return False
        self.answers[question_id] = option_index
        return True

    def submit(self) -> bool:
        if self.state != DrillState.IN_PROGRESS or self.loading:
            return False
        self.state = DrillState.SUBMITTED
        return True

    def score(self) -> int:
        return sum(1 for q in self.questions if self.answers.get(q.id) == q.correct_answer_index)

    def reset(self) -> bool:
        """New Quiz: throws away the questions, the answers and the topic."""
        if self.state != DrillState.SUBMITTED or self.loading:
            return False
        self.questions = []
        self.answers = {}
        self.topic = ""
        self.state = DrillState.IDLE
        return True

    def render(self) -> dict:
        submitted = self.state == DrillState.SUBMITTED
        cards = []
        for number, q in enumerate(self.questions, start=1):
            selected = self.answers.get(q.id)
            options = []
            for idx, text in enumerate(q.options):
                option = {"index": idx, "text": text, "selected": selected == idx}
                if submitted:
                    option["correct"] = idx == q.correct_answer_index
                options.append(option)
            card = {"number": number, "id": q.id, "question": q.question, "options": options}
            if submitted:
                card["is_correct"] = selected == q.correct_answer_index
                card["explanation"] = q.explanation
            cards.append(card)

        view = {
            "loading": self.loading,
            "state": self.state.value,
            "topic": self.topic,
            "level": self.level,
            "levels": LEVELS,
            "questions": cards,
        }
        if submitted:
            score = self.score()
            total = len(self.questions)
            view["score"] = score
            view["total"] = total
            view["message"] = (
                "Perfect Score! You are ready!" if score == total
                else "Keep practicing to improve your skills."
            )
        return view
