import logging

from typing import List

from disha.schemas import CourseRecommendation

logger = logging.getLogger(__name__)

class CourseRecommender:
    def __init__(self, gateway):
        self.gateway = gateway
        self.courses: List[CourseRecommendation] = []
        self.loading = False

    def can_recommend(self, goal: str) -> bool:
        return bool(goal and goal.strip()) and not self.loading

    async def recommend(self, goal: str, gap: str = "") -> List[CourseRecommendation]:
        if not self.can_recommend(goal):
            return self.courses

        self.loading = True
        try:
            self.courses = await self.gateway.recommend_courses(goal, gap or "")
        except Exception as e:
            logger.error(f"Course recommendation failed: {e}", exc_info=True)
            self.courses = []
        finally:
            self.loading = False
        return self.courses

    def render(self) -> dict:
        return {
            "loading": self.loading,
            "cards": [
                {**course.model_dump(by_alias=True), "badge": "FREE" if course.is_free else "PAID"}
                for course in self.courses
            ],
        }
