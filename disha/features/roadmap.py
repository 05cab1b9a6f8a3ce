import logging

from typing import List, Optional

from disha.schemas import RoadmapStep

logger = logging.getLogger(__name__)

ROADMAP_ERROR = "Failed to generate roadmap. Please try again."

class RoadmapBuilder:
    def __init__(self, gateway):
        self.gateway = gateway
        self.roadmap: Optional[List[RoadmapStep]] = None
        self.loading = False
        self.error = ""

    def can_generate(self, role: str, background: str) -> bool:
        return bool(role and role.strip() and background and background.strip()) and not self.loading

    async def generate(self, role: str, background: str) -> List[RoadmapStep]:
        if not self.can_generate(role, background):
            return self.roadmap or []

        self.loading = True
        self.error = ""
        self.roadmap = None
        try:
            self.roadmap = await self.gateway.generate_roadmap(role, background)
        except Exception as e:
            logger.error(f"Roadmap generation failed: {e}", exc_info=True)
            self.error = ROADMAP_ERROR
            self.roadmap = []
        finally:
            self.loading = False
        return self.roadmap

    def render(self) -> dict:
        steps = self.roadmap or []
        return {
            "loading": self.loading,
            "error": self.error,
            "has_timeline": bool(steps),
            "timeline": [
                {"step": idx, **step.model_dump()}
                for idx, step in enumerate(steps, start=1)
            ],
        }
