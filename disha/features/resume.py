import logging

from typing import Optional

from disha.schemas import ResumeAnalysis

logger = logging.getLogger(__name__)

# Circumference of the r=36 score ring, rounded the way the client draws it
RING_CIRCUMFERENCE = 226

def score_band(score: int) -> str:
    if score > 70:
        return "good"
    if score > 40:
        return "fair"
    return "poor"

class ResumeScanner:
    def __init__(self, gateway):
        self.gateway = gateway
        self.result: Optional[ResumeAnalysis] = None
        self.loading = False

    def can_analyze(self, text: str, role: str) -> bool:
        return bool(text and text.strip() and role and role.strip()) and not self.loading

    async def analyze(self, text: str, role: str) -> Optional[ResumeAnalysis]:
        if not self.can_analyze(text, role):
            return self.result

        self.loading = True
        try:
            self.result = await self.gateway.analyze_resume(text, role)
        except Exception as e:
            logger.error(f"Resume analysis failed: {e}", exc_info=True)
            self.result = None
        finally:
            self.loading = False
        return self.result

    def render(self) -> dict:
        if self.result is None:
            return {"loading": self.loading, "result": None}

        score = self.result.score
        return {
            "loading": self.loading,
            "result": {
                "score": score,
                "band": score_band(score),
                "ring_dash_offset": RING_CIRCUMFERENCE - (RING_CIRCUMFERENCE * score) / 100,
                "summary": self.result.summary,
                "strengths": list(self.result.strengths),
                "weaknesses": list(self.result.weaknesses),
                "improvements": [imp.model_dump() for imp in self.result.improvements],
            },
        }
