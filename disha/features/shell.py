from enum import Enum

class AppView(str, Enum):
    CHAT = "CHAT"
    ROADMAP = "ROADMAP"
    INTERVIEW = "INTERVIEW"
    RESUME = "RESUME"
    COURSES = "COURSES"

NAV_ITEMS = [
    {"id": AppView.CHAT, "label": "Career Chat", "tagline": "Your personal AI career guide, available 24/7."},
    {"id": AppView.ROADMAP, "label": "Roadmap", "tagline": "Visualize your path to success step-by-step."},
    {"id": AppView.INTERVIEW, "label": "Mock Interview", "tagline": "Practice makes perfect. Test your knowledge."},
    {"id": AppView.RESUME, "label": "Resume Check", "tagline": "Optimize your resume for the ATS and recruiters."},
    {"id": AppView.COURSES, "label": "Courses", "tagline": "Curated learning resources just for you."},
]

class NavigationShell:
    """Which panel is showing. Nothing else."""

    def __init__(self):
        self.active_view = AppView.CHAT

    def select(self, view) -> AppView:
        # Unknown views fall back to the chat panel
        try:
            self.active_view = AppView(view)
        except ValueError:
            self.active_view = AppView.CHAT
        return self.active_view

    def render(self) -> dict:
        active = next(item for item in NAV_ITEMS if item["id"] == self.active_view)
        return {
            "active_view": self.active_view.value,
            "title": active["label"],
            "tagline": active["tagline"],
            "nav_items": [
                {
                    "id": item["id"].value,
                    "label": item["label"],
                    "active": item["id"] == self.active_view,
                }
                for item in NAV_ITEMS
            ],
        }
