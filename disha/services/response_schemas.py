"""
Response schemas declared to the model for every schema-bound call.

These are plain OpenAPI-style descriptors (the subset Gemini accepts as
`response_schema`). The pydantic models in `disha.schemas` validate what
comes back; keep both in step.
"""

ROADMAP_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "phase": {"type": "string", "description": "Phase name (e.g., Foundations, Advanced)"},
            "title": {"type": "string", "description": "Main title of this step"},
            "duration": {"type": "string", "description": "Estimated time to complete"},
            "description": {"type": "string", "description": "What to learn in this step"},
            "skills": {"type": "array", "items": {"type": "string"}},
            "tools": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["phase", "title", "duration", "description", "skills", "tools"],
    },
}

QUESTIONS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "question": {"type": "string"},
            "options": {"type": "array", "items": {"type": "string"}},
            "correctAnswerIndex": {"type": "integer", "description": "Zero-based index of the correct option"},
            "explanation": {"type": "string", "description": "Why this is the correct answer"},
        },
        "required": ["id", "question", "options", "correctAnswerIndex", "explanation"],
    },
}

COURSES_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "platform": {"type": "string"},
            "level": {"type": "string", "enum": ["Beginner", "Intermediate", "Advanced"]},
            "duration": {"type": "string"},
            "isFree": {"type": "boolean"},
            "reason": {"type": "string"},
        },
        "required": ["title", "platform", "level", "duration", "isFree", "reason"],
    },
}

RESUME_SCHEMA = {
    "type": "object",
    "properties": {
        "summary": {"type": "string", "description": "Overall feedback summary"},
        "score": {"type": "integer", "description": "Score out of 100"},
        "strengths": {"type": "array", "items": {"type": "string"}},
        "weaknesses": {"type": "array", "items": {"type": "string"}},
        "improvements": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "original": {"type": "string", "description": "The problematic line or section (or 'General')"},
                    "suggestion": {"type": "string", "description": "Improved version or suggestion"},
                    "reason": {"type": "string", "description": "Why this change helps"},
                },
                "required": ["original", "suggestion", "reason"],
            },
        },
    },
    "required": ["summary", "score", "strengths", "weaknesses", "improvements"],
}
