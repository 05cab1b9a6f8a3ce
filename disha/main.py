import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from disha.core.config import settings
from disha.db.session_store import SessionStore
from disha.routers import chat, courses, interview, resume, roadmap, shell
from disha.services.gateway import ModelGateway

logger = logging.getLogger(__name__)

# 1. SETUP
app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    logger.info(">>> SERVER STARTING UP <<<")

    gateway = ModelGateway.from_settings(settings)
    app.state.sessions = SessionStore(gateway)

    logger.info("Server is ready to accept requests.")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info(">>> SERVER SHUTTING DOWN <<<")

# 2. ROUTERS
app.include_router(shell.router)
app.include_router(chat.router)
app.include_router(roadmap.router)
app.include_router(interview.router)
app.include_router(resume.router)
app.include_router(courses.router)

# 3. ENDPOINTS
@app.get("/")
async def root():
    sessions = getattr(app.state, "sessions", None)
    return {
        "message": f"{settings.PROJECT_NAME} API is running!",
        "docs": "/docs",
        "model_configured": bool(sessions and sessions.gateway.is_configured),
        "status": "OK",
    }
