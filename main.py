import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file before settings are read
load_dotenv()

from clipqueue.config import get_settings, log_configuration_status
from clipqueue.errors import register_exception_handlers
from clipqueue.routers import (
    auth_router,
    projects_router,
    queue_router,
    segments_router,
    youtube_router,
)
from clipqueue.utils.logging_utils import get_system_logger, setup_logger

settings = get_settings()

setup_logger(log_level=getattr(logging, settings.log_level.upper(), logging.INFO))
log_configuration_status(get_system_logger())

app = FastAPI(title="ClipQueue API")

# CORS configuration
app.add_middleware(CORSMiddleware,
    allow_origins=[settings.allowed_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(projects_router)
app.include_router(segments_router)
app.include_router(queue_router)
app.include_router(youtube_router)
app.include_router(auth_router)


@app.get("/")
def root():
    return {"message": "ClipQueue API. Curate YouTube segments into projects under /api/projects, /api/segments and /api/queue."}


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="::", port=8000)
