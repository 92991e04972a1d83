import sys
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from preppal.infrastructure.config import get_settings
from preppal.infrastructure.db.session import Base, engine
from preppal.infrastructure.db import models  # noqa: F401
from preppal.presentation.dependencies import SessionRequired
from preppal.presentation.api.routers.auth_router import router as auth_router
from preppal.presentation.api.routers.reference_router import router as reference_router
from preppal.presentation.api.routers.exam_router import router as exam_router
from preppal.presentation.api.routers.subject_router import router as subject_router
from preppal.presentation.api.routers.chapter_router import router as chapter_router
from preppal.presentation.api.routers.book_router import router as book_router
from preppal.presentation.api.routers.prompt_router import router as prompt_router
from preppal.presentation.api.routers.question_router import router as question_router
from preppal.presentation.api.routers.setup_docs_router import router as setup_docs_router

settings = get_settings()

# Create tables
Base.metadata.create_all(bind=engine)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="PrepPal Admin API")


# Session guard: browsers are sent to the login page, API callers get a 401
@app.exception_handler(SessionRequired)
async def session_required_handler(request: Request, exc: SessionRequired):
    logger.info(f"Unauthenticated request to {request.url.path}: {exc.reason}")
    if "text/html" in request.headers.get("accept", ""):
        return RedirectResponse(url=settings.login_path, status_code=303)
    return JSONResponse(
        status_code=401,
        content={"detail": exc.reason, "login_url": settings.login_path},
        headers={"WWW-Authenticate": "Bearer"},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred."}
    )

# Include routers
app.include_router(auth_router)
app.include_router(reference_router)
app.include_router(exam_router)
app.include_router(subject_router)
app.include_router(chapter_router)
app.include_router(book_router)
app.include_router(prompt_router)
app.include_router(question_router)
app.include_router(setup_docs_router)


# Optional root endpoint
@app.get("/")
def root():
    return {"message": "Welcome to PrepPal Admin API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
