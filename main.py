import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings
from app.core.context import AppContext
from app.core.database import Base
from app.core.logging import configure_logging
from app.endpoints import (
    analytics,
    assignments,
    auth,
    course_progress,
    courses,
    create_course,
    file_progress,
    quizzes,
    submissions,
    upload,
)
from app.middleware.exceptions import (
    global_exception_handler,
    http_exception_handler,
    storage_exception_handler,
    validation_exception_handler,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.models import registry  # noqa: F401
from app.services.storage import StorageError

logger = logging.getLogger("app")


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)
    context = AppContext.from_settings(settings, engine=engine)
    owns_engine = engine is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Base.metadata.create_all(bind=context.engine)
        logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
        yield
        if owns_engine:
            context.engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)

    prefix = settings.API_PREFIX
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Auth"])
    app.include_router(create_course.router, prefix=f"{prefix}/create-course", tags=["Course Management"])
    app.include_router(courses.router, prefix=f"{prefix}/courses", tags=["Courses"])
    app.include_router(upload.router, prefix=f"{prefix}/upload", tags=["Course Content"])
    app.include_router(quizzes.router, prefix=f"{prefix}/quizzes", tags=["Quizzes"])
    app.include_router(submissions.router, prefix=f"{prefix}/submissions", tags=["Quiz Submissions"])
    app.include_router(assignments.router, prefix=prefix, tags=["Assignments"])
    app.include_router(course_progress.router, prefix=f"{prefix}/course-progress", tags=["Course Progress"])
    app.include_router(file_progress.router, prefix=f"{prefix}/file-progress", tags=["File Progress"])
    app.include_router(analytics.router, prefix=f"{prefix}/analytics", tags=["Analytics"])

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
