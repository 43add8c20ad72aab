from contextlib import asynccontextmanager

from fastapi import FastAPI

from skillroute import __version__
from skillroute.api.v1.middleware.error_handler import ErrorHandlerMiddleware
from skillroute.api.v1.middleware.logging_middleware import LoggingMiddleware
from skillroute.api.v1.router import v1_router
from skillroute.config import settings
from skillroute.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(debug=settings.debug, level=settings.log_level or None)
    logger = get_logger("startup")
    logger.info("Starting skill routing service", version=__version__)

    from skillroute.skills.registry import SkillRegistry

    registry = SkillRegistry(max_workers=settings.load_workers)
    result = registry.load_directory(settings.skills_dir, filename=settings.skill_filename)
    app.state.load_result = result
    logger.info(
        "Skill catalog initialized",
        skill_count=len(result.catalog),
        issue_count=len(result.issues),
    )

    yield

    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Skill Routing Service",
        description="Route queries to skill documents and check their structure",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware is applied in reverse order -- outermost first.
    # 1. Error handler (catches exceptions from inner layers)
    app.add_middleware(ErrorHandlerMiddleware)
    # 2. Request/response logger (innermost -- logs timing around handler)
    app.add_middleware(LoggingMiddleware)

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
