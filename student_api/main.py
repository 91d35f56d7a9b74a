# student_api/main.py
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from student_api.api.auth import router as auth_router
from student_api.api.errors import register_error_handlers
from student_api.api.students import router as students_router
from student_api.core.config import Settings
from student_api.core.security import TokenConfig, TokenService
from student_api.db.models import Base
from student_api.db.session import build_engine, build_session_factory
from student_api.services.auth import UserAuthenticator

logger = logging.getLogger(__name__)


async def _bootstrap_user(app: FastAPI, settings: Settings) -> None:
    if not (settings.bootstrap_username and settings.bootstrap_password_hash):
        return
    async with app.state.session_factory() as s:
        created = await UserAuthenticator(s).ensure_user(
            settings.bootstrap_username,
            settings.bootstrap_password_hash.get_secret_value(),
        )
    if created:
        logger.info("Created bootstrap user %s", settings.bootstrap_username)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === STARTUP ===
    async with app.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await _bootstrap_user(app, app.state.settings)
    logger.info("Student API ready")
    yield
    # === SHUTDOWN ===
    await app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with every collaborator wired explicitly.

    A missing or malformed signing secret or TTL fails here, before the app
    can serve anything. Run with ``uvicorn student_api.main:create_app --factory``.
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )

    token_service = TokenService(TokenConfig.from_settings(settings))
    engine = build_engine(settings.db_url)

    app = FastAPI(title="Student Records API", lifespan=lifespan)
    app.state.settings = settings
    app.state.token_service = token_service
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_error_handlers(app)
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(students_router, prefix="/api/students", tags=["students"])

    @app.get("/")
    def root():
        return {"ok": True}

    return app
