import logging

from app import config

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from app.api.base import api_router  # noqa: E402
from app.infra.supabase import get_supabase_client  # noqa: E402
from app.infra.supabase.repositories import RepositoryFactory  # noqa: E402
from app.middleware.auth import TokenVerifier  # noqa: E402
from app.services.session_registry import SessionRegistry  # noqa: E402
from app.services.thought_service import ThoughtService  # noqa: E402
from app.services.user_profile_service import UserProfileService  # noqa: E402

logger = logging.getLogger(__name__)


def create_app(
    repositories: Optional[RepositoryFactory] = None,
    token_verifier: Optional[TokenVerifier] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        repositories: repository factory to use; defaults to one backed by
            the Supabase client singleton, created at startup
        token_verifier: access-token verifier; defaults to one for the
            configured SUPABASE_URL
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting MindTrace API")
        repos = repositories or RepositoryFactory(get_supabase_client())

        app.state.thought_service = ThoughtService(repos)
        app.state.sessions = SessionRegistry(app.state.thought_service)
        app.state.user_profile_service = UserProfileService(repos)
        app.state.token_verifier = token_verifier or TokenVerifier(config.SUPABASE_URL)

        yield

        logger.info(f"Shutting down with {len(app.state.sessions)} active sessions")

    app = FastAPI(
        title="MindTrace API",
        description="Backend API for MindTrace - date-bucketed personal journaling",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Specify your frontend URL in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {
            "message": "MindTrace API",
            "docs": "/docs",
            "version": "1.0.0"
        }

    return app


app = create_app()
