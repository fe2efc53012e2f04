"""
Claim Ledger

FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from claimledger.api import router as ledger_router
from claimledger.api.endpoints import get_dispatcher
from claimledger.config.settings import settings

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def seed_catalog() -> None:
    """Load the configured contract-type seed file through bootstrap."""
    if settings.seed_contract_types is None:
        return
    payload = settings.seed_contract_types.read_text(encoding="utf-8")
    response = get_dispatcher().initialize([payload])
    if not response.ok:
        raise RuntimeError(f"Seeding contract types failed: {response.message}")
    logger.info(f"Seeded contract types from {settings.seed_contract_types}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management."""
    logger.info(f"Starting {settings.app_name}")
    seed_catalog()
    yield
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="""
    Shared ledger for a multi-party insurance workflow.

    ## Actors

    - **Insurer**: contract types, claim processing, user authentication
    - **Shop**: contract issuance and user onboarding
    - **Repair shop**: repair order fulfillment
    - **Police**: theft claim investigation

    Every operation is invoked with `POST /invoke/{operation}` and a list of
    JSON-encoded arguments; see `GET /operations`.
    """,
    version=settings.app_version,
    lifespan=lifespan
)

app.include_router(ledger_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
