import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from authcore import __version__
from authcore.adapters.sqlite.migrator import SQLiteMigrator
from authcore.api.deps import get_settings
from authcore.api.routes import accounts, auth
from authcore.config.loader import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Fail fast on bad settings and bring the schema up to date."""
    settings = get_settings()

    auth_settings = load_settings(settings.config_path)
    if not auth_settings.tokens.signing_key.get_secret_value():
        logger.warning("No signing key configured; logins will fail until one is set")
    logger.info("Settings loaded from %s", settings.config_path)

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path).run_migrations()

    yield


app = FastAPI(
    title="authcore API",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(accounts.router, prefix="/api/accounts", tags=["Accounts"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    return {"status": "ok", "version": __version__}
