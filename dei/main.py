"""Read API consumed by the site's page rendering."""
import logging

from fastapi import FastAPI

from dei.api.routes import router
from dei.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="DEI site data", version="0.1.0")
app.include_router(router)

logger.info(
    f"Supabase {'configured' if settings.supabase_configured else 'not configured'}, "
    f"Medium feed: {settings.medium_feed_url}"
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dei.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
