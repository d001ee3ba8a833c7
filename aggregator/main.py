# aggregator/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aggregator.config import get_settings
from aggregator.logging_config import configure_logging
from aggregator.routers import (
    articles_router,
    categories_router,
    preferences_router,
    sources_router,
)

settings = get_settings()
configure_logging(json_format=settings.LOG_JSON, level=settings.LOG_LEVEL)

app = FastAPI(title="News Aggregator API")

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

app.include_router(articles_router)
app.include_router(sources_router)
app.include_router(categories_router)
app.include_router(preferences_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@app.get("/health")
def health() -> dict:
    return {"status": "ok", "service": "news-aggregator", "environment": settings.ENVIRONMENT}
