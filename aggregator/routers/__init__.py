# aggregator/routers/__init__.py
"""
API routers for v1 endpoints.
"""

from aggregator.routers.articles import router as articles_router
from aggregator.routers.categories import router as categories_router
from aggregator.routers.preferences import router as preferences_router
from aggregator.routers.sources import router as sources_router

__all__ = [
    "articles_router",
    "categories_router",
    "preferences_router",
    "sources_router",
]
