import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI

from portal.core.cache import clear_cache
from portal.core.config import settings
from portal.services import empreendimento_service
from portal.services.content_store import ContentStore, build_content_store
from portal.services.search_service import ListingIndex

logger = logging.getLogger(__name__)

_content_store: Optional[ContentStore] = None


# Lifespan handler para startup e shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Iniciando {settings.PROJECT_NAME} ({settings.ENVIRONMENT}) "
        f"com Content Store '{settings.CONTENT_STORE_BACKEND}'"
    )
    yield
    clear_cache()


def get_content_store() -> ContentStore:
    """Content Store compartilhado, criado na primeira requisição"""
    global _content_store
    if _content_store is None:
        _content_store = build_content_store(settings)
        logger.info(f"Content Store criado: {_content_store!r}")
    return _content_store


def get_listing_index(store: ContentStore = Depends(get_content_store)) -> ListingIndex:
    return empreendimento_service.construir_indice(
        store,
        fuzzy_threshold=settings.SEARCH_FUZZY_THRESHOLD,
        min_fuzzy_length=settings.SEARCH_FUZZY_MIN_TOKEN_LENGTH,
        candidate_limit=settings.SEARCH_CANDIDATE_LIMIT,
    )
