# Landing pages e sugestões semeadas
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from portal.core.dependencies import get_content_store
from portal.schemas.sitemap_schema import LandingPage
from portal.schemas.suggestion_schema import SuggestionCard
from portal.services import empreendimento_service, sitemap_service, suggestion_service
from portal.services.content_store import ContentStore

router = APIRouter(
    prefix="",
    tags=["Landing pages"],
)


@router.get("/landing", response_model=List[str])
def listar_landings(store: ContentStore = Depends(get_content_store)):
    """Slugs de landing pages para pré-geração."""
    return sitemap_service.landing_segments(empreendimento_service.carregar_empreendimentos(store))


@router.get("/landing/{slug}", response_model=LandingPage)
def landing(slug: str, store: ContentStore = Depends(get_content_store)):
    try:
        return sitemap_service.resolver_landing(empreendimento_service.carregar_empreendimentos(store), slug)
    except ValueError:
        raise HTTPException(status_code=404, detail="Landing page não encontrada")


@router.get("/sugestoes", response_model=List[SuggestionCard])
def sugestoes(city: Optional[str] = None, state: Optional[str] = None):
    if city:
        return suggestion_service.suggestions_for_city(city, state)
    return suggestion_service.get_seeded_suggestions()
