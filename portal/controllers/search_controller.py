# Busca - autocomplete de empreendimentos
from typing import Dict, List, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from portal.core.config import settings
from portal.core.dependencies import get_listing_index
from portal.core.rate_limit import limiter
from portal.schemas.empreendimento_schema import SearchFilters, SearchHit
from portal.services.search_service import ListingIndex, selection_params
from portal.services.slug_service import build_listing_path

router = APIRouter(
    prefix="/busca",
    tags=["Busca"],
)


def _filtros(
    preco_min: Optional[float] = Query(None, ge=0, alias="precoMin"),
    preco_max: Optional[float] = Query(None, ge=0, alias="precoMax"),
    status: Optional[str] = None,
) -> SearchFilters:
    return SearchFilters(preco_min=preco_min, preco_max=preco_max, status=status or None)


@router.get("", response_model=List[SearchHit])
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
def buscar(
    request: Request,
    q: str = "",
    limit: int = Query(settings.SEARCH_RESULT_LIMIT, ge=1, le=50),
    filtros: SearchFilters = Depends(_filtros),
    index: ListingIndex = Depends(get_listing_index),
):
    """Sugestões ranqueadas para o texto digitado; consulta vazia não sugere nada."""
    resultados = index.search(q, filtros, limit=limit)
    return [SearchHit(**emp.model_dump(), path=build_listing_path(emp)) for emp in resultados]


@router.get("/selecao", response_model=Dict[str, str])
def selecionar(
    id: str,
    q: Optional[str] = None,
    filtros: SearchFilters = Depends(_filtros),
    index: ListingIndex = Depends(get_listing_index),
):
    """Parâmetros da listagem de empreendimentos para a sugestão escolhida."""
    empreendimento = index.get(id)
    if empreendimento is None:
        raise HTTPException(status_code=404, detail="Empreendimento não encontrado")
    params = selection_params(empreendimento, q, filtros)
    params["url"] = f"/empreendimentos?{urlencode(params)}"
    return params
