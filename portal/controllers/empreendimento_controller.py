# Empreendimentos - listagem e página de detalhe
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from portal.core.config import settings
from portal.core.dependencies import get_content_store
from portal.schemas.empreendimento_schema import (
    CatalogFilters,
    Empreendimento,
    EmpreendimentoOut,
    PathResolution,
)
from portal.schemas.pagination_schema import PaginatedResponse
from portal.services import empreendimento_service
from portal.services.content_store import ContentStore

router = APIRouter(
    prefix="/empreendimentos",
    tags=["Empreendimentos"],
)


@router.get("", response_model=PaginatedResponse[EmpreendimentoOut])
def listar_empreendimentos(
    q: Optional[str] = None,
    cidade: Optional[str] = None,
    bairro: Optional[str] = None,
    tipo: Optional[str] = None,
    status: Optional[str] = None,
    preco_min: Optional[float] = Query(None, ge=0, alias="precoMin"),
    preco_max: Optional[float] = Query(None, ge=0, alias="precoMax"),
    page: int = Query(1, ge=1, description="Número da página"),
    page_size: int = Query(12, ge=1, le=100, description="Empreendimentos por página"),
    store: ContentStore = Depends(get_content_store),
):
    filtros = CatalogFilters(
        q=q,
        cidade=cidade,
        bairro=bairro,
        tipo=tipo,
        status=status,
        preco_min=preco_min,
        preco_max=preco_max,
    )
    return empreendimento_service.listar_empreendimentos(
        store, filtros, page=page, page_size=page_size
    )


# Coleção completa para a busca no navegador
@router.get("/lista", response_model=List[Empreendimento])
def listar_todos(store: ContentStore = Depends(get_content_store)):
    return empreendimento_service.carregar_empreendimentos(store)


@router.get(
    "/{slug_id:path}",
    response_model=PathResolution,
    summary="Resolve o caminho de um empreendimento",
)
def detalhe_empreendimento(
    slug_id: str,
    redirect: bool = Query(True, description="Redireciona caminhos não canônicos"),
    store: ContentStore = Depends(get_content_store),
):
    """
    Aceita o caminho canônico, caminhos com slug antigo e o id puro.
    Caminhos que não são canônicos recebem 308 para o caminho atual.
    """
    try:
        resolucao = empreendimento_service.resolver_empreendimento(
            store, slug_id, sugestoes_limit=settings.REGION_SUGGESTION_LIMIT
        )
    except ValueError:
        raise HTTPException(status_code=404, detail="Empreendimento não encontrado")

    if resolucao.redirect and redirect:
        return RedirectResponse(url=f"/empreendimentos/{resolucao.canonical_path}", status_code=308)
    return resolucao
