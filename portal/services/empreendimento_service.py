import logging
from typing import List, Optional

from portal.core.cache import cached
from portal.schemas.empreendimento_schema import (
    CatalogFilters,
    Empreendimento,
    EmpreendimentoOut,
    PathResolution,
)
from portal.schemas.pagination_schema import PaginatedResponse
from portal.services.content_store import ContentStore, ContentStoreError
from portal.services.search_service import ListingIndex
from portal.services.slug_service import build_listing_path, is_canonical, parse_path
from portal.utils.text import normalize

logger = logging.getLogger(__name__)

# Status que contam como "pronto" para o filtro "planta"
PRONTO_LABELS = ("entregue", "pronto para morar", "pronto pra morar", "pronto")


@cached("empreendimentos")
def _buscar_todos(store: ContentStore) -> List[Empreendimento]:
    return store.fetch_all()


def carregar_empreendimentos(store: ContentStore) -> List[Empreendimento]:
    """Coleção completa do Content Store; falhas viram lista vazia (e não entram no cache)."""
    try:
        return _buscar_todos(store)
    except ContentStoreError:
        logger.warning("Content Store indisponível, listagem de empreendimentos vazia")
        return []


def com_path(empreendimento: Empreendimento) -> EmpreendimentoOut:
    return EmpreendimentoOut(**empreendimento.model_dump(), path=build_listing_path(empreendimento))


def _ordem_destaque(empreendimento: Empreendimento):
    preco = empreendimento.preco_minimo
    return (not empreendimento.is_oportunidade, preco is None, preco or 0)


def _is_pronto(status: Optional[str]) -> bool:
    st = normalize(status).replace("_", " ")
    return any(label in st for label in PRONTO_LABELS)


def aplicar_filtros(empreendimento: Empreendimento, filtros: CatalogFilters) -> bool:
    if filtros.q:
        termo = normalize(filtros.q.strip())
        campos = (empreendimento.nome, empreendimento.cidade, empreendimento.bairro, empreendimento.destaque)
        if not any(termo in normalize(campo) for campo in campos):
            return False

    if filtros.cidade and normalize(empreendimento.cidade) != normalize(filtros.cidade):
        return False
    if filtros.bairro and normalize(empreendimento.bairro) != normalize(filtros.bairro):
        return False
    if filtros.tipo and normalize(empreendimento.tipo) != normalize(filtros.tipo):
        return False

    if filtros.status:
        if filtros.status == "planta":
            # "na planta" é tudo que ainda não está pronto para morar
            if _is_pronto(empreendimento.status):
                return False
        elif empreendimento.status != filtros.status:
            return False

    preco = empreendimento.preco_minimo
    if filtros.preco_min is not None and (preco is None or preco < filtros.preco_min):
        return False
    if filtros.preco_max is not None and (preco is None or preco > filtros.preco_max):
        return False
    return True


def listar_empreendimentos(
    store: ContentStore,
    filtros: Optional[CatalogFilters] = None,
    page: int = 1,
    page_size: int = 12,
) -> PaginatedResponse[EmpreendimentoOut]:
    filtros = filtros or CatalogFilters()
    filtrados = [emp for emp in carregar_empreendimentos(store) if aplicar_filtros(emp, filtros)]
    inicio = (page - 1) * page_size
    items = [com_path(emp) for emp in filtrados[inicio:inicio + page_size]]
    return PaginatedResponse[EmpreendimentoOut].create(
        items=items,
        total=len(filtrados),
        page=page,
        page_size=page_size,
    )


def sugestoes_da_regiao(
    store: ContentStore,
    empreendimento: Empreendimento,
    limit: int = 4,
) -> List[EmpreendimentoOut]:
    """Outros empreendimentos da mesma cidade, oportunidades e menores preços primeiro."""
    mesma_cidade = [
        emp for emp in carregar_empreendimentos(store)
        if emp.cidade == empreendimento.cidade and emp.id != empreendimento.id
    ]
    mesma_cidade.sort(key=_ordem_destaque)
    return [com_path(emp) for emp in mesma_cidade[:limit]]


def resolver_empreendimento(
    store: ContentStore,
    param: str,
    sugestoes_limit: int = 4,
) -> PathResolution:
    """
    Resolve o parâmetro da rota para o empreendimento e seu caminho canônico.

    Levanta ValueError quando o id não existe no Content Store.
    """
    parsed = parse_path(param.strip("/"))
    if not parsed.id:
        raise ValueError("Empreendimento não encontrado")

    try:
        empreendimento = store.fetch_by_id(parsed.id)
    except ContentStoreError:
        empreendimento = None
    if empreendimento is None:
        raise ValueError("Empreendimento não encontrado")

    canonical_path = build_listing_path(empreendimento)
    redirect = not is_canonical(parsed, empreendimento)
    if redirect:
        logger.info(f"Caminho não canônico para {parsed.id}: {param!r} -> {canonical_path!r}")

    return PathResolution(
        empreendimento=com_path(empreendimento),
        canonical_path=canonical_path,
        redirect=redirect,
        sugestoes=sugestoes_da_regiao(store, empreendimento, limit=sugestoes_limit),
    )


@cached("busca")
def _indice(
    store: ContentStore,
    fuzzy_threshold: float,
    min_fuzzy_length: int,
    candidate_limit: int,
) -> ListingIndex:
    return ListingIndex(
        _buscar_todos(store),
        fuzzy_threshold=fuzzy_threshold,
        min_fuzzy_length=min_fuzzy_length,
        candidate_limit=candidate_limit,
    )


def construir_indice(
    store: ContentStore,
    fuzzy_threshold: float = 80,
    min_fuzzy_length: int = 5,
    candidate_limit: int = 200,
) -> ListingIndex:
    try:
        return _indice(store, fuzzy_threshold, min_fuzzy_length, candidate_limit)
    except ContentStoreError:
        logger.warning("Content Store indisponível, índice de busca vazio")
        return ListingIndex([], fuzzy_threshold, min_fuzzy_length, candidate_limit)
