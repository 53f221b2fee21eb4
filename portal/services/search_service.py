"""
Busca aproximada de empreendimentos (autocomplete)

O índice guarda cópias normalizadas dos campos pesquisáveis para não
normalizar de novo a cada tecla digitada.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from rapidfuzz import fuzz

from portal.schemas.empreendimento_schema import Empreendimento, SearchFilters
from portal.utils.text import normalize

logger = logging.getLogger(__name__)

# Peso relativo de cada campo no ranking (maior primeiro)
FIELD_WEIGHTS = (
    ("nome", 0.8),
    ("cidade", 0.6),
    ("bairro", 0.5),
    ("destaque", 0.4),
    ("descricao", 0.3),
)

EXACT_QUALITY = 1.0
# Teto para casamentos aproximados: nunca alcança um casamento exato
FUZZY_QUALITY = 0.9


@dataclass(frozen=True)
class IndexEntry:
    listing: Empreendimento
    fields: Dict[str, str]


class ListingIndex:
    """
    Índice em memória sobre a coleção completa de empreendimentos.

    Cada termo da consulta precisa casar com pelo menos um campo (E entre
    termos, OU entre campos). Empates mantêm a ordem de inserção.
    """

    def __init__(
        self,
        listings: Sequence[Empreendimento],
        fuzzy_threshold: float = 80,
        min_fuzzy_length: int = 5,
        candidate_limit: int = 200,
    ):
        self.fuzzy_threshold = fuzzy_threshold
        self.min_fuzzy_length = min_fuzzy_length
        self.candidate_limit = candidate_limit
        self.entries: List[IndexEntry] = [
            IndexEntry(
                listing=listing,
                fields={name: normalize(getattr(listing, name, None)) for name, _ in FIELD_WEIGHTS},
            )
            for listing in listings
        ]
        logger.debug(f"Índice de busca criado com {len(self.entries)} empreendimentos")

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, empreendimento_id: str) -> Optional[Empreendimento]:
        return next((e.listing for e in self.entries if e.listing.id == empreendimento_id), None)

    def _field_quality(self, token: str, text: str) -> float:
        if not text:
            return 0.0
        if token in text:
            return EXACT_QUALITY
        if len(token) < self.min_fuzzy_length:
            return 0.0
        ratio = fuzz.partial_ratio(token, text)
        if ratio >= self.fuzzy_threshold:
            return FUZZY_QUALITY * ratio / 100
        return 0.0

    def _score(self, entry: IndexEntry, tokens: List[str]) -> Optional[float]:
        total = 0.0
        for token in tokens:
            best = max(
                weight * self._field_quality(token, entry.fields[name])
                for name, weight in FIELD_WEIGHTS
            )
            if best <= 0:
                return None
            total += best
        return total

    def rank(self, query: str) -> List[Empreendimento]:
        """Todos os empreendimentos que casam com a consulta, do mais relevante ao menos."""
        tokens = [normalize(token) for token in (query or "").split()]
        tokens = [token for token in tokens if token]
        if not tokens:
            return []

        scored = []
        for entry in self.entries:
            score = self._score(entry, tokens)
            if score is not None:
                scored.append((score, entry.listing))

        # sort estável por score desc; empate fica na ordem de inserção
        scored.sort(key=lambda item: -item[0])
        return [listing for _, listing in scored]

    def search(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
        limit: int = 5,
    ) -> List[Empreendimento]:
        ranked = self.rank(query)[: self.candidate_limit]
        if filters is not None:
            ranked = [item for item in ranked if matches_filters(item, filters)]
        return ranked[:limit]


def matches_filters(listing: Empreendimento, filters: SearchFilters) -> bool:
    preco = listing.preco_minimo
    if filters.preco_min is not None and (preco is None or preco < filters.preco_min):
        return False
    if filters.preco_max is not None and (preco is None or preco > filters.preco_max):
        return False
    if filters.status and listing.status != filters.status:
        return False
    return True


def selection_params(
    listing: Empreendimento,
    query: Optional[str] = None,
    filters: Optional[SearchFilters] = None,
) -> Dict[str, str]:
    """Parâmetros da listagem de empreendimentos ao escolher uma sugestão."""
    params: Dict[str, str] = {}
    if query and query.strip():
        params["q"] = query.strip()
    if listing.nome:
        params["q"] = listing.nome
    if listing.cidade:
        params["cidade"] = listing.cidade
    if listing.estado:
        params["estado"] = listing.estado
    if listing.bairro:
        params["bairro"] = listing.bairro
    if filters is not None:
        if filters.preco_min is not None:
            params["precoMin"] = _format_number(filters.preco_min)
        if filters.preco_max is not None:
            params["precoMax"] = _format_number(filters.preco_max)
        if filters.status:
            params["status"] = filters.status
    return params


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
