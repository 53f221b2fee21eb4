"""
Sugestões semeadas a partir das buscas mais comuns
"""
from typing import List, Optional

from portal.schemas.suggestion_schema import Region, SuggestionCard
from portal.services.slug_service import slugify

DEFAULT_IMAGE = "/branding/san-remo-logo2.png"

SEEDS = (
    ("Itapema", "SC", (
        "Apartamentos à venda em Itapema",
        "Apartamentos prontos para morar em Itapema",
        "Apartamentos na planta em Itapema",
    )),
    ("Florianópolis", "SC", (
        "Apartamentos à venda em Florianópolis",
        "Apartamentos na planta em Florianópolis",
        "Apartamentos prontos para morar em Florianópolis",
    )),
    ("Goiânia", "GO", (
        "Apartamentos à venda em Goiânia",
        "Apartamentos na planta em Goiânia",
        "Apartamentos prontos para morar em Goiânia",
    )),
    ("Curitiba", "PR", (
        "Apartamentos à venda em Curitiba",
        "Apartamentos na planta em Curitiba",
        "Apartamentos prontos para morar em Curitiba",
    )),
    ("Balneário Camboriú", "SC", (
        "Apartamento à venda Balneário Camboriú",
        "Apartamentos prontos para morar em Balneário Camboriú",
    )),
    ("Belo Horizonte", "MG", (
        "Apartamentos à venda em Belo Horizonte",
        "Apartamentos na planta em Belo Horizonte",
        "Apartamentos à venda no Santo Agostinho",
    )),
)


def build_suggestion_slug(phrase: str, city: str, state: str) -> str:
    return f"{slugify(phrase)}-{slugify(city)}-{slugify(state)}"


def get_seeded_suggestions() -> List[SuggestionCard]:
    cards = []
    for city, state, phrases in SEEDS:
        for idx, phrase in enumerate(phrases):
            cards.append(SuggestionCard(
                id=f"{city}-{idx}",
                title=phrase,
                subtitle=f"{city}, {state}",
                slug=build_suggestion_slug(phrase, city, state),
                image=DEFAULT_IMAGE,
                region=Region(city=city, state=state),
            ))
    return cards


def suggestions_for_city(city: str, state: Optional[str] = None, limit: int = 6) -> List[SuggestionCard]:
    return [
        card for card in get_seeded_suggestions()
        if card.region.city.lower() == city.lower()
        and (not state or card.region.state.lower() == state.lower())
    ][:limit]


def find_by_slug(slug: str) -> Optional[SuggestionCard]:
    return next((card for card in get_seeded_suggestions() if card.slug == slug), None)
