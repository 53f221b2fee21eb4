"""
URLs canônicas de empreendimentos

Formato: <tipo>-<qualificadores|venda>-<cidade>-<estado>/<nome>--<id>

O sufixo "--<id>" torna o caminho sempre reversível para o id, mesmo quando
dois empreendimentos geram o mesmo prefixo.
"""
import re
from typing import Dict, Iterable, Optional

from portal.schemas.empreendimento_schema import ParsedPath
from portal.utils.text import normalize

DELIMITER = "--"
DEFAULT_TIPO = "apartamentos"
DEFAULT_QUALIFIER = "venda"
DEFAULT_NAME_SLUG = "empreendimento"

# Ordem importa: o primeiro grupo que casar define o qualificador
STATUS_QUALIFIERS = (
    (("entreg", "pronto"), "prontos-para-morar"),
    (("lanc",), "em-lancamento"),
    (("obra", "constru"), "em-obra"),
)

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(value: Optional[str]) -> str:
    """
    Gera um slug com apenas [a-z0-9-].

    Texto vazio ou None devolve "" (quem chama escolhe o fallback).
    """
    text = _INVALID_CHARS.sub("", normalize(value))
    text = _WHITESPACE.sub("-", text.strip())
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


def _campo(listing, name: str):
    if isinstance(listing, dict):
        return listing.get(name)
    return getattr(listing, name, None)


def status_qualifier(status: Optional[str]) -> Optional[str]:
    st = normalize(status)
    if not st:
        return None
    for needles, qualifier in STATUS_QUALIFIERS:
        if any(needle in st for needle in needles):
            return qualifier
    return None


def build_location_segment(listing) -> str:
    """Segmento de localização: tipo, qualificadores, cidade e estado."""
    tipo = slugify(_campo(listing, "tipo")) or DEFAULT_TIPO

    qualifiers = []
    qualifier = status_qualifier(_campo(listing, "status"))
    if qualifier:
        qualifiers.append(qualifier)
    bairro_slug = slugify(_campo(listing, "bairro"))
    if bairro_slug:
        qualifiers.append(bairro_slug)

    qualifier_segment = "-".join(qualifiers) if qualifiers else DEFAULT_QUALIFIER
    parts = [tipo, qualifier_segment, slugify(_campo(listing, "cidade")), slugify(_campo(listing, "estado"))]
    # cidade/estado vazios não devem gerar hífens soltos
    return "-".join(part for part in parts if part)


def build_name_slug(listing) -> str:
    source = _campo(listing, "slug")
    if source is None:
        source = _campo(listing, "nome")
    return slugify(source) or DEFAULT_NAME_SLUG


def build_listing_path(listing) -> str:
    return f"{build_location_segment(listing)}/{build_name_slug(listing)}{DELIMITER}{_campo(listing, 'id')}"


def parse_path(param: str) -> ParsedPath:
    """
    Recupera o id de um caminho emitido por build_listing_path.

    Só o último "--" separa o id. Sem delimitador o parâmetro inteiro é o id
    (links antigos). O slug do nome nunca termina em hífen, então hífens
    extras antes do delimitador pertencem ao id ("nome---abc" -> "-abc").
    """
    index = param.rfind(DELIMITER)
    if index == -1:
        return ParsedPath(id=param)
    while index > 0 and param[index - 1] == "-":
        index -= 1

    slug_fragment = param[:index]
    return ParsedPath(
        id=param[index + len(DELIMITER):],
        slug_fragment=slug_fragment.lower() if slug_fragment else None,
    )


def build_city_landing_segment(
    city: str,
    state: str,
    tipo: Optional[str] = None,
    status: Optional[str] = None,
    bairro: Optional[str] = None,
) -> str:
    return build_location_segment(
        {"cidade": city, "estado": state, "tipo": tipo, "status": status, "bairro": bairro}
    )


def build_slug_map(listings: Iterable) -> Dict[str, str]:
    return {str(_campo(item, "id")): build_listing_path(item) for item in listings}


def is_canonical(parsed: ParsedPath, listing) -> bool:
    """O trecho de nome do caminho pedido bate com o slug canônico?"""
    if not parsed.slug_fragment:
        return False
    requested = parsed.slug_fragment.split("/")[-1]
    return requested == build_name_slug(listing)
