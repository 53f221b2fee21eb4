"""
Sitemap, robots.txt e landing pages por cidade
"""
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from portal.schemas.empreendimento_schema import Empreendimento
from portal.schemas.sitemap_schema import LandingPage, SitemapEntry
from portal.services.empreendimento_service import com_path
from portal.services.slug_service import build_city_landing_segment, build_listing_path, slugify
from portal.services.suggestion_service import find_by_slug, get_seeded_suggestions

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_SEM_DATA = datetime.min.replace(tzinfo=timezone.utc)


def _cidades_distintas(listings: Sequence[Empreendimento]):
    vistos = {}
    for emp in listings:
        if not emp.cidade or not emp.estado:
            continue
        vistos.setdefault((emp.cidade, emp.estado), None)
    return list(vistos)


def _data_atualizacao(emp: Empreendimento) -> datetime:
    """updated_at como datetime com fuso; ausente ou inválido vai para o fim."""
    if not emp.updated_at:
        return _SEM_DATA
    try:
        valor = datetime.fromisoformat(emp.updated_at.replace("Z", "+00:00"))
    except ValueError:
        return _SEM_DATA
    if valor.tzinfo is None:
        valor = valor.replace(tzinfo=timezone.utc)
    return valor


def build_sitemap_entries(
    listings: Sequence[Empreendimento],
    site_url: str,
    now: Optional[datetime] = None,
    listing_limit: int = 1000,
    city_limit: int = 50,
) -> List[SitemapEntry]:
    base_url = site_url.rstrip("/")
    agora = (now or datetime.now(timezone.utc)).isoformat()

    entries = [SitemapEntry(url=base_url, last_modified=agora, change_frequency="daily", priority=1)]

    # mais recentes primeiro
    recentes = sorted(listings, key=_data_atualizacao, reverse=True)[:listing_limit]
    for emp in recentes:
        entries.append(SitemapEntry(
            url=f"{base_url}/empreendimentos/{build_listing_path(emp)}",
            last_modified=emp.updated_at or agora,
            change_frequency="weekly",
            priority=0.7,
        ))

    for cidade, estado in _cidades_distintas(listings)[:city_limit]:
        entries.append(SitemapEntry(
            url=f"{base_url}/landing/{build_city_landing_segment(cidade, estado)}",
            last_modified=agora,
            change_frequency="weekly",
            priority=0.6,
        ))
    return entries


def render_sitemap_xml(entries: Sequence[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.last_modified
        ET.SubElement(url, "changefreq").text = entry.change_frequency
        ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(urlset, encoding="unicode")


def render_robots(site_url: str) -> str:
    return f"User-agent: *\nAllow: /\n\nSitemap: {site_url.rstrip('/')}/sitemap.xml\n"


def landing_segments(listings: Sequence[Empreendimento], limit: int = 50) -> List[str]:
    """Slugs de landing pré-gerados: sugestões semeadas e uma página por cidade."""
    sugestoes = [card.slug for card in get_seeded_suggestions()[:10]]
    cidades = [build_city_landing_segment(cidade, estado) for cidade, estado in _cidades_distintas(listings)]
    return (sugestoes + cidades)[:limit]


def resolver_landing(listings: Sequence[Empreendimento], slug: str, limit: int = 24) -> LandingPage:
    """
    Empreendimentos de uma landing page.

    Uma sugestão semeada define a cidade; senão, o slug precisa terminar em
    "-<cidade>-<estado>". Levanta ValueError quando nada casa.
    """
    slug = slug.strip("/").lower()
    card = find_by_slug(slug)

    if card is not None:
        cidade, estado = slugify(card.region.city), slugify(card.region.state)
        encontrados = [
            emp for emp in listings
            if slugify(emp.cidade) == cidade and slugify(emp.estado) == estado
        ]
    else:
        encontrados = [
            emp for emp in listings
            if emp.cidade and emp.estado
            and slug.endswith(f"-{slugify(emp.cidade)}-{slugify(emp.estado)}")
        ]

    if not encontrados:
        raise ValueError("Nenhum empreendimento para esta landing page")

    encontrados = sorted(encontrados, key=lambda emp: not emp.is_oportunidade)[:limit]
    title = card.title if card is not None else f"Resultados para {encontrados[0].cidade}"
    return LandingPage(slug=slug, title=title, empreendimentos=[com_path(emp) for emp in encontrados])
