# Sitemap e robots.txt
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from portal.core.config import settings
from portal.core.dependencies import get_content_store
from portal.services import empreendimento_service, sitemap_service
from portal.services.content_store import ContentStore

router = APIRouter(
    prefix="",
    tags=["SEO"],
)


@router.get("/sitemap.xml", response_class=Response)
def sitemap(store: ContentStore = Depends(get_content_store)):
    entries = sitemap_service.build_sitemap_entries(
        empreendimento_service.carregar_empreendimentos(store),
        settings.SITE_URL,
        listing_limit=settings.SITEMAP_LISTING_LIMIT,
        city_limit=settings.SITEMAP_CITY_LIMIT,
    )
    return Response(content=sitemap_service.render_sitemap_xml(entries), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    return sitemap_service.render_robots(settings.SITE_URL)
