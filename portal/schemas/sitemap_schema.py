from typing import List

from pydantic import BaseModel

from portal.schemas.empreendimento_schema import EmpreendimentoOut


class SitemapEntry(BaseModel):
    url: str
    last_modified: str
    change_frequency: str
    priority: float


class LandingPage(BaseModel):
    slug: str
    title: str
    empreendimentos: List[EmpreendimentoOut]
