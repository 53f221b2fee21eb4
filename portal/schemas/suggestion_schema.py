from typing import Optional

from pydantic import BaseModel


class Region(BaseModel):
    city: str
    state: str


class SuggestionCard(BaseModel):
    """Sugestão de busca semeada para landing pages"""
    id: str
    title: str
    subtitle: Optional[str] = None
    slug: str
    image: Optional[str] = None
    region: Region
