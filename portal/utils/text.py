"""
Normalização de texto compartilhada entre slugs e busca
"""
import unicodedata
from typing import Optional


def strip_accents(value: str) -> str:
    """Remove acentos decompondo o texto (NFKD) e descartando marcas combinantes."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(value: Optional[str]) -> str:
    """
    Versão minúscula e sem acentos do texto.

    "São José" -> "sao jose". None ou vazio -> "".
    """
    if not value:
        return ""
    return strip_accents(str(value)).lower()
