import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_PRECO_LIXO = re.compile(r"[^0-9.,-]")


def parse_preco(value) -> Optional[float]:
    """
    Converte o preço vindo do Content Store em float.

    Aceita números e textos como "450000", "450000.50", "R$ 450.000,00".
    Qualquer outra coisa ("sob consulta", "") vira None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        numero = float(value)
        return numero if math.isfinite(numero) else None

    texto = _PRECO_LIXO.sub("", str(value))
    if not texto or not any(ch.isdigit() for ch in texto):
        return None

    if "," in texto and "." in texto:
        # o separador que aparece por último é o decimal
        if texto.rfind(",") > texto.rfind("."):
            texto = texto.replace(".", "").replace(",", ".")
        else:
            texto = texto.replace(",", "")
    else:
        for sep in (",", "."):
            if sep not in texto:
                continue
            # "450.000" e "1,500" são separadores de milhar, "450000,5" é decimal
            if texto.count(sep) == 1 and len(texto.rsplit(sep, 1)[1]) != 3:
                texto = texto.replace(sep, ".")
            else:
                texto = texto.replace(sep, "")

    try:
        numero = float(texto)
    except ValueError:
        return None
    return numero if math.isfinite(numero) else None


class Empreendimento(BaseModel):
    """Empreendimento publicado pelo Content Store (somente leitura)"""
    model_config = ConfigDict(from_attributes=True, extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    nome: str = Field(..., min_length=1)
    cidade: str = ""
    estado: str = ""
    bairro: Optional[str] = None
    tipo: Optional[str] = None
    slug: Optional[str] = None
    status: Optional[str] = None
    destaque: Optional[str] = None
    descricao: Optional[str] = None
    imagem_capa: Optional[str] = None
    data_entrega_prevista: Optional[str] = None
    updated_at: Optional[str] = None
    is_oportunidade: bool = False
    preco_minimo: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_como_texto(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("cidade", "estado", mode="before")
    @classmethod
    def localizacao_padrao(cls, v):
        return "" if v is None else str(v)

    @field_validator(
        "bairro", "tipo", "slug", "status", "destaque", "descricao",
        "imagem_capa", "data_entrega_prevista", "updated_at",
        mode="before",
    )
    @classmethod
    def texto_opcional(cls, v):
        if v is None:
            return None
        if isinstance(v, (datetime, date)):
            return v.isoformat()
        v = str(v)
        return v if v.strip() else None

    @field_validator("is_oportunidade", mode="before")
    @classmethod
    def oportunidade_padrao(cls, v):
        return False if v is None else v

    @field_validator("preco_minimo", mode="before")
    @classmethod
    def coerce_preco(cls, v):
        return parse_preco(v)


class EmpreendimentoOut(Empreendimento):
    path: str


class ParsedPath(BaseModel):
    """Resultado da leitura de um parâmetro de rota de empreendimento"""
    id: str
    slug_fragment: Optional[str] = None


class PathResolution(BaseModel):
    empreendimento: EmpreendimentoOut
    canonical_path: str
    redirect: bool = False
    sugestoes: List[EmpreendimentoOut] = []


class SearchFilters(BaseModel):
    """Filtros aplicados depois do ranking da busca"""
    preco_min: Optional[float] = Field(None, ge=0)
    preco_max: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None


class CatalogFilters(BaseModel):
    """Filtros da listagem completa de empreendimentos"""
    q: Optional[str] = None
    cidade: Optional[str] = None
    bairro: Optional[str] = None
    tipo: Optional[str] = None
    status: Optional[str] = None
    preco_min: Optional[float] = Field(None, ge=0)
    preco_max: Optional[float] = Field(None, ge=0)


class SearchHit(BaseModel):
    id: str
    nome: str
    cidade: str
    estado: str
    bairro: Optional[str] = None
    status: Optional[str] = None
    preco_minimo: Optional[float] = None
    imagem_capa: Optional[str] = None
    path: str
