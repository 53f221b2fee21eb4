"""
Acesso ao Content Store (view pública de empreendimentos)

Toda linha vinda do backend passa por Empreendimento antes de chegar aos
slugs ou à busca; linhas inválidas são descartadas com aviso.
"""
import logging
from typing import Any, Iterable, List, Optional, Protocol

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from supabase import ClientOptions, create_client

from portal.core import database
from portal.core.config import Settings
from portal.models.empreendimento_model import EmpreendimentoRow
from portal.schemas.empreendimento_schema import Empreendimento

logger = logging.getLogger(__name__)

LISTING_COLUMNS = (
    "id, nome, tipo, slug, cidade, estado, bairro, destaque, descricao, status, "
    "data_entrega_prevista, is_oportunidade, preco_minimo, imagem_capa, updated_at"
)


class ContentStoreError(Exception):
    """Falha ao consultar o backend de conteúdo"""


class ContentStore(Protocol):
    def fetch_all(self) -> List[Empreendimento]: ...

    def fetch_by_id(self, empreendimento_id: str) -> Optional[Empreendimento]: ...


def parse_row(row: Any) -> Optional[Empreendimento]:
    try:
        return Empreendimento.model_validate(row)
    except ValidationError as e:
        row_id = row.get("id") if isinstance(row, dict) else getattr(row, "id", None)
        logger.warning(f"Empreendimento inválido descartado (id={row_id!r}): {e.error_count()} erro(s)")
        return None


def parse_rows(rows: Iterable[Any]) -> List[Empreendimento]:
    parsed = [parse_row(row) for row in rows or []]
    return [item for item in parsed if item is not None]


class SupabaseContentStore:
    """Content Store sobre a API de dados do Supabase (Postgres hospedado)"""

    def __init__(self, client, view: str = "public_empreendimentos"):
        self.client = client
        self.view = view

    def __repr__(self) -> str:
        return f"SupabaseContentStore({self.view})"

    def fetch_all(self) -> List[Empreendimento]:
        try:
            response = (
                self.client.table(self.view)
                .select(LISTING_COLUMNS)
                .order("is_oportunidade", desc=True)
                .order("preco_minimo")
                .execute()
            )
        except Exception as e:
            logger.error(f"Erro ao buscar empreendimentos no Supabase: {e}", exc_info=True)
            raise ContentStoreError(str(e)) from e
        return parse_rows(response.data)

    def fetch_by_id(self, empreendimento_id: str) -> Optional[Empreendimento]:
        try:
            response = (
                self.client.table(self.view)
                .select(LISTING_COLUMNS)
                .eq("id", empreendimento_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Erro ao buscar empreendimento {empreendimento_id}: {e}", exc_info=True)
            raise ContentStoreError(str(e)) from e
        rows = parse_rows(response.data)
        return rows[0] if rows else None


class SqlContentStore:
    """Content Store sobre SQLAlchemy (Postgres local, sqlite nos testes)"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def __repr__(self) -> str:
        return f"SqlContentStore({EmpreendimentoRow.__tablename__})"

    def fetch_all(self) -> List[Empreendimento]:
        query = select(EmpreendimentoRow).order_by(
            EmpreendimentoRow.is_oportunidade.desc(),
            EmpreendimentoRow.preco_minimo.asc(),
        )
        db = self.session_factory()
        try:
            rows = db.execute(query).scalars().all()
            return parse_rows(rows)
        except SQLAlchemyError as e:
            logger.error(f"Erro ao buscar empreendimentos no banco: {e}", exc_info=True)
            raise ContentStoreError(str(e)) from e
        finally:
            db.close()

    def fetch_by_id(self, empreendimento_id: str) -> Optional[Empreendimento]:
        db = self.session_factory()
        try:
            row = db.get(EmpreendimentoRow, empreendimento_id)
            return parse_row(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Erro ao buscar empreendimento {empreendimento_id}: {e}", exc_info=True)
            raise ContentStoreError(str(e)) from e
        finally:
            db.close()


def build_content_store(settings: Settings) -> ContentStore:
    backend = settings.CONTENT_STORE_BACKEND.lower()
    if backend == "supabase":
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise ValueError("SUPABASE_URL e SUPABASE_KEY são obrigatórios para o backend supabase")
        client = create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_KEY,
            options=ClientOptions(schema=settings.SUPABASE_SCHEMA, auto_refresh_token=False, persist_session=False),
        )
        return SupabaseContentStore(client, view=settings.LISTINGS_VIEW)
    if backend == "sql":
        if database.engine is None:
            raise ValueError("DATABASE_URL é obrigatório para o backend sql")
        return SqlContentStore(database.SessionLocal)
    raise ValueError(f"CONTENT_STORE_BACKEND desconhecido: {settings.CONTENT_STORE_BACKEND}")
