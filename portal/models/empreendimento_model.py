from sqlalchemy import Boolean, Column, DateTime, Index, Numeric, String, Text

from portal.core.config import settings
from portal.core.database import Base


class EmpreendimentoRow(Base):
    """Linha da view pública de empreendimentos (somente leitura)"""
    __tablename__ = settings.LISTINGS_VIEW

    id                    = Column(String, primary_key=True)
    nome                  = Column(String, nullable=False)
    tipo                  = Column(String)
    slug                  = Column(String)
    cidade                = Column(String, nullable=False, index=True)
    estado                = Column(String, nullable=False)
    bairro                = Column(String)
    destaque              = Column(Text)
    descricao             = Column(Text)
    status                = Column(String, index=True)
    data_entrega_prevista = Column(String)
    is_oportunidade       = Column(Boolean, default=False, nullable=False)
    preco_minimo          = Column(Numeric(14, 2))
    imagem_capa           = Column(String)
    updated_at            = Column(DateTime(timezone=True))

    # Ordem padrão das listagens: oportunidades primeiro, depois o mais barato
    __table_args__ = (
        Index("idx_oportunidade_preco", "is_oportunidade", "preco_minimo"),
    )
