"""
Configuração global para testes

Este arquivo é carregado automaticamente pelo pytest antes de qualquer teste.
Ele configura as variáveis de ambiente necessárias para os testes.
"""
import os
import pytest

# Configurações padrão para testes - definidas ANTES de qualquer import
TEST_ENV_VARS = {
    "ENVIRONMENT": "testing",
    "LOG_LEVEL": "WARNING",
    "SITE_URL": "https://www.sanremo.com.br",
    "CONTENT_STORE_BACKEND": "sql",
    "DATABASE_URL": "sqlite:///:memory:",
    "CORS_ORIGINS": "*",
    "RATE_LIMIT_ENABLED": "false",
    "RATE_LIMIT_PER_MINUTE": "60",
    "CACHE_ENABLED": "false",
    "CACHE_TTL_SECONDS": "60",
}

# Configura variáveis de ambiente imediatamente quando o módulo é importado
# Isso garante que estejam disponíveis antes de qualquer import que use Settings
for key, value in TEST_ENV_VARS.items():
    if key not in os.environ:
        os.environ[key] = value

from portal.schemas.empreendimento_schema import Empreendimento  # noqa: E402
from portal.services.content_store import ContentStoreError, parse_rows  # noqa: E402

EMPREENDIMENTOS = [
    {
        "id": "a1",
        "nome": "Residencial Atlântico",
        "cidade": "Itapema",
        "estado": "SC",
        "bairro": "Meia Praia",
        "destaque": "Vista para o mar",
        "status": "lancamento",
        "preco_minimo": "450000",
        "is_oportunidade": False,
        "updated_at": "2024-05-01T10:00:00+00:00",
    },
    {
        "id": "a2",
        "nome": "Atlântico Sul",
        "cidade": "Itapema",
        "estado": "SC",
        "bairro": "Centro",
        "status": "entregue",
        "preco_minimo": 620000,
        "is_oportunidade": True,
        "updated_at": "2024-06-01T10:00:00+00:00",
    },
    {
        "id": "b1",
        "nome": "Edifício Aurora",
        "cidade": "São José",
        "estado": "SC",
        "bairro": "Kobrasol",
        "status": "obra",
        "preco_minimo": "380.000,00",
    },
    {
        "id": "c1",
        "nome": "Torre Jardins",
        "tipo": "Coberturas",
        "cidade": "Goiânia",
        "estado": "GO",
        "bairro": "Setor Marista",
        "status": "lancamento",
        "preco_minimo": None,
    },
    {
        "id": "d1",
        "nome": "Mirante do Vale",
        "cidade": "Belo Horizonte",
        "estado": "MG",
        "bairro": "Santo Agostinho",
        "status": "pronto_pra_morar",
        "preco_minimo": 980000,
    },
]


class FakeContentStore:
    """Content Store em memória"""

    def __init__(self, rows=None, fail=False):
        self.items = parse_rows(EMPREENDIMENTOS if rows is None else rows)
        self.fail = fail

    def __repr__(self):
        return f"FakeContentStore({len(self.items)})"

    def fetch_all(self):
        if self.fail:
            raise ContentStoreError("backend fora do ar")
        return list(self.items)

    def fetch_by_id(self, empreendimento_id):
        if self.fail:
            raise ContentStoreError("backend fora do ar")
        return next((item for item in self.items if item.id == empreendimento_id), None)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura o ambiente de testes antes de tudo"""
    for key, value in TEST_ENV_VARS.items():
        os.environ[key] = value
    yield


@pytest.fixture
def store():
    return FakeContentStore()


@pytest.fixture
def failing_store():
    return FakeContentStore(fail=True)


@pytest.fixture
def empreendimentos(store):
    return store.fetch_all()


def make(**fields) -> Empreendimento:
    """Cria um empreendimento com valores padrão para os campos obrigatórios"""
    fields.setdefault("id", fields.get("nome", "x").lower().replace(" ", "-"))
    fields.setdefault("nome", "Empreendimento")
    return Empreendimento(**fields)
