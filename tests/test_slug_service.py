"""
Testes para as URLs canônicas de empreendimentos
"""
import re

import pytest

from conftest import make
from portal.services.slug_service import (
    build_city_landing_segment,
    build_listing_path,
    build_location_segment,
    build_slug_map,
    is_canonical,
    parse_path,
    slugify,
    status_qualifier,
)

TEXTOS_DIFICEIS = [
    "Residencial Meia Praia",
    "  São José -- dos  Campos!! ",
    "İstanbul Ærø",
    "ﬁlial ½ ²",
    "tab\tseparado\nlinha",
    "--começo e fim--",
    "Casa 🏠 na praia",
    "Ed. Aurora / Bloco-B",
    "___",
    "",
]


class TestSlugify:
    """Testes para slugify"""

    def test_basic(self):
        assert slugify("Residencial Meia Praia") == "residencial-meia-praia"

    def test_accents_and_punctuation(self):
        assert slugify("  São José -- dos  Campos!! ") == "sao-jose-dos-campos"
        assert slugify("Balneário Camboriú") == "balneario-camboriu"

    def test_empty_input(self):
        assert slugify(None) == ""
        assert slugify("") == ""
        assert slugify("!!!") == ""

    def test_trims_hyphens(self):
        assert slugify("--começo e fim--") == "comeco-e-fim"

    @pytest.mark.parametrize("texto", TEXTOS_DIFICEIS)
    def test_charset(self, texto):
        assert re.fullmatch(r"[a-z0-9-]*", slugify(texto))

    @pytest.mark.parametrize("texto", TEXTOS_DIFICEIS)
    def test_idempotent(self, texto):
        assert slugify(slugify(texto)) == slugify(texto)

    @pytest.mark.parametrize("texto", TEXTOS_DIFICEIS)
    def test_never_double_hyphen(self, texto):
        assert "--" not in slugify(texto)


class TestStatusQualifier:
    """Testes para o qualificador derivado do status"""

    @pytest.mark.parametrize("status,esperado", [
        ("entregue", "prontos-para-morar"),
        ("Entregue em 2023", "prontos-para-morar"),
        ("pronto_pra_morar", "prontos-para-morar"),
        ("lancamento", "em-lancamento"),
        ("Em lançamento", "em-lancamento"),
        ("pre_lancamento", "em-lancamento"),
        ("obra", "em-obra"),
        ("Em construção", "em-obra"),
        ("vendido", None),
        ("", None),
        (None, None),
    ])
    def test_mapping(self, status, esperado):
        assert status_qualifier(status) == esperado


class TestLocationSegment:
    """Testes para o segmento de localização"""

    def test_full_segment(self):
        listing = {
            "id": "abc123",
            "nome": "Residencial Meia Praia",
            "cidade": "Itapema",
            "estado": "SC",
            "tipo": "Apartamentos",
            "status": "entregue",
            "bairro": "Meia Praia",
        }
        assert build_location_segment(listing) == "apartamentos-prontos-para-morar-meia-praia-itapema-sc"

    def test_defaults(self):
        listing = {"id": "x", "nome": "Ed. Aurora", "cidade": "São José", "estado": "SC"}
        assert build_location_segment(listing) == "apartamentos-venda-sao-jose-sc"

    def test_bairro_without_status(self):
        listing = make(id="x", nome="Aurora", cidade="Itapema", estado="SC", bairro="Centro")
        assert build_location_segment(listing) == "apartamentos-centro-itapema-sc"

    def test_status_without_bairro(self):
        listing = make(id="x", nome="Aurora", cidade="Itapema", estado="SC", status="obra", tipo="Casas")
        assert build_location_segment(listing) == "casas-em-obra-itapema-sc"

    def test_unknown_status_falls_back_to_venda(self):
        listing = make(id="x", nome="Aurora", cidade="Itapema", estado="SC", status="esgotado")
        assert build_location_segment(listing) == "apartamentos-venda-itapema-sc"

    def test_city_landing_segment(self):
        assert build_city_landing_segment("Balneário Camboriú", "SC") == "apartamentos-venda-balneario-camboriu-sc"
        assert build_city_landing_segment(
            "Balneário Camboriú", "SC", tipo="Casas", status="lançamento", bairro="Centro"
        ) == "casas-em-lancamento-centro-balneario-camboriu-sc"


class TestListingPath:
    """Testes para o caminho canônico completo"""

    def test_path(self):
        listing = {
            "id": "abc123",
            "nome": "Residencial Meia Praia",
            "cidade": "Itapema",
            "estado": "SC",
            "tipo": "Apartamentos",
            "status": "entregue",
            "bairro": "Meia Praia",
        }
        assert build_listing_path(listing) == (
            "apartamentos-prontos-para-morar-meia-praia-itapema-sc/residencial-meia-praia--abc123"
        )

    def test_slug_override(self):
        listing = make(id="7", nome="Residencial Meia Praia", slug="Meia Praia Premium", cidade="Itapema", estado="SC")
        assert build_listing_path(listing).endswith("/meia-praia-premium--7")

    def test_name_fallback(self):
        listing = {"id": "7", "nome": "!!!", "cidade": "Itapema", "estado": "SC"}
        assert build_listing_path(listing) == "apartamentos-venda-itapema-sc/empreendimento--7"

    def test_empty_slug_override_uses_fallback(self):
        listing = {"id": "7", "nome": "Aurora", "slug": "", "cidade": "Itapema", "estado": "SC"}
        assert build_listing_path(listing).endswith("/empreendimento--7")

    @pytest.mark.parametrize("listing", [
        {"id": "abc123", "nome": "Residencial -- Duplo", "cidade": "Itapema", "estado": "SC"},
        {"id": "0f8c2e1a-6b1d-4c5e-9a77-3e2f1b0c9d11", "nome": "Torre", "cidade": "", "estado": ""},
        {"id": "42", "nome": "", "cidade": "São José", "estado": "SC", "status": "entregue", "bairro": "Kobrasol"},
        {"id": "x-y", "nome": "Nome com - hífens - soltos", "cidade": "Goiânia", "estado": "GO"},
        {"id": "-abc", "nome": "Residencial", "cidade": "Itapema", "estado": "SC"},
    ])
    def test_round_trip_on_id(self, listing):
        assert parse_path(build_listing_path(listing)).id == listing["id"]

    def test_slug_map(self, empreendimentos):
        slug_map = build_slug_map(empreendimentos)
        assert set(slug_map) == {emp.id for emp in empreendimentos}
        assert slug_map["b1"] == "apartamentos-em-obra-kobrasol-sao-jose-sc/edificio-aurora--b1"


class TestParsePath:
    """Testes para a leitura do parâmetro da rota"""

    def test_legacy_id(self):
        parsed = parse_path("abc123")
        assert parsed.id == "abc123"
        assert parsed.slug_fragment is None

    def test_last_delimiter(self):
        parsed = parse_path("foo--bar--baz")
        assert parsed.slug_fragment == "foo--bar"
        assert parsed.id == "baz"

    def test_fragment_lowercased_id_untouched(self):
        parsed = parse_path("Residencial-Atlantico--ABC")
        assert parsed.slug_fragment == "residencial-atlantico"
        assert parsed.id == "ABC"

    def test_hyphens_before_delimiter_belong_to_id(self):
        parsed = parse_path("segmento/residencial---abc")
        assert parsed.slug_fragment == "segmento/residencial"
        assert parsed.id == "-abc"

    def test_empty_fragment(self):
        parsed = parse_path("--abc")
        assert parsed.slug_fragment is None
        assert parsed.id == "abc"


class TestIsCanonical:
    """Testes para a verificação do slug canônico"""

    def test_canonical_path(self, empreendimentos):
        listing = empreendimentos[0]
        assert is_canonical(parse_path(build_listing_path(listing)), listing)

    def test_old_base_segment_same_name(self, empreendimentos):
        listing = empreendimentos[0]
        assert is_canonical(parse_path("segmento-antigo/residencial-atlantico--a1"), listing)

    def test_renamed_listing(self, empreendimentos):
        listing = empreendimentos[0]
        assert not is_canonical(parse_path("nome-antigo--a1"), listing)

    def test_bare_id(self, empreendimentos):
        listing = empreendimentos[0]
        assert not is_canonical(parse_path("a1"), listing)
