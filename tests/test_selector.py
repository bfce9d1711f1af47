"""Tests del selector en cascada y del cálculo de candidatos."""

from datetime import date

import pytest

from config.mappings import CLAVE_SELECCION
from models.selector_model import SelectorUbicacion, SeleccionIncompleta, calcular_candidatos
from services.componentes import ServicioComponentes
from services.sesion import ContextoSesion
from utilities.uid import es_uid


class TestCalcularCandidatos:
    """Unidades por nombre normalizado, casetas por municipio literal."""

    @pytest.mark.parametrize("municipio, esperado", [
        ("Plasencia", ["Unidad de Plasencia-1", "Unidad de Plasencia-2"]),
        ("Hervás", ["Unidad Hervás"]),
        ("Jaraíz de la Vera", ["Unidad Jaraíz Vera"]),
        ("Nuñomoral", ["Unidad de Nuñomoral"]),
    ])
    def test_unidades_zona_norte(self, catalogo, municipio, esperado):
        zona = catalogo.zona("Cáceres", "Zona Norte")
        assert calcular_candidatos("unidad", municipio, zona) == esperado

    def test_coincidencia_parcial_devuelve_varias(self, catalogo):
        zona = catalogo.zona("Cáceres", "Zona Centro")
        assert calcular_candidatos("unidad", "Alcántara", zona) == [
            "Unidad Valencia Alcántara", "Unidad de Alcántara"
        ]
        assert calcular_candidatos("unidad", "Valencia de Alcántara", zona) == ["Unidad Valencia Alcántara"]

    def test_conectores_ignorados(self, catalogo):
        assert calcular_candidatos(
            "unidad", "Villanueva de la Serena", catalogo.zona("Badajoz", "Zona Vegas")
        ) == ["Unidad Villanueva Serena"]
        assert calcular_candidatos(
            "unidad", "Jerez de los Caballeros", catalogo.zona("Badajoz", "Zona Sur")
        ) == ["Unidad Jerez Caballeros"]

    def test_casetas_por_municipio(self, catalogo):
        zona = catalogo.zona("Cáceres", "Zona Norte")
        assert calcular_candidatos("caseta", "Caminomorisco", zona) == [
            "Caseta Pico Santa Bárbara", "Caseta Las Mestas"
        ]
        assert calcular_candidatos("caseta", "Coria", zona) == []

    def test_casetas_sensibles_a_mayusculas(self, catalogo):
        zona = catalogo.zona("Cáceres", "Zona Norte")
        assert calcular_candidatos("caseta", "caminomorisco", zona) == []

    def test_entradas_incompletas(self, catalogo):
        zona = catalogo.zona("Cáceres", "Zona Norte")
        assert calcular_candidatos("", "Plasencia", zona) == []
        assert calcular_candidatos("unidad", "", zona) == []
        assert calcular_candidatos("unidad", "Plasencia", None) == []
        assert calcular_candidatos("otro", "Plasencia", zona) == []


def _selector_completo(catalogo, tipo="unidad", municipio="Plasencia", instancia="Unidad de Plasencia-2"):
    selector = SelectorUbicacion(catalogo)
    selector.set_provincia("Cáceres")
    selector.set_zona("Zona Norte")
    selector.set_municipio(municipio)
    selector.set_tipo(tipo)
    selector.set_instancia(instancia)
    return selector


class TestSelectorUbicacion:
    """Transiciones del selector."""

    def test_solo_provincia_habilitada_al_inicio(self, catalogo):
        selector = SelectorUbicacion(catalogo)
        assert selector.nivel_habilitado("provincia")
        assert not selector.nivel_habilitado("zona")
        assert selector.opciones_zonas() == []
        assert selector.opciones_tipos() == {}

    def test_opciones_por_nivel(self, catalogo):
        selector = SelectorUbicacion(catalogo)
        selector.set_provincia("Badajoz")
        assert selector.opciones_zonas() == ["Zona Sur", "Zona Vegas"]
        selector.set_zona("Zona Sur")
        assert "Zafra" in selector.opciones_municipios()
        selector.set_municipio("Zafra")
        assert selector.opciones_tipos() == {"unidad": "Unidad", "caseta": "Caseta"}

    def test_cambiar_nivel_vacia_los_posteriores(self, catalogo):
        selector = _selector_completo(catalogo)
        selector.set_zona("Zona Centro")
        assert selector.zona == "Zona Centro"
        assert (selector.municipio, selector.tipo, selector.instancia) == ("", "", "")

    @pytest.mark.parametrize("setter, valor, posteriores", [
        ("set_provincia", "Badajoz", ("zona", "municipio", "tipo", "instancia")),
        ("set_zona", "Zona Centro", ("municipio", "tipo", "instancia")),
        ("set_municipio", "Hervás", ("tipo", "instancia")),
    ])
    def test_nivel_superior_anula_confirmacion(self, catalogo, setter, valor, posteriores):
        selector = _selector_completo(catalogo)
        getattr(selector, setter)(valor)

        assert all(getattr(selector, nivel) == "" for nivel in posteriores)
        assert not selector.puede_confirmar()

    def test_vaciar_provincia_lo_vacia_todo(self, catalogo):
        selector = _selector_completo(catalogo)
        selector.set_provincia("")
        assert (selector.provincia, selector.zona, selector.municipio, selector.tipo, selector.instancia) == ("",) * 5

    def test_cambiar_tipo_vacia_instancia(self, catalogo):
        selector = _selector_completo(catalogo)
        selector.set_tipo("caseta")
        assert selector.instancia == ""
        assert selector.candidatos() == ["Caseta Monte Valcorchero"]

    def test_valor_prematuro_ignorado(self, catalogo):
        selector = SelectorUbicacion(catalogo)
        selector.set_zona("Zona Norte")
        assert selector.zona == ""

    def test_puede_confirmar_solo_con_cinco_niveles(self, catalogo):
        selector = _selector_completo(catalogo)
        assert selector.puede_confirmar()
        selector.set_instancia("")
        assert not selector.puede_confirmar()

    def test_nombre_centro(self, catalogo):
        assert _selector_completo(catalogo).nombre_centro() == "Plasencia"
        caseta = _selector_completo(catalogo, tipo="caseta", instancia="Caseta Monte Valcorchero")
        assert caseta.nombre_centro() == "Caseta Monte Valcorchero"


class TestConfirmar:
    """Persistencia de la selección confirmada."""

    def test_incompleta(self, catalogo, almacen):
        selector = SelectorUbicacion(catalogo)
        selector.set_provincia("Cáceres")
        with pytest.raises(SeleccionIncompleta):
            selector.confirmar(ContextoSesion(almacen))
        assert almacen.get(CLAVE_SELECCION) is None

    def test_guarda_instantanea(self, catalogo, almacen):
        contexto = ContextoSesion(almacen)
        sel = _selector_completo(catalogo).confirmar(contexto, hoy=date(2025, 7, 14))

        assert sel.seleccion == "Unidad de Plasencia-2"
        assert sel.unidad == "Unidad de Plasencia-2"
        assert sel.caseta is None
        assert sel.fecha == "2025-07-14"
        assert es_uid(sel.session_key)
        assert contexto.leer_seleccion() == sel

    def test_reutiliza_clave_de_sesion(self, catalogo, almacen):
        contexto = ContextoSesion(almacen)
        primera = _selector_completo(catalogo).confirmar(contexto)
        segunda = _selector_completo(
            catalogo, tipo="caseta", municipio="Hervás", instancia="Caseta Pinajarro"
        ).confirmar(contexto)
        assert segunda.session_key == primera.session_key
        assert segunda.nombre_centro == "Caseta Pinajarro"

    def test_limpia_claves_heredadas(self, catalogo, almacen):
        almacen.set_json("infoex:header", {"unidad": "vieja"})
        almacen.set_json("infoex:componentes", [])
        _selector_completo(catalogo).confirmar(ContextoSesion(almacen))
        assert almacen.get("infoex:header") is None
        assert almacen.get("infoex:componentes") is None

    def test_conserva_dotacion_heredada(self, catalogo, almacen):
        almacen.set_json("infoex:componentes", [{"nombre": "Ana", "apellidos": "Ruiz"}])
        _selector_completo(catalogo).confirmar(ContextoSesion(almacen))

        assert almacen.get("infoex:componentes") is None
        assert [c.nombre for c in ServicioComponentes(almacen).listar()] == ["Ana"]
