"""Tests del contexto de sesión y de los identificadores."""

from config.mappings import CLAVE_SELECCION
from services.sesion import ContextoSesion
from utilities.uid import generar_uid, es_uid


class TestContextoSesion:
    """Lectura y escritura de la instantánea de selección."""

    def test_sin_seleccion(self, almacen):
        assert ContextoSesion(almacen).leer_seleccion() is None

    def test_json_corrupto(self, almacen):
        almacen.set(CLAVE_SELECCION, "{roto")
        assert ContextoSesion(almacen).leer_seleccion() is None

    def test_claves_ausentes_quedan_vacias(self, almacen):
        almacen.set_json(CLAVE_SELECCION, {"session_key": "k", "tipo": "unidad"})
        sel = ContextoSesion(almacen).leer_seleccion()
        assert sel.session_key == "k"
        assert sel.provincia == ""
        assert sel.seleccion == ""

    def test_guardar_y_limpiar(self, almacen):
        contexto = ContextoSesion(almacen)
        sel = contexto.guardar_seleccion(
            "Badajoz", "Zona Sur", "Zafra", "unidad", "Unidad de Zafra", "Zafra", "2025-07-14"
        )
        assert contexto.leer_seleccion() == sel
        contexto.limpiar_seleccion()
        assert contexto.leer_seleccion() is None

    def test_contexto_fila(self, seleccion_caseta):
        fila = seleccion_caseta.contexto_fila()
        assert fila["tipo"] == "caseta"
        assert fila["caseta"] == "Caseta Las Mestas"
        assert fila["unidad"] is None


class TestUid:
    """Identificadores ULID."""

    def test_generar(self):
        uid = generar_uid()
        assert es_uid(uid)
        assert uid != generar_uid()

    def test_no_uid(self):
        assert not es_uid("")
        assert not es_uid("no-es-un-ulid")
        assert not es_uid(None)
