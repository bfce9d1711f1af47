"""Tests del almacén de filas genérico y del modo degradado."""

import pytest

import database.conexion as conexion
from database.base_model import BackendNoConfigurado, ErrorBackend
from database.setup import inicializar_base_de_datos
from models.cuadernillo_model import CuadernilloModel
from models.parte_model import ParteModel, ParteFilaModel

PK = "2025-07-14:unidad:Unidad de Plasencia-1"


def _fila(apellidos, **extra):
    return {"session_key": "s1", "tipo": "unidad", "unidad": "Unidad de Plasencia-1",
            "fecha": "2025-07-14", "componente_nombre": "Ana",
            "componente_apellidos": apellidos, "codigo": "JR", **extra}


class TestSelect:
    """Filtros, orden y rango."""

    def test_insert_ignora_claves_desconocidas(self, backend):
        assert CuadernilloModel().insert([_fila("Ruiz", columna_inventada=1)]) == 1
        filas, total = CuadernilloModel().select()
        assert total == 1
        assert "columna_inventada" not in filas[0]
        assert len(filas[0]["id"]) == 26

    def test_insert_vacio(self, backend):
        assert CuadernilloModel().insert([]) == 0

    def test_rango_y_total(self, backend):
        CuadernilloModel().insert([_fila(a) for a in ("C", "A", "D", "B")])
        filas, total = CuadernilloModel().select(order_by=["componente_apellidos"], offset=1, limit=2)
        assert total == 4
        assert [f["componente_apellidos"] for f in filas] == ["B", "C"]

    def test_filtro_none_es_nulo(self, backend):
        CuadernilloModel().insert([_fila("Ruiz"), _fila("Sanz", caseta="Caseta Las Mestas")])
        filas, total = CuadernilloModel().select(filters={"caseta": None})
        assert total == 1
        assert filas[0]["componente_apellidos"] == "Ruiz"

    def test_or_fields_sin_mayusculas(self, backend):
        CuadernilloModel().insert([_fila("Ruiz"), _fila("Sanz", componente_nombre="Rubén"), _fila("Gil")])
        _, total = CuadernilloModel().select(
            or_fields=[("componente_nombre", "RU"), ("componente_apellidos", "ru")]
        )
        assert total == 2

    def test_rechazo_del_driver(self, backend):
        with pytest.raises(ErrorBackend):
            CuadernilloModel().insert([_fila("Ruiz", codigo=None)])


class TestUpsertDelete:
    """Upsert por clave de conflicto y borrado filtrado."""

    def test_upsert_inserta_y_actualiza(self, backend):
        model = ParteModel()
        model.upsert({"pk": PK, "fecha": "2025-07-14", "horas_extras_total": 1.0}, conflict_key="pk")
        model.upsert({"pk": PK, "fecha": "2025-07-14", "horas_extras_total": 2.5}, conflict_key="pk")
        filas, total = model.select()
        assert total == 1
        assert filas[0]["horas_extras_total"] == 2.5
        assert model.obtener(PK)["pk"] == PK
        assert model.obtener("no-existe") is None

    def test_reemplazar_lineas(self, backend):
        ParteModel().upsert({"pk": PK, "fecha": "2025-07-14"}, conflict_key="pk")
        lineas = ParteFilaModel()
        lineas.reemplazar(PK, [{"componente_id": "c1", "codigo": "JR"}, {"componente_id": "c2"}])
        lineas.reemplazar(PK, [{"componente_id": "c3", "codigo": "V"}])
        assert [f["componente_id"] for f in lineas.de_parte(PK)] == ["c3"]

    def test_delete_devuelve_borradas(self, backend):
        CuadernilloModel().insert([_fila("Ruiz", parte_pk=PK), _fila("Sanz", parte_pk=PK), _fila("Gil")])
        assert CuadernilloModel().delete({"parte_pk": PK}) == 2
        assert CuadernilloModel().select()[1] == 1

    def test_delete_sin_filtros(self, backend):
        with pytest.raises(ValueError):
            CuadernilloModel().delete({})


class TestModoDegradado:
    """Sin backend configurado."""

    def test_operaciones_lanzan(self, sin_backend):
        assert not conexion.hay_backend()
        with pytest.raises(BackendNoConfigurado):
            CuadernilloModel().select()
        with pytest.raises(BackendNoConfigurado):
            CuadernilloModel().insert([_fila("Ruiz")])

    def test_backend_no_configurado_es_error_backend(self):
        assert issubclass(BackendNoConfigurado, ErrorBackend)

    def test_inicializar_sin_backend(self, sin_backend):
        assert inicializar_base_de_datos() is False

    def test_inicializar_con_sqlite(self):
        assert conexion.hay_backend()
        assert inicializar_base_de_datos() is True
