"""Tests del generador de datos de demostración."""

from config.mappings import CODIGOS_JORNADA
from database.prueba import generar_registros_demo, poblar_demo
from models.cuadernillo_model import CuadernilloModel


class TestGenerador:
    """Dotación y filas ficticias."""

    def test_una_fila_por_componente_y_dia(self, seleccion):
        componentes, filas = generar_registros_demo(seleccion, 2025, 7, n_componentes=4, semilla=3)
        assert len(componentes) == 4
        assert len(filas) == 31 * 4
        assert {f["fecha"] for f in filas} == {f"2025-07-{d:02d}" for d in range(1, 32)}

    def test_codigos_y_claves(self, seleccion):
        _, filas = generar_registros_demo(seleccion, 2024, 2, n_componentes=2, semilla=3)
        assert len(filas) == 29 * 2
        assert all(f["codigo"] in CODIGOS_JORNADA and f["codigo"] for f in filas)
        assert filas[0]["parte_pk"] == "2024-02-01:unidad:Unidad de Plasencia-1"
        assert all(f["unidad"] == "Unidad de Plasencia-1" and f["caseta"] is None for f in filas)

    def test_horas_extra_iguales_en_el_dia(self, seleccion):
        _, filas = generar_registros_demo(seleccion, 2025, 7, n_componentes=3, semilla=5)
        por_dia = {}
        for f in filas:
            por_dia.setdefault(f["fecha"], set()).add(f["horas_extra"])
        assert all(len(valores) == 1 for valores in por_dia.values())

    def test_semilla_reproducible(self, seleccion):
        a, filas_a = generar_registros_demo(seleccion, 2025, 7, n_componentes=3, semilla=11)
        b, filas_b = generar_registros_demo(seleccion, 2025, 7, n_componentes=3, semilla=11)
        assert [c.nombre_completo for c in a] == [c.nombre_completo for c in b]
        assert [f["codigo"] for f in filas_a] == [f["codigo"] for f in filas_b]


def test_poblar_demo(backend):
    insertadas = poblar_demo(anio=2025, mes=6, n_componentes=2, semilla=1)
    assert insertadas == 30 * 2

    filas, total = CuadernilloModel().select()
    assert total == 60
    assert {f["unidad"] for f in filas} == {"Unidad de Plasencia-1"}
