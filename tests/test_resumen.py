"""Tests de los resúmenes mensual y anual."""

import pandas as pd
import pytest

from config.mappings import MESES
from database.base_model import BackendNoConfigurado
from database.prueba import generar_registros_demo
from models.cuadernillo_model import CuadernilloModel
from services.resumen import ServicioResumen, CODIGOS_RESUMEN


@pytest.fixture
def julio(backend, seleccion):
    """Tres componentes con un mes de julio completo en el backend."""
    _, filas = generar_registros_demo(seleccion, 2025, 7, n_componentes=3, semilla=7)
    CuadernilloModel().insert(filas)
    return filas


class TestResumenMensual:
    """Códigos por componente en un mes."""

    def test_cuenta_todos_los_dias(self, julio, seleccion):
        tabla = ServicioResumen(seleccion).resumen_mensual(2025, 7)
        assert list(tabla.columns) == CODIGOS_RESUMEN + ["Total"]
        assert tabla.index.name == "Componente"
        assert tabla["Total"].sum() == 31 * 3
        assert (tabla[CODIGOS_RESUMEN].sum(axis=1) == tabla["Total"]).all()

    def test_mes_sin_datos(self, julio, seleccion):
        tabla = ServicioResumen(seleccion).resumen_mensual(2025, 8)
        assert tabla.empty
        assert list(tabla.columns) == CODIGOS_RESUMEN + ["Total"]

    def test_ignora_otros_centros(self, julio, seleccion, seleccion_caseta):
        assert ServicioResumen(seleccion_caseta).resumen_mensual(2025, 7).empty

    def test_ignora_filas_sin_codigo(self, backend, seleccion):
        CuadernilloModel().insert([{**seleccion.contexto_fila(), "fecha": "2025-07-01",
                                    "componente_nombre": "Ana", "componente_apellidos": "Ruiz", "codigo": ""}])
        assert ServicioResumen(seleccion).resumen_mensual(2025, 7).empty

    def test_horas_extra_una_por_dia(self, julio, seleccion):
        por_dia = {f["fecha"]: f["horas_extra"] or 0 for f in julio}
        assert ServicioResumen(seleccion).horas_extra_mes(2025, 7) == pytest.approx(sum(por_dia.values()))
        assert ServicioResumen(seleccion).horas_extra_mes(2025, 8) == 0.0


class TestResumenAnual:
    """Códigos por mes en un año."""

    def test_doce_meses(self, julio, seleccion):
        tabla = ServicioResumen(seleccion).resumen_anual(2025)
        assert list(tabla.index) == MESES
        assert list(tabla.columns) == CODIGOS_RESUMEN
        assert tabla.loc["Julio"].sum() == 31 * 3
        assert tabla.drop(index="Julio").to_numpy().sum() == 0

    def test_anio_sin_datos(self, backend, seleccion):
        tabla = ServicioResumen(seleccion).resumen_anual(2024)
        assert tabla.shape == (12, len(CODIGOS_RESUMEN))
        assert tabla.to_numpy().sum() == 0


class TestExportacion:
    """Libro Excel con una hoja por tabla."""

    def test_exportar_excel(self, julio, seleccion, tmp_path):
        servicio = ServicioResumen(seleccion)
        ruta = tmp_path / "resumen.xlsx"
        servicio.exportar_excel({"Julio": servicio.resumen_mensual(2025, 7),
                                 "2025": servicio.resumen_anual(2025)}, str(ruta))

        hojas = pd.read_excel(ruta, sheet_name=None, engine="openpyxl")
        assert list(hojas) == ["Julio", "2025"]
        assert len(hojas["2025"]) == 12


def test_sin_backend(sin_backend, seleccion):
    with pytest.raises(BackendNoConfigurado):
        ServicioResumen(seleccion).resumen_mensual(2025, 7)
