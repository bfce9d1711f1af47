"""Tests del parte diario."""

from datetime import date

import pytest

from config.mappings import PREFIJO_PARTE
from models.cuadernillo_model import CuadernilloModel
from models.parte_model import ParteModel, ParteFilaModel
from services.almacen_local import AlmacenLocal
from services.control_diario import ServicioParteDiario, clave_parte

FECHA = date(2025, 7, 14)


def _parte(almacen, seleccion, dotacion, remoto=False):
    parte = ServicioParteDiario(almacen, seleccion, FECHA, dotacion, remoto=remoto)
    parte.cargar()
    return parte


class TestClaveParte:
    """Identificador del parte."""

    def test_con_seleccion(self, seleccion):
        assert clave_parte(seleccion, FECHA) == "2025-07-14:unidad:Unidad de Plasencia-1"

    def test_sin_seleccion(self):
        assert clave_parte(None, FECHA) == "2025-07-14:NA:SIN"


class TestParteLocal:
    """Edición y persistencia local, sin backend."""

    def test_una_fila_por_componente(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        assert [f.componente_id for f in parte.filas] == ["c1", "c2", "c3"]
        assert all(f.codigo == "" for f in parte.filas)

    def test_actualizar_codigo(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        parte.actualizar_fila("c1", "codigo", "jr")
        assert parte.fila("c1").codigo == "JR"

    def test_codigo_desconocido(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        with pytest.raises(ValueError):
            parte.actualizar_fila("c1", "codigo", "XX")

    def test_horas_normalizadas(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        parte.actualizar_fila("c2", "jornada_ini", "8:00")
        assert parte.fila("c2").jornada_ini == "08:00"
        with pytest.raises(ValueError):
            parte.actualizar_fila("c2", "jornada_fin", "25:00")

    def test_marcas_booleanas(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        parte.actualizar_fila("c3", "abono_df", 1)
        assert parte.fila("c3").abono_df is True

    def test_campo_o_componente_desconocido(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        with pytest.raises(ValueError):
            parte.actualizar_fila("c1", "componente_id", "x")
        with pytest.raises(KeyError):
            parte.actualizar_fila("zz", "codigo", "JR")

    def test_persiste_en_local(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        parte.actualizar_fila("c1", "codigo", "TC")
        parte.set_horas_extras("02:30")

        assert almacen.get(PREFIJO_PARTE + parte.parte_pk) is not None
        recargado = _parte(almacen, seleccion, dotacion)
        assert recargado.fila("c1").codigo == "TC"
        assert recargado.horas_extras_total == "02:30"
        assert recargado.horas_extras_valor() == 2.5

    def test_partes_de_dias_distintos_separados(self, almacen, seleccion, dotacion):
        _parte(almacen, seleccion, dotacion).actualizar_fila("c1", "codigo", "V")
        otro_dia = ServicioParteDiario(almacen, seleccion, date(2025, 7, 15), dotacion, remoto=False)
        otro_dia.cargar()
        assert otro_dia.fila("c1").codigo == ""

    def test_sincronizar_componentes(self, almacen, seleccion, dotacion):
        parte = _parte(almacen, seleccion, dotacion)
        parte.actualizar_fila("c3", "codigo", "B")

        nueva = dotacion[2:] + [dotacion[0].__class__(id="c4", nombre="Sol", apellidos="Vera")]
        parte.sincronizar_componentes(nueva)

        assert [f.componente_id for f in parte.filas] == ["c3", "c4"]
        assert parte.fila("c3").codigo == "B"
        assert parte.fila("c4").codigo == ""

    def test_sin_backend_no_sincroniza(self, almacen, seleccion, dotacion):
        assert _parte(almacen, seleccion, dotacion).sincronizar_remoto() is False

    def test_sin_seleccion_no_sincroniza(self, almacen, dotacion, backend):
        parte = ServicioParteDiario(almacen, None, FECHA, dotacion, remoto=True)
        parte.cargar()
        assert parte.sincronizar_remoto() is False


class TestParteRemoto:
    """Sincronización con el backend SQLite de pruebas."""

    def test_sincroniza_cabecera_lineas_y_cuadernillo(self, almacen, seleccion, dotacion, backend):
        parte = _parte(almacen, seleccion, dotacion, remoto=True)
        parte.actualizar_fila("c1", "codigo", "JR")
        parte.actualizar_fila("c1", "jornada_ini", "08:00")
        parte.set_horas_extras("2,5")

        assert parte.sincronizar_remoto() is True

        cabecera = ParteModel().obtener(parte.parte_pk)
        assert cabecera["horas_extras_total"] == 2.5
        assert cabecera["unidad"] == "Unidad de Plasencia-1"
        assert cabecera["caseta"] is None
        assert len(ParteFilaModel().de_parte(parte.parte_pk)) == 3

        filas, total = CuadernilloModel().buscar_por_dia("2025-07-14")
        assert total == 1
        assert filas[0]["componente_apellidos"] == "Ruiz Gómez"
        assert filas[0]["horas_extra"] == 2.5
        assert filas[0]["parte_pk"] == parte.parte_pk

    def test_resincronizar_reemplaza(self, almacen, seleccion, dotacion, backend):
        parte = _parte(almacen, seleccion, dotacion, remoto=True)
        parte.actualizar_fila("c1", "codigo", "JR")
        parte.sincronizar_remoto()
        parte.actualizar_fila("c2", "codigo", "V")
        parte.sincronizar_remoto()

        _, total = CuadernilloModel().buscar_por_dia("2025-07-14")
        assert total == 2
        assert len(ParteFilaModel().de_parte(parte.parte_pk)) == 3

    def test_carga_remota_prevalece(self, almacen, seleccion, dotacion, backend):
        parte = _parte(almacen, seleccion, dotacion, remoto=True)
        parte.actualizar_fila("c2", "codigo", "TH")
        parte.set_horas_extras("1")
        parte.sincronizar_remoto()

        otro_equipo = _parte(AlmacenLocal(None), seleccion, dotacion, remoto=True)
        assert otro_equipo.fila("c2").codigo == "TH"
        assert otro_equipo.horas_extras_total == "1"
