#  Copyright (c) 2026 Fleer
#  Permission is hereby granted, free of charge, to any person obtaining a copy
#  of this software and associated documentation files (the "Software"), to deal
#  in the Software without restriction, including without limitation the rights
#  to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
#  copies of the Software, and to permit persons to whom the Software is
#  furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all
#  copies or substantial portions of the Software.

import logging
from datetime import date

from config.mappings import CODIGOS_JORNADA, PREFIJO_PARTE
from database.base_model import BackendNoConfigurado
from database.conexion import hay_backend
from database.schemas import SeleccionActual, Componente, FilaParte
from models.cuadernillo_model import CuadernilloModel
from models.parte_model import ParteModel, ParteFilaModel
from services.almacen_local import AlmacenLocal
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

CAMPOS_BOOLEANOS = ("abono_df", "superior_categoria")
CAMPOS_HORA = ("jornada_ini", "jornada_fin", "salida_ini", "salida_fin")


def clave_parte(seleccion: SeleccionActual | None, fecha: date) -> str:
    """Clave del parte: 'YYYY-MM-DD:tipo:unidad_o_caseta'.

    Sin selección se usan los marcadores 'NA' (tipo) y 'SIN' (centro).
    """
    tipo = seleccion.tipo if seleccion and seleccion.tipo else "NA"
    centro = seleccion.seleccion if seleccion and seleccion.seleccion else "SIN"
    return f"{fecha.isoformat()}:{tipo}:{centro}"


class ServicioParteDiario:
    """
    Parte diario de una unidad o caseta: una fila por componente.

    Cada edición se guarda de inmediato en el almacén local. La sincronización
    con el backend (`sincronizar_remoto`) la agrupa el controlador con un
    temporizador de debounce.
    """

    def __init__(self, almacen: AlmacenLocal, seleccion: SeleccionActual | None, fecha: date,
                 componentes: list[Componente] | None = None, remoto: bool | None = None):
        """
        Args:
            almacen (AlmacenLocal): Almacén local.
            seleccion (SeleccionActual | None): Contexto elegido en el inicio.
            fecha (date): Día del parte.
            componentes (list[Componente], optional): Dotación actual.
            remoto (bool, optional): Forzar o desactivar el backend. Por defecto, si hay backend.
        """
        self.almacen = almacen
        self.seleccion = seleccion
        self.fecha = fecha
        self.componentes = list(componentes or [])
        self.remoto = hay_backend() if remoto is None else remoto

        self.filas: list[FilaParte] = []
        self.horas_extras_total = ""

        self.model_parte = ParteModel()
        self.model_filas = ParteFilaModel()
        self.model_cuadernillo = CuadernilloModel()

    # ----------------------------
    # CLAVES
    # ----------------------------
    @property
    def parte_pk(self) -> str:
        return clave_parte(self.seleccion, self.fecha)

    @property
    def clave_local(self) -> str:
        return f"{PREFIJO_PARTE}{self.parte_pk}"

    @property
    def sincroniza_remoto(self) -> bool:
        return self.remoto and self.seleccion is not None

    # ----------------------------
    # CARGA
    # ----------------------------
    def cargar(self):
        """
        Carga el parte: primero el almacén local y, si hay backend, el último
        estado remoto (que prevalece). Después ajusta las filas a la dotación.

        Raises:
            ErrorBackend: Si la lectura remota falla. El estado local ya queda cargado.
        """
        self.filas = []
        self.horas_extras_total = ""

        guardado = self.almacen.get_json(self.clave_local)
        if isinstance(guardado, dict):
            self.filas = [FilaParte.from_dict(f) for f in guardado.get("filas") or [] if isinstance(f, dict)]
            self.horas_extras_total = str(guardado.get("horas_extras_total") or "")

        try:
            if self.sincroniza_remoto:
                self._cargar_remoto()
        finally:
            self.sincronizar_componentes(self.componentes)

    def _cargar_remoto(self):
        parte = self.model_parte.obtener(self.parte_pk)
        if parte is None:
            return
        if parte.get("horas_extras_total") is not None:
            self.horas_extras_total = f"{parte['horas_extras_total']:g}"
        lineas = self.model_filas.de_parte(self.parte_pk)
        self.filas = [FilaParte.from_dict(r) for r in lineas]

    def sincronizar_componentes(self, componentes: list[Componente]):
        """
        Ajusta las filas a la dotación: conserva las existentes, crea filas
        vacías para componentes nuevos y descarta las de componentes eliminados.
        """
        self.componentes = list(componentes)
        por_id = {f.componente_id: f for f in self.filas}
        self.filas = [por_id.get(c.id) or FilaParte(componente_id=c.id) for c in self.componentes]

    # ----------------------------
    # EDICIÓN
    # ----------------------------
    def fila(self, componente_id: str) -> FilaParte | None:
        return next((f for f in self.filas if f.componente_id == componente_id), None)

    def actualizar_fila(self, componente_id: str, campo: str, valor):
        """
        Modifica un campo de la fila de un componente y guarda en local.

        Raises:
            KeyError: Si el componente no tiene fila.
            ValueError: Si el campo no existe o el valor no es válido.
        """
        fila = self.fila(componente_id)
        if fila is None:
            raise KeyError(componente_id)

        if campo == "codigo":
            valor = (valor or "").strip().upper()
            if valor not in CODIGOS_JORNADA:
                raise ValueError(f"Código desconocido: '{valor}'")
        elif campo in CAMPOS_BOOLEANOS:
            valor = bool(valor)
        elif campo in CAMPOS_HORA:
            valor = Sanitizer.limpiar_hora(valor)
        else:
            raise ValueError(f"Campo no editable: '{campo}'")

        setattr(fila, campo, valor)
        self.guardar_local()

    def set_horas_extras(self, texto: str):
        self.horas_extras_total = (texto or "").strip()
        self.guardar_local()

    def horas_extras_valor(self):
        return Sanitizer.limpiar_horas_extra(self.horas_extras_total)

    # ----------------------------
    # PERSISTENCIA
    # ----------------------------
    def guardar_local(self):
        self.almacen.set_json(self.clave_local, {
            "filas": [f.to_dict() for f in self.filas],
            "horas_extras_total": self.horas_extras_total,
        })

    def _fila_cuadernillo(self, fila: FilaParte, componente: Componente) -> dict:
        return {
            **self.seleccion.contexto_fila(),
            "parte_pk": self.parte_pk,
            "fecha": self.fecha.isoformat(),
            "componente_nombre": componente.nombre,
            "componente_apellidos": componente.apellidos,
            "componente_numero": componente.numero or None,
            "codigo": fila.codigo,
            "abono_df": fila.abono_df,
            "superior_categoria": fila.superior_categoria,
            "jornada_ini": fila.jornada_ini or None,
            "jornada_fin": fila.jornada_fin or None,
            "horas_extra": self.horas_extras_valor(),
        }

    def sincronizar_remoto(self) -> bool:
        """
        Envía el parte al backend: upsert de la cabecera, reemplazo de las
        líneas y reemplazo de las filas aplanadas del cuadernillo.

        Returns:
            bool: False si no hay backend o selección (no se envía nada).

        Raises:
            ErrorBackend: Si alguna escritura falla.
        """
        if not self.sincroniza_remoto:
            return False

        cabecera = {
            **self.seleccion.contexto_fila(),
            "pk": self.parte_pk,
            "fecha": self.fecha.isoformat(),
            "horas_extras_total": self.horas_extras_valor(),
        }
        try:
            self.model_parte.upsert(cabecera, conflict_key="pk")
            self.model_filas.reemplazar(self.parte_pk, [
                {**f.to_dict(), "codigo": f.codigo or None,
                 "jornada_ini": f.jornada_ini or None, "jornada_fin": f.jornada_fin or None,
                 "salida_ini": f.salida_ini or None, "salida_fin": f.salida_fin or None}
                for f in self.filas
            ])

            por_id = {c.id: c for c in self.componentes}
            self.model_cuadernillo.reemplazar_parte(self.parte_pk, [
                self._fila_cuadernillo(f, por_id[f.componente_id])
                for f in self.filas if f.codigo and f.componente_id in por_id
            ])
        except BackendNoConfigurado:
            logger.warning("Backend desactivado durante la sincronización del parte %s", self.parte_pk)
            return False

        logger.info("Parte %s sincronizado (%d filas)", self.parte_pk, len(self.filas))
        return True
