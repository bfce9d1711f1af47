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

from config.mappings import CAMPOS_SALIDA, CAMPO_HORA, CAMPO_ENTERO, PREFIJO_SALIDAS
from database.base_model import BackendNoConfigurado
from database.conexion import hay_backend
from models.salida_model import modelo_salidas
from services.almacen_local import AlmacenLocal
from utilities.sanitizer import Sanitizer
from utilities.uid import generar_uid

logger = logging.getLogger(__name__)

CLAVE_TEMPORAL = "temp"


class SinParteVinculado(ValueError):
    """Se intentó guardar salidas sin un parte diario al que asociarlas."""

    def __init__(self, mensaje="No hay parte vinculado. Abre antes el control diario del día."):
        super().__init__(mensaje)


class ServicioSalidas:
    """
    Lista editable de salidas (incendios o trabajos) de un parte diario.

    Cada salida es un diccionario con `id` y los campos declarados en
    CAMPOS_SALIDA[tipo]. Toda modificación se guarda en el almacén local;
    el envío al backend es explícito (`guardar_remoto`).
    """

    def __init__(self, almacen: AlmacenLocal, tipo: str, parte_pk: str | None = None, remoto: bool | None = None):
        if tipo not in CAMPOS_SALIDA:
            raise ValueError(f"Tipo de salida desconocido: {tipo}")
        self.almacen = almacen
        self.tipo = tipo
        self.parte_pk = parte_pk
        self.remoto = hay_backend() if remoto is None else remoto
        self.salidas: list[dict] = []
        self.model = modelo_salidas(tipo)

    @property
    def campos(self) -> list[tuple]:
        return CAMPOS_SALIDA[self.tipo]["campos"]

    @property
    def titulo(self) -> str:
        return CAMPOS_SALIDA[self.tipo]["titulo"]

    @property
    def clave_local(self) -> str:
        return PREFIJO_SALIDAS.format(tipo=self.tipo) + (self.parte_pk or CLAVE_TEMPORAL)

    def _vacia(self) -> dict:
        salida = {"id": generar_uid()}
        for campo, _, tipo_campo in self.campos:
            salida[campo] = None if tipo_campo == CAMPO_ENTERO else ""
        return salida

    def _desde_fila(self, fila: dict) -> dict:
        salida = {"id": str(fila.get("id") or generar_uid())}
        for campo, _, tipo_campo in self.campos:
            valor = fila.get(campo)
            salida[campo] = valor if tipo_campo == CAMPO_ENTERO else (valor or "")
        return salida

    # ----------------------------
    # CARGA
    # ----------------------------
    def cargar(self) -> list[dict]:
        """
        Carga las salidas del almacén local y, si hay backend y parte, las remotas.

        Raises:
            ErrorBackend: Si la consulta remota falla (lo local ya está cargado).
        """
        guardadas = self.almacen.get_json(self.clave_local, [])
        self.salidas = [self._desde_fila(s) for s in guardadas if isinstance(s, dict)] \
            if isinstance(guardadas, list) else []

        if self.remoto and self.parte_pk:
            filas, _ = self.model.select(filters={"parte_pk": self.parte_pk}, order_by=["orden", "created_at"])
            if filas:
                self.salidas = [self._desde_fila(f) for f in filas]
        return self.salidas

    # ----------------------------
    # EDICIÓN
    # ----------------------------
    def agregar(self) -> dict:
        salida = self._vacia()
        self.salidas.append(salida)
        self.guardar_local()
        return salida

    def eliminar(self, salida_id: str) -> bool:
        restantes = [s for s in self.salidas if s["id"] != salida_id]
        if len(restantes) == len(self.salidas):
            return False
        self.salidas = restantes
        self.guardar_local()
        return True

    def actualizar(self, salida_id: str, campo: str, valor):
        """
        Modifica un campo de una salida.

        Raises:
            KeyError: Si la salida no existe.
            ValueError: Si el campo no pertenece al tipo o el valor es inválido.
        """
        tipos = {c: t for c, _, t in self.campos}
        if campo not in tipos:
            raise ValueError(f"Campo desconocido para {self.tipo}: '{campo}'")
        salida = next((s for s in self.salidas if s["id"] == salida_id), None)
        if salida is None:
            raise KeyError(salida_id)

        if tipos[campo] == CAMPO_HORA:
            valor = Sanitizer.limpiar_hora(valor)
        elif tipos[campo] == CAMPO_ENTERO:
            valor = Sanitizer.limpiar_entero(valor)
        else:
            valor = (valor or "").strip()

        salida[campo] = valor
        self.guardar_local()

    # ----------------------------
    # PERSISTENCIA
    # ----------------------------
    def guardar_local(self):
        self.almacen.set_json(self.clave_local, self.salidas)

    def guardar_remoto(self) -> int:
        """
        Sustituye en el backend las salidas del parte (borrar e insertar).

        Returns:
            int: Número de salidas enviadas.

        Raises:
            BackendNoConfigurado: En modo degradado (las salidas quedan en local).
            SinParteVinculado: Si no hay parte diario asociado.
            ErrorBackend: Si el backend rechaza la operación.
        """
        if not self.remoto:
            raise BackendNoConfigurado("Backend no configurado. Las salidas se han guardado en local.")
        if not self.parte_pk:
            raise SinParteVinculado()

        self.model.delete({"parte_pk": self.parte_pk})
        payload = []
        for orden, salida in enumerate(self.salidas):
            fila = {"id": salida["id"], "parte_pk": self.parte_pk, "orden": orden}
            for campo, _, tipo_campo in self.campos:
                valor = salida.get(campo)
                fila[campo] = valor if tipo_campo == CAMPO_ENTERO else (valor or None)
            payload.append(fila)
        enviadas = self.model.insert(payload)
        logger.info("%d salidas (%s) guardadas para el parte %s", enviadas, self.tipo, self.parte_pk)
        return enviadas
