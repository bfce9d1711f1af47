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

from config.mappings import CLAVE_COMPONENTES, CLAVES_COMPONENTES_LEGADO
from database.schemas import Componente
from services.almacen_local import AlmacenLocal
from utilities.uid import generar_uid

logger = logging.getLogger(__name__)


class ServicioComponentes:
    """
    Gestión de la dotación (componentes) guardada en el almacén local.

    La clave canónica es `cuadernillo.componentes`. Si no existe, se migra
    una única vez la primera clave heredada que tenga datos.
    """

    def __init__(self, almacen: AlmacenLocal):
        self.almacen = almacen

    def migrar_legado(self):
        """Pasa a la clave canónica la dotación de una clave heredada, si aún no existe.

        Se llama antes de borrar las claves heredadas para no perder la dotación.
        """
        if self.almacen.get(CLAVE_COMPONENTES) is not None:
            return
        for clave in CLAVES_COMPONENTES_LEGADO:
            datos = self.almacen.get_json(clave)
            if isinstance(datos, list):
                logger.info("Migrando %d componentes desde '%s'", len(datos), clave)
                self.almacen.set_json(CLAVE_COMPONENTES, datos)
                break
        for clave in CLAVES_COMPONENTES_LEGADO:
            self.almacen.remove(clave)

    def _leer_crudo(self) -> list:
        self.migrar_legado()
        datos = self.almacen.get_json(CLAVE_COMPONENTES, [])
        return datos if isinstance(datos, list) else []

    def listar(self) -> list[Componente]:
        """
        Devuelve la dotación actual en orden de alta.

        Las entradas sin id (versiones antiguas) reciben uno nuevo y se
        reescriben para que las filas del parte puedan referenciarlas.
        """
        componentes = []
        reparar = False
        for d in self._leer_crudo():
            if not isinstance(d, dict):
                continue
            if not d.get("id"):
                d["id"] = generar_uid()
                reparar = True
            componentes.append(Componente(
                id=str(d["id"]),
                nombre=str(d.get("nombre") or "").strip(),
                apellidos=str(d.get("apellidos") or "").strip(),
                numero=str(d.get("numero") or "").strip(),
            ))
        if reparar:
            self._guardar(componentes)
        return componentes

    def _guardar(self, componentes: list[Componente]):
        self.almacen.set_json(CLAVE_COMPONENTES, [
            {"id": c.id, "nombre": c.nombre, "apellidos": c.apellidos, "numero": c.numero or None}
            for c in componentes
        ])

    @staticmethod
    def puede_crear(nombre: str, apellidos: str) -> bool:
        return bool((nombre or "").strip()) and bool((apellidos or "").strip())

    def crear(self, nombre: str, apellidos: str, numero: str = "") -> Componente:
        """
        Añade un componente al final de la dotación.

        Raises:
            ValueError: Si falta el nombre o los apellidos.
        """
        if not self.puede_crear(nombre, apellidos):
            raise ValueError("Nombre y apellidos son obligatorios")
        nuevo = Componente(
            id=generar_uid(),
            nombre=nombre.strip(),
            apellidos=apellidos.strip(),
            numero=(numero or "").strip(),
        )
        componentes = self.listar()
        componentes.append(nuevo)
        self._guardar(componentes)
        logger.info("Componente añadido: %s", nuevo.nombre_completo)
        return nuevo

    def eliminar(self, componente_id: str) -> bool:
        componentes = self.listar()
        restantes = [c for c in componentes if c.id != componente_id]
        if len(restantes) == len(componentes):
            return False
        self._guardar(restantes)
        return True
