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

from config.mappings import CLAVE_SELECCION, CLAVES_LEGADO
from database.schemas import SeleccionActual
from services.almacen_local import AlmacenLocal
from services.componentes import ServicioComponentes
from utilities.uid import generar_uid

logger = logging.getLogger(__name__)


class ContextoSesion:
    """
    Dueño único de la selección actual guardada en el almacén local.

    Todas las pantallas leen y escriben la instantánea a través de esta clase;
    ninguna accede a la clave directamente.
    """

    def __init__(self, almacen: AlmacenLocal):
        self.almacen = almacen

    def leer_seleccion(self) -> SeleccionActual | None:
        """
        Recupera la instantánea guardada.

        Returns:
            SeleccionActual | None: None si no hay selección o el JSON está corrupto.
        """
        data = self.almacen.get_json(CLAVE_SELECCION)
        if not isinstance(data, dict):
            return None
        return SeleccionActual.from_dict(data)

    def guardar_seleccion(self, provincia, zona, municipio, tipo, seleccion, nombre_centro, fecha) -> SeleccionActual:
        """
        Sustituye la instantánea conservando la clave de sesión existente.

        La primera vez se genera una clave nueva; las siguientes se reutiliza.

        Returns:
            SeleccionActual: La instantánea persistida.
        """
        existente = self.leer_seleccion()
        session_key = existente.session_key if existente and existente.session_key else generar_uid()

        sel = SeleccionActual(
            session_key=session_key,
            provincia=provincia,
            zona=zona,
            municipio=municipio,
            tipo=tipo,
            seleccion=seleccion,
            nombre_centro=nombre_centro,
            fecha=fecha,
        )
        self.almacen.set_json(CLAVE_SELECCION, sel.to_dict())
        logger.info("Selección guardada: %s / %s (%s)", sel.tipo, sel.seleccion, sel.fecha)
        return sel

    def limpiar_seleccion(self):
        self.almacen.remove(CLAVE_SELECCION)

    def limpiar_claves_legado(self):
        """Borra cabeceras y dotaciones guardadas con esquemas de claves antiguos.

        La dotación heredada se migra antes a la clave canónica.
        """
        ServicioComponentes(self.almacen).migrar_legado()
        for clave in CLAVES_LEGADO:
            if self.almacen.get(clave) is not None:
                logger.info("Eliminando clave heredada '%s'", clave)
                self.almacen.remove(clave)
