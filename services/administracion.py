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

import csv
import logging
import math

import pandas as pd

from config.mappings import (
    COLUMNAS_EXPORTACION, MODO_BUSQUEDA_CENTRO, MODO_BUSQUEDA_COMPONENTE, TIPO_UNIDAD, TIPO_CASETA
)
from database import config
from database.schemas import ResultadoBusqueda
from models.cuadernillo_model import CuadernilloModel
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)


def unidad_o_caseta(fila: dict) -> str:
    """Nombre del centro de una fila según su tipo."""
    if fila.get("tipo") == TIPO_UNIDAD:
        return fila.get("unidad") or ""
    if fila.get("tipo") == TIPO_CASETA:
        return fila.get("caseta") or ""
    return ""


def jornada_texto(fila: dict) -> str:
    ini = fila.get("jornada_ini") or ""
    fin = fila.get("jornada_fin") or ""
    return f"{ini} – {fin}" if ini or fin else ""


def total_paginas(total: int, tam_pagina: int) -> int:
    """Número de páginas para `total` filas; nunca menor que 1."""
    return max(1, math.ceil(total / tam_pagina)) if tam_pagina > 0 else 1


def nombre_archivo_csv(fecha: str, pagina: int) -> str:
    return f"cuadernillo_{fecha}_p{pagina + 1}.csv"


class ServicioAdministracion:
    """
    Consulta del cuadernillo por día para el administrador.

    El acceso está protegido por un inicio de sesión simple con las
    credenciales ADMIN_USER / ADMIN_PASS de la configuración. La sesión solo
    dura lo que vive la instancia.
    """

    def __init__(self, model: CuadernilloModel | None = None):
        self.model = model or CuadernilloModel()
        self.autenticado = False

    # ----------------------------
    # ACCESO
    # ----------------------------
    def autenticar(self, usuario: str, clave: str) -> bool:
        """
        Valida las credenciales. El usuario se compara sin tildes ni mayúsculas.

        Returns:
            bool: True si son correctas (queda autenticado).
        """
        usuario_norm = Sanitizer.quitar_tildes(usuario).strip().lower()
        esperado = Sanitizer.quitar_tildes(config.ADMIN_USER).strip().lower()
        self.autenticado = usuario_norm == esperado and clave == config.ADMIN_PASS
        if not self.autenticado:
            logger.warning("Intento de acceso a administración con credenciales incorrectas")
        return self.autenticado

    def cerrar_sesion(self):
        self.autenticado = False

    # ----------------------------
    # CONSULTA
    # ----------------------------
    def buscar(self, fecha: str, modo: str = MODO_BUSQUEDA_CENTRO, texto: str = "",
               pagina: int = 0, tam_pagina: int = 100) -> ResultadoBusqueda:
        """
        Busca las filas de un día, filtradas y paginadas.

        Args:
            fecha (str): Día (YYYY-MM-DD).
            modo (str): 'centro' o 'componente'.
            texto (str): Texto parcial, sin distinguir mayúsculas.
            pagina (int): Página empezando en 0.
            tam_pagina (int): Filas por página.

        Returns:
            ResultadoBusqueda: Filas de la página, total y número de páginas.

        Raises:
            PermissionError: Si no se ha iniciado sesión.
            ValueError: Si el modo no es válido.
            ErrorBackend: Si la consulta falla o no hay backend.
        """
        if not self.autenticado:
            raise PermissionError("Inicia sesión como administrador")
        if modo not in (MODO_BUSQUEDA_CENTRO, MODO_BUSQUEDA_COMPONENTE):
            raise ValueError(f"Modo de búsqueda desconocido: {modo}")

        pagina = max(0, pagina)
        filas, total = self.model.buscar_por_dia(
            fecha, modo=modo, texto=texto, offset=pagina * tam_pagina, limit=tam_pagina
        )
        return ResultadoBusqueda(
            filas=filas,
            total=total,
            pagina=pagina,
            total_paginas=total_paginas(total, tam_pagina),
        )

    # ----------------------------
    # EXPORTACIÓN
    # ----------------------------
    @staticmethod
    def exportar_csv(filas: list[dict], ruta: str) -> int:
        """
        Exporta las filas visibles a CSV con todos los campos entre comillas.

        Returns:
            int: Número de filas escritas.
        """
        datos = [
            {**fila, "unidad_caseta": unidad_o_caseta(fila)}
            for fila in filas
        ]
        df = pd.DataFrame(datos, columns=COLUMNAS_EXPORTACION)
        df.to_csv(ruta, index=False, quoting=csv.QUOTE_ALL, encoding="utf-8")
        logger.info("📄 %d filas exportadas a %s", len(df), ruta)
        return len(df)
