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

import pandas as pd

from config.mappings import CODIGOS_JORNADA, MESES
from database.schemas import SeleccionActual
from models.cuadernillo_model import CuadernilloModel

logger = logging.getLogger(__name__)

CODIGOS_RESUMEN = [c for c in CODIGOS_JORNADA if c]
COLUMNAS_CUADERNILLO = ["fecha", "componente_nombre", "componente_apellidos", "codigo", "horas_extra"]


class ServicioResumen:
    """
    Resúmenes mensual y anual del cuadernillo de una unidad o caseta.

    Trabaja con DataFrames de pandas construidos a partir de las filas
    aplanadas del backend. Sin backend lanza BackendNoConfigurado.
    """

    def __init__(self, seleccion: SeleccionActual, model: CuadernilloModel | None = None):
        self.seleccion = seleccion
        self.model = model or CuadernilloModel()

    def _dataframe(self, prefijo_fecha: str) -> pd.DataFrame:
        filas = self.model.de_centro(self.seleccion.tipo, self.seleccion.unidad, self.seleccion.caseta)
        df = pd.DataFrame(filas, columns=COLUMNAS_CUADERNILLO)
        if df.empty:
            return df
        df["fecha"] = df["fecha"].fillna("")
        df["codigo"] = df["codigo"].fillna("")
        return df[df["fecha"].str.startswith(prefijo_fecha) & (df["codigo"] != "")].copy()

    def resumen_mensual(self, anio: int, mes: int) -> pd.DataFrame:
        """
        Cuenta los códigos de asistencia de cada componente en un mes.

        Args:
            anio (int): Año.
            mes (int): Mes (1-12).

        Returns:
            pd.DataFrame: Índice "Componente" (apellidos, nombre), una columna por
            código y la columna "Total".
        """
        df = self._dataframe(f"{anio:04d}-{mes:02d}")
        if df.empty:
            tabla = pd.DataFrame(columns=CODIGOS_RESUMEN, dtype=int)
        else:
            df["componente"] = df["componente_apellidos"].fillna("") + ", " + df["componente_nombre"].fillna("")
            tabla = pd.crosstab(df["componente"], df["codigo"]).reindex(columns=CODIGOS_RESUMEN, fill_value=0)

        tabla["Total"] = tabla[CODIGOS_RESUMEN].sum(axis=1)
        tabla.index.name = "Componente"
        tabla.columns.name = None
        return tabla

    def horas_extra_mes(self, anio: int, mes: int) -> float:
        """Suma las horas extra del mes (una cifra por día, compartida por todas sus filas)."""
        df = self._dataframe(f"{anio:04d}-{mes:02d}")
        if df.empty:
            return 0.0
        return float(df.drop_duplicates("fecha")["horas_extra"].fillna(0).sum())

    def resumen_anual(self, anio: int) -> pd.DataFrame:
        """
        Cuenta los códigos de asistencia por mes de un año.

        Returns:
            pd.DataFrame: Doce filas (índice "Mes" con los nombres de MESES) y una
            columna por código. Los meses sin datos quedan a cero.
        """
        df = self._dataframe(f"{anio:04d}-")
        if df.empty:
            tabla = pd.DataFrame(0, index=range(1, 13), columns=CODIGOS_RESUMEN)
        else:
            df["mes"] = df["fecha"].str.slice(5, 7).astype(int)
            tabla = pd.crosstab(df["mes"], df["codigo"]).reindex(
                index=range(1, 13), columns=CODIGOS_RESUMEN, fill_value=0
            )

        tabla.index = MESES
        tabla.index.name = "Mes"
        tabla.columns.name = None
        return tabla

    @staticmethod
    def exportar_excel(tablas: dict[str, pd.DataFrame], ruta: str):
        """
        Guarda uno o varios resúmenes en un libro Excel (una hoja por tabla).

        Args:
            tablas (dict[str, pd.DataFrame]): Nombre de hoja → tabla.
            ruta (str): Archivo .xlsx de destino.
        """
        with pd.ExcelWriter(ruta, engine="openpyxl") as writer:
            for hoja, tabla in tablas.items():
                tabla.to_excel(writer, sheet_name=hoja[:31])
        logger.info("📊 Resumen exportado a %s", ruta)
