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

from database.base_model import BaseCRUDModel
from database.models import Cuadernillo
from config.mappings import MODO_BUSQUEDA_CENTRO, MODO_BUSQUEDA_COMPONENTE

ORDEN_ADMINISTRACION = ["tipo", "unidad", "caseta", "componente_apellidos"]


class CuadernilloModel(BaseCRUDModel):
    """Modelo CRUD para las filas aplanadas del cuadernillo."""
    model = Cuadernillo

    def buscar_por_dia(self, fecha: str, modo: str = MODO_BUSQUEDA_CENTRO, texto: str = "",
                       offset: int = 0, limit: int = 100):
        """Consulta paginada de un día para la pantalla de administración.

        Args:
            fecha (str): Día en formato YYYY-MM-DD.
            modo (str): 'centro' busca en unidad/caseta; 'componente' en nombre/apellidos.
            texto (str): Texto parcial a buscar. Vacío = sin filtro.
            offset (int): Filas a saltar.
            limit (int): Tamaño de página.

        Returns:
            tuple[list[dict], int]: Filas de la página y total del día filtrado.
        """
        texto = (texto or "").strip()
        or_fields = None
        if texto:
            if modo == MODO_BUSQUEDA_COMPONENTE:
                or_fields = [("componente_nombre", texto), ("componente_apellidos", texto)]
            else:
                or_fields = [("unidad", texto), ("caseta", texto)]

        return self.select(
            filters={"fecha": fecha},
            or_fields=or_fields,
            order_by=ORDEN_ADMINISTRACION,
            offset=offset,
            limit=limit,
        )

    def de_centro(self, tipo: str, unidad: str | None, caseta: str | None) -> list[dict]:
        """Todas las filas de una unidad o caseta (para resúmenes)."""
        filas, _ = self.select(
            filters={"tipo": tipo, "unidad": unidad, "caseta": caseta},
            order_by=["fecha", "componente_apellidos"],
        )
        return filas

    def reemplazar_parte(self, parte_pk: str, filas: list[dict]):
        """Sustituye las filas aplanadas de un parte (borrar e insertar)."""
        self.delete({"parte_pk": parte_pk})
        self.insert(filas)
