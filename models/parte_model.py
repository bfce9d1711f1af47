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
from database.models import Parte, ParteFila


class ParteModel(BaseCRUDModel):
    """Modelo CRUD para la cabecera de los partes diarios."""
    model = Parte

    def obtener(self, pk: str) -> dict | None:
        """Devuelve la cabecera del parte o None si aún no existe en el backend."""
        filas, _ = self.select(filters={"pk": pk}, limit=1)
        return filas[0] if filas else None


class ParteFilaModel(BaseCRUDModel):
    """Modelo CRUD para las líneas por componente de un parte."""
    model = ParteFila

    def de_parte(self, parte_pk: str) -> list[dict]:
        filas, _ = self.select(filters={"parte_pk": parte_pk}, order_by=["id"])
        return filas

    def reemplazar(self, parte_pk: str, filas: list[dict]):
        """Sustituye todas las líneas del parte (borrar e insertar, no atómico)."""
        self.delete({"parte_pk": parte_pk})
        self.insert([{**f, "parte_pk": parte_pk} for f in filas])
