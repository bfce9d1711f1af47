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
from database.models import SalidaIncendio, SalidaTrabajo


class SalidaIncendioModel(BaseCRUDModel):
    """Modelo CRUD para las salidas a incendios."""
    model = SalidaIncendio


class SalidaTrabajoModel(BaseCRUDModel):
    """Modelo CRUD para las salidas por trabajos."""
    model = SalidaTrabajo


_MODELOS = {
    "incendios": SalidaIncendioModel,
    "trabajos": SalidaTrabajoModel,
}


def modelo_salidas(tipo: str) -> BaseCRUDModel:
    """Instancia el modelo CRUD del tipo de salida ('incendios' o 'trabajos')."""
    try:
        return _MODELOS[tipo]()
    except KeyError:
        raise ValueError(f"Tipo de salida desconocido: {tipo}") from None
