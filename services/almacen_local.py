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

import json
import logging
import os

logger = logging.getLogger(__name__)


class AlmacenLocal:
    """
    Almacén clave-valor local persistido en un archivo JSON.

    Los valores son cadenas (normalmente JSON serializado), igual que un
    almacenamiento de navegador. Cada escritura reescribe el archivo completo.
    """

    def __init__(self, ruta: str | None = None):
        """
        Args:
            ruta (str, optional): Archivo donde se persiste. None = solo en memoria.
        """
        self.ruta = ruta
        self._datos = self._leer_archivo()

    def _leer_archivo(self) -> dict:
        if not self.ruta or not os.path.exists(self.ruta):
            return {}
        try:
            with open(self.ruta, "r", encoding="utf-8") as f:
                datos = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Almacén local ilegible (%s); se empieza vacío: %s", self.ruta, e)
            return {}
        if not isinstance(datos, dict):
            logger.warning("Almacén local con formato inesperado; se empieza vacío.")
            return {}
        return {k: v for k, v in datos.items() if isinstance(v, str)}

    def _volcar(self):
        if not self.ruta:
            return
        directorio = os.path.dirname(self.ruta)
        if directorio:
            os.makedirs(directorio, exist_ok=True)
        tmp = f"{self.ruta}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._datos, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.ruta)

    # ----------------------------
    # INTERFAZ CLAVE-VALOR
    # ----------------------------
    def get(self, clave: str) -> str | None:
        return self._datos.get(clave)

    def set(self, clave: str, valor: str):
        self._datos[clave] = valor
        self._volcar()

    def remove(self, clave: str):
        if self._datos.pop(clave, None) is not None:
            self._volcar()

    def claves(self) -> list[str]:
        return list(self._datos)

    # ----------------------------
    # AYUDANTES JSON
    # ----------------------------
    def get_json(self, clave: str, default=None):
        """Lee y decodifica un valor JSON. Si falta o está corrupto devuelve `default`."""
        raw = self.get(clave)
        if not raw:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Valor JSON corrupto en '%s'; se ignora.", clave)
            return default

    def set_json(self, clave: str, valor):
        self.set(clave, json.dumps(valor, ensure_ascii=False))
