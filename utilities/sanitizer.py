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
import math
import re
import unicodedata
import pandas as pd
from typing import Any

from config.mappings import STOPWORDS_NOMBRES

_NO_ALFANUMERICO = re.compile(r"[^a-z0-9]+")
_HORA = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class Sanitizer:
    """Clase utilitaria estática para limpieza y validación de datos."""

    @staticmethod
    def quitar_tildes(texto: Any) -> str:
        """
        Descompone el texto (NFD) y elimina las marcas diacríticas.

        Args:
            texto (Any): Texto de entrada.

        Returns:
            str: Texto sin tildes ni diéresis. La Ñ queda como N.
        """
        if texto is None or (not isinstance(texto, str) and pd.isna(texto)):
            return ""
        txt = unicodedata.normalize("NFD", str(texto))
        return "".join(c for c in txt if unicodedata.category(c) != "Mn")

    @staticmethod
    def normalizar_nombre(texto: Any) -> str:
        """
        Normaliza un nombre de unidad o municipio para compararlos.

        Quita tildes, pasa a minúsculas, convierte cualquier tramo no
        alfanumérico en un espacio y descarta los artículos y conectores
        ("de", "la", "del", "los", "las", "y"). Es idempotente.

        Args:
            texto (Any): Texto de entrada.

        Returns:
            str: Texto normalizado, p. ej. "Unidad de Cáceres-2" -> "unidad caceres 2".
        """
        txt = Sanitizer.quitar_tildes(texto).lower()
        tokens = _NO_ALFANUMERICO.sub(" ", txt).split()
        return " ".join(t for t in tokens if t not in STOPWORDS_NOMBRES)

    @staticmethod
    def limpiar_hora(valor: Any) -> str:
        """
        Valida una hora "HH:MM" (acepta "H:MM" y rellena con cero).

        Args:
            valor (Any): Valor de entrada. Vacío o None significan "sin hora".

        Returns:
            str: Hora normalizada o cadena vacía.

        Raises:
            ValueError: Si el valor no es una hora válida.
        """
        if valor is None:
            return ""
        txt = str(valor).strip()
        if txt == "":
            return ""
        if re.match(r"^\d:\d\d$", txt):
            txt = "0" + txt
        if not _HORA.match(txt):
            raise ValueError(f"Hora inválida: '{valor}' (formato HH:MM)")
        return txt

    @staticmethod
    def limpiar_horas_extra(valor: Any):
        """
        Convierte el texto de horas extra en horas decimales.

        Acepta "2", "2.5", "2,5" y "02:30". Valores vacíos, no numéricos,
        negativos o infinitos devuelven None.

        Args:
            valor (Any): Valor de entrada.

        Returns:
            float | None: Horas en decimal.
        """
        if valor is None:
            return None
        s_val = str(valor).strip()
        if s_val in ["", "-", "nan", "None"]:
            return None
        if ":" in s_val:
            partes = s_val.split(":")
            if len(partes) != 2 or not all(p.isdigit() for p in partes):
                return None
            horas, minutos = int(partes[0]), int(partes[1])
            if minutos >= 60:
                return None
            return round(horas + minutos / 60, 2)
        try:
            horas = float(s_val.replace(",", "."))
        except ValueError:
            return None
        return horas if math.isfinite(horas) and horas >= 0 else None

    @staticmethod
    def limpiar_entero(valor: Any):
        """
        Convierte un número de componentes a entero no negativo.

        Returns:
            int | None: None si el valor está vacío.

        Raises:
            ValueError: Si no es un entero o es negativo.
        """
        if valor is None or str(valor).strip() == "":
            return None
        numero = int(str(valor).strip())
        if numero < 0:
            raise ValueError("El número no puede ser negativo")
        return numero
