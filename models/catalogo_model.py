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
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from database import config

logger = logging.getLogger(__name__)

# ---------- caché en proceso (el catálogo se carga una vez) ----------
_CATALOGO_CACHE = {}


class CatalogoInvalido(ValueError):
    """El catálogo de ubicaciones no tiene la estructura esperada."""


@dataclass(frozen=True)
class ZonaCatalogo:
    """Entrada de una zona: municipios, unidades, alias y casetas por municipio."""
    nombre: str
    municipios: tuple = ()
    unidades: tuple = ()
    alias: tuple = ()
    casetas: Mapping[str, tuple] = field(default_factory=lambda: MappingProxyType({}))


def _lista_textos(valor, ruta: str, obligatoria: bool) -> tuple:
    if valor is None:
        if obligatoria:
            raise CatalogoInvalido(f"{ruta}: falta la lista")
        return ()
    if not isinstance(valor, list) or not all(isinstance(v, str) for v in valor):
        raise CatalogoInvalido(f"{ruta}: debe ser una lista de textos")
    return tuple(valor)


def _parsear_zona(nombre: str, data, ruta: str) -> ZonaCatalogo:
    if not isinstance(data, dict):
        raise CatalogoInvalido(f"{ruta}: la zona debe ser un objeto")

    casetas_raw = data.get("casetas")
    if casetas_raw is None:
        casetas_raw = {}
    if not isinstance(casetas_raw, dict):
        raise CatalogoInvalido(f"{ruta}.casetas: debe ser un objeto municipio -> lista")
    casetas = {
        municipio: _lista_textos(lista, f"{ruta}.casetas.{municipio}", True)
        for municipio, lista in casetas_raw.items()
    }

    return ZonaCatalogo(
        nombre=nombre,
        municipios=_lista_textos(data.get("municipios"), f"{ruta}.municipios", True),
        unidades=_lista_textos(data.get("unidades"), f"{ruta}.unidades", True),
        alias=_lista_textos(data.get("alias"), f"{ruta}.alias", False),
        casetas=MappingProxyType(casetas),
    )


class CatalogoUbicaciones:
    """Catálogo estático provincia → zona → ZonaCatalogo, validado al construirse.

    Las consultas con claves inexistentes devuelven listas vacías; nunca lanzan.
    """

    def __init__(self, raw: dict):
        """
        Args:
            raw (dict): Estructura anidada tal como viene del JSON.

        Raises:
            CatalogoInvalido: Si algún nivel no tiene la forma esperada.
        """
        if not isinstance(raw, dict) or not raw:
            raise CatalogoInvalido("El catálogo debe ser un objeto provincia -> zonas no vacío")

        provincias = {}
        for provincia, zonas in raw.items():
            if not isinstance(zonas, dict):
                raise CatalogoInvalido(f"{provincia}: las zonas deben ser un objeto")
            provincias[provincia] = {
                nombre: _parsear_zona(nombre, data, f"{provincia}.{nombre}")
                for nombre, data in zonas.items()
            }
        self._provincias = provincias

    def provincias(self) -> list[str]:
        return list(self._provincias)

    def zonas(self, provincia: str) -> list[str]:
        return list(self._provincias.get(provincia, {}))

    def zona(self, provincia: str, zona: str) -> ZonaCatalogo | None:
        return self._provincias.get(provincia, {}).get(zona)

    def municipios(self, provincia: str, zona: str) -> list[str]:
        entrada = self.zona(provincia, zona)
        return list(entrada.municipios) if entrada else []


def leer_catalogo(ruta: str) -> CatalogoUbicaciones:
    """Lee y valida el catálogo desde disco.

    Raises:
        FileNotFoundError: Si el archivo no existe.
        CatalogoInvalido: Si el JSON está mal formado o no cumple la estructura.
    """
    if not os.path.exists(ruta):
        raise FileNotFoundError(f"No existe el catálogo de ubicaciones en {ruta}")
    with open(ruta, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogoInvalido(f"JSON inválido en {ruta}: {e}") from e
    catalogo = CatalogoUbicaciones(data)
    logger.info("Catálogo cargado: %d provincias", len(catalogo.provincias()))
    return catalogo


def cargar_catalogo(ruta: str | None = None) -> CatalogoUbicaciones:
    """Devuelve el catálogo de la ruta dada (por defecto CATALOGO_PATH), leído una sola vez."""
    ruta = ruta or config.CATALOGO_PATH
    if ruta not in _CATALOGO_CACHE:
        _CATALOGO_CACHE[ruta] = leer_catalogo(ruta)
    return _CATALOGO_CACHE[ruta]
