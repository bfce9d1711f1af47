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
from datetime import date

from config.mappings import TIPO_UNIDAD, TIPO_CASETA, TIPOS_INSTALACION
from database.schemas import SeleccionActual
from models.catalogo_model import CatalogoUbicaciones, ZonaCatalogo
from services.sesion import ContextoSesion
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

NIVELES = ("provincia", "zona", "municipio", "tipo", "instancia")


class SeleccionIncompleta(ValueError):
    """Se intentó confirmar sin haber elegido los cinco niveles."""


def calcular_candidatos(tipo: str, municipio: str, zona: ZonaCatalogo | None) -> list[str]:
    """Calcula las instalaciones elegibles para el último nivel del selector.

    Para unidades filtra las de la zona cuyo nombre normalizado contiene el
    municipio normalizado. Para casetas busca el municipio tal cual (sensible
    a mayúsculas) en el mapa de casetas de la zona. Función pura.

    Args:
        tipo (str): 'unidad' o 'caseta'.
        municipio (str): Municipio elegido.
        zona (ZonaCatalogo | None): Entrada de la zona elegida.

    Returns:
        list[str]: Candidatos en el orden del catálogo.
    """
    if not tipo or not municipio or zona is None:
        return []

    if tipo == TIPO_UNIDAD:
        objetivo = Sanitizer.normalizar_nombre(municipio)
        return [u for u in zona.unidades if objetivo in Sanitizer.normalizar_nombre(u)]

    if tipo == TIPO_CASETA:
        return list(zona.casetas.get(municipio, ()))

    return []


class SelectorUbicacion:
    """Selector en cascada provincia → zona → municipio → tipo → instancia.

    Elegir un valor en un nivel vacía todos los niveles posteriores. Un nivel
    solo admite valor si el anterior está elegido (la interfaz deshabilita
    el control); un valor prematuro se ignora.
    """

    def __init__(self, catalogo: CatalogoUbicaciones):
        self.catalogo = catalogo
        self.provincia = ""
        self.zona = ""
        self.municipio = ""
        self.tipo = ""
        self.instancia = ""

    # ----------------------------
    # TRANSICIONES
    # ----------------------------
    def _fijar(self, nivel: str, valor):
        indice = NIVELES.index(nivel)
        valor = (valor or "").strip()

        if valor and indice > 0 and not getattr(self, NIVELES[indice - 1]):
            logger.debug("Ignorado %s='%s': falta %s", nivel, valor, NIVELES[indice - 1])
            return

        setattr(self, nivel, valor)
        for posterior in NIVELES[indice + 1:]:
            setattr(self, posterior, "")

    def set_provincia(self, valor):
        self._fijar("provincia", valor)

    def set_zona(self, valor):
        self._fijar("zona", valor)

    def set_municipio(self, valor):
        self._fijar("municipio", valor)

    def set_tipo(self, valor):
        self._fijar("tipo", valor)

    def set_instancia(self, valor):
        self._fijar("instancia", valor)

    def nivel_habilitado(self, nivel: str) -> bool:
        """True si el control de `nivel` debe estar activo (el nivel anterior tiene valor)."""
        indice = NIVELES.index(nivel)
        return indice == 0 or bool(getattr(self, NIVELES[indice - 1]))

    # ----------------------------
    # OPCIONES DE CADA NIVEL
    # ----------------------------
    def opciones_provincias(self) -> list[str]:
        return self.catalogo.provincias()

    def opciones_zonas(self) -> list[str]:
        return self.catalogo.zonas(self.provincia) if self.provincia else []

    def opciones_municipios(self) -> list[str]:
        return self.catalogo.municipios(self.provincia, self.zona) if self.zona else []

    def opciones_tipos(self) -> dict:
        return dict(TIPOS_INSTALACION) if self.municipio else {}

    def candidatos(self) -> list[str]:
        return calcular_candidatos(self.tipo, self.municipio, self.catalogo.zona(self.provincia, self.zona))

    # ----------------------------
    # CONFIRMACIÓN
    # ----------------------------
    def puede_confirmar(self) -> bool:
        return all(getattr(self, nivel) for nivel in NIVELES)

    def nombre_centro(self) -> str:
        """Nombre visible: la caseta si el tipo es caseta, si no el municipio."""
        return self.instancia if self.tipo == TIPO_CASETA else self.municipio

    def confirmar(self, contexto: ContextoSesion, hoy: date | None = None) -> SeleccionActual:
        """
        Persiste la selección como instantánea de sesión.

        Reutiliza la clave de sesión existente y limpia las dotaciones
        guardadas con claves heredadas.

        Args:
            contexto (ContextoSesion): Dueño de la instantánea.
            hoy (date, optional): Fecha del cuadernillo. Por defecto, hoy.

        Returns:
            SeleccionActual: La instantánea guardada.

        Raises:
            SeleccionIncompleta: Si falta algún nivel.
        """
        if not self.puede_confirmar():
            faltan = [n for n in NIVELES if not getattr(self, n)]
            raise SeleccionIncompleta(f"Faltan niveles por elegir: {', '.join(faltan)}")

        sel = contexto.guardar_seleccion(
            provincia=self.provincia,
            zona=self.zona,
            municipio=self.municipio,
            tipo=self.tipo,
            seleccion=self.instancia,
            nombre_centro=self.nombre_centro(),
            fecha=(hoy or date.today()).isoformat(),
        )
        contexto.limpiar_claves_legado()
        return sel
