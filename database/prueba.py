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

import calendar
import logging
import random
from datetime import date

from faker import Faker

from config.mappings import TIPO_UNIDAD
from database.schemas import SeleccionActual, Componente
from database.setup import inicializar_base_de_datos
from models.catalogo_model import cargar_catalogo
from models.cuadernillo_model import CuadernilloModel
from models.selector_model import calcular_candidatos
from services.control_diario import clave_parte
from utilities.uid import generar_uid

logger = logging.getLogger(__name__)

# Peso de cada código en los datos de prueba (la mayoría de días son jornada)
PESOS_CODIGOS = {"JR": 60, "TH": 10, "TC": 15, "V": 10, "B": 5}
HORAS_EXTRA_POSIBLES = [None, None, None, 1.0, 1.5, 2.5]


def generar_registros_demo(seleccion: SeleccionActual, anio: int, mes: int,
                           n_componentes: int = 6, semilla: int | None = None):
    """Genera una dotación ficticia y sus filas de cuadernillo para un mes completo.

    Args:
        seleccion (SeleccionActual): Centro al que se asignan las filas.
        anio (int): Año.
        mes (int): Mes (1-12).
        n_componentes (int, optional): Tamaño de la dotación. Defaults to 6.
        semilla (int, optional): Semilla para obtener datos reproducibles.

    Returns:
        tuple[list[Componente], list[dict]]: Dotación y filas listas para insertar.
    """
    faker = Faker("es_ES")
    rnd = random.Random(semilla)
    if semilla is not None:
        faker.seed_instance(semilla)

    componentes = [
        Componente(
            id=generar_uid(),
            nombre=faker.first_name(),
            apellidos=f"{faker.last_name()} {faker.last_name()}",
            numero=str(rnd.randint(100, 999)),
        )
        for _ in range(n_componentes)
    ]

    codigos = list(PESOS_CODIGOS)
    pesos = list(PESOS_CODIGOS.values())
    filas = []
    for dia in range(1, calendar.monthrange(anio, mes)[1] + 1):
        fecha = date(anio, mes, dia)
        horas_extra = rnd.choice(HORAS_EXTRA_POSIBLES)
        for c in componentes:
            codigo = rnd.choices(codigos, weights=pesos)[0]
            trabaja = codigo in ("JR", "TH", "TC")
            filas.append({
                **seleccion.contexto_fila(),
                "parte_pk": clave_parte(seleccion, fecha),
                "fecha": fecha.isoformat(),
                "componente_nombre": c.nombre,
                "componente_apellidos": c.apellidos,
                "componente_numero": c.numero,
                "codigo": codigo,
                "abono_df": False,
                "superior_categoria": rnd.random() < 0.1,
                "jornada_ini": "08:00" if trabaja else None,
                "jornada_fin": "15:00" if trabaja else None,
                "horas_extra": horas_extra,
            })
    return componentes, filas


def seleccion_demo() -> SeleccionActual:
    """Primera unidad del catálogo como centro de ejemplo."""
    catalogo = cargar_catalogo()
    provincia = catalogo.provincias()[0]
    zona = catalogo.zonas(provincia)[0]
    municipio = catalogo.municipios(provincia, zona)[0]
    unidad = calcular_candidatos(TIPO_UNIDAD, municipio, catalogo.zona(provincia, zona))[0]
    return SeleccionActual(
        session_key=generar_uid(),
        provincia=provincia,
        zona=zona,
        municipio=municipio,
        tipo=TIPO_UNIDAD,
        seleccion=unidad,
        nombre_centro=municipio,
        fecha=date.today().isoformat(),
    )


def poblar_demo(seleccion: SeleccionActual | None = None, anio: int | None = None, mes: int | None = None,
                n_componentes: int = 6, semilla: int | None = None) -> int:
    """Inserta en el backend un mes de datos ficticios.

    Returns:
        int: Filas de cuadernillo insertadas.

    Raises:
        BackendNoConfigurado: Si no hay backend.
    """
    hoy = date.today()
    seleccion = seleccion or seleccion_demo()
    _, filas = generar_registros_demo(seleccion, anio or hoy.year, mes or hoy.month, n_componentes, semilla)
    insertadas = CuadernilloModel().insert(filas)
    logger.info("✅ Se han creado %d filas de prueba para %s.", insertadas, seleccion.seleccion)
    return insertadas


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if inicializar_base_de_datos():
        poblar_demo()
