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

"""Constantes de dominio del cuadernillo.

Este módulo define los tipos de instalación, los códigos de asistencia del
parte diario, las claves del almacén local (canónicas y heredadas) y la
estructura de campos de cada tipo de salida.
"""

# Tipos de instalación seleccionables en el último nivel del selector
TIPO_UNIDAD = "unidad"
TIPO_CASETA = "caseta"
TIPOS_INSTALACION = {
    TIPO_UNIDAD: "Unidad",
    TIPO_CASETA: "Caseta",
}

# Palabras ignoradas al comparar nombres de unidades con municipios
STOPWORDS_NOMBRES = frozenset({"de", "la", "del", "los", "las", "y"})

# Códigos de asistencia del parte diario ("" = sin asignar)
CODIGOS_JORNADA = {
    "": "Sin código",
    "JR": "Jornada",
    "TH": "Turno de horas",
    "TC": "Turno completo",
    "V": "Vacaciones",
    "B": "Baja",
}
"""dict: Código → descripción. El orden es el que muestran los desplegables."""

# ---------------- ALMACÉN LOCAL ----------------
CLAVE_SELECCION = "cuadernillo.currentSelection"
CLAVE_COMPONENTES = "cuadernillo.componentes"
PREFIJO_PARTE = "cuadernillo.parte:"
PREFIJO_SALIDAS = "cuadernillo.{tipo}:"

# Claves de versiones anteriores. Se migran una vez y luego se borran.
CLAVES_COMPONENTES_LEGADO = ["cuadernilo:componentes", "infoex:componentes"]
CLAVES_LEGADO = ["infoex:header"] + CLAVES_COMPONENTES_LEGADO

# ---------------- SALIDAS ----------------
CAMPO_TEXTO = "texto"
CAMPO_HORA = "hora"
CAMPO_ENTERO = "entero"

CAMPOS_SALIDA = {
    "incendios": {
        "tabla": "incendios",
        "titulo": "Salidas a incendios",
        "campos": [
            ("termino_municipal", "Término municipal", CAMPO_TEXTO),
            ("h_movilizacion", "Hora movilización", CAMPO_HORA),
            ("h_salida", "Hora salida al incendio", CAMPO_HORA),
            ("h_llegada_inc", "Hora llegada al incendio", CAMPO_HORA),
            ("h_regreso", "Hora regreso del incendio", CAMPO_HORA),
            ("h_llegada_base", "Hora llegada a base", CAMPO_HORA),
            ("num_componentes", "Nº componentes", CAMPO_ENTERO),
        ],
    },
    "trabajos": {
        "tabla": "salidas_trabajo",
        "titulo": "Salidas por trabajos",
        "campos": [
            ("destino", "Destino", CAMPO_TEXTO),
            ("motivo", "Motivo", CAMPO_TEXTO),
            ("h_salida", "Hora salida", CAMPO_HORA),
            ("h_llegada", "Hora llegada al destino", CAMPO_HORA),
            ("h_regreso", "Hora regreso a base", CAMPO_HORA),
            ("num_componentes", "Nº componentes", CAMPO_ENTERO),
        ],
    },
}
"""dict: Definición de cada tipo de salida: tabla remota y lista (campo, etiqueta, tipo)."""

# ---------------- ADMINISTRACIÓN ----------------
MODO_BUSQUEDA_CENTRO = "centro"
MODO_BUSQUEDA_COMPONENTE = "componente"
TAMANOS_PAGINA = [50, 100, 200]

COLUMNAS_EXPORTACION = [
    "fecha",
    "unidad_caseta",
    "componente_nombre",
    "componente_apellidos",
    "componente_numero",
    "codigo",
    "jornada_ini",
    "jornada_fin",
    "horas_extra",
]

MESES = [
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
]
