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
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

import database.conexion as conexion
import database.models  # noqa: F401  (registra las tablas en Base.metadata)

logger = logging.getLogger(__name__)

TABLAS_ESPERADAS = ["partes", "parte_filas", "incendios", "salidas_trabajo", "cuadernillo"]


def inicializar_base_de_datos() -> bool:
    """
    Crea la estructura de la base de datos si no existe.

    En modo degradado (sin backend configurado) no hace nada y lo avisa.

    Returns:
        bool: True si el backend quedó listo, False en modo degradado o error.
    """
    if conexion.engine is None:
        logger.warning("⚠️ Sin backend remoto: los datos solo se guardarán en local.")
        return False

    logger.info("🔄 Inicializando base de datos (%s)...", conexion.engine.dialect.name)
    try:
        conexion.Base.metadata.create_all(bind=conexion.engine)
    except SQLAlchemyError as e:
        logger.error("❌ Error crítico creando tablas: %s", e)
        return False

    faltantes = [t for t in TABLAS_ESPERADAS if not inspect(conexion.engine).has_table(t)]
    if faltantes:
        logger.error("❌ Tablas no creadas: %s", ", ".join(faltantes))
        return False

    logger.info("✅ Estructura de tablas verificada/creada.")
    return True
