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
import sys

from PyQt6.QtCore import QTranslator, QLibraryInfo, QTimer
from PyQt6.QtWidgets import QApplication, QMessageBox
from qt_material import apply_stylesheet

import database.config as config
from controllers.master import MasterController
from database.setup import inicializar_base_de_datos
from models.catalogo_model import CatalogoInvalido, cargar_catalogo

logger = logging.getLogger(__name__)


def crear_aplicacion(argv) -> QApplication:
    """QApplication con los textos de Qt en español y el tema de qt_material."""
    app = QApplication(argv)
    app.setApplicationName(config.APP_TITLE)

    traductor = QTranslator(app)
    if traductor.load("qt_es", QLibraryInfo.path(QLibraryInfo.LibraryPath.TranslationsPath)):
        app.installTranslator(traductor)
    else:
        logger.debug("Traducciones de Qt al español no disponibles")

    apply_stylesheet(app, theme=config.THEME_XML, invert_secondary=True,
                     extra={"font_family": config.FONT_FAMILY})
    return app


def validar_catalogo() -> bool:
    """Carga el catálogo de ubicaciones; si falta o está mal formado avisa y devuelve False."""
    try:
        cargar_catalogo()
    except (FileNotFoundError, CatalogoInvalido) as e:
        logger.error("❌ Catálogo de ubicaciones no válido: %s", e)
        QMessageBox.critical(None, "Catálogo no válido", str(e))
        return False
    return True


def main():
    """
    Arranque de la aplicación.

    1. Configura el logging.
    2. Crea las tablas del backend (o avisa del modo degradado).
    3. Prepara la QApplication y comprueba el catálogo.
    4. Muestra la ventana principal y entra en el bucle de eventos.
    """
    config.configurar_logging()
    inicializar_base_de_datos()

    app = crear_aplicacion(sys.argv)
    if not validar_catalogo():
        sys.exit(1)

    ventana = MasterController()
    ventana.setWindowTitle(config.APP_TITLE)
    QTimer.singleShot(100, ventana.showMaximized)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
