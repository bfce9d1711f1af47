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

from PyQt6.QtCore import Qt, QObject, QEvent
from PyQt6.QtWidgets import (
    QTableWidget, QHeaderView, QAbstractItemView, QTableWidgetItem,
    QLabel, QPushButton, QSizePolicy, QMessageBox, QWidget
)

from database.base_model import BackendNoConfigurado, ErrorBackend
from database.schemas import ResultadoBusqueda

logger = logging.getLogger(__name__)

ALTO_FILA = 42
ANCHO_MINIMO_COLUMNA = 60
ALINEACION_TEXTO = Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter


class FiltroCursorBoton(QObject):
    """Pone el cursor de mano sobre las columnas de botón de una tabla."""

    def __init__(self, tabla: QTableWidget, columnas: list[int]):
        super().__init__(tabla)
        self.tabla = tabla
        self.columnas = set(columnas)

    def eventFilter(self, obj, event):
        if obj is not self.tabla.viewport():
            return False
        if event.type() == QEvent.Type.MouseMove:
            celda = self.tabla.indexAt(event.position().toPoint())
            sobre_boton = celda.isValid() and celda.column() in self.columnas
            self.tabla.viewport().setCursor(
                Qt.CursorShape.PointingHandCursor if sobre_boton else Qt.CursorShape.ArrowCursor
            )
        elif event.type() == QEvent.Type.Leave:
            self.tabla.viewport().unsetCursor()
        return False


class PyQtHelper:
    """
    Utilidades estáticas para las tablas de las pantallas del cuadernillo.
    """

    # -------------------------------------------------
    # CONFIGURACIÓN DE TABLAS
    # -------------------------------------------------
    @staticmethod
    def configurar_tabla(tabla: QTableWidget, headers: list[str], anchos: list[int],
                         delegados: dict = None, columnas_fijas: list[int] = None):
        """
        Deja la tabla en modo solo lectura, sin selección y con columnas elásticas.

        Args:
            tabla (QTableWidget): Tabla a configurar.
            headers (list[str]): Títulos de las columnas.
            anchos (list[int]): Ancho en píxeles de cada columna fija (0 = elástica).
            delegados (dict, optional): {columna: delegado} de las columnas con botón.
                Son fijas y muestran cursor de mano.
            columnas_fijas (list[int], optional): Otras columnas de ancho fijo
                (las que llevan widgets de edición).
        """
        delegados = delegados or {}
        fijas = set(columnas_fijas or []) | set(delegados)

        tabla.setColumnCount(len(headers))
        tabla.setHorizontalHeaderLabels(headers)
        tabla.verticalHeader().setVisible(False)
        tabla.verticalHeader().setDefaultSectionSize(ALTO_FILA)
        tabla.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        tabla.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        tabla.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        tabla.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        for columna, delegado in delegados.items():
            tabla.setItemDelegateForColumn(columna, delegado)
        if delegados:
            PyQtHelper.habilitar_cursor_boton(tabla, list(delegados))

        cabecera = tabla.horizontalHeader()
        cabecera.setStretchLastSection(False)
        cabecera.setMinimumSectionSize(ANCHO_MINIMO_COLUMNA)
        for columna, ancho in enumerate(anchos):
            if columna in fijas:
                cabecera.setSectionResizeMode(columna, QHeaderView.ResizeMode.Fixed)
                cabecera.resizeSection(columna, ancho)
            else:
                cabecera.setSectionResizeMode(columna, QHeaderView.ResizeMode.Stretch)

    @staticmethod
    def cargar_datos_en_tabla(tabla: QTableWidget, filas: list[list], id_column: int | None = 0,
                              alineacion=ALINEACION_TEXTO):
        """
        Sustituye el contenido de la tabla. None se muestra como celda vacía.

        Args:
            tabla (QTableWidget): Tabla destino.
            filas (list[list]): Valores por fila.
            id_column (int | None): Columna cuyo valor se guarda como UserRole,
                que es el id que reciben los delegados. None = ninguna.
            alineacion (Qt.AlignmentFlag, optional): Alineación de las celdas.
        """
        tabla.setUpdatesEnabled(False)
        try:
            tabla.setRowCount(len(filas))
            for i, fila in enumerate(filas):
                for j, valor in enumerate(fila):
                    item = QTableWidgetItem("" if valor is None else str(valor))
                    item.setTextAlignment(alineacion)
                    if j == id_column:
                        item.setData(Qt.ItemDataRole.UserRole, valor)
                    tabla.setItem(i, j, item)
        finally:
            tabla.setUpdatesEnabled(True)

    @staticmethod
    def habilitar_cursor_boton(tabla: QTableWidget, columnas_boton: list[int]):
        """Instala un FiltroCursorBoton en el viewport de la tabla."""
        tabla.viewport().setMouseTracking(True)
        filtro = FiltroCursorBoton(tabla, columnas_boton)
        tabla.viewport().installEventFilter(filtro)
        # el padre Qt es la tabla, pero PyQt necesita una referencia Python viva
        tabla._filtro_cursor = filtro


# -------------------------------------------------
# MENSAJES
# -------------------------------------------------
def mostrar_error_backend(parent: QWidget, error: ErrorBackend, accion: str):
    """
    Muestra el error de una llamada al backend.

    En modo degradado es un aviso (los datos quedan en local); cualquier otro
    fallo se muestra como error crítico con el mensaje del driver.

    Args:
        parent (QWidget): Ventana sobre la que se muestra el mensaje.
        error (ErrorBackend): Excepción capturada.
        accion (str): Qué se intentaba hacer, p. ej. "guardar las salidas".
    """
    if isinstance(error, BackendNoConfigurado):
        QMessageBox.warning(parent, "Sin backend", f"No se pudo {accion}: {error}")
        return
    logger.error("Error al %s: %s", accion, error)
    QMessageBox.critical(parent, "Error", f"No se pudo {accion}:\n{str(error)[:300]}")


# -------------------------------------------------
# PAGINACIÓN
# -------------------------------------------------
def actualizar_paginacion_ui(resultado: ResultadoBusqueda, lbl_registros: QLabel,
                             lbl_contador: QLabel, btn_anterior: QPushButton, btn_siguiente: QPushButton):
    """Refleja en los controles de paginación la página de `resultado` (base 0)."""
    actual = resultado.pagina + 1
    lbl_registros.setText(f"Total registros: {resultado.total}")
    lbl_contador.setText(f"Página {actual} de {resultado.total_paginas}")
    btn_anterior.setEnabled(actual > 1)
    btn_siguiente.setEnabled(actual < resultado.total_paginas)
