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

from PyQt6.QtWidgets import QStyledItemDelegate
from PyQt6.QtCore import Qt, QEvent
from PyQt6.QtGui import QMouseEvent, QColor, QFont


class BotonAccionDelegate(QStyledItemDelegate):
    """
    Delegado que dibuja un símbolo clicable (p. ej. "✕" para eliminar) en una
    columna de QTableWidget y ejecuta un callback con el id de la fila.
    """

    def __init__(self, callback, simbolo: str, columna: int = 0, color: str = "#e74c3c", parent=None):
        """
        Args:
            callback (callable): Función a ejecutar al hacer clic. Recibe el id de la fila.
            simbolo (str): Texto a dibujar centrado en la celda.
            columna (int, optional): Columna donde se dibuja el botón. Por defecto 0.
            color (str, optional): Color del símbolo.
            parent (QObject, optional): Objeto padre.
        """
        super().__init__(parent)
        self.callback = callback
        self.simbolo = simbolo
        self.columna = columna
        self.color = QColor(color)

    def paint(self, painter, option, index):
        if index.column() != self.columna:
            super().paint(painter, option, index)
            return

        painter.save()
        painter.setPen(self.color)
        fuente = QFont(option.font)
        fuente.setBold(True)
        painter.setFont(fuente)
        painter.drawText(option.rect, Qt.AlignmentFlag.AlignCenter, self.simbolo)
        painter.restore()

    def editorEvent(self, event, model, option, index):
        """
        Dispara el callback con el clic izquierdo.

        El id se busca en la propia celda (UserRole) y, si no está, en la
        columna 0 de la misma fila.
        """
        if (
                event.type() == QEvent.Type.MouseButtonPress
                and index.column() == self.columna
                and isinstance(event, QMouseEvent)
                and event.button() == Qt.MouseButton.LeftButton
        ):
            objeto_id = index.data(Qt.ItemDataRole.UserRole)
            if objeto_id is None:
                objeto_id = index.sibling(index.row(), 0).data(Qt.ItemDataRole.UserRole)
            if objeto_id is not None:
                self.callback(objeto_id)
            return True

        return False
