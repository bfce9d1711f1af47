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

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QPushButton, QMessageBox

from services.componentes import ServicioComponentes
from utilities.delegado import BotonAccionDelegate
from utilities.dialogos import DialogoComponente
from utilities.helper import PyQtHelper

logger = logging.getLogger(__name__)


class ControladorComponentes(QWidget):
    """Gestión de la dotación: alta y baja de componentes."""

    componentes_cambiados = pyqtSignal()

    def __init__(self, servicio: ServicioComponentes, parent=None):
        super().__init__(parent)
        self.servicio = servicio

        layout = QVBoxLayout(self)
        cabecera = QHBoxLayout()
        titulo = QLabel("Componentes")
        titulo.setStyleSheet("font-size: 18px; font-weight: bold;")
        cabecera.addWidget(titulo)
        cabecera.addStretch()
        self.lbl_total = QLabel("")
        cabecera.addWidget(self.lbl_total)
        self.btn_nuevo = QPushButton("Añadir componente")
        self.btn_nuevo.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_nuevo.clicked.connect(self.nuevo_componente)
        cabecera.addWidget(self.btn_nuevo)
        layout.addLayout(cabecera)

        # Índices: 0=Borrar (id en UserRole)
        self.delegado_borrar = BotonAccionDelegate(callback=self.eliminar_componente, simbolo="✕", columna=0)
        self.tabla = QTableWidget()
        PyQtHelper.configurar_tabla(
            self.tabla, ["", "Apellidos", "Nombre", "Nº"], [50, 0, 0, 120],
            delegados={0: self.delegado_borrar}, columnas_fijas=[3],
        )
        layout.addWidget(self.tabla)

        self.cargar_datos_tabla()

    def al_mostrar(self):
        self.cargar_datos_tabla()

    def cargar_datos_tabla(self):
        componentes = self.servicio.listar()
        PyQtHelper.cargar_datos_en_tabla(
            self.tabla, [[c.id, c.apellidos, c.nombre, c.numero] for c in componentes], id_column=0
        )
        self.lbl_total.setText(f"{len(componentes)} componentes")

    def nuevo_componente(self):
        dlg = DialogoComponente(self)
        if not dlg.exec():
            return
        datos = dlg.obtener_datos()
        try:
            self.servicio.crear(**datos)
        except ValueError as e:
            QMessageBox.warning(self, "Faltan datos", str(e))
            return
        self.cargar_datos_tabla()
        self.componentes_cambiados.emit()

    def eliminar_componente(self, componente_id):
        confirm = QMessageBox.question(
            self, "Confirmar", "¿Eliminar este componente de la dotación?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return
        if self.servicio.eliminar(componente_id):
            self.cargar_datos_tabla()
            self.componentes_cambiados.emit()
