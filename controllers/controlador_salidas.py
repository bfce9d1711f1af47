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

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QTableWidgetItem,
    QLineEdit, QPushButton, QMessageBox
)

from config.mappings import CAMPO_HORA, CAMPO_ENTERO
from database.base_model import ErrorBackend
from services.almacen_local import AlmacenLocal
from services.salidas import ServicioSalidas, SinParteVinculado
from utilities.delegado import BotonAccionDelegate
from utilities.helper import PyQtHelper, mostrar_error_backend

logger = logging.getLogger(__name__)


class ControladorSalidas(QWidget):
    """Lista editable de salidas de un tipo ('incendios' o 'trabajos').

    La misma vista sirve para ambos tipos: las columnas salen de CAMPOS_SALIDA.
    """

    def __init__(self, almacen: AlmacenLocal, tipo: str, parent=None):
        super().__init__(parent)
        self.almacen = almacen
        self.tipo = tipo
        self.servicio = ServicioSalidas(almacen, tipo)

        layout = QVBoxLayout(self)
        cabecera = QHBoxLayout()
        titulo = QLabel(self.servicio.titulo)
        titulo.setStyleSheet("font-size: 18px; font-weight: bold;")
        cabecera.addWidget(titulo)
        self.lbl_parte = QLabel("")
        cabecera.addWidget(self.lbl_parte)
        cabecera.addStretch()

        self.btn_agregar = QPushButton("Añadir salida")
        self.btn_guardar = QPushButton("Guardar")
        for btn, accion in ((self.btn_agregar, self.agregar_salida), (self.btn_guardar, self.guardar)):
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(accion)
            cabecera.addWidget(btn)
        layout.addLayout(cabecera)

        self.delegado_borrar = BotonAccionDelegate(callback=self.eliminar_salida, simbolo="✕", columna=0)
        self.tabla = QTableWidget()
        campos = self.servicio.campos
        PyQtHelper.configurar_tabla(
            self.tabla,
            [""] + [etiqueta for _, etiqueta, _ in campos],
            [50] + [0 if t not in (CAMPO_HORA, CAMPO_ENTERO) else 120 for _, _, t in campos],
            delegados={0: self.delegado_borrar},
            columnas_fijas=[i + 1 for i, (_, _, t) in enumerate(campos) if t in (CAMPO_HORA, CAMPO_ENTERO)],
        )
        layout.addWidget(self.tabla)

    def set_parte(self, parte_pk: str | None):
        """Vincula la vista al parte diario indicado y recarga."""
        self.servicio = ServicioSalidas(self.almacen, self.tipo, parte_pk)
        self.cargar()

    def al_mostrar(self):
        self.cargar()

    def cargar(self):
        self.lbl_parte.setText(f"Parte: {self.servicio.parte_pk}" if self.servicio.parte_pk else "Sin parte vinculado")
        try:
            self.servicio.cargar()
        except ErrorBackend as e:
            mostrar_error_backend(self, e, "leer las salidas del backend")
        self._pintar_tabla()

    def _pintar_tabla(self):
        self.tabla.setRowCount(0)
        for fila_idx, salida in enumerate(self.servicio.salidas):
            self.tabla.insertRow(fila_idx)
            item = QTableWidgetItem("")
            item.setData(Qt.ItemDataRole.UserRole, salida["id"])
            self.tabla.setItem(fila_idx, 0, item)

            for col, (campo, _, tipo_campo) in enumerate(self.servicio.campos, start=1):
                valor = salida.get(campo)
                txt = QLineEdit("" if valor is None else str(valor))
                if tipo_campo == CAMPO_HORA:
                    txt.setPlaceholderText("HH:MM")
                txt.editingFinished.connect(
                    lambda t=txt, sid=salida["id"], c=campo: self._editar(t, sid, c)
                )
                self.tabla.setCellWidget(fila_idx, col, txt)

    def _editar(self, txt: QLineEdit, salida_id, campo):
        try:
            self.servicio.actualizar(salida_id, campo, txt.text())
        except (KeyError, ValueError) as e:
            QMessageBox.warning(self, "Valor no válido", str(e))
        salida = next((s for s in self.servicio.salidas if s["id"] == salida_id), None)
        if salida is not None:
            valor = salida.get(campo)
            txt.setText("" if valor is None else str(valor))

    def agregar_salida(self):
        self.servicio.agregar()
        self._pintar_tabla()

    def eliminar_salida(self, salida_id):
        if self.servicio.eliminar(salida_id):
            self._pintar_tabla()

    def guardar(self):
        try:
            enviadas = self.servicio.guardar_remoto()
        except SinParteVinculado as e:
            QMessageBox.warning(self, "Sin parte", str(e))
            return
        except ErrorBackend as e:
            mostrar_error_backend(self, e, "guardar las salidas")
            return
        QMessageBox.information(self, "Éxito", f"{enviadas} salidas guardadas correctamente.")
