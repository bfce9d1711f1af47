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
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QComboBox, QPushButton, QLabel, QMessageBox, QHBoxLayout
)

from models.catalogo_model import CatalogoUbicaciones
from models.selector_model import SelectorUbicacion, SeleccionIncompleta, NIVELES
from services.sesion import ContextoSesion

logger = logging.getLogger(__name__)


class ControladorSelector(QWidget):
    """Pantalla de inicio: selector en cascada de la ubicación de trabajo.

    Cada desplegable se habilita cuando el anterior tiene valor; cambiar un
    nivel vacía los posteriores. Al confirmar se guarda la instantánea de
    sesión y se emite `seleccion_confirmada`.
    """

    seleccion_confirmada = pyqtSignal(object)  # SeleccionActual

    def __init__(self, catalogo: CatalogoUbicaciones, contexto: ContextoSesion, parent=None):
        super().__init__(parent)
        self.selector = SelectorUbicacion(catalogo)
        self.contexto = contexto

        layout = QVBoxLayout(self)
        layout.setContentsMargins(60, 40, 60, 40)
        layout.setSpacing(20)

        titulo = QLabel("Selecciona tu unidad o caseta")
        titulo.setStyleSheet("font-size: 20px; font-weight: bold;")
        layout.addWidget(titulo)

        form = QFormLayout()
        self.combos = {}
        etiquetas = {
            "provincia": "Provincia", "zona": "Zona", "municipio": "Municipio",
            "tipo": "Tipo", "instancia": "Unidad / Caseta",
        }
        for nivel in NIVELES:
            combo = QComboBox()
            combo.currentIndexChanged.connect(lambda _, n=nivel: self._al_cambiar(n))
            self.combos[nivel] = combo
            form.addRow(f"{etiquetas[nivel]}:", combo)
        layout.addLayout(form)

        self.lbl_actual = QLabel("")
        self.lbl_actual.setWordWrap(True)
        layout.addWidget(self.lbl_actual)

        botones = QHBoxLayout()
        botones.addStretch()
        self.btn_confirmar = QPushButton("Confirmar")
        self.btn_confirmar.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_confirmar.clicked.connect(self.confirmar)
        botones.addWidget(self.btn_confirmar)
        layout.addLayout(botones)
        layout.addStretch()

        self._refrescar()

    # ----------------------------
    # SINCRONIZACIÓN UI <-> MODELO
    # ----------------------------
    def _opciones(self, nivel: str) -> list[tuple[str, str]]:
        """Pares (texto visible, valor) del desplegable de un nivel."""
        if nivel == "provincia":
            return [(p, p) for p in self.selector.opciones_provincias()]
        if nivel == "zona":
            return [(z, z) for z in self.selector.opciones_zonas()]
        if nivel == "municipio":
            return [(m, m) for m in self.selector.opciones_municipios()]
        if nivel == "tipo":
            return [(etiqueta, valor) for valor, etiqueta in self.selector.opciones_tipos().items()]
        return [(c, c) for c in self.selector.candidatos()]

    def _refrescar(self):
        for nivel, combo in self.combos.items():
            combo.blockSignals(True)
            combo.clear()
            combo.addItem("— Elegir —", "")
            for texto, valor in self._opciones(nivel):
                combo.addItem(texto, valor)
            actual = getattr(self.selector, nivel)
            indice = combo.findData(actual) if actual else 0
            combo.setCurrentIndex(max(indice, 0))
            combo.setEnabled(self.selector.nivel_habilitado(nivel))
            combo.blockSignals(False)

        self.btn_confirmar.setEnabled(self.selector.puede_confirmar())
        sel = self.contexto.leer_seleccion()
        self.lbl_actual.setText(
            f"Selección actual: {sel.nombre_centro} · {sel.seleccion} ({sel.fecha})" if sel else "Sin selección guardada."
        )

    def _al_cambiar(self, nivel: str):
        valor = self.combos[nivel].currentData() or ""
        getattr(self.selector, f"set_{nivel}")(valor)
        self._refrescar()

    def al_mostrar(self):
        self._refrescar()

    # ----------------------------
    # CONFIRMACIÓN
    # ----------------------------
    def confirmar(self):
        try:
            sel = self.selector.confirmar(self.contexto)
        except SeleccionIncompleta as e:
            QMessageBox.warning(self, "Selección incompleta", str(e))
            return
        self._refrescar()
        self.seleccion_confirmada.emit(sel)
