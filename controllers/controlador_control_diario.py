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

from PyQt6.QtCore import Qt, QTimer, QDate, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QTableWidgetItem,
    QComboBox, QCheckBox, QLineEdit, QPushButton, QDateEdit, QMessageBox
)

from config.mappings import CODIGOS_JORNADA
from database import config
from database.base_model import ErrorBackend
from services.almacen_local import AlmacenLocal
from services.componentes import ServicioComponentes
from services.control_diario import ServicioParteDiario
from services.sesion import ContextoSesion
from utilities.helper import PyQtHelper, mostrar_error_backend

logger = logging.getLogger(__name__)

COL_COMPONENTE, COL_CODIGO, COL_ABONO, COL_SUPERIOR = 0, 1, 2, 3
COLUMNAS_HORA = {4: "jornada_ini", 5: "jornada_fin", 6: "salida_ini", 7: "salida_fin"}


class ControladorControlDiario(QWidget):
    """Parte diario: una fila por componente con código, marcas y horarios.

    Cada edición se guarda al momento en local; el envío al backend se agrupa
    con un temporizador de debounce (DEBOUNCE_MS).
    """

    signal_abrir_salidas = pyqtSignal(str, str)  # (tipo de salida, parte_pk)

    def __init__(self, almacen: AlmacenLocal, contexto: ContextoSesion, componentes: ServicioComponentes, parent=None):
        super().__init__(parent)
        self.almacen = almacen
        self.contexto = contexto
        self.servicio_componentes = componentes
        self.parte: ServicioParteDiario | None = None

        # Timer Debounce (sincronización con el backend)
        self.debounce_timer = QTimer(self)
        self.debounce_timer.setSingleShot(True)
        self.debounce_timer.setInterval(config.DEBOUNCE_MS)
        self.debounce_timer.timeout.connect(self._sincronizar)

        self._construir_ui()

    def _construir_ui(self):
        layout = QVBoxLayout(self)

        cabecera = QHBoxLayout()
        self.lbl_centro = QLabel("")
        self.lbl_centro.setStyleSheet("font-size: 18px; font-weight: bold;")
        cabecera.addWidget(self.lbl_centro)
        cabecera.addStretch()
        cabecera.addWidget(QLabel("Fecha:"))
        self.date_fecha = QDateEdit()
        self.date_fecha.setCalendarPopup(True)
        self.date_fecha.setDisplayFormat("dd/MM/yyyy")
        self.date_fecha.setDate(QDate.currentDate())
        self.date_fecha.dateChanged.connect(lambda _: self.cargar())
        cabecera.addWidget(self.date_fecha)
        layout.addLayout(cabecera)

        self.tabla = QTableWidget()
        PyQtHelper.configurar_tabla(
            self.tabla,
            ["Componente", "Código", "Abono DF", "Sup. categoría",
             "Jornada inicio", "Jornada fin", "Salida inicio", "Salida fin"],
            [0, 150, 90, 110, 110, 110, 110, 110],
            columnas_fijas=[1, 2, 3, 4, 5, 6, 7],
        )
        layout.addWidget(self.tabla)

        pie = QHBoxLayout()
        pie.addWidget(QLabel("Horas extra del día:"))
        self.txt_horas_extra = QLineEdit()
        self.txt_horas_extra.setPlaceholderText("p. ej. 2, 2,5 o 02:30")
        self.txt_horas_extra.setFixedWidth(160)
        self.txt_horas_extra.textEdited.connect(self._al_cambiar_horas_extra)
        pie.addWidget(self.txt_horas_extra)
        self.lbl_estado = QLabel("")
        pie.addWidget(self.lbl_estado)
        pie.addStretch()

        self.btn_incendios = QPushButton("Salidas a incendios")
        self.btn_trabajos = QPushButton("Salidas por trabajos")
        for btn, tipo in ((self.btn_incendios, "incendios"), (self.btn_trabajos, "trabajos")):
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(lambda _, t=tipo: self._abrir_salidas(t))
            pie.addWidget(btn)
        layout.addLayout(pie)

    # ----------------------------
    # CARGA
    # ----------------------------
    def _fecha(self) -> date:
        return self.date_fecha.date().toPyDate()

    def al_mostrar(self):
        self.cargar()

    def cargar(self):
        """Reconstruye el parte del día seleccionado y pinta la tabla."""
        if self.debounce_timer.isActive():
            self.debounce_timer.stop()
            self._sincronizar()

        seleccion = self.contexto.leer_seleccion()
        self.lbl_centro.setText(
            f"{seleccion.nombre_centro} · {seleccion.seleccion}" if seleccion else "Sin selección (elige una en Inicio)"
        )
        self.parte = ServicioParteDiario(
            self.almacen, seleccion, self._fecha(), self.servicio_componentes.listar()
        )
        try:
            self.parte.cargar()
        except ErrorBackend as e:
            mostrar_error_backend(self, e, "leer el parte del backend")

        self.txt_horas_extra.setText(self.parte.horas_extras_total)
        self._pintar_tabla()
        self.lbl_estado.setText("")

    def _pintar_tabla(self):
        self.tabla.setRowCount(0)
        por_id = {c.id: c for c in self.parte.componentes}

        for fila_idx, fila in enumerate(self.parte.filas):
            self.tabla.insertRow(fila_idx)
            componente = por_id[fila.componente_id]
            item = QTableWidgetItem(componente.nombre_completo)
            item.setData(Qt.ItemDataRole.UserRole, fila.componente_id)
            self.tabla.setItem(fila_idx, COL_COMPONENTE, item)

            combo = QComboBox()
            for codigo, descripcion in CODIGOS_JORNADA.items():
                combo.addItem(codigo or "—", codigo)
                combo.setItemData(combo.count() - 1, descripcion, Qt.ItemDataRole.ToolTipRole)
            combo.setCurrentIndex(max(combo.findData(fila.codigo), 0))
            combo.currentIndexChanged.connect(
                lambda _, c=combo, cid=fila.componente_id: self._editar(cid, "codigo", c.currentData())
            )
            self.tabla.setCellWidget(fila_idx, COL_CODIGO, combo)

            for col, campo in ((COL_ABONO, "abono_df"), (COL_SUPERIOR, "superior_categoria")):
                chk = QCheckBox()
                chk.setChecked(getattr(fila, campo))
                chk.toggled.connect(lambda valor, cid=fila.componente_id, f=campo: self._editar(cid, f, valor))
                self.tabla.setCellWidget(fila_idx, col, chk)

            for col, campo in COLUMNAS_HORA.items():
                txt = QLineEdit(getattr(fila, campo))
                txt.setPlaceholderText("HH:MM")
                txt.editingFinished.connect(
                    lambda t=txt, cid=fila.componente_id, f=campo: self._editar_hora(t, cid, f)
                )
                self.tabla.setCellWidget(fila_idx, col, txt)

    # ----------------------------
    # EDICIÓN
    # ----------------------------
    def _editar(self, componente_id, campo, valor) -> bool:
        try:
            self.parte.actualizar_fila(componente_id, campo, valor)
        except (KeyError, ValueError) as e:
            QMessageBox.warning(self, "Valor no válido", str(e))
            return False
        self._programar_sincronizacion()
        return True

    def _editar_hora(self, txt: QLineEdit, componente_id, campo):
        if txt.text().strip() == getattr(self.parte.fila(componente_id), campo):
            return
        self._editar(componente_id, campo, txt.text())
        # Valor normalizado ("8:05" -> "08:05") o el anterior si no era válido
        txt.setText(getattr(self.parte.fila(componente_id), campo))

    def _al_cambiar_horas_extra(self, texto):
        self.parte.set_horas_extras(texto)
        self._programar_sincronizacion()

    def _programar_sincronizacion(self):
        self.lbl_estado.setText("Guardado en local")
        self.debounce_timer.start()

    def _sincronizar(self):
        if self.parte is None:
            return
        try:
            if self.parte.sincronizar_remoto():
                self.lbl_estado.setText("Sincronizado ✓")
        except ErrorBackend as e:
            self.lbl_estado.setText("Error al sincronizar")
            mostrar_error_backend(self, e, "sincronizar el parte")

    def _abrir_salidas(self, tipo: str):
        if self.parte is None or self.parte.seleccion is None:
            QMessageBox.warning(self, "Sin selección", "Elige primero una unidad o caseta en Inicio.")
            return
        self.signal_abrir_salidas.emit(tipo, self.parte.parte_pk)
