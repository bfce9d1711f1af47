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

from PyQt6.QtCore import Qt, QTimer, QDate
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QLineEdit, QComboBox,
    QPushButton, QDateEdit, QFileDialog, QMessageBox, QStackedWidget
)

from config.mappings import MODO_BUSQUEDA_CENTRO, MODO_BUSQUEDA_COMPONENTE, TAMANOS_PAGINA
from database.base_model import ErrorBackend
from services.administracion import (
    ServicioAdministracion, unidad_o_caseta, jornada_texto, nombre_archivo_csv
)
from utilities.dialogos import DialogoLogin
from utilities.helper import PyQtHelper, actualizar_paginacion_ui, mostrar_error_backend

logger = logging.getLogger(__name__)


class ControladorAdministracion(QWidget):
    """Consulta del cuadernillo por día, protegida con usuario y contraseña.

    Búsqueda por centro o por componente con debounce, paginación y
    exportación a CSV de la página visible.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.servicio = ServicioAdministracion()
        self.resultado = None
        self.pagina_actual = 0

        # Timer Debounce (búsqueda por texto)
        self.debounce_timer = QTimer(self)
        self.debounce_timer.setSingleShot(True)
        self.debounce_timer.setInterval(300)
        self.debounce_timer.timeout.connect(self.buscar_desde_inicio)

        layout = QVBoxLayout(self)
        self.stack = QStackedWidget()
        self.stack.addWidget(self._pantalla_bloqueada())
        self.stack.addWidget(self._pantalla_consulta())
        layout.addWidget(self.stack)

    # ----------------------------
    # CONSTRUCCIÓN UI
    # ----------------------------
    def _pantalla_bloqueada(self) -> QWidget:
        pantalla = QWidget()
        layout = QVBoxLayout(pantalla)
        layout.addStretch()
        lbl = QLabel("Zona de administración")
        lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        lbl.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(lbl)
        self.btn_login = QPushButton("Iniciar sesión")
        self.btn_login.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_login.clicked.connect(self.iniciar_sesion)
        layout.addWidget(self.btn_login, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addStretch()
        return pantalla

    def _pantalla_consulta(self) -> QWidget:
        pantalla = QWidget()
        layout = QVBoxLayout(pantalla)

        filtros = QHBoxLayout()
        self.date_fecha = QDateEdit()
        self.date_fecha.setCalendarPopup(True)
        self.date_fecha.setDisplayFormat("dd/MM/yyyy")
        self.date_fecha.setDate(QDate.currentDate())
        self.date_fecha.dateChanged.connect(lambda _: self.buscar_desde_inicio())

        self.combo_modo = QComboBox()
        self.combo_modo.addItem("Unidad / Caseta", MODO_BUSQUEDA_CENTRO)
        self.combo_modo.addItem("Componente", MODO_BUSQUEDA_COMPONENTE)
        self.combo_modo.currentIndexChanged.connect(lambda _: self.buscar_desde_inicio())

        self.txt_buscar = QLineEdit()
        self.txt_buscar.setPlaceholderText("🔍 Buscar...")
        self.txt_buscar.textChanged.connect(lambda _: self.debounce_timer.start())

        self.combo_tam = QComboBox()
        for tam in TAMANOS_PAGINA:
            self.combo_tam.addItem(f"{tam} / página", tam)
        self.combo_tam.setCurrentIndex(TAMANOS_PAGINA.index(100))
        self.combo_tam.currentIndexChanged.connect(lambda _: self.buscar_desde_inicio())

        self.btn_csv = QPushButton("Exportar CSV")
        self.btn_logout = QPushButton("Cerrar sesión")
        self.btn_csv.clicked.connect(self.exportar_csv)
        self.btn_logout.clicked.connect(self.cerrar_sesion)

        filtros.addWidget(self.date_fecha)
        filtros.addWidget(self.combo_modo)
        filtros.addWidget(self.txt_buscar, stretch=1)
        filtros.addWidget(self.combo_tam)
        filtros.addWidget(self.btn_csv)
        filtros.addWidget(self.btn_logout)
        layout.addLayout(filtros)

        self.tabla = QTableWidget()
        PyQtHelper.configurar_tabla(
            self.tabla,
            ["Fecha", "Unidad/Caseta", "Nombre", "Apellidos", "Nº", "Código", "Jornada", "Horas Extra"],
            [100, 0, 0, 0, 70, 70, 120, 100],
            columnas_fijas=[0, 4, 5, 6, 7],
        )
        layout.addWidget(self.tabla)

        paginacion = QHBoxLayout()
        self.lbl_registros = QLabel("")
        self.lbl_contador = QLabel("")
        self.btn_before = QPushButton("Anterior")
        self.btn_after = QPushButton("Siguiente")
        self.btn_before.clicked.connect(lambda: self.cambiar_pagina(-1))
        self.btn_after.clicked.connect(lambda: self.cambiar_pagina(1))
        paginacion.addWidget(self.lbl_registros)
        paginacion.addStretch()
        paginacion.addWidget(self.btn_before)
        paginacion.addWidget(self.lbl_contador)
        paginacion.addWidget(self.btn_after)
        layout.addLayout(paginacion)
        return pantalla

    # ----------------------------
    # SESIÓN
    # ----------------------------
    def al_mostrar(self):
        if self.servicio.autenticado:
            self.buscar()

    def iniciar_sesion(self):
        if DialogoLogin(self.servicio.autenticar, self).exec():
            self.stack.setCurrentIndex(1)
            self.buscar_desde_inicio()

    def cerrar_sesion(self):
        self.servicio.cerrar_sesion()
        self.resultado = None
        self.tabla.setRowCount(0)
        self.stack.setCurrentIndex(0)

    # ----------------------------
    # CONSULTA
    # ----------------------------
    def _fecha(self) -> str:
        return self.date_fecha.date().toPyDate().isoformat()

    def buscar_desde_inicio(self):
        self.pagina_actual = 0
        self.buscar()

    def cambiar_pagina(self, delta: int):
        self.pagina_actual = max(0, self.pagina_actual + delta)
        self.buscar()

    def buscar(self):
        if not self.servicio.autenticado:
            return
        try:
            self.resultado = self.servicio.buscar(
                self._fecha(),
                modo=self.combo_modo.currentData(),
                texto=self.txt_buscar.text(),
                pagina=self.pagina_actual,
                tam_pagina=self.combo_tam.currentData(),
            )
        except ErrorBackend as e:
            mostrar_error_backend(self, e, "consultar el cuadernillo")
            return

        PyQtHelper.cargar_datos_en_tabla(self.tabla, [
            [f.get("fecha"), unidad_o_caseta(f), f.get("componente_nombre"), f.get("componente_apellidos"),
             f.get("componente_numero"), f.get("codigo"), jornada_texto(f), f.get("horas_extra")]
            for f in self.resultado.filas
        ], id_column=None)

        actualizar_paginacion_ui(
            self.resultado, self.lbl_registros, self.lbl_contador, self.btn_before, self.btn_after
        )

    def exportar_csv(self):
        if not self.resultado or not self.resultado.filas:
            QMessageBox.information(self, "Sin datos", "No hay resultados para exportar.")
            return
        ruta, _ = QFileDialog.getSaveFileName(
            self, "Exportar CSV", nombre_archivo_csv(self._fecha(), self.resultado.pagina), "CSV (*.csv)"
        )
        if not ruta:
            return
        try:
            self.servicio.exportar_csv(self.resultado.filas, ruta)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"No se pudo exportar: {e}")
