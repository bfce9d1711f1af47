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

import pandas as pd
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter, QColor, QFont
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QSpinBox, QComboBox,
    QPushButton, QFileDialog, QSplitter, QMessageBox
)

# --- IMPORTACIÓN DE PYQT CHARTS ---
from PyQt6.QtCharts import (
    QChart, QChartView, QStackedBarSeries, QBarSet, QBarCategoryAxis, QValueAxis
)

from config.mappings import MESES
from database.base_model import ErrorBackend
from services.resumen import ServicioResumen, CODIGOS_RESUMEN
from services.sesion import ContextoSesion
from utilities.helper import PyQtHelper, mostrar_error_backend

logger = logging.getLogger(__name__)

COLORES_CODIGOS = {
    "JR": "#2ecc71",
    "TH": "#3498db",
    "TC": "#9b59b6",
    "V": "#f1c40f",
    "B": "#e74c3c",
}


class ControladorResumen(QWidget):
    """Resumen mensual (por componente) y anual (por mes) del centro elegido."""

    def __init__(self, contexto: ContextoSesion, parent=None):
        super().__init__(parent)
        self.contexto = contexto
        self.tabla_mensual = pd.DataFrame()
        self.tabla_anual = pd.DataFrame()

        layout = QVBoxLayout(self)
        filtros = QHBoxLayout()
        self.lbl_centro = QLabel("")
        self.lbl_centro.setStyleSheet("font-size: 18px; font-weight: bold;")
        filtros.addWidget(self.lbl_centro)
        filtros.addStretch()

        hoy = date.today()
        self.spin_anio = QSpinBox()
        self.spin_anio.setRange(2000, 2100)
        self.spin_anio.setValue(hoy.year)
        self.combo_mes = QComboBox()
        self.combo_mes.addItems(MESES)
        self.combo_mes.setCurrentIndex(hoy.month - 1)
        self.btn_actualizar = QPushButton("Actualizar")
        self.btn_exportar = QPushButton("Exportar Excel")
        filtros.addWidget(QLabel("Año:"))
        filtros.addWidget(self.spin_anio)
        filtros.addWidget(QLabel("Mes:"))
        filtros.addWidget(self.combo_mes)
        for btn in (self.btn_actualizar, self.btn_exportar):
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            filtros.addWidget(btn)
        layout.addLayout(filtros)

        self.btn_actualizar.clicked.connect(self.cargar)
        self.btn_exportar.clicked.connect(self.exportar)

        self.lbl_horas_extra = QLabel("")
        layout.addWidget(self.lbl_horas_extra)

        splitter = QSplitter(Qt.Orientation.Vertical)
        self.tabla = QTableWidget()
        PyQtHelper.configurar_tabla(
            self.tabla, ["Componente"] + CODIGOS_RESUMEN + ["Total"], [0] + [70] * (len(CODIGOS_RESUMEN) + 1),
            columnas_fijas=list(range(1, len(CODIGOS_RESUMEN) + 2)),
        )
        splitter.addWidget(self.tabla)

        self.chart = QChart()
        self.chart.setAnimationOptions(QChart.AnimationOption.SeriesAnimations)
        self.chart.setBackgroundRoundness(0)
        self.chart.legend().setAlignment(Qt.AlignmentFlag.AlignTop)
        self.chart.legend().setFont(QFont("Arial", 9, QFont.Weight.Bold))
        self.chart_view = QChartView(self.chart)
        self.chart_view.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.chart_view.setMinimumHeight(320)
        splitter.addWidget(self.chart_view)
        layout.addWidget(splitter)

    def al_mostrar(self):
        self.cargar()

    def cargar(self):
        seleccion = self.contexto.leer_seleccion()
        if seleccion is None:
            self.lbl_centro.setText("Sin selección (elige una en Inicio)")
            return
        self.lbl_centro.setText(f"{seleccion.nombre_centro} · {seleccion.seleccion}")

        servicio = ServicioResumen(seleccion)
        anio, mes = self.spin_anio.value(), self.combo_mes.currentIndex() + 1
        try:
            self.tabla_mensual = servicio.resumen_mensual(anio, mes)
            self.tabla_anual = servicio.resumen_anual(anio)
            horas = servicio.horas_extra_mes(anio, mes)
        except ErrorBackend as e:
            mostrar_error_backend(self, e, "calcular el resumen")
            return

        self.lbl_horas_extra.setText(f"Horas extra en {MESES[mes - 1].lower()}: {horas:g}")
        PyQtHelper.cargar_datos_en_tabla(
            self.tabla,
            [[componente] + list(fila) for componente, fila in self.tabla_mensual.iterrows()],
            id_column=None,
        )
        self._renderizar_grafico(anio)

    def _renderizar_grafico(self, anio: int):
        """Barras apiladas: un bloque por código en cada mes del año."""
        series = QStackedBarSeries()
        for codigo in CODIGOS_RESUMEN:
            barra = QBarSet(codigo)
            barra.setColor(QColor(COLORES_CODIGOS.get(codigo, "#95a5a6")))
            for valor in self.tabla_anual[codigo]:
                barra.append(int(valor))
            series.append(barra)

        self.chart.removeAllSeries()
        for axis in self.chart.axes():
            self.chart.removeAxis(axis)

        self.chart.addSeries(series)
        self.chart.setTitle(f"Códigos por mes · {anio}")

        axis_x = QBarCategoryAxis()
        axis_x.append([m[:3] for m in MESES])
        self.chart.addAxis(axis_x, Qt.AlignmentFlag.AlignBottom)
        series.attachAxis(axis_x)

        maximo = int(self.tabla_anual.sum(axis=1).max()) if not self.tabla_anual.empty else 0
        axis_y = QValueAxis()
        axis_y.setRange(0, max(5, maximo + 1))
        axis_y.setLabelFormat("%d")
        self.chart.addAxis(axis_y, Qt.AlignmentFlag.AlignLeft)
        series.attachAxis(axis_y)

    def exportar(self):
        if self.tabla_anual.empty:
            return
        ruta, _ = QFileDialog.getSaveFileName(self, "Exportar resumen", "resumen.xlsx", "Excel (*.xlsx)")
        if not ruta:
            return
        mes = MESES[self.combo_mes.currentIndex()]
        try:
            ServicioResumen.exportar_excel({mes: self.tabla_mensual, str(self.spin_anio.value()): self.tabla_anual}, ruta)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"No se pudo exportar: {e}")
            return
        QMessageBox.information(self, "Éxito", f"Resumen exportado a {ruta}")
