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
import os

from PyQt6.QtCore import pyqtSignal, Qt
from PyQt6.QtWidgets import (
    QWidget, QMessageBox, QApplication, QFileDialog, QVBoxLayout, QFormLayout, QRadioButton,
    QButtonGroup, QHBoxLayout, QLineEdit, QPushButton, QLabel, QSpinBox
)
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from database import config

logger = logging.getLogger(__name__)

BACKENDS = [
    ("sqlite", "Local (SQLite)"),
    ("postgresql", "Servidor (PostgreSQL)"),
    ("ninguno", "Sin backend (solo local)"),
]

# Campo del formulario -> (etiqueta, variable del .env, valor por defecto)
CAMPOS_SERVIDOR = {
    "servidor": ("Servidor:", "DB_HOST", "localhost"),
    "puerto": ("Puerto:", "DB_PORT", "5432"),
    "base_datos": ("Base de datos:", "DB_NAME_REMOTE", "cuadernillo"),
    "usuario": ("Usuario:", "DB_USER", ""),
    "clave": ("Contraseña:", "DB_PASS", ""),
}


class ControladorConfiguraciones(QWidget):
    """
    Pantalla de configuración de la aplicación.

    Permite elegir el backend remoto (SQLite, PostgreSQL o ninguno), la ruta
    del almacén local y la espera del guardado automático. Todo se guarda en
    el .env y se aplica al reiniciar.
    """

    configuracion_guardada = pyqtSignal(dict)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.radios = {}
        self.campos = {}
        self._construir_ui()
        self.cargar_configuracion()

    def _construir_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(40, 30, 40, 30)
        layout.setSpacing(15)

        titulo = QLabel("Configuración")
        titulo.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(titulo)

        fila_tipos = QHBoxLayout()
        self.grupo_backend = QButtonGroup(self)
        for clave, texto in BACKENDS:
            radio = QRadioButton(texto)
            self.grupo_backend.addButton(radio)
            fila_tipos.addWidget(radio)
            self.radios[clave] = radio
        fila_tipos.addStretch()
        layout.addLayout(fila_tipos)

        form = QFormLayout()
        for nombre, (etiqueta, _, _) in CAMPOS_SERVIDOR.items():
            campo = QLineEdit()
            form.addRow(etiqueta, campo)
            self.campos[nombre] = campo
        self.campos["clave"].setEchoMode(QLineEdit.EchoMode.Password)

        fila_almacen = QHBoxLayout()
        self.txt_almacen = QLineEdit()
        btn_examinar = QPushButton("...")
        btn_examinar.clicked.connect(self.seleccionar_almacen)
        fila_almacen.addWidget(self.txt_almacen)
        fila_almacen.addWidget(btn_examinar)
        form.addRow("Almacén local:", fila_almacen)

        self.spin_debounce = QSpinBox()
        self.spin_debounce.setRange(100, 10000)
        self.spin_debounce.setSingleStep(100)
        self.spin_debounce.setSuffix(" ms")
        form.addRow("Espera de guardado:", self.spin_debounce)
        layout.addLayout(form)

        botones = QHBoxLayout()
        botones.addStretch()
        self.btn_probar = QPushButton("Probar conexión")
        self.btn_guardar = QPushButton("Guardar")
        for btn in (self.btn_probar, self.btn_guardar):
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            botones.addWidget(btn)
        layout.addLayout(botones)
        layout.addStretch()

        self.radios["postgresql"].toggled.connect(self._actualizar_campos_servidor)
        self.btn_probar.clicked.connect(self.probar_conexion)
        self.btn_guardar.clicked.connect(self.guardar_configuracion)

    # ----------------------------
    # CARGA
    # ----------------------------
    def cargar_configuracion(self):
        """Refleja en el formulario la configuración con la que arrancó la aplicación."""
        self.radios.get(config.DB_TYPE, self.radios["ninguno"]).setChecked(True)
        for nombre, (_, variable, defecto) in CAMPOS_SERVIDOR.items():
            self.campos[nombre].setText(os.getenv(variable, defecto))
        self.txt_almacen.setText(config.ALMACEN_LOCAL_PATH)
        self.spin_debounce.setValue(config.DEBOUNCE_MS)
        self._actualizar_campos_servidor()

    def _actualizar_campos_servidor(self):
        activo = self.radios["postgresql"].isChecked()
        for campo in self.campos.values():
            campo.setEnabled(activo)
        self.btn_probar.setEnabled(activo)

    def seleccionar_almacen(self):
        ruta, _ = QFileDialog.getSaveFileName(self, "Archivo del almacén local", self.txt_almacen.text(),
                                              "JSON (*.json)")
        if ruta:
            self.txt_almacen.setText(os.path.normpath(ruta))

    def _backend_elegido(self) -> str:
        return next(clave for clave, radio in self.radios.items() if radio.isChecked())

    def _datos_servidor(self) -> dict:
        datos = {nombre: campo.text().strip() for nombre, campo in self.campos.items()}
        datos["clave"] = self.campos["clave"].text()
        return datos

    # ----------------------------
    # ACCIONES
    # ----------------------------
    def probar_conexion(self):
        """Abre y cierra una conexión con los datos de PostgreSQL del formulario."""
        datos = self._datos_servidor()
        if not all(datos.values()):
            QMessageBox.warning(self, "Campos vacíos", "Rellena todos los datos del servidor.")
            return

        url = config.url_postgresql(datos["usuario"], datos["clave"], datos["servidor"],
                                    datos["puerto"], datos["base_datos"])
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            motor = create_engine(url, connect_args={"connect_timeout": 5})
            with motor.connect():
                pass
            motor.dispose()
        except SQLAlchemyError as e:
            logger.warning("Prueba de conexión fallida: %s", e)
            QMessageBox.critical(self, "Error", f"No se pudo conectar:\n{str(e)[:200]}")
            return
        finally:
            QApplication.restoreOverrideCursor()
        QMessageBox.information(self, "Conexión correcta", f"Conectado a {datos['servidor']}/{datos['base_datos']}.")

    def guardar_configuracion(self):
        """Escribe la configuración en el .env. Se aplica al reiniciar."""
        backend = self._backend_elegido()
        cambios = {
            "DB_TYPE": backend,
            "ALMACEN_LOCAL": self.txt_almacen.text().strip(),
            "DEBOUNCE_MS": str(self.spin_debounce.value()),
        }
        if backend == "postgresql":
            datos = self._datos_servidor()
            cambios.update({variable: datos[nombre] for nombre, (_, variable, _) in CAMPOS_SERVIDOR.items()})

        try:
            for clave, valor in cambios.items():
                if valor:
                    config.actualizar_env(clave, valor)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"No se pudo escribir el .env: {e}")
            return

        logger.info("💾 Configuración guardada (backend: %s)", backend)
        self.configuracion_guardada.emit({k: v for k, v in cambios.items() if k != "DB_PASS"})
        QMessageBox.information(self, "Configuración guardada",
                                "Los cambios se aplicarán la próxima vez que abras la aplicación.")
