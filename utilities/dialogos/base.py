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

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QMessageBox, QVBoxLayout, QLabel, QLineEdit,
    QHBoxLayout, QPushButton, QFormLayout
)

from services.componentes import ServicioComponentes


class DialogoBase(QDialog):
    """
    Clase base para todos los diálogos de la aplicación, proporcionando métodos comunes
    y configuración compartida.
    """

    def mostrar_error(self, mensaje, titulo="Error"):
        """
        Muestra un cuadro de diálogo modal de error crítico.

        Args:
            mensaje (str): El texto explicativo del error.
            titulo (str, optional): El título de la ventana del mensaje. Por defecto es "Error".
        """
        msg = QMessageBox(self)
        msg.setIcon(QMessageBox.Icon.Critical)
        msg.setWindowTitle(titulo)
        msg.setText(mensaje)
        msg.setStandardButtons(QMessageBox.StandardButton.Ok)
        msg.exec()

    def _botonera(self, layout, texto_aceptar="Aceptar"):
        btn_layout = QHBoxLayout()
        self.btn_cancelar = QPushButton("Cancelar")
        self.btn_cancelar.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_aceptar = QPushButton(texto_aceptar)
        self.btn_aceptar.setCursor(Qt.CursorShape.PointingHandCursor)
        btn_layout.addStretch()
        btn_layout.addWidget(self.btn_cancelar)
        btn_layout.addWidget(self.btn_aceptar)
        layout.addLayout(btn_layout)

        self.btn_aceptar.clicked.connect(self.validar_y_aceptar)
        self.btn_cancelar.clicked.connect(self.reject)

    def validar_y_aceptar(self):
        self.accept()


class DialogoComponente(DialogoBase):
    """
    Diálogo para dar de alta un componente en la dotación.
    El botón Aceptar solo se habilita con nombre y apellidos.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Nuevo componente")
        self.setFixedSize(460, 260)
        self.datos = None

        layout = QVBoxLayout()
        layout.setContentsMargins(40, 30, 40, 30)
        layout.setSpacing(20)

        form = QFormLayout()
        self.input_nombre = QLineEdit()
        self.input_apellidos = QLineEdit()
        self.input_numero = QLineEdit()
        self.input_numero.setPlaceholderText("Opcional")
        form.addRow("Nombre:", self.input_nombre)
        form.addRow("Apellidos:", self.input_apellidos)
        form.addRow("Nº componente:", self.input_numero)
        layout.addLayout(form)

        self._botonera(layout, "Añadir")
        self.setLayout(layout)

        self.input_nombre.textChanged.connect(self._actualizar_estado)
        self.input_apellidos.textChanged.connect(self._actualizar_estado)
        self._actualizar_estado()
        self.input_nombre.setFocus()

    def _actualizar_estado(self):
        self.btn_aceptar.setEnabled(
            ServicioComponentes.puede_crear(self.input_nombre.text(), self.input_apellidos.text())
        )

    def validar_y_aceptar(self):
        """Guarda los datos introducidos y cierra el diálogo."""
        nombre = self.input_nombre.text().strip()
        apellidos = self.input_apellidos.text().strip()
        if not ServicioComponentes.puede_crear(nombre, apellidos):
            self.mostrar_error("Nombre y apellidos son obligatorios.", "Faltan datos")
            return
        self.datos = {"nombre": nombre, "apellidos": apellidos, "numero": self.input_numero.text().strip()}
        self.accept()

    def obtener_datos(self):
        """
        Returns:
            dict | None: {nombre, apellidos, numero} o None si se canceló.
        """
        return self.datos


class DialogoLogin(DialogoBase):
    """Credenciales de administración. Valida con el callback recibido."""

    def __init__(self, validar, parent=None):
        """
        Args:
            validar (callable): Recibe (usuario, clave) y devuelve bool.
            parent (QWidget, optional): Widget padre.
        """
        super().__init__(parent)
        self.validar = validar
        self.setWindowTitle("Acceso de administración")
        self.setFixedSize(420, 240)

        layout = QVBoxLayout()
        layout.setContentsMargins(40, 30, 40, 30)
        layout.setSpacing(15)

        form = QFormLayout()
        self.input_usuario = QLineEdit()
        self.input_clave = QLineEdit()
        self.input_clave.setEchoMode(QLineEdit.EchoMode.Password)
        self.input_clave.returnPressed.connect(self.validar_y_aceptar)
        form.addRow("Usuario:", self.input_usuario)
        form.addRow("Contraseña:", self.input_clave)
        layout.addLayout(form)

        self.lbl_error = QLabel("")
        self.lbl_error.setStyleSheet("color: #e74c3c;")
        layout.addWidget(self.lbl_error)

        self._botonera(layout, "Entrar")
        self.setLayout(layout)

    def validar_y_aceptar(self):
        if self.validar(self.input_usuario.text(), self.input_clave.text()):
            self.accept()
            return
        self.lbl_error.setText("Credenciales incorrectas.")
        self.input_clave.clear()
