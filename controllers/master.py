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

from PyQt6.QtCore import Qt, QSize, QPropertyAnimation, QEasingCurve, QParallelAnimationGroup
from PyQt6.QtWidgets import (
    QMainWindow, QStackedWidget, QPushButton, QLabel, QWidget, QVBoxLayout, QHBoxLayout
)

# --- IMPORTACIONES DE CONTROLADORES Y SERVICIOS ---
from controllers.controlador_administracion import ControladorAdministracion
from controllers.controlador_componentes import ControladorComponentes
from controllers.controlador_configuraciones import ControladorConfiguraciones
from controllers.controlador_control_diario import ControladorControlDiario
from controllers.controlador_resumen import ControladorResumen
from controllers.controlador_salidas import ControladorSalidas
from controllers.controlador_selector import ControladorSelector
from database import config
from database.conexion import hay_backend
from models.catalogo_model import cargar_catalogo
from services.almacen_local import AlmacenLocal
from services.componentes import ServicioComponentes
from services.sesion import ContextoSesion

logger = logging.getLogger(__name__)

# Páginas del stack, en el orden de los botones del sidebar
PAGINAS = [
    ("inicio", "Inicio"),
    ("control-diario", "Control diario"),
    ("componentes", "Componentes"),
    ("incendios", "Incendios"),
    ("trabajos", "Trabajos"),
    ("resumen", "Resumen"),
    ("administracion", "Administración"),
    ("configuracion", "Configuración"),
]


class MasterController(QMainWindow):
    """Controlador Maestro (Ventana Principal) de la aplicación.

    Crea los servicios compartidos (almacén local, contexto de sesión,
    dotación), coordina la navegación entre las pantallas del cuadernillo
    mediante el menú lateral y refresca cada pantalla al mostrarla.
    """

    def __init__(self):
        super().__init__()

        # 1. Servicios compartidos
        self.almacen = AlmacenLocal(config.ALMACEN_LOCAL_PATH)
        self.contexto = ContextoSesion(self.almacen)
        self.componentes = ServicioComponentes(self.almacen)
        self.catalogo = cargar_catalogo()

        # 2. Interfaz
        self._construir_ui()
        self._init_navigation()
        self._init_sidebar_animation()

        # 3. Pantalla inicial: control diario si ya hay selección guardada
        self.cambiar_pagina(1 if self.contexto.leer_seleccion() else 0)

    # ----------------------------
    # --- SETUP INTERFAZ & SIDEBAR ---
    # ----------------------------
    def _construir_ui(self):
        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        self.sidebar = QWidget()
        layout_sidebar = QVBoxLayout(self.sidebar)
        layout_sidebar.setContentsMargins(0, 0, 0, 0)
        layout_sidebar.setSpacing(5)

        self.btn_toggle_sidebar = QPushButton("☰")
        self.btn_toggle_sidebar.setToolTip("Mostrar / Ocultar sidebar")
        self.btn_toggle_sidebar.setCursor(Qt.CursorShape.PointingHandCursor)
        self.btn_toggle_sidebar.clicked.connect(self.toggle_sidebar)
        layout_sidebar.addWidget(self.btn_toggle_sidebar)

        self.lbl_titulo = QLabel(config.APP_TITLE)
        self.lbl_titulo.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_titulo.setStyleSheet("font-weight: bold; padding: 10px;")
        layout_sidebar.addWidget(self.lbl_titulo)

        self.botones = []
        for indice, (_, texto) in enumerate(PAGINAS):
            btn = QPushButton(f"   {texto}")
            btn.setCheckable(True)
            btn.setFixedHeight(45)
            btn.setIconSize(QSize(24, 24))
            btn.setStyleSheet("text-align: left; padding-left: 15px;")
            btn.clicked.connect(lambda _, i=indice: self.cambiar_pagina(i))
            layout_sidebar.addWidget(btn)
            self.botones.append(btn)
        layout_sidebar.addStretch()

        self.lbl_backend = QLabel("● Backend conectado" if hay_backend() else "● Sin backend (solo local)")
        self.lbl_backend.setStyleSheet(f"color: {'#2ecc71' if hay_backend() else '#f39c12'}; padding: 10px;")
        layout_sidebar.addWidget(self.lbl_backend)

        self.stackedWidget = QStackedWidget()
        layout.addWidget(self.sidebar)
        layout.addWidget(self.stackedWidget, stretch=1)
        self.setCentralWidget(central)

    def _init_navigation(self):
        """Inicializa los controladores de las vistas y los añade al Stack."""
        self.vista_selector = ControladorSelector(self.catalogo, self.contexto)
        self.vista_control_diario = ControladorControlDiario(self.almacen, self.contexto, self.componentes)
        self.vista_componentes = ControladorComponentes(self.componentes)
        self.vista_salidas = {
            "incendios": ControladorSalidas(self.almacen, "incendios"),
            "trabajos": ControladorSalidas(self.almacen, "trabajos"),
        }
        self.vista_resumen = ControladorResumen(self.contexto)
        self.vista_administracion = ControladorAdministracion()
        self.vista_configuraciones = ControladorConfiguraciones()

        for vista in (self.vista_selector, self.vista_control_diario, self.vista_componentes,
                      self.vista_salidas["incendios"], self.vista_salidas["trabajos"],
                      self.vista_resumen, self.vista_administracion, self.vista_configuraciones):
            self.stackedWidget.addWidget(vista)

        self.vista_selector.seleccion_confirmada.connect(lambda _: self.cambiar_pagina(1))
        self.vista_control_diario.signal_abrir_salidas.connect(self.abrir_salidas)
        self.vista_configuraciones.configuracion_guardada.connect(self._on_config_guardada)
        self.stackedWidget.currentChanged.connect(self._on_tab_changed)

    def _init_sidebar_animation(self):
        """Configura la animación del menú lateral (expandir/colapsar)."""
        self.width_expandido = 220
        self.width_colapsado = 60

        self.sidebar.setMinimumWidth(self.width_expandido)
        self.sidebar.setMaximumWidth(self.width_expandido)

        self.animacion_min = QPropertyAnimation(self.sidebar, b"minimumWidth")
        self.animacion_max = QPropertyAnimation(self.sidebar, b"maximumWidth")
        self.grupo_animacion = QParallelAnimationGroup()
        self.grupo_animacion.addAnimation(self.animacion_min)
        self.grupo_animacion.addAnimation(self.animacion_max)

    # ----------------------------
    # --- LÓGICA DE ANIMACIÓN (TOGGLE) ---
    # ----------------------------
    def toggle_sidebar(self):
        """Ejecuta la animación de apertura o cierre del menú lateral."""
        ancho_actual = self.sidebar.width()
        expandir = ancho_actual != self.width_expandido
        destino = self.width_expandido if expandir else self.width_colapsado

        try:
            self.grupo_animacion.finished.disconnect()
        except TypeError:
            pass

        for animacion in (self.animacion_min, self.animacion_max):
            animacion.setDuration(500)
            animacion.setStartValue(ancho_actual)
            animacion.setEndValue(destino)
            animacion.setEasingCurve(QEasingCurve.Type.InOutQuart)

        if expandir:
            self.grupo_animacion.finished.connect(lambda: self._set_elementos_visibles(True))
        else:
            self._set_elementos_visibles(False)
        self.grupo_animacion.start()

    def _set_elementos_visibles(self, visible: bool):
        """Muestra u oculta los textos del sidebar según su estado (expandido/colapsado)."""
        self.lbl_titulo.setVisible(visible)
        self.lbl_backend.setVisible(visible)
        for btn, (_, texto) in zip(self.botones, PAGINAS):
            btn.setText(f"   {texto}" if visible else texto[0])
            btn.setToolTip("" if visible else texto)
            btn.setStyleSheet("text-align: left; padding-left: 15px;" if visible else "text-align: center;")

    # ----------------------------
    # --- NAVEGACIÓN ---
    # ----------------------------
    def cambiar_pagina(self, index):
        """Cambia la vista actual en el StackedWidget."""
        if self.stackedWidget.currentIndex() == index:
            self._on_tab_changed(index)
        else:
            self.stackedWidget.setCurrentIndex(index)

    def _on_tab_changed(self, index):
        """Marca el botón activo y refresca la vista mostrada."""
        for i, btn in enumerate(self.botones):
            btn.setChecked(i == index)
        vista = self.stackedWidget.widget(index)
        if hasattr(vista, "al_mostrar"):
            vista.al_mostrar()

    def abrir_salidas(self, tipo: str, parte_pk: str):
        """Abre la lista de salidas vinculada al parte del control diario."""
        vista = self.vista_salidas[tipo]
        vista.set_parte(parte_pk)
        self.stackedWidget.blockSignals(True)
        self.stackedWidget.setCurrentWidget(vista)
        self.stackedWidget.blockSignals(False)
        for i, btn in enumerate(self.botones):
            btn.setChecked(i == self.stackedWidget.currentIndex())

    def _on_config_guardada(self, nueva_config):
        """El backend no cambia en caliente: avisa en el sidebar hasta reiniciar."""
        if nueva_config.get("DB_TYPE") != config.DB_TYPE:
            self.lbl_backend.setText("● Reinicia para cambiar de backend")
            self.lbl_backend.setStyleSheet("color: #3498db; padding: 10px;")
