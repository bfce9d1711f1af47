"""Tests del módulo de arranque."""

import importlib
import sys

import pytest

pytest.importorskip("PyQt6.QtWidgets")
pytest.importorskip("PyQt6.QtCharts")
pytest.importorskip("qt_material")


def test_importar_no_modifica_sys_path():
    antes = list(sys.path)
    main = importlib.import_module("main")

    assert sys.path == antes
    assert callable(main.main)
    assert callable(main.validar_catalogo)


def test_validar_catalogo_valido():
    main = importlib.import_module("main")
    assert main.validar_catalogo() is True
