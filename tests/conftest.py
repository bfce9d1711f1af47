"""
Fixtures compartidas de la batería de tests.

Las variables de entorno se fijan ANTES de importar cualquier módulo de la
aplicación: `database.config` las lee al importarse y crea el engine con
ellas. El backend de los tests es un SQLite temporal.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

_TMP = tempfile.mkdtemp(prefix="cuadernillo-tests-")
os.environ["DB_TYPE"] = "sqlite"
os.environ["DB_NAME"] = os.path.join(_TMP, "tests.db")
os.environ["ALMACEN_LOCAL"] = os.path.join(_TMP, "almacen.json")
os.environ["ADMIN_USER"] = "admin"
os.environ["ADMIN_PASS"] = "admin"
os.environ.pop("CATALOGO_PATH", None)

sys.path.insert(0, str(Path(__file__).parent.parent))

import database.conexion as conexion  # noqa: E402
import database.models  # noqa: E402,F401
from database.schemas import SeleccionActual, Componente  # noqa: E402
from models.catalogo_model import cargar_catalogo  # noqa: E402
from services.almacen_local import AlmacenLocal  # noqa: E402


# =============================================================================
# Backend
# =============================================================================


@pytest.fixture
def backend():
    """Esquema SQLite recién creado para cada test que lo pida."""
    conexion.Base.metadata.drop_all(bind=conexion.engine)
    conexion.Base.metadata.create_all(bind=conexion.engine)
    yield conexion.engine
    conexion.Base.metadata.drop_all(bind=conexion.engine)


@pytest.fixture
def sin_backend(monkeypatch):
    """Simula el modo degradado (sin backend configurado)."""
    monkeypatch.setattr(conexion, "engine", None)
    monkeypatch.setattr(conexion, "SessionLocal", None)


# =============================================================================
# Datos
# =============================================================================


@pytest.fixture
def almacen(tmp_path):
    return AlmacenLocal(str(tmp_path / "almacen.json"))


@pytest.fixture
def catalogo():
    return cargar_catalogo()


@pytest.fixture
def seleccion():
    return SeleccionActual(
        session_key="01HZX3Y4B5C6D7E8F9G0H1J2K3",
        provincia="Cáceres",
        zona="Zona Norte",
        municipio="Plasencia",
        tipo="unidad",
        seleccion="Unidad de Plasencia-1",
        nombre_centro="Plasencia",
        fecha="2025-07-14",
    )


@pytest.fixture
def seleccion_caseta():
    return SeleccionActual(
        session_key="01HZX3Y4B5C6D7E8F9G0H1J2K4",
        provincia="Cáceres",
        zona="Zona Norte",
        municipio="Caminomorisco",
        tipo="caseta",
        seleccion="Caseta Las Mestas",
        nombre_centro="Caseta Las Mestas",
        fecha="2025-07-14",
    )


@pytest.fixture
def dotacion():
    return [
        Componente(id="c1", nombre="Ana", apellidos="Ruiz Gómez", numero="101"),
        Componente(id="c2", nombre="Luis", apellidos="Martín Sanz"),
        Componente(id="c3", nombre="Eva", apellidos="Díaz Pardo", numero="103"),
    ]
