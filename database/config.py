#  Copyright (c) 2026 Fleer
import logging
import os
import sys
from dotenv import load_dotenv, set_key
from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

# 1. DETERMINAR RUTAS BASE
if getattr(sys, 'frozen', False):
    # Si es .exe, BASE_DIR será la carpeta del ejecutable
    BASE_DIR = os.path.dirname(sys.executable)
    PROJECT_DIR = BASE_DIR
else:
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    PROJECT_DIR = os.path.dirname(BASE_DIR)

ENV_PATH = os.path.join(BASE_DIR, '.env')
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)


def actualizar_env(clave, valor):
    """Actualiza o crea una variable de entorno en el archivo .env.

    Se utiliza para persistir la configuración de conexión elegida en la
    pantalla de configuración.

    Args:
        clave (str): Nombre de la variable de entorno.
        valor (str): Valor a asignar.
    """
    if not os.path.exists(ENV_PATH):
        with open(ENV_PATH, 'w') as f: f.write("")
    set_key(ENV_PATH, clave, str(valor))


def configurar_logging(nivel: str | None = None):
    """Configura el logging raíz de la aplicación.

    Args:
        nivel (str, optional): Nivel textual (DEBUG, INFO...). Por defecto LOG_LEVEL.
    """
    logging.basicConfig(
        level=getattr(logging, (nivel or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def _ruta(valor, base):
    return valor if os.path.isabs(valor) else os.path.join(base, valor)


def url_postgresql(usuario, clave, servidor, puerto, base_datos) -> URL:
    """URL de conexión a PostgreSQL con la clave escapada (admite @, : o /)."""
    return URL.create(
        "postgresql",
        username=usuario,
        password=clave,
        host=servidor,
        port=int(puerto) if str(puerto or "").isdigit() else None,
        database=base_datos,
    )


# 2. CONFIGURACIÓN DE BASE DE DATOS (backend remoto)
DB_TYPE = os.getenv("DB_TYPE", "sqlite").lower()
DB_NAME = os.getenv("DB_NAME", "cuadernillo.db")

if DB_TYPE == "sqlite":
    DATABASE_URL = f"sqlite:///{_ruta(DB_NAME, BASE_DIR)}"
elif DB_TYPE == "postgresql":
    _user = os.getenv("DB_USER")
    _pass = os.getenv("DB_PASS")
    _host = os.getenv("DB_HOST")
    _name = os.getenv("DB_NAME_REMOTE")
    _port = os.getenv("DB_PORT", "5432")

    if not all([_user, _pass, _host, _name]):
        # Sin credenciales completas trabajamos en modo degradado (solo local)
        logger.warning("Credenciales de PostgreSQL incompletas; backend remoto desactivado.")
        DATABASE_URL = None
    else:
        DATABASE_URL = url_postgresql(_user, _pass, _host, _port, _name)
else:
    DATABASE_URL = None

# 3. ALMACÉN LOCAL Y CATÁLOGO
ALMACEN_LOCAL_PATH = _ruta(os.getenv("ALMACEN_LOCAL", "almacen_local.json"), BASE_DIR)
CATALOGO_PATH = _ruta(
    os.getenv("CATALOGO_PATH", os.path.join("config", "catalogo_ubicaciones.json")),
    PROJECT_DIR
)

# 4. COMPORTAMIENTO
DEBOUNCE_MS = int(os.getenv("DEBOUNCE_MS", "500"))
ADMIN_USER = os.getenv("ADMIN_USER", "admin")
ADMIN_PASS = os.getenv("ADMIN_PASS", "admin")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# 5. CONFIGURACIÓN VISUAL (UI)
THEME_XML = 'dark_teal.xml'
FONT_FAMILY = 'Roboto'
APP_TITLE = "Cuadernillo · INFOEX"
