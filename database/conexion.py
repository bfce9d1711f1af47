#  Copyright (c) 2026 Fleer
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import DATABASE_URL

logger = logging.getLogger(__name__)

# Sin DATABASE_URL no hay engine: la aplicación funciona en modo degradado
engine = create_engine(DATABASE_URL, echo=False) if DATABASE_URL else None


@event.listens_for(Engine, "connect")
def activar_foreign_keys_sqlite(dbapi_connection, connection_record):
    """Activa el soporte de claves foráneas (Foreign Keys) para conexiones SQLite.

    Se ejecuta automáticamente al conectar; si el driver no es 'sqlite3'
    no hace nada.

    Args:
        dbapi_connection: La conexión cruda de la DBAPI.
        connection_record: El registro de contexto de la conexión.
    """
    if "sqlite3" in str(dbapi_connection.__class__.__module__):
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        except Exception as e:
            logger.warning("No se pudo activar PRAGMA foreign_keys: %s", e)
        finally:
            cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine is not None else None
Base = declarative_base()


def hay_backend() -> bool:
    """Indica si hay un backend remoto configurado."""
    return SessionLocal is not None
