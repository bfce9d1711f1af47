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
from sqlalchemy import or_, cast, String
from sqlalchemy.exc import SQLAlchemyError
import database.conexion as conexion

logger = logging.getLogger(__name__)


class ErrorBackend(Exception):
    """Fallo en una llamada al backend remoto. El mensaje es el del driver."""


class BackendNoConfigurado(ErrorBackend):
    """No hay backend remoto configurado (modo degradado)."""

    def __init__(self, mensaje="Backend remoto no configurado"):
        super().__init__(mensaje)


class BaseCRUDModel:
    """Clase base para operaciones de almacén de filas sobre modelos SQLAlchemy.

    Expone la interfaz que usan los servicios: insertar, seleccionar con
    filtros/orden/rango, upsert por clave de conflicto y borrado por filtro.
    Las filas entran y salen como diccionarios planos. Las clases hijas
    definen el atributo de clase `model`.
    """

    model = None  # se define en la subclase

    # ----------------------------
    # SESIÓN Y CONVERSIÓN
    # ----------------------------
    @staticmethod
    def _get_session():
        """Crea una sesión nueva.

        Raises:
            BackendNoConfigurado: Si la aplicación está en modo degradado.
        """
        if conexion.SessionLocal is None:
            raise BackendNoConfigurado()
        return conexion.SessionLocal()

    def _a_dict(self, obj) -> dict:
        return {c.name: getattr(obj, c.name) for c in self.model.__table__.columns}

    def _datos_validos(self, data: dict) -> dict:
        columnas = self.model.__table__.columns.keys()
        return {k: v for k, v in data.items() if k in columnas}

    # ----------------------------
    # OPERACIONES
    # ----------------------------
    def insert(self, rows: list[dict]) -> int:
        """Inserta varias filas en una sola transacción.

        Args:
            rows (list[dict]): Filas a insertar. Se ignoran claves que no son columnas.

        Returns:
            int: Número de filas insertadas.

        Raises:
            ErrorBackend: Si la base de datos rechaza la operación.
        """
        if not rows:
            return 0
        with self._get_session() as session:
            try:
                session.add_all([self.model(**self._datos_validos(r)) for r in rows])
                session.commit()
                return len(rows)
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Error insertando en %s: %s", self.model.__tablename__, e)
                raise ErrorBackend(str(e)) from e

    def select(
        self,
        filters: dict | None = None,
        or_fields: list[tuple[str, str]] | None = None,
        order_by: list[str] | None = None,
        offset: int | None = None,
        limit: int | None = None
    ) -> tuple[list[dict], int]:
        """Consulta filas con filtros, ordenamiento y rango.

        Args:
            filters (dict, optional): Igualdad exacta (AND). {campo: valor}.
            or_fields (list[tuple], optional): Búsqueda parcial sin mayúsculas (OR).
            order_by (list[str], optional): Columnas en orden ascendente, nulos primero.
            offset (int, optional): Filas a saltar.
            limit (int, optional): Máximo de filas.

        Returns:
            tuple[list[dict], int]: Filas del rango y total que cumple los filtros.
        """
        with self._get_session() as session:
            try:
                query = self._apply_filters(session.query(self.model), filters, or_fields)
                total = query.count()

                for campo in order_by or []:
                    if hasattr(self.model, campo):
                        query = query.order_by(getattr(self.model, campo).asc().nullsfirst())
                if offset is not None:
                    query = query.offset(offset)
                if limit is not None:
                    query = query.limit(limit)

                return [self._a_dict(o) for o in query.all()], total
            except SQLAlchemyError as e:
                logger.error("Error consultando %s: %s", self.model.__tablename__, e)
                raise ErrorBackend(str(e)) from e

    def upsert(self, row: dict, conflict_key: str) -> None:
        """Inserta la fila o actualiza la existente con la misma clave de conflicto.

        Args:
            row (dict): Datos completos de la fila.
            conflict_key (str): Columna única usada para detectar la fila existente.
        """
        data = self._datos_validos(row)
        with self._get_session() as session:
            try:
                obj = session.query(self.model).filter(
                    getattr(self.model, conflict_key) == data[conflict_key]
                ).first()
                if obj is None:
                    session.add(self.model(**data))
                else:
                    for key, value in data.items():
                        setattr(obj, key, value)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Error en upsert de %s: %s", self.model.__tablename__, e)
                raise ErrorBackend(str(e)) from e

    def delete(self, filters: dict) -> int:
        """Elimina las filas que cumplen los filtros de igualdad.

        Args:
            filters (dict): Filtros exactos. Obligatorios: no se vacía una tabla entera.

        Returns:
            int: Número de filas eliminadas.
        """
        if not filters:
            raise ValueError("delete requiere al menos un filtro")
        with self._get_session() as session:
            try:
                query = session.query(self.model)
                for field, value in filters.items():
                    query = query.filter(getattr(self.model, field) == value)
                borradas = query.delete(synchronize_session=False)
                session.commit()
                return borradas
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Error borrando en %s: %s", self.model.__tablename__, e)
                raise ErrorBackend(str(e)) from e

    # ----------------------------
    # MÉTODO AUXILIAR DE FILTRADO
    # ----------------------------
    def _apply_filters(self, query, filters: dict | None = None, or_fields: list[tuple[str, str]] | None = None):
        """Aplica filtros dinámicos (AND) y de búsqueda parcial (OR) a una consulta.

        Un valor None en `filters` filtra por IS NULL.
        """
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field).is_(None) if value is None
                                         else getattr(self.model, field) == value)

        if or_fields:
            or_conditions = []
            for field, value in or_fields:
                if hasattr(self.model, field):
                    column = getattr(self.model, field)
                    or_conditions.append(cast(column, String).ilike(f"%{value}%"))
            if or_conditions:
                query = query.filter(or_(*or_conditions))

        return query
