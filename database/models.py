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

from sqlalchemy import (
    Column, String, Float, ForeignKey, Integer, Boolean, DateTime, func
)
from sqlalchemy.orm import relationship
from database.conexion import Base
from utilities.uid import generar_uid


# ---------------- MODELOS ----------------

class Parte(Base):
    """Parte diario de una unidad o caseta: cabecera con el contexto de selección."""
    __tablename__ = "partes"

    # "YYYY-MM-DD:tipo:unidad_o_caseta"
    pk = Column(String(200), primary_key=True)
    created_at = Column(DateTime, server_default=func.now())
    session_key = Column(String(40), nullable=True)

    fecha = Column(String(10), nullable=False, index=True)
    provincia = Column(String(100))
    zona = Column(String(100))
    municipio = Column(String(150))
    tipo = Column(String(10))
    unidad = Column(String(150))
    caseta = Column(String(150))
    nombre_centro = Column(String(150))
    horas_extras_total = Column(Float, nullable=True)

    filas = relationship("ParteFila", back_populates="parte", cascade="all, delete-orphan")


class ParteFila(Base):
    """Línea del parte diario: código de asistencia y horarios de un componente."""
    __tablename__ = "parte_filas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    parte_pk = Column(
        String(200),
        ForeignKey("partes.pk", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    componente_id = Column(String(40), nullable=False)
    codigo = Column(String(4), nullable=True)
    abono_df = Column(Boolean, default=False, nullable=False)
    superior_categoria = Column(Boolean, default=False, nullable=False)
    jornada_ini = Column(String(5))
    jornada_fin = Column(String(5))
    salida_ini = Column(String(5))
    salida_fin = Column(String(5))

    parte = relationship("Parte", back_populates="filas")


class SalidaIncendio(Base):
    """Salida a incendio registrada desde un parte diario."""
    __tablename__ = "incendios"

    id = Column(String(26), primary_key=True, default=generar_uid, index=True)
    created_at = Column(DateTime, server_default=func.now())
    # Sin FK: una salida puede guardarse antes de que el parte llegue al backend
    parte_pk = Column(String(200), nullable=False, index=True)
    orden = Column(Integer, default=0, nullable=False)

    termino_municipal = Column(String(150))
    h_movilizacion = Column(String(5))
    h_salida = Column(String(5))
    h_llegada_inc = Column(String(5))
    h_regreso = Column(String(5))
    h_llegada_base = Column(String(5))
    num_componentes = Column(Integer, nullable=True)


class SalidaTrabajo(Base):
    """Salida por trabajos (desbroces, revisiones, apoyo) fuera del centro."""
    __tablename__ = "salidas_trabajo"

    id = Column(String(26), primary_key=True, default=generar_uid, index=True)
    created_at = Column(DateTime, server_default=func.now())
    parte_pk = Column(String(200), nullable=False, index=True)
    orden = Column(Integer, default=0, nullable=False)

    destino = Column(String(150))
    motivo = Column(String(255))
    h_salida = Column(String(5))
    h_llegada = Column(String(5))
    h_regreso = Column(String(5))
    num_componentes = Column(Integer, nullable=True)


class Cuadernillo(Base):
    """Fila aplanada del cuadernillo: contexto + componente + valores del día.

    Es la tabla que consultan la administración y los resúmenes.
    """
    __tablename__ = "cuadernillo"

    id = Column(String(26), primary_key=True, default=generar_uid, index=True)
    created_at = Column(DateTime, server_default=func.now())

    session_key = Column(String(40), nullable=False)
    parte_pk = Column(String(200), nullable=True, index=True)
    provincia = Column(String(100))
    zona = Column(String(100))
    municipio = Column(String(150))
    tipo = Column(String(10), nullable=False)
    unidad = Column(String(150))
    caseta = Column(String(150))
    nombre_centro = Column(String(150))
    fecha = Column(String(10), index=True)

    componente_nombre = Column(String(150))
    componente_apellidos = Column(String(150))
    componente_numero = Column(String(30))

    codigo = Column(String(4), nullable=False)
    abono_df = Column(Boolean, nullable=True)
    superior_categoria = Column(Boolean, nullable=True)
    jornada_ini = Column(String(5))
    jornada_fin = Column(String(5))
    horas_extra = Column(Float, nullable=True)
