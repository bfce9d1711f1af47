from dataclasses import dataclass, field, asdict, fields
from typing import Optional


@dataclass
class SeleccionActual:
    """
    Instantánea de la ubicación elegida en la pantalla de inicio.
    Es lo que leen el resto de pantallas a través del contexto de sesión.
    """
    session_key: str
    provincia: str
    zona: str
    municipio: str
    tipo: str            # 'unidad' | 'caseta'
    seleccion: str       # unidad o caseta elegida
    nombre_centro: str   # caseta si tipo == 'caseta', si no el municipio
    fecha: str           # YYYY-MM-DD

    @property
    def unidad(self) -> Optional[str]:
        return self.seleccion if self.tipo == "unidad" else None

    @property
    def caseta(self) -> Optional[str]:
        return self.seleccion if self.tipo == "caseta" else None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SeleccionActual":
        """Construye la instantánea desde un dict guardado. Claves ausentes quedan vacías."""
        return cls(**{f.name: str(data.get(f.name) or "") for f in fields(cls)})

    def contexto_fila(self) -> dict:
        """Columnas de contexto comunes a las filas remotas (partes, cuadernillo)."""
        return {
            "session_key": self.session_key,
            "provincia": self.provincia or None,
            "zona": self.zona or None,
            "municipio": self.municipio or None,
            "tipo": self.tipo,
            "unidad": self.unidad,
            "caseta": self.caseta,
            "nombre_centro": self.nombre_centro or None,
        }


@dataclass
class Componente:
    """Miembro de la dotación (componente) de una unidad o caseta."""
    id: str
    nombre: str
    apellidos: str
    numero: str = ""

    @property
    def nombre_completo(self) -> str:
        return f"{self.apellidos}, {self.nombre}"


@dataclass
class FilaParte:
    """Línea del parte diario para un componente."""
    componente_id: str
    codigo: str = ""
    abono_df: bool = False
    superior_categoria: bool = False
    jornada_ini: str = ""
    jornada_fin: str = ""
    salida_ini: str = ""
    salida_fin: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "FilaParte":
        return cls(
            componente_id=str(data.get("componente_id") or ""),
            codigo=data.get("codigo") or "",
            abono_df=bool(data.get("abono_df")),
            superior_categoria=bool(data.get("superior_categoria")),
            jornada_ini=data.get("jornada_ini") or "",
            jornada_fin=data.get("jornada_fin") or "",
            salida_ini=data.get("salida_ini") or "",
            salida_fin=data.get("salida_fin") or "",
        )


@dataclass
class ResultadoBusqueda:
    """Página de resultados de la administración."""
    filas: list = field(default_factory=list)
    total: int = 0
    pagina: int = 0
    total_paginas: int = 1
