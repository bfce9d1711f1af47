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

import ulid


def generar_uid() -> str:
    """
    Genera un identificador ordenable lexicográficamente (ULID).

    Se usa para claves de sesión, componentes, salidas y filas del cuadernillo.

    Returns:
        str: Cadena ULID de 26 caracteres.
    """
    return str(ulid.new())


def es_uid(valor) -> bool:
    """Indica si `valor` es un ULID bien formado (clave de sesión válida)."""
    if not isinstance(valor, str) or len(valor) != 26:
        return False
    try:
        ulid.from_str(valor)
    except ValueError:
        return False
    return True
