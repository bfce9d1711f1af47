"""Tests de normalización y validación de valores de entrada."""

import pytest

from utilities.sanitizer import Sanitizer


class TestNormalizarNombre:
    """Normalización usada para cruzar unidades con municipios."""

    @pytest.mark.parametrize("entrada, esperado", [
        ("Cáceres", "caceres"),
        ("Unidad de Cáceres-2", "unidad caceres 2"),
        ("Parque de los Bomberos", "parque bomberos"),
        ("Jaraíz de la Vera", "jaraiz vera"),
        ("Nuñomoral", "nunomoral"),
        ("Jerez de los Caballeros", "jerez caballeros"),
        ("  Villanueva   de la Serena ", "villanueva serena"),
        ("Valle del Jerte y La Vera", "valle jerte vera"),
    ])
    def test_normaliza(self, entrada, esperado):
        assert Sanitizer.normalizar_nombre(entrada) == esperado

    @pytest.mark.parametrize("entrada", [
        "Unidad de Plasencia-1", "Fregenal de la Sierra", "Las_Mestas de los Montes", "Y de la",
    ])
    def test_es_idempotente(self, entrada):
        una_vez = Sanitizer.normalizar_nombre(entrada)
        assert Sanitizer.normalizar_nombre(una_vez) == una_vez

    def test_none_y_vacio(self):
        assert Sanitizer.normalizar_nombre(None) == ""
        assert Sanitizer.normalizar_nombre("") == ""
        assert Sanitizer.normalizar_nombre("de la") == ""

    def test_quitar_tildes_conserva_mayusculas(self):
        assert Sanitizer.quitar_tildes("Mérida ÁVILA Ñ") == "Merida AVILA N"


class TestLimpiarHora:
    """Horas HH:MM del parte diario y de las salidas."""

    def test_rellena_hora_de_un_digito(self):
        assert Sanitizer.limpiar_hora("8:05") == "08:05"

    def test_acepta_hora_valida(self):
        assert Sanitizer.limpiar_hora(" 23:59 ") == "23:59"

    def test_vacio_es_sin_hora(self):
        assert Sanitizer.limpiar_hora("") == ""
        assert Sanitizer.limpiar_hora(None) == ""

    @pytest.mark.parametrize("valor", ["24:00", "12:60", "abc", "1230", "12:5"])
    def test_rechaza_horas_invalidas(self, valor):
        with pytest.raises(ValueError):
            Sanitizer.limpiar_hora(valor)


class TestLimpiarHorasExtra:
    """Texto libre de horas extra convertido a horas decimales."""

    @pytest.mark.parametrize("valor, esperado", [
        ("2", 2.0),
        ("2.5", 2.5),
        ("2,5", 2.5),
        ("02:30", 2.5),
        ("1:15", 1.25),
    ])
    def test_convierte(self, valor, esperado):
        assert Sanitizer.limpiar_horas_extra(valor) == esperado

    @pytest.mark.parametrize("valor", [None, "", "-", "abc", "1:75", "1:2:3", "inf", "1e400", "NaN", "-3", "-0,5"])
    def test_valores_no_numericos_son_none(self, valor):
        assert Sanitizer.limpiar_horas_extra(valor) is None


class TestLimpiarEntero:
    """Número de componentes de una salida."""

    def test_convierte(self):
        assert Sanitizer.limpiar_entero(" 4 ") == 4
        assert Sanitizer.limpiar_entero(0) == 0

    def test_vacio_es_none(self):
        assert Sanitizer.limpiar_entero("") is None
        assert Sanitizer.limpiar_entero(None) is None

    @pytest.mark.parametrize("valor", ["-1", "3.5", "cinco"])
    def test_rechaza(self, valor):
        with pytest.raises(ValueError):
            Sanitizer.limpiar_entero(valor)
