"""Tests del catálogo estático de ubicaciones."""

import json

import pytest

from models.catalogo_model import CatalogoUbicaciones, CatalogoInvalido, leer_catalogo, cargar_catalogo


class TestCatalogoIncluido:
    """El catálogo que se distribuye con la aplicación."""

    def test_provincias_y_zonas_en_orden(self, catalogo):
        assert catalogo.provincias() == ["Cáceres", "Badajoz"]
        assert catalogo.zonas("Cáceres") == ["Zona Norte", "Zona Centro"]

    def test_municipios(self, catalogo):
        assert "Mérida" in catalogo.municipios("Badajoz", "Zona Vegas")

    def test_claves_inexistentes(self, catalogo):
        assert catalogo.zonas("Ávila") == []
        assert catalogo.zona("Cáceres", "Zona Oeste") is None
        assert catalogo.municipios("Cáceres", "Zona Oeste") == []

    def test_zona_sin_casetas(self, catalogo):
        assert dict(catalogo.zona("Badajoz", "Zona Vegas").casetas) == {}

    def test_casetas_de_solo_lectura(self, catalogo):
        zona = catalogo.zona("Cáceres", "Zona Norte")
        with pytest.raises(TypeError):
            zona.casetas["Coria"] = ("Caseta nueva",)

    def test_se_carga_una_vez(self):
        assert cargar_catalogo() is cargar_catalogo()


class TestValidacion:
    """Estructuras mal formadas se rechazan al construir."""

    def test_falta_unidades(self):
        with pytest.raises(CatalogoInvalido):
            CatalogoUbicaciones({"P": {"Z": {"municipios": ["a"]}}})

    def test_municipios_no_textos(self):
        with pytest.raises(CatalogoInvalido):
            CatalogoUbicaciones({"P": {"Z": {"municipios": [1], "unidades": []}}})

    def test_casetas_no_objeto(self):
        with pytest.raises(CatalogoInvalido):
            CatalogoUbicaciones({"P": {"Z": {"municipios": [], "unidades": [], "casetas": ["x"]}}})

    def test_vacio(self):
        with pytest.raises(CatalogoInvalido):
            CatalogoUbicaciones({})

    def test_alias_opcional(self):
        catalogo = CatalogoUbicaciones({"P": {"Z": {"municipios": ["m"], "unidades": ["Unidad m"]}}})
        assert catalogo.zona("P", "Z").alias == ()


class TestLectura:
    """Lectura desde disco."""

    def test_json_invalido(self, tmp_path):
        ruta = tmp_path / "catalogo.json"
        ruta.write_text("{", encoding="utf-8")
        with pytest.raises(CatalogoInvalido):
            leer_catalogo(str(ruta))

    def test_archivo_inexistente(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            leer_catalogo(str(tmp_path / "no.json"))

    def test_archivo_valido(self, tmp_path):
        ruta = tmp_path / "catalogo.json"
        ruta.write_text(json.dumps({"P": {"Z": {"municipios": ["m"], "unidades": []}}}), encoding="utf-8")
        assert leer_catalogo(str(ruta)).municipios("P", "Z") == ["m"]
