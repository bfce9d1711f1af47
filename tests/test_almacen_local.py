"""Tests del almacén clave-valor local."""

import json

from services.almacen_local import AlmacenLocal


class TestAlmacenLocal:
    """Persistencia en archivo JSON."""

    def test_persiste_entre_instancias(self, tmp_path):
        ruta = str(tmp_path / "sub" / "almacen.json")
        AlmacenLocal(ruta).set_json("clave", {"a": 1})
        assert AlmacenLocal(ruta).get_json("clave") == {"a": 1}

    def test_archivo_corrupto_empieza_vacio(self, tmp_path):
        ruta = tmp_path / "almacen.json"
        ruta.write_text("{no es json", encoding="utf-8")
        almacen = AlmacenLocal(str(ruta))
        assert almacen.claves() == []

    def test_valor_corrupto_devuelve_default(self, almacen):
        almacen.set("clave", "{roto")
        assert almacen.get_json("clave", default=[]) == []
        assert almacen.get("clave") == "{roto"

    def test_remove(self, almacen):
        almacen.set("a", "1")
        almacen.remove("a")
        almacen.remove("no-existe")
        assert almacen.get("a") is None

    def test_solo_memoria(self):
        almacen = AlmacenLocal(None)
        almacen.set_json("k", [1, 2])
        assert almacen.get_json("k") == [1, 2]

    def test_guarda_texto_sin_escapar(self, tmp_path):
        ruta = tmp_path / "almacen.json"
        AlmacenLocal(str(ruta)).set_json("centro", "Cáceres")
        contenido = json.loads(ruta.read_text(encoding="utf-8"))
        assert json.loads(contenido["centro"]) == "Cáceres"
