import pytest

from sibox.shader import Shader
from sibox.shader_library import ShaderLibrary


def test_create_registers_shader():
    library = ShaderLibrary()
    shader = library.create_shader("Quad")
    assert shader.name == "Quad"
    assert library.get_shader("Quad") is shader
    assert "Quad" in library


def test_get_missing_returns_none():
    assert ShaderLibrary().get_shader("Missing") is None


def test_duplicate_name_rejected():
    library = ShaderLibrary()
    library.create_shader("Quad")
    with pytest.raises(ValueError):
        library.create_shader("Quad")
    assert len(library) == 1


def test_add_shader_uses_own_name_by_default():
    library = ShaderLibrary()
    shader = Shader("Text")
    library.add_shader(shader)
    assert library.get_shader("Text") is shader


def test_add_shader_under_other_name():
    library = ShaderLibrary()
    shader = Shader("Text")
    library.add_shader(shader, "Alias")
    assert library.get_shader("Alias") is shader
    assert "Text" not in library


def test_remove_shader():
    library = ShaderLibrary()
    library.create_shader("Tilemap")
    assert library.remove_shader("Tilemap") is True
    assert library.remove_shader("Tilemap") is False
    assert library.get_shader("Tilemap") is None


def test_clear_empties_library():
    library = ShaderLibrary()
    library.create_shader("Quad")
    library.create_shader("Text")
    library.clear()
    assert len(library) == 0
    assert list(library) == []