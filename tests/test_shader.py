import pytest

from sibox.shader import (
    Shader,
    ShaderError,
    ShaderStage,
    is_valid_shader_stage,
    shader_type_string,
)

VERTEX_SOURCE = """#version 450 core
layout(location = 0) in vec3 a_Position;
uniform mat4 u_ViewProjection;
// uniform float u_Commented;
void main() { gl_Position = u_ViewProjection * vec4(a_Position, 1.0); }
"""

FRAGMENT_SOURCE = """#version 450 core
uniform vec4 u_Color;
out vec4 o_Color;
void main() { o_Color = u_Color; }
"""


def linked_shader():
    shader = Shader("Quad")
    shader.add_stage_from_source(ShaderStage.VERTEX, VERTEX_SOURCE)
    shader.add_stage_from_source(ShaderStage.FRAGMENT, FRAGMENT_SOURCE)
    shader.link_program()
    return shader


def test_valid_stages():
    assert all(is_valid_shader_stage(stage) for stage in ShaderStage)
    assert is_valid_shader_stage(0x1234) is False


def test_stage_names():
    assert shader_type_string(ShaderStage.VERTEX) == "Vertex Shader"
    assert shader_type_string(ShaderStage.TESS_CONTROL) == "Tessellation Control Shader"
    assert shader_type_string(0x1234) == "Unknown Shader Type"


def test_leading_bytes_before_version_are_dropped():
    shader = Shader("Bom")
    shader.add_stage_from_source(ShaderStage.VERTEX, "\ufeff" + VERTEX_SOURCE)
    (stage, source), = shader.stage_sources
    assert stage is ShaderStage.VERTEX
    assert source == VERTEX_SOURCE


def test_source_without_directive_is_rejected():
    shader = Shader("Broken")
    with pytest.raises(ShaderError):
        shader.add_stage_from_source(ShaderStage.VERTEX, "void main() {}")
    assert shader.stage_sources == ()


def test_invalid_stage_is_rejected():
    with pytest.raises(ShaderError):
        Shader("Bad").add_stage_from_source(0x1234, VERTEX_SOURCE)


def test_stage_ids_are_distinct():
    shader = Shader("Ids")
    first = shader.add_stage_from_source(ShaderStage.VERTEX, VERTEX_SOURCE)
    second = shader.add_stage_from_source(ShaderStage.FRAGMENT, FRAGMENT_SOURCE)
    assert first != second


def test_link_completes_program():
    shader = Shader("Quad")
    shader.add_stage_from_source(ShaderStage.VERTEX, VERTEX_SOURCE)
    shader.add_stage_from_source(ShaderStage.FRAGMENT, FRAGMENT_SOURCE)
    program = shader.link_program()
    assert program == shader.program_id
    assert shader.is_complete
    assert not shader.has_error
    assert shader.stage_sources == ()


def test_adding_stage_after_link_fails():
    shader = linked_shader()
    with pytest.raises(ShaderError):
        shader.add_stage_from_source(ShaderStage.GEOMETRY, VERTEX_SOURCE)


def test_link_without_stages_fails():
    shader = Shader("Empty")
    with pytest.raises(ShaderError):
        shader.link_program()
    assert shader.has_error
    assert not shader.is_complete


def test_link_with_duplicate_stage_fails():
    shader = Shader("Twice")
    shader.add_stage_from_source(ShaderStage.VERTEX, VERTEX_SOURCE)
    shader.add_stage_from_source(ShaderStage.VERTEX, VERTEX_SOURCE)
    with pytest.raises(ShaderError):
        shader.link_program()
    assert shader.has_error


def test_declared_uniforms_are_found():
    shader = linked_shader()
    assert set(shader.uniform_names) == {"u_ViewProjection", "u_Color"}


def test_uniform_round_trip():
    shader = linked_shader()
    colour = (0.1, 0.2, 0.3, 1.0)
    shader.set_uniform("u_Color", colour)
    assert shader.uniform("u_Color") == colour


def test_undeclared_uniform_is_ignored():
    shader = linked_shader()
    shader.set_uniform("u_Commented", 3.0)
    assert shader.uniform_location("u_Commented") == -1
    with pytest.raises(KeyError):
        shader.uniform("u_Commented")


def test_add_stage_from_file(tmp_path):
    path = tmp_path / "quad.vert"
    path.write_text("\ufeff" + VERTEX_SOURCE, encoding="utf-8")
    shader = Shader("File")
    shader.add_stage_from_file(ShaderStage.VERTEX, path)
    assert shader.stage_sources == ((ShaderStage.VERTEX, VERTEX_SOURCE),)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ShaderError):
        Shader("Missing").add_stage_from_file(ShaderStage.VERTEX, tmp_path / "nope.vert")


def test_bind_attribute_tracks_used_count():
    shader = Shader("Attributes")
    shader.bind_attribute(2, "a_TexCoord")
    shader.bind_attribute(0, "a_Position")
    assert shader.used_vertex_attributes == 3
    assert shader.attribute_locations == {"a_TexCoord": 2, "a_Position": 0}


def test_negative_attribute_rejected():
    with pytest.raises(ValueError):
        Shader("Attributes").bind_attribute(-1, "a_Position")


def test_clean_up_invalidates_program():
    shader = linked_shader()
    shader.clean_up()
    assert shader.program_id == 0


def test_program_ids_are_unique():
    assert Shader("A").program_id != Shader("B").program_id