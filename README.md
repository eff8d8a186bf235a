# sibox

Building blocks for a batched 2D renderer, in plain Python on top of numpy
and Pillow. Everything is held in memory: the package works out vertex
streams, layouts, texture coordinates, matrices and draw calls, and hands each
draw call to a callback you supply.

## Modules

- `sibox.vector`: `Vector2`, `Vector3`, `Vector4` with component-wise
  arithmetic (against vectors of the same size or plain numbers),
  `length`, `length_squared`, `normalize`, `normalized` and `dot`; and
  `Matrix2x2`, which starts as the identity and has `get` and `set`.
- `sibox.render_buffer`: the `ShaderDataType` and `BufferUsageType` enums with
  their names, sizes and component counts; `BufferElement`; `BufferLayout`,
  which packs element offsets and computes the stride; and
  `vertex_attributes(layout, first_index)`, which expands a layout into
  `VertexAttribute` slots (one per matrix column, integer and boolean types
  flagged as integer attributes).
- `sibox.texture`: `TextureSpecification` and `Texture`. A texture holds its
  pixel bytes; `set_data` checks the size exactly. `Texture.from_file` loads an
  image with Pillow, converts it to the specification's format, flips it
  vertically unless told not to, and raises `TextureError` if it cannot be read.
- `sibox.shader`: `Shader`, built from `ShaderStage` sources (text before the
  first `#` is dropped). `link_program` checks the set of stages (at least one,
  no stage twice, a compute stage alone) and collects the `uniform`
  declarations found in the sources; `set_uniform` and `uniform` store and read
  uniform values. Problems raise `ShaderError`.
- `sibox.shader_library`: `ShaderLibrary`, shaders registered under unique
  names.
- `sibox.sprite_sheet`: `SpriteSheet`, which cuts a texture into sprites or a
  grid of tiles and gives each sprite's texture-coordinate rectangle.
- `sibox.camera`: `Transform`, `Rect` and `Camera` with view, perspective and
  orthographic view-projection matrices (numpy 4x4 arrays) and the rectangle
  the orthographic view covers.
- `sibox.viewport`: `Viewport`, which keeps its camera's aspect ratio in step
  with its size and renders any object with a `render()` method set as its
  `world`.
- `sibox.batch`: `QuadBatch`, `TextureSet`, `RenderStats`, `RendererData` and
  `quad_indices`. A batch collects quads and flushes them when full, when it
  runs out of texture slots, or on request; each flush passes the vertices,
  index count, bound textures and view-projection matrix to `submit`.
- `sibox.renderer`: `Renderer`, which owns the viewports, a shader library and
  one quad batch and runs the frame (`begin_frame`, `render`); and
  `format_gl_debug_message` for readable debug messages.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from sibox.camera import Camera, Rect
from sibox.render_buffer import BufferElement, BufferLayout, ShaderDataType
from sibox.renderer import Renderer
from sibox.shader import Shader, ShaderStage
from sibox.sprite_sheet import SpriteSheet
from sibox.texture import Texture, TextureSpecification

layout = BufferLayout([
    BufferElement("a_Position", ShaderDataType.FLOAT3),
    BufferElement("a_Color", ShaderDataType.FLOAT4),
])
print(layout.stride)  # 28

texture = Texture(TextureSpecification(width=64, height=32))
sheet = SpriteSheet(texture)
print(sheet.create_tiles_from_tile_size(16, 16))  # 8

shader = Shader("Quad")
shader.add_stage_from_source(
    ShaderStage.VERTEX, "#version 450\nuniform mat4 u_ViewProjection;\nvoid main() {}\n"
)
shader.link_program()
print(shader.uniform_names)  # ('u_ViewProjection',)

submissions = []
with Renderer(submit=submissions.append) as renderer:
    viewport = renderer.create_viewport((1280, 720))
    viewport.set_camera(Camera())

    class Scene:
        def render(self):
            renderer.quad_batch.draw_rectangle(Rect(0.0, 0.0, 2.0, 1.0), (1.0, 0.0, 0.0, 1.0))

    viewport.world = Scene()
    renderer.begin_frame()
    renderer.render()
    print(renderer.stats.draw_calls, renderer.stats.quad_count)  # 1 1

print(len(submissions[0].vertices))  # 4
```

## What it does not do

There is no window, no graphics context and no GPU. Shaders are never
compiled: linking only checks which stages were added and reads uniform names
from the source text. Textures are byte buffers in memory. Drawing ends at the
`submit` callback; putting pixels on a screen is up to the caller. There is no
text, font or tilemap rendering, and no on-screen debug interface.