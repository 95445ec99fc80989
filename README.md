# chemengine

Pure-Python building blocks for a game engine. The package depends on nothing
outside the standard library.

## What is inside

- **`chemengine.render.render_graph`**: `RenderGraph` orders render passes.
  The order comes from explicit edges and from the resources each pass reads
  and writes. The module also has `PassId`, `ResourceId`, `ResourceAccess`,
  `ResourceBinding`, `PassContext` and `RenderPassNode`. Its errors are
  `GraphError` and its subclasses `CycleDetectedError`, `UnknownPassError`,
  `ResourceConflictError` and `NotCompiledError`.
- **`chemengine.render.gpu_cull`**:
  - `extract_frustum_planes` takes a column-major view-projection matrix and
    returns a `GpuFrustum` of six normalised planes.
  - `cull_cpu` tests `GpuAabb` boxes against a frustum and returns one
    `CullResult` per box.
  - Each of these types has a `to_bytes()` method that packs it into the
    GPU layout: 32, 96 and 4 bytes.
- **`chemengine.render.gpu_driven`**:
  - `GpuDrawList` holds `ObjectData` records (112 bytes packed). For each
    record it keeps a matching `DrawIndirectCommand` (16 bytes).
  - `cpu_frustum_cull` sets each command's instance count to 1 or 0.
  - The module also has `aabb_in_frustum` and `DrawIndexedIndirectCommand`.
- **`chemengine.render.mesh`**:
  - `Vertex` packs a position and an RGBA colour into 28 little-endian bytes.
  - `Mesh.triangle()` builds a sample RGB triangle.
  - `Mesh.vertex_bytes()` packs all the vertices of a mesh.
- **`chemengine.worldgen.dungeon`**:
  - `Dungeon.generate(width, height, seed, min_room_size)` builds a
    deterministic dungeon by binary space partitioning.
  - The result holds `Room`s, joined in sequence by L-shaped `Corridor`s,
    and a row-major grid of `Tile`s.
- **`chemengine.scene.hierarchy`**: `Entity`, `Parent`, and `Children`, which
  is a duplicate-free ordered list of child entities.
- **`chemengine.scene.name`**: `Name` is a readable label for an entity.
- **`chemengine.window.window`**:
  - `WindowDescriptor` holds window creation settings. The defaults are
    "ChemEngine", 1280×720, vsync on and resizable.
  - `WindowState` holds runtime window state.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

### Render graph

```python
from chemengine.render.render_graph import RenderGraph

graph = RenderGraph()
gbuffer = graph.add_pass("GBufferWrite")
lighting = graph.add_pass("LightingRead")
graph.set_pass_writes(gbuffer, ["gbuffer"])
graph.set_pass_reads(lighting, ["gbuffer"])
graph.set_pass_execute(lighting, lambda ctx: print(ctx.pass_name, ctx.frame_index))

graph.compile()
graph.execute(0)
print(graph.execution_order())
print(graph.resource_lifetime("gbuffer"))   # (first writer, last reader)
```

`compile` adds an edge from every writer of a resource to every reader of it.
It raises an error in three cases:

- `UnknownPassError` if an edge names a pass that is not in the graph.
- `ResourceConflictError` if two writers of one resource have no ordering
  between them.
- `CycleDetectedError` if the dependencies form a cycle.

Passes with no dependencies between them run in order of their ids.
`execute` does nothing until the graph has been compiled. Adding a pass, an
edge or a resource declaration clears the compiled order.

### Frustum culling

```python
from chemengine.render.gpu_cull import GpuAabb, cull_cpu, extract_frustum_planes

identity = [[1.0, 0.0, 0.0, 0.0], [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0], [0.0, 0.0, 0.0, 1.0]]
frustum = extract_frustum_planes(identity)
box = GpuAabb(min=(-0.5, -0.5, -0.5), max=(0.5, 0.5, 0.5))
print([r.visible for r in cull_cpu(frustum, [box])])   # [1]
```

### Indirect draw list

```python
from chemengine.render.gpu_driven import GpuDrawList, ObjectData

draw_list = GpuDrawList()
draw_list.add_object(ObjectData(aabb_min=(-1.0, -1.0, -6.0),
                                aabb_max=(1.0, 1.0, -4.0), vertex_count=3))
draw_list.cpu_frustum_cull(frustum.planes)
print(draw_list.visible_count, len(draw_list.commands_as_bytes()))
```

### Dungeons

```python
from chemengine.worldgen.dungeon import Dungeon, Tile

dungeon = Dungeon.generate(80, 50, 42, 5)
print(len(dungeon.rooms), len(dungeon.corridors), dungeon.floor_count())
print(dungeon.get_tile(-1, 0) is Tile.WALL)   # everything outside the grid is wall
```

The same arguments always give the same dungeon.

## What it does not do

This package works only on data. It has the following limits:

- It opens no window and reads no keyboard or mouse input.
- It does not talk to a GPU or an XR headset. Byte packing is as far as it
  goes toward the GPU.
- It has no vector, quaternion or matrix types. Matrices and planes are plain
  nested sequences of floats.
- It has no transforms or cameras.
- It does no terrain, noise or biome generation.
- It has no command-line tool.