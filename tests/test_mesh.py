import struct

from chemengine.render.mesh import Mesh, Vertex


def test_vertex_bytes_round_trip():
    v = Vertex((0.5, -0.5, 0.25), (1.0, 0.0, 0.5, 1.0))
    data = v.to_bytes()
    values = struct.unpack("<7f", data)
    assert values[:3] == v.position
    assert values[3:] == v.color


def test_color_starts_at_offset_12():
    v = Vertex((0.0, 0.0, 0.0), (0.5, 0.25, 0.75, 1.0))
    data = v.to_bytes()
    assert struct.unpack_from("<4f", data, 12) == v.color


def test_triangle_vertices():
    mesh = Mesh.triangle()
    assert [v.position for v in mesh.vertices] == [
        (0.0, 0.5, 0.0),
        (-0.5, -0.5, 0.0),
        (0.5, -0.5, 0.0),
    ]
    assert mesh.indices is None


def test_vertex_bytes_concatenates_vertices():
    mesh = Mesh.triangle()
    data = mesh.vertex_bytes()
    assert data == b"".join(v.to_bytes() for v in mesh.vertices)
    assert len(data) == len(mesh.vertices) * Vertex.SIZE


def test_empty_mesh_has_no_bytes():
    assert Mesh().vertex_bytes() == b""