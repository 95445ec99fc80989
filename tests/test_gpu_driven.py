import math

import pytest

from chemengine.render.gpu_driven import (
    DrawIndexedIndirectCommand,
    DrawIndirectCommand,
    GpuDrawList,
    ObjectData,
    aabb_in_frustum,
)


def standard_frustum():
    s = 1.0 / math.sqrt(2.0)
    return [
        (s, 0.0, -s, 0.0),
        (-s, 0.0, -s, 0.0),
        (0.0, s, -s, 0.0),
        (0.0, -s, -s, 0.0),
        (0.0, 0.0, -1.0, -0.1),
        (0.0, 0.0, 1.0, 100.0),
    ]


def make_object(aabb_min, aabb_max):
    return ObjectData(aabb_min=aabb_min, aabb_max=aabb_max, vertex_count=3, first_vertex=0)


def test_draw_list_add_and_count():
    draw_list = GpuDrawList()
    assert draw_list.object_count() == 0
    for _ in range(3):
        draw_list.add_object(ObjectData())
    assert draw_list.object_count() == 3
    assert len(draw_list.commands) == 3


def test_add_object_returns_index():
    draw_list = GpuDrawList()
    assert draw_list.add_object(ObjectData()) == 0
    assert draw_list.add_object(ObjectData()) == 1
    assert draw_list.commands[1].first_instance == 1


def test_draw_list_clear():
    draw_list = GpuDrawList()
    draw_list.add_object(ObjectData())
    draw_list.add_object(ObjectData())
    draw_list.visible_count = 2
    draw_list.clear()
    assert draw_list.object_count() == 0
    assert len(draw_list.commands) == 0
    assert draw_list.visible_count == 0


def test_commands_as_bytes_layout():
    assert DrawIndirectCommand.SIZE == 16
    draw_list = GpuDrawList()
    draw_list.add_object(ObjectData(vertex_count=36, first_vertex=100))
    data = draw_list.commands_as_bytes()
    assert len(data) == 16
    cmd = DrawIndirectCommand.from_bytes(data[:16])
    assert cmd.vertex_count == 36
    assert cmd.instance_count == 1
    assert cmd.first_vertex == 100
    assert cmd.first_instance == 0


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        DrawIndirectCommand.from_bytes(b"\x00" * 15)


def test_object_data_layout():
    assert ObjectData.SIZE == 112
    assert len(ObjectData().to_bytes()) == 112


def test_objects_as_bytes_length():
    draw_list = GpuDrawList()
    draw_list.add_object(ObjectData())
    draw_list.add_object(ObjectData(mesh_id=7))
    data = draw_list.objects_as_bytes()
    assert len(data) == 224
    assert data[112 + 96:112 + 100] == (7).to_bytes(4, "little")


def test_indexed_command_layout():
    cmd = DrawIndexedIndirectCommand(6, 1, 0, -4, 2)
    data = cmd.to_bytes()
    assert len(data) == 20
    assert data[12:16] == (-4).to_bytes(4, "little", signed=True)


def test_cpu_frustum_cull_visible():
    draw_list = GpuDrawList()
    draw_list.add_object(make_object((-1.0, -1.0, -6.0), (1.0, 1.0, -4.0)))
    draw_list.cpu_frustum_cull(standard_frustum())
    assert draw_list.commands[0].instance_count == 1
    assert draw_list.visible_count == 1


def test_cpu_frustum_cull_outside():
    draw_list = GpuDrawList()
    draw_list.add_object(make_object((-1.0, -1.0, 9.0), (1.0, 1.0, 11.0)))
    draw_list.cpu_frustum_cull(standard_frustum())
    assert draw_list.commands[0].instance_count == 0
    assert draw_list.visible_count == 0


def test_cpu_frustum_cull_partial():
    draw_list = GpuDrawList()
    draw_list.add_object(make_object((-0.1, -0.1, -0.5), (0.1, 0.1, 0.05)))
    draw_list.cpu_frustum_cull(standard_frustum())
    assert draw_list.commands[0].instance_count == 1
    assert draw_list.visible_count == 1


def test_aabb_in_frustum_all_inside():
    assert aabb_in_frustum((-0.5, -0.5, -5.5), (0.5, 0.5, -4.5), standard_frustum())


def test_aabb_in_frustum_behind_camera():
    assert not aabb_in_frustum((-1.0, -1.0, 4.0), (1.0, 1.0, 6.0), standard_frustum())


def test_count_visible_after_cull():
    draw_list = GpuDrawList()
    draw_list.add_object(make_object((-1.0, -1.0, -3.0), (1.0, 1.0, -1.0)))
    draw_list.add_object(make_object((-1.0, -1.0, -10.0), (1.0, 1.0, -8.0)))
    draw_list.add_object(make_object((50.0, 50.0, 4.0), (52.0, 52.0, 6.0)))
    draw_list.add_object(make_object((-1.0, -1.0, -50.0), (1.0, 1.0, -48.0)))
    draw_list.add_object(make_object((200.0, 0.0, -5.0), (202.0, 2.0, -3.0)))
    draw_list.cpu_frustum_cull(standard_frustum())
    assert draw_list.visible_count == 3
    assert draw_list.count_visible() == 3
    assert [c.instance_count for c in draw_list.commands] == [1, 1, 0, 1, 0]