import copy

from chemengine.scene.name import Name


def test_name_display():
    assert str(Name("Player")) == "Player"
    assert f"{Name('Player')}" == "Player"


def test_name_as_str():
    assert Name("Camera").as_str() == "Camera"


def test_name_clone():
    cloned = copy.copy(Name("Entity"))
    assert cloned.as_str() == "Entity"


def test_name_debug():
    assert "Debug" in repr(Name("Debug"))