"""Window configuration and runtime window state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WindowDescriptor:
    """Configuration used when the window is created."""

    title: str = "ChemEngine"
    width: int = 1280
    height: int = 720
    vsync: bool = True
    resizable: bool = True


@dataclass
class WindowState:
    """Runtime window state, updated each frame."""

    width: int = 0
    height: int = 0
    focused: bool = False
    minimized: bool = False
    scale_factor: float = 0.0
    should_close: bool = False