"""Engine building blocks: render graph and culling, dungeons, scene markers and window settings."""

__version__ = "0.1.0"