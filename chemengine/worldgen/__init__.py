"""Procedural world generation: BSP dungeons."""