"""Meshes, frustum culling, indirect draw lists and the render graph."""