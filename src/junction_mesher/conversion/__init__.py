"""
Mesh output package.

Defines the sink contract the geometry builders emit into, and the sinks
that turn emitted faces into indexed meshes and OBJ files.
"""

from .mesh_sink import (
    Winding,
    SurfaceTag,
    MeshSink,
    EmittedFace,
    FaceCollector,
    emit_faces,
    face_normal,
    unit_face_normal,
)
from .surface_masks import tag_to_color, color_to_tag
from .mesh_builder import RenderMesh, WeldingMeshBuilder, build_render_mesh
from .obj_writer import ObjWriter

__all__ = [
    'Winding',
    'SurfaceTag',
    'MeshSink',
    'EmittedFace',
    'FaceCollector',
    'emit_faces',
    'face_normal',
    'unit_face_normal',
    'tag_to_color',
    'color_to_tag',
    'RenderMesh',
    'WeldingMeshBuilder',
    'build_render_mesh',
    'ObjWriter',
]
