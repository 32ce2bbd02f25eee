"""
Surface mask encoding.

Surface tags travel to downstream shading as vertex colors: the red
channel carries the tag id scaled into [0, 1] (id / 255), the remaining
channels are zero and alpha is one.
"""

from __future__ import annotations

from typing import Optional, Tuple

from junction_mesher.conversion.mesh_sink import SurfaceTag

Color = Tuple[float, float, float, float]

MASK_SCALE = 255.0


def tag_to_color(tag: SurfaceTag) -> Color:
    """Encode a surface tag as an RGBA vertex color."""
    return (tag.value / MASK_SCALE, 0.0, 0.0, 1.0)


def color_to_tag(color: Color) -> Optional[SurfaceTag]:
    """Decode a vertex color written by tag_to_color.

    Returns:
        The surface tag, or None if the red channel is not a known id
    """
    tag_id = int(round(color[0] * MASK_SCALE))
    try:
        return SurfaceTag(tag_id)
    except ValueError:
        return None
