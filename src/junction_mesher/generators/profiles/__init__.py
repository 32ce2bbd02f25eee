"""
Geometry configuration package.

Provides the configuration dataclasses for intersection geometry and
JSON persistence for named configurations.
"""

from .geometry_config import (
    CurbGutter,
    CornerSize,
    CornerSizeSet,
    FootpathDepthSet,
    CornerGeometryConfig,
    FootpathGeometryConfig,
    IntersectionGeometryConfig,
    RoadSystemDefaults,
    GEOMETRY_PARAMETER_SCHEMA,
    apply_geometry_params,
)
from .config_storage import (
    get_configs_dir,
    config_to_dict,
    dict_to_config,
    save_config,
    load_config,
    load_config_from_path,
    list_saved_configs,
    delete_config,
)

__all__ = [
    'CurbGutter',
    'CornerSize',
    'CornerSizeSet',
    'FootpathDepthSet',
    'CornerGeometryConfig',
    'FootpathGeometryConfig',
    'IntersectionGeometryConfig',
    'RoadSystemDefaults',
    'GEOMETRY_PARAMETER_SCHEMA',
    'apply_geometry_params',
    'get_configs_dir',
    'config_to_dict',
    'dict_to_config',
    'save_config',
    'load_config',
    'load_config_from_path',
    'list_saved_configs',
    'delete_config',
]
