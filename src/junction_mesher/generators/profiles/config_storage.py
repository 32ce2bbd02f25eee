"""
Persistence layer for intersection geometry configurations.

Handles save/load of named configurations to
~/.config/junction_mesher/configs/ (or a caller-supplied directory).
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from junction_mesher.generators.intersection.topology import CornerId, Side
from .geometry_config import (
    CornerGeometryConfig,
    CornerSize,
    CornerSizeSet,
    CurbGutter,
    FootpathDepthSet,
    FootpathGeometryConfig,
    IntersectionGeometryConfig,
)

logger = logging.getLogger(__name__)


def get_configs_dir(directory: Optional[Path] = None) -> Path:
    """
    Get the directory for storing configurations.

    Args:
        directory: Override directory; defaults to ~/.config/junction_mesher/configs/

    Returns:
        The directory path, created if it doesn't exist.
    """
    config_dir = directory or Path.home() / ".config" / "junction_mesher" / "configs"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


# ------------------------------------------------------------------
# Serialization
# ------------------------------------------------------------------

def _curb_to_dict(curb: CurbGutter) -> Dict[str, float]:
    return {
        "skirt_out": curb.skirt_out,
        "skirt_down": curb.skirt_down,
        "gutter_depth": curb.gutter_depth,
        "gutter_width": curb.gutter_width,
    }


def _dict_to_curb(data: Dict[str, Any]) -> CurbGutter:
    defaults = CurbGutter()
    return CurbGutter(
        skirt_out=float(data.get("skirt_out", defaults.skirt_out)),
        skirt_down=float(data.get("skirt_down", defaults.skirt_down)),
        gutter_depth=float(data.get("gutter_depth", defaults.gutter_depth)),
        gutter_width=float(data.get("gutter_width", defaults.gutter_width)),
    )


def config_to_dict(config: IntersectionGeometryConfig) -> Dict[str, Any]:
    """Convert a configuration to a JSON-serializable dictionary."""
    sizes = config.corners.sizes
    return {
        "name": config.name,
        "curb": _curb_to_dict(config.curb),
        "corners": {
            corner.value: {
                "x_size": sizes.get(corner).x_size,
                "z_size": sizes.get(corner).z_size,
            }
            for corner in CornerId
        },
        "corner_curbs": {
            corner.value: _curb_to_dict(curb)
            for corner, curb in config.corners.curb_overrides.items()
        },
        "footpath_depths": {
            side.value: config.footpaths.depths.get(side) for side in Side
        },
        "footpath_curbs": {
            side.value: _curb_to_dict(curb)
            for side, curb in config.footpaths.curb_overrides.items()
        },
    }


def dict_to_config(data: Dict[str, Any]) -> IntersectionGeometryConfig:
    """Create a configuration from a dictionary.

    Missing entries fall back to defaults. Unknown corner or side keys
    raise ValueError.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

    corner_data = data.get("corners", {})
    sizes = CornerSizeSet()
    for key, value in corner_data.items():
        sizes = sizes.with_corner(
            CornerId(key),
            CornerSize(float(value["x_size"]), float(value["z_size"])),
        )

    depths = FootpathDepthSet()
    for key, value in data.get("footpath_depths", {}).items():
        depths = depths.with_side(Side(key), float(value))

    return IntersectionGeometryConfig(
        name=data.get("name", "Default"),
        curb=_dict_to_curb(data.get("curb", {})),
        corners=CornerGeometryConfig(
            sizes=sizes,
            curb_overrides={
                CornerId(key): _dict_to_curb(value)
                for key, value in data.get("corner_curbs", {}).items()
            },
        ),
        footpaths=FootpathGeometryConfig(
            depths=depths,
            curb_overrides={
                Side(key): _dict_to_curb(value)
                for key, value in data.get("footpath_curbs", {}).items()
            },
        ),
    )


def _sanitize_filename(name: str) -> str:
    """
    Sanitize a configuration name for use as a filename.

    Args:
        name: The configuration name

    Returns:
        A safe filename (lowercase, spaces replaced with underscores, special chars removed)
    """
    safe = name.lower().replace(" ", "_")
    safe = "".join(c for c in safe if c.isalnum() or c in "_-")
    return safe or "config"


# ------------------------------------------------------------------
# File operations
# ------------------------------------------------------------------

def save_config(config: IntersectionGeometryConfig,
                directory: Optional[Path] = None) -> Path:
    """
    Save a configuration under its name.

    Args:
        config: The configuration to save
        directory: Optional override of the storage directory

    Returns:
        Path to the saved file

    Raises:
        OSError: If the file cannot be written
    """
    file_path = get_configs_dir(directory) / (_sanitize_filename(config.name) + ".json")

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)

    logger.debug("Saved geometry config '%s' to %s", config.name, file_path)
    return file_path


def load_config_from_path(file_path: Path) -> Optional[IntersectionGeometryConfig]:
    """
    Load a configuration from a specific file path.

    Args:
        file_path: Path to the JSON configuration file

    Returns:
        The configuration if valid, None otherwise
    """
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return dict_to_config(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Ignoring invalid geometry config %s: %s", file_path, e)
        return None


def load_config(name: str,
                directory: Optional[Path] = None) -> Optional[IntersectionGeometryConfig]:
    """
    Load a configuration by name.

    Args:
        name: The configuration name (converted to a filename)
        directory: Optional override of the storage directory

    Returns:
        The configuration if found and valid, None otherwise
    """
    file_path = get_configs_dir(directory) / (_sanitize_filename(name) + ".json")
    return load_config_from_path(file_path)


def list_saved_configs(directory: Optional[Path] = None) -> List[str]:
    """
    List the names of all valid saved configurations.

    Returns:
        Sorted list of configuration names
    """
    names = []
    for file_path in get_configs_dir(directory).glob("*.json"):
        config = load_config_from_path(file_path)
        if config:
            names.append(config.name)
    return sorted(names)


def delete_config(name: str, directory: Optional[Path] = None) -> bool:
    """
    Delete a saved configuration by name.

    Returns:
        True if deleted, False if not found
    """
    configs_dir = get_configs_dir(directory)
    file_path = configs_dir / (_sanitize_filename(name) + ".json")

    if file_path.exists():
        file_path.unlink()
        return True

    # Fall back to matching the stored name
    for fp in configs_dir.glob("*.json"):
        config = load_config_from_path(fp)
        if config and config.name == name:
            fp.unlink()
            return True

    return False
