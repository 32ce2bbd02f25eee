"""
Validation check modules.

- config_checks: Site size, curb profile, corner size and footpath depth checks
- geometry_checks: Finite vertices, degenerate faces, surface orientation
"""

from .config_checks import (
    validate_parameters,
    check_site_size,
    check_curb,
)
from .geometry_checks import (
    validate_faces,
    check_face,
)

__all__ = [
    'validate_parameters',
    'check_site_size',
    'check_curb',
    'validate_faces',
    'check_face',
]
