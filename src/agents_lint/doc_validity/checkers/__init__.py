"""Independent validators for a parsed context document."""
from .filesystem import check_filesystem
from .scripts import check_scripts
from .dependencies import check_dependencies
from .framework import check_framework
from .structure import check_structure
from .cross import DocumentContext, check_cross_consistency

# Run order for a single document
CHECKERS = [
    check_structure,
    check_filesystem,
    check_scripts,
    check_dependencies,
    check_framework,
]

__all__ = [
    "CHECKERS",
    "DocumentContext",
    "check_cross_consistency",
    "check_dependencies",
    "check_filesystem",
    "check_framework",
    "check_scripts",
    "check_structure",
]
