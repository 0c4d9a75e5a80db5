"""
Core module for fem-diffusion.

Provides nodes, diffusion materials, the small dense matrix utility,
error types and configuration.
"""

from .config import DEFAULT_CONFIG, KernelConfig
from .entities import Node
from .errors import DegenerateGeometryError, ElementError, ShapeMismatchError
from .material import DiffusionMaterial
from .matrix import SmallMatrix

__all__ = [
    "DEFAULT_CONFIG",
    "KernelConfig",
    "Node",
    "DiffusionMaterial",
    "SmallMatrix",
    "ElementError",
    "DegenerateGeometryError",
    "ShapeMismatchError",
]
