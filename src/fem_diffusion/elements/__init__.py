from .elements import (
    HEXA8,
    QUAD4,
    QUAD8,
    QUAD9,
    SEGMENT2,
    SEGMENT3,
    TETRA4,
    TRI3,
    DiffusionElement,
    ElementFactory,
    ElementFamily,
)
from .reference import ReferenceElement, get_reference_element
from .shapes import SHAPE_LIBRARY, ElementKind

__all__ = [
    "DiffusionElement",
    "ElementFactory",
    "ElementFamily",
    "ElementKind",
    "ReferenceElement",
    "SHAPE_LIBRARY",
    "get_reference_element",
    "SEGMENT2",
    "SEGMENT3",
    "TRI3",
    "QUAD4",
    "QUAD8",
    "QUAD9",
    "TETRA4",
    "HEXA8",
]
