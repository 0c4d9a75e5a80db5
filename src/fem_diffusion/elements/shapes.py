"""Reference shape functions of the supported element kinds.

Each kind is described by a ``ShapeDefinition``: its intrinsic dimension,
the natural coordinates of its nodes, the shape functions and their
derivatives with respect to the natural coordinates, and the quadrature
rule used by default. Adding an element kind means adding an entry to
``SHAPE_LIBRARY``.

Node numbering convention:

    SEGMENT2      SEGMENT3
    0-----1       0--2--1

    TRI3          QUAD4          QUAD8          QUAD9
    2             3---2          3---6---2      3---6---2
    |\\            |   |          |       |      |   |   |
    | \\           |   |          7       5      7---8---5
    |  \\          |   |          |       |      |   |   |
    0---1         0---1          0---4---1      0---4---1

    TETRA4                    HEXA8
            3                        7-------6
           /|\\                      /|      /|
          / | \\                    / |     / |
         /  2  \\                  4-------5  |
        / .' `. \\                 |  3----|--2
       0---------1                | /     | /
                                  |/      |/
                                  0-------1

Natural coordinates are in [-1, 1] for segments, quadrilaterals and
hexahedra, and on the unit simplex for triangles and tetrahedra.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

import numpy as np

from fem_diffusion.elements.quadrature import gauss_tensor, gauss_tetrahedron, gauss_triangle


class ElementKind(str, Enum):
    """Supported element kinds."""

    SEGMENT2 = "SEGMENT2"
    SEGMENT3 = "SEGMENT3"
    TRI3 = "TRI3"
    QUAD4 = "QUAD4"
    QUAD8 = "QUAD8"
    QUAD9 = "QUAD9"
    TETRA4 = "TETRA4"
    HEXA8 = "HEXA8"

    @classmethod
    def _missing_(cls, value):
        # Element names are matched case-insensitively
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return None


@dataclass(frozen=True)
class ShapeDefinition:
    """Closed-form description of a reference element.

    Attributes
    ----------
    kind : ElementKind
        Element kind described.
    dimension : int
        Intrinsic (reference) dimension.
    node_coordinates : np.ndarray
        Natural coordinates of the nodes (n_nodes x dimension).
    shape_functions : callable
        ``f(xi) -> (n_nodes,)`` shape function values at point ``xi``.
    shape_function_derivatives : callable
        ``f(xi) -> (dimension, n_nodes)`` derivatives with respect to each
        natural coordinate.
    quadrature : callable
        ``f(order) -> (points, weights)`` quadrature rule.
    default_order : int
        Order passed to ``quadrature`` when none is configured.
    """

    kind: ElementKind
    dimension: int
    node_coordinates: np.ndarray
    shape_functions: Callable[[np.ndarray], np.ndarray]
    shape_function_derivatives: Callable[[np.ndarray], np.ndarray]
    quadrature: Callable[[int], Tuple[np.ndarray, np.ndarray]]
    default_order: int

    @property
    def node_count(self) -> int:
        return self.node_coordinates.shape[0]


# =============================================================================
# Segments
# =============================================================================


def segment2_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Linear shape functions

    N0 = 0.5(1 - xi)
    N1 = 0.5(1 + xi)
    """
    (s,) = xi
    return 0.5 * np.array([1 - s, 1 + s])


def segment2_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    return 0.5 * np.array([[-1.0, 1.0]])


def segment3_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Quadratic shape functions, mid node last"""
    (s,) = xi
    return np.array([
        0.5 * s * (s - 1),  # N0
        0.5 * s * (s + 1),  # N1
        1 - s**2,  # N2
    ])


def segment3_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    (s,) = xi
    return np.array([[s - 0.5, s + 0.5, -2 * s]])


# =============================================================================
# Triangles
# =============================================================================


def tri3_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Area coordinates

    N0 = 1 - xi - eta
    N1 = xi
    N2 = eta
    """
    s, t = xi
    return np.array([1 - s - t, s, t])


def tri3_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    return np.array([
        [-1.0, 1.0, 0.0],
        [-1.0, 0.0, 1.0],
    ])


# =============================================================================
# Quadrilaterals
# =============================================================================


def quad4_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Bilinear shape functions

    N0 = 0.25(1 - xi)(1 - eta)
    N1 = 0.25(1 + xi)(1 - eta)
    N2 = 0.25(1 + xi)(1 + eta)
    N3 = 0.25(1 - xi)(1 + eta)
    """
    s, t = xi
    return 0.25 * np.array([
        (1 - s) * (1 - t),
        (1 + s) * (1 - t),
        (1 + s) * (1 + t),
        (1 - s) * (1 + t),
    ])


def quad4_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    s, t = xi
    dN_dxi = 0.25 * np.array([-(1 - t), (1 - t), (1 + t), -(1 + t)])
    dN_deta = 0.25 * np.array([-(1 - s), -(1 + s), (1 + s), (1 - s)])
    return np.array([dN_dxi, dN_deta])


_QUAD8_NODES = np.array([
    [-1, -1],
    [1, -1],
    [1, 1],
    [-1, 1],  # Corner nodes
    [0, -1],
    [1, 0],
    [0, 1],
    [-1, 0],  # Mid-side nodes
], dtype=float)


def quad8_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Serendipity shape functions

    corner: 0.25(1 + xi xi_i)(1 + eta eta_i)(xi xi_i + eta eta_i - 1)
    xi_i = 0: 0.5(1 - xi^2)(1 + eta eta_i)
    eta_i = 0: 0.5(1 + xi xi_i)(1 - eta^2)
    """
    s, t = xi
    N = np.empty(8)
    for i, (si, ti) in enumerate(_QUAD8_NODES):
        if si != 0 and ti != 0:
            N[i] = 0.25 * (1 + s * si) * (1 + t * ti) * (s * si + t * ti - 1)
        elif si == 0:
            N[i] = 0.5 * (1 - s**2) * (1 + t * ti)
        else:
            N[i] = 0.5 * (1 + s * si) * (1 - t**2)
    return N


def quad8_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    s, t = xi
    dN = np.empty((2, 8))
    for i, (si, ti) in enumerate(_QUAD8_NODES):
        if si != 0 and ti != 0:
            dN[0, i] = 0.25 * si * (1 + t * ti) * (2 * s * si + t * ti)
            dN[1, i] = 0.25 * ti * (1 + s * si) * (s * si + 2 * t * ti)
        elif si == 0:
            dN[0, i] = -s * (1 + t * ti)
            dN[1, i] = 0.5 * ti * (1 - s**2)
        else:
            dN[0, i] = 0.5 * si * (1 - t**2)
            dN[1, i] = -t * (1 + s * si)
    return dN


def quad9_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Biquadratic Lagrange shape functions"""
    s, t = xi
    return np.array([
        0.25 * s * t * (s - 1) * (t - 1),  # N0
        0.25 * s * t * (s + 1) * (t - 1),  # N1
        0.25 * s * t * (s + 1) * (t + 1),  # N2
        0.25 * s * t * (s - 1) * (t + 1),  # N3
        0.5 * (1 - s**2) * t * (t - 1),  # N4
        0.5 * s * (s + 1) * (1 - t**2),  # N5
        0.5 * (1 - s**2) * t * (t + 1),  # N6
        0.5 * s * (s - 1) * (1 - t**2),  # N7
        (1 - s**2) * (1 - t**2),  # N8
    ])


def quad9_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    s, t = xi
    dN_dxi = np.array([
        0.25 * t * (t - 1) * (2 * s - 1),  # N0
        0.25 * t * (t - 1) * (2 * s + 1),  # N1
        0.25 * t * (t + 1) * (2 * s + 1),  # N2
        0.25 * t * (t + 1) * (2 * s - 1),  # N3
        -s * t * (t - 1),  # N4
        0.5 * (1 - t**2) * (2 * s + 1),  # N5
        -s * t * (t + 1),  # N6
        0.5 * (1 - t**2) * (2 * s - 1),  # N7
        -2 * s * (1 - t**2),  # N8
    ])
    dN_deta = np.array([
        0.25 * s * (s - 1) * (2 * t - 1),  # N0
        0.25 * s * (s + 1) * (2 * t - 1),  # N1
        0.25 * s * (s + 1) * (2 * t + 1),  # N2
        0.25 * s * (s - 1) * (2 * t + 1),  # N3
        0.5 * (1 - s**2) * (2 * t - 1),  # N4
        -s * (s + 1) * t,  # N5
        0.5 * (1 - s**2) * (2 * t + 1),  # N6
        -s * (s - 1) * t,  # N7
        -2 * t * (1 - s**2),  # N8
    ])
    return np.array([dN_dxi, dN_deta])


# =============================================================================
# Solids
# =============================================================================


def tetra4_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Linear tetrahedral shape functions (volume coordinates)."""
    s, t, u = xi
    return np.array([1 - s - t - u, s, t, u])


def tetra4_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    return np.array([
        [-1.0, 1.0, 0.0, 0.0],
        [-1.0, 0.0, 1.0, 0.0],
        [-1.0, 0.0, 0.0, 1.0],
    ])


_HEXA8_NODES = np.array([
    [-1, -1, -1],
    [1, -1, -1],
    [1, 1, -1],
    [-1, 1, -1],
    [-1, -1, 1],
    [1, -1, 1],
    [1, 1, 1],
    [-1, 1, 1],
], dtype=float)


def hexa8_shape_functions(xi: np.ndarray) -> np.ndarray:
    """Trilinear shape functions: 0.125(1 + xi xi_i)(1 + eta eta_i)(1 + zeta zeta_i)"""
    return 0.125 * np.prod(1 + _HEXA8_NODES * np.asarray(xi), axis=1)


def hexa8_shape_function_derivatives(xi: np.ndarray) -> np.ndarray:
    factors = 1 + _HEXA8_NODES * np.asarray(xi)  # (8, 3)
    dN = np.empty((3, 8))
    for k in range(3):
        others = [m for m in range(3) if m != k]
        dN[k] = 0.125 * _HEXA8_NODES[:, k] * factors[:, others[0]] * factors[:, others[1]]
    return dN


# =============================================================================
# Library
# =============================================================================


def _line_rule(order: int) -> Tuple[np.ndarray, np.ndarray]:
    return gauss_tensor(order, 1)


def _quad_rule(order: int) -> Tuple[np.ndarray, np.ndarray]:
    return gauss_tensor(order, 2)


def _hexa_rule(order: int) -> Tuple[np.ndarray, np.ndarray]:
    return gauss_tensor(order, 3)


SHAPE_LIBRARY: Dict[ElementKind, ShapeDefinition] = {
    ElementKind.SEGMENT2: ShapeDefinition(
        kind=ElementKind.SEGMENT2,
        dimension=1,
        node_coordinates=np.array([[-1.0], [1.0]]),
        shape_functions=segment2_shape_functions,
        shape_function_derivatives=segment2_shape_function_derivatives,
        quadrature=_line_rule,
        default_order=2,
    ),
    ElementKind.SEGMENT3: ShapeDefinition(
        kind=ElementKind.SEGMENT3,
        dimension=1,
        node_coordinates=np.array([[-1.0], [1.0], [0.0]]),
        shape_functions=segment3_shape_functions,
        shape_function_derivatives=segment3_shape_function_derivatives,
        quadrature=_line_rule,
        default_order=3,
    ),
    ElementKind.TRI3: ShapeDefinition(
        kind=ElementKind.TRI3,
        dimension=2,
        node_coordinates=np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]),
        shape_functions=tri3_shape_functions,
        shape_function_derivatives=tri3_shape_function_derivatives,
        quadrature=gauss_triangle,
        default_order=3,
    ),
    ElementKind.QUAD4: ShapeDefinition(
        kind=ElementKind.QUAD4,
        dimension=2,
        node_coordinates=_QUAD8_NODES[:4].copy(),
        shape_functions=quad4_shape_functions,
        shape_function_derivatives=quad4_shape_function_derivatives,
        quadrature=_quad_rule,
        default_order=2,
    ),
    ElementKind.QUAD8: ShapeDefinition(
        kind=ElementKind.QUAD8,
        dimension=2,
        node_coordinates=_QUAD8_NODES.copy(),
        shape_functions=quad8_shape_functions,
        shape_function_derivatives=quad8_shape_function_derivatives,
        quadrature=_quad_rule,
        default_order=3,
    ),
    ElementKind.QUAD9: ShapeDefinition(
        kind=ElementKind.QUAD9,
        dimension=2,
        node_coordinates=np.vstack([_QUAD8_NODES, [[0.0, 0.0]]]),
        shape_functions=quad9_shape_functions,
        shape_function_derivatives=quad9_shape_function_derivatives,
        quadrature=_quad_rule,
        default_order=3,
    ),
    ElementKind.TETRA4: ShapeDefinition(
        kind=ElementKind.TETRA4,
        dimension=3,
        node_coordinates=np.array([
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ]),
        shape_functions=tetra4_shape_functions,
        shape_function_derivatives=tetra4_shape_function_derivatives,
        quadrature=gauss_tetrahedron,
        default_order=4,
    ),
    ElementKind.HEXA8: ShapeDefinition(
        kind=ElementKind.HEXA8,
        dimension=3,
        node_coordinates=_HEXA8_NODES.copy(),
        shape_functions=hexa8_shape_functions,
        shape_function_derivatives=hexa8_shape_function_derivatives,
        quadrature=_hexa_rule,
        default_order=2,
    ),
}
