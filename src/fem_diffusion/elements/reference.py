"""Reference shape-function tables.

A ``ReferenceElement`` holds, for one element kind and quadrature rule,
the shape function values and natural derivatives evaluated at every
quadrature point, together with the quadrature weights:

    shapes[node, gp]              N_node(p_gp)
    dshapes[node, direction, gp]  dN_node/dxi_direction (p_gp)
    weights[gp]

Tables are built once per (kind, order) and shared by every element of
that kind. The arrays are read-only.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

import numpy as np

from fem_diffusion.elements.shapes import SHAPE_LIBRARY, ElementKind, ShapeDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceElement:
    """Shape-function tables of a reference element.

    Attributes
    ----------
    kind : ElementKind
        Element kind the tables belong to.
    order : int
        Order of the quadrature rule used.
    points : np.ndarray
        Quadrature points in natural coordinates (n_gp x dimension).
    shapes : np.ndarray
        Shape function values (n_nodes x n_gp).
    dshapes : np.ndarray
        Natural derivatives (n_nodes x dimension x n_gp).
    weights : np.ndarray
        Quadrature weights (n_gp,).
    """

    kind: ElementKind
    order: int
    points: np.ndarray
    shapes: np.ndarray
    dshapes: np.ndarray
    weights: np.ndarray

    @property
    def dimension(self) -> int:
        return self.dshapes.shape[1]

    @property
    def node_count(self) -> int:
        return self.shapes.shape[0]

    @property
    def gauss_point_count(self) -> int:
        return self.weights.shape[0]

    def check_partition_of_unity(self, tol: float = 1e-12) -> bool:
        """True if shape functions sum to one and derivatives to zero at every point."""
        values_ok = np.allclose(self.shapes.sum(axis=0), 1.0, rtol=0.0, atol=tol)
        derivatives_ok = np.allclose(self.dshapes.sum(axis=0), 0.0, rtol=0.0, atol=tol)
        return bool(values_ok and derivatives_ok)


def build_reference_element(definition: ShapeDefinition, order: int) -> ReferenceElement:
    """Evaluate the shape functions of ``definition`` on its quadrature rule."""
    points, weights = definition.quadrature(order)
    points = np.asarray(points, dtype=float).reshape(len(weights), definition.dimension)
    n_gp = len(weights)

    shapes = np.empty((definition.node_count, n_gp))
    dshapes = np.empty((definition.node_count, definition.dimension, n_gp))
    for gp, xi in enumerate(points):
        shapes[:, gp] = definition.shape_functions(xi)
        dshapes[:, :, gp] = definition.shape_function_derivatives(xi).T

    for array in (points, shapes, dshapes, weights):
        array.setflags(write=False)

    return ReferenceElement(
        kind=definition.kind,
        order=order,
        points=points,
        shapes=shapes,
        dshapes=dshapes,
        weights=np.asarray(weights, dtype=float),
    )


@lru_cache(maxsize=None)
def _cached_reference_element(kind: ElementKind, order: int) -> ReferenceElement:
    reference = build_reference_element(SHAPE_LIBRARY[kind], order)
    logger.debug(
        f"Built reference tables for {kind.value}: {reference.node_count} nodes, "
        f"{reference.gauss_point_count} quadrature points (order {order})"
    )
    return reference


def get_reference_element(
    kind: Union[ElementKind, str], order: Optional[int] = None
) -> ReferenceElement:
    """Shared reference tables for ``kind``.

    Parameters
    ----------
    kind : ElementKind or str
        Element kind, or its name.
    order : int, optional
        Quadrature order. Defaults to the kind's default rule.

    Returns
    -------
    ReferenceElement
        Cached, read-only tables.

    Raises
    ------
    ValueError
        If the kind is unknown or no rule of that order exists.
    """
    kind = ElementKind(kind)
    if order is None:
        order = SHAPE_LIBRARY[kind].default_order
    return _cached_reference_element(kind, int(order))
