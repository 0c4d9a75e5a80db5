"""
Gauss quadrature rules on the reference elements.

Line, quadrilateral and hexahedron rules are tensor products of the
Gauss-Legendre rule on [-1, 1]. Triangle and tetrahedron rules are
symmetric rules on the unit simplices:

    triangle    : vertices (0,0), (1,0), (0,1), area 1/2
    tetrahedron : vertices (0,0,0), (1,0,0), (0,1,0), (0,0,1), volume 1/6

Weights include the measure of the reference element, so that

    integral over reference element of f = sum_i w_i * f(p_i)

References:
    - Dunavant, D.A. "High degree efficient symmetrical Gaussian
      quadrature rules for the triangle." IJNME, 21(6), 1985.
    - Keast, P. "Moderate-degree tetrahedral quadrature formulas."
      CMAME, 55(3), 1986.
"""

import itertools
from typing import Tuple

import numpy as np


def gauss_legendre(order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Gauss-Legendre rule with ``order`` points on [-1, 1].

    Exact for polynomials of degree ``2 * order - 1``.

    Returns
    -------
    points : ndarray, shape (order,)
    weights : ndarray, shape (order,)
    """
    if order < 1:
        raise ValueError(f"Gauss-Legendre order must be >= 1, got {order}")
    points, weights = np.polynomial.legendre.leggauss(order)
    return points, weights


def gauss_tensor(order: int, dim: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Tensor-product Gauss-Legendre rule on [-1, 1]^dim.

    The first coordinate varies fastest.

    Returns
    -------
    points : ndarray, shape (order**dim, dim)
    weights : ndarray, shape (order**dim,)
    """
    pts_1d, w_1d = gauss_legendre(order)
    points = []
    weights = []
    for idx in itertools.product(range(order), repeat=dim):
        idx = idx[::-1]
        points.append([pts_1d[i] for i in idx])
        weights.append(np.prod([w_1d[i] for i in idx]))
    return np.array(points), np.array(weights)


def gauss_triangle(order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Symmetric Gauss rule on the reference triangle.

    Parameters
    ----------
    order : int
        Number of points: 1 (degree 1), 3 (degree 2) or 7 (degree 5).

    Returns
    -------
    points : ndarray, shape (order, 2)
        Quadrature points in (xi, eta) coordinates.
    weights : ndarray, shape (order,)
        Quadrature weights (include the 1/2 area factor).
    """
    if order == 1:
        return np.array([[1.0 / 3.0, 1.0 / 3.0]]), np.array([0.5])

    if order == 3:
        points = np.array([
            [1.0 / 6.0, 1.0 / 6.0],
            [2.0 / 3.0, 1.0 / 6.0],
            [1.0 / 6.0, 2.0 / 3.0],
        ])
        return points, np.full(3, 1.0 / 6.0)

    if order == 7:
        a1, b1, w1 = 0.059715871789770, 0.470142064105115, 0.132394152788506
        a2, b2, w2 = 0.797426985353087, 0.101286507323456, 0.125939180544827
        points = np.array([
            [1.0 / 3.0, 1.0 / 3.0],
            [b1, b1],
            [a1, b1],
            [b1, a1],
            [b2, b2],
            [a2, b2],
            [b2, a2],
        ])
        weights = np.array([0.225, w1, w1, w1, w2, w2, w2]) * 0.5
        return points, weights

    raise ValueError(f"No triangle rule with {order} points (available: 1, 3, 7)")


def gauss_tetrahedron(order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Symmetric Gauss rule on the reference tetrahedron.

    Parameters
    ----------
    order : int
        Number of points: 1 (degree 1) or 4 (degree 2).

    Returns
    -------
    points : ndarray, shape (order, 3)
    weights : ndarray, shape (order,)
        Quadrature weights (include the 1/6 volume factor).
    """
    if order == 1:
        return np.array([[0.25, 0.25, 0.25]]), np.array([1.0 / 6.0])

    if order == 4:
        a = (5.0 + 3.0 * np.sqrt(5.0)) / 20.0
        b = (5.0 - np.sqrt(5.0)) / 20.0
        points = np.array([
            [b, b, b],
            [a, b, b],
            [b, a, b],
            [b, b, a],
        ])
        return points, np.full(4, 1.0 / 24.0)

    raise ValueError(f"No tetrahedron rule with {order} points (available: 1, 4)")
