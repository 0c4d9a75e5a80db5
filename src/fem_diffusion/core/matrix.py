"""Small dense square matrices with closed-form inverse.

Jacobians of isoparametric elements are at most 3x3, so the determinant
and inverse are written out by cofactor expansion instead of going
through a general LU factorization.
"""

from typing import Tuple, Union

import numpy as np

from fem_diffusion.core.errors import DegenerateGeometryError

SUPPORTED_DIMENSIONS = (1, 2, 3)


class SmallMatrix:
    """Square matrix of dimension 1, 2 or 3.

    Parameters
    ----------
    data : array_like
        Matrix entries, shape (dim, dim). A scalar is accepted for dim 1.
    """

    __slots__ = ("data", "dim")

    def __init__(self, data: Union[float, np.ndarray]):
        data = np.array(data, dtype=float)
        if data.ndim == 0:
            data = data.reshape(1, 1)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"SmallMatrix requires a square array, got shape {data.shape}")
        if data.shape[0] not in SUPPORTED_DIMENSIONS:
            raise ValueError(
                f"SmallMatrix supports dimensions {SUPPORTED_DIMENSIONS}, got {data.shape[0]}"
            )
        self.data = data
        self.dim = data.shape[0]

    @classmethod
    def zeros(cls, dim: int) -> "SmallMatrix":
        return cls(np.zeros((dim, dim)))

    def determinant(self) -> float:
        a = self.data
        if self.dim == 1:
            return float(a[0, 0])
        if self.dim == 2:
            return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])
        return float(
            a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1])
            - a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0])
            + a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
        )

    def hadamard_bound(self) -> float:
        """Product of the row norms, an upper bound of ``abs(det)``."""
        return float(np.prod(np.linalg.norm(self.data, axis=1)))

    def inverse(self, tolerance: float = 0.0) -> Tuple[np.ndarray, float]:
        """Compute the inverse and the determinant.

        Parameters
        ----------
        tolerance : float, optional
            Relative threshold. The matrix is treated as singular when
            ``abs(det) <= tolerance * prod(row norms)``. The row-norm product
            bounds ``abs(det)`` (Hadamard), so the test does not depend on
            the scale of the entries.

        Returns
        -------
        inverse : np.ndarray
            Inverse matrix (dim x dim).
        det : float
            Determinant of the matrix.

        Raises
        ------
        DegenerateGeometryError
            If the determinant is zero or small relative to the Hadamard bound.
        ValueError
            If ``tolerance`` is negative or not finite.
        """
        if not np.isfinite(tolerance) or tolerance < 0:
            raise ValueError(f"tolerance must be finite and non-negative: {tolerance}")

        det = self.determinant()
        bound = self.hadamard_bound()
        if not np.isfinite(det) or abs(det) <= tolerance * bound or det == 0.0:
            raise DegenerateGeometryError(
                f"Singular {self.dim}x{self.dim} matrix: det={det:.3e} "
                f"(Hadamard bound {bound:.3e}, relative tolerance {tolerance:.1e})",
                determinant=det,
            )

        a = self.data
        if self.dim == 1:
            return np.array([[1.0 / det]]), det

        if self.dim == 2:
            adj = np.array([
                [a[1, 1], -a[0, 1]],
                [-a[1, 0], a[0, 0]],
            ])
            return adj / det, det

        # Adjugate: transpose of the cofactor matrix
        adj = np.array([
            [
                a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1],
                a[0, 2] * a[2, 1] - a[0, 1] * a[2, 2],
                a[0, 1] * a[1, 2] - a[0, 2] * a[1, 1],
            ],
            [
                a[1, 2] * a[2, 0] - a[1, 0] * a[2, 2],
                a[0, 0] * a[2, 2] - a[0, 2] * a[2, 0],
                a[0, 2] * a[1, 0] - a[0, 0] * a[1, 2],
            ],
            [
                a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0],
                a[0, 1] * a[2, 0] - a[0, 0] * a[2, 1],
                a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0],
            ],
        ])
        return adj / det, det

    def __repr__(self):
        return f"SmallMatrix(dim={self.dim}, data={self.data.tolist()})"
