"""
Mesh entities module.

Only the node is needed at element level: elements borrow nodes built
by the mesh and never modify them.
"""

from typing import Iterable, Union

import numpy as np


class Node:
    """
    Represents a node with 3D coordinates.

    This class ensures that coordinates always include a z-value.
    If fewer than 3 coordinates are provided, zeros are appended.
    The coordinate array is read-only.

    Attributes
    ----------
    coords : np.ndarray
        Array of coordinates in the form [x, y, z].
    x : float
        X coordinate.
    y : float
        Y coordinate.
    z : float
        Z coordinate.
    """

    __slots__ = ("_coords",)

    def __init__(self, coords: Union[float, Iterable[float], np.ndarray]):
        """
        Initialize a Node instance.

        Parameters
        ----------
        coords : float, list of float or np.ndarray
            Coordinates of the node. If fewer than 3 values are provided,
            the missing components are set to 0.0.
        """
        coords_arr = np.array(coords, dtype=float).ravel()
        if coords_arr.size > 3:
            raise ValueError(f"A node has at most 3 coordinates, got {coords_arr.size}")
        if coords_arr.size < 3:
            coords_arr = np.concatenate((coords_arr, np.zeros(3 - coords_arr.size)))
        coords_arr.setflags(write=False)
        self._coords = coords_arr

    @property
    def coords(self) -> np.ndarray:
        return self._coords

    @property
    def x(self) -> float:
        return float(self._coords[0])

    @property
    def y(self) -> float:
        return float(self._coords[1])

    @property
    def z(self) -> float:
        return float(self._coords[2])

    def __repr__(self):
        return f"Node(x={self.x}, y={self.y}, z={self.z})"
