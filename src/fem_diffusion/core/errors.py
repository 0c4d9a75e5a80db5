"""
Errors raised by the element kernel.

Both errors derive from ``ValueError`` so callers that already guard
element construction and integration with ``except ValueError`` keep
working.
"""

from typing import Any, Optional


class ElementError(ValueError):
    """Base class for element-level failures."""


class DegenerateGeometryError(ElementError):
    """Jacobian determinant is zero, below tolerance or negative.

    Parameters
    ----------
    message : str
        Human readable description.
    element : object, optional
        The offending element.
    gauss_point : int, optional
        Index of the quadrature point where the failure was detected.
    determinant : float, optional
        The Jacobian determinant found at that point.
    """

    def __init__(
        self,
        message: str,
        element: Optional[Any] = None,
        gauss_point: Optional[int] = None,
        determinant: Optional[float] = None,
    ):
        super().__init__(message)
        self.element = element
        self.gauss_point = gauss_point
        self.determinant = determinant


class ShapeMismatchError(ElementError):
    """Element connectivity does not match its kind.

    Raised at construction time, never from the integration loops.
    """

    def __init__(self, message: str, expected: Optional[int] = None, got: Optional[int] = None):
        super().__init__(message)
        self.expected = expected
        self.got = got
