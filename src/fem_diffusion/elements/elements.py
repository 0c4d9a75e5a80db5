"""Isoparametric elements for one-group neutron diffusion.

Every element kind shares the same integration code; concrete classes
only bind an ``ElementKind`` and with it a reference shape-function table.

Formulation:
    Stiffness/absorption matrix: Ae = ∫(D ∇Nᵢ·∇Nⱼ + Σa NᵢNⱼ) dΩ
    Fission source matrix:       Be = ∫ν Σf NᵢNⱼ dΩ

Each integral is evaluated by Gauss quadrature on the reference element:

    ∫f dΩ = Σ_gp f(ξ_gp) w_gp det J(ξ_gp)

with the Jacobian J[i, j] = ∂x_j/∂ξ_i = Σ_n ∂N_n/∂ξ_i x_n[j] and physical
gradients ∇N = J⁻¹ ∇_ξ N.
"""

import logging
from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from fem_diffusion.core.config import DEFAULT_CONFIG, KernelConfig
from fem_diffusion.core.entities import Node
from fem_diffusion.core.errors import DegenerateGeometryError, ShapeMismatchError
from fem_diffusion.core.helpers import format_matrix
from fem_diffusion.core.material import DiffusionMaterial
from fem_diffusion.core.matrix import SmallMatrix
from fem_diffusion.elements.reference import ReferenceElement, get_reference_element
from fem_diffusion.elements.shapes import SHAPE_LIBRARY, ElementKind

logger = logging.getLogger(__name__)

NodeLike = Union[Node, float, Iterable[float], np.ndarray]


class ElementFamily(IntEnum):
    """Element family, valued by intrinsic dimension."""

    LINE = 1
    PLANE = 2
    SOLID = 3


class DiffusionElement:
    """Finite element of the diffusion operator.

    Parameters
    ----------
    kind : ElementKind
        Element kind, selects the reference shape-function table.
    nodes : sequence of Node
        Nodes in the local numbering of the kind. Plain coordinates are
        wrapped into ``Node`` objects.
    node_ids : sequence of int
        Global node indices, same length and order as ``nodes``.
    material : DiffusionMaterial
        Cross sections and diffusion coefficient.
    config : KernelConfig, optional
        Tolerance and quadrature settings. Defaults to ``DEFAULT_CONFIG``.

    Raises
    ------
    ShapeMismatchError
        If the number of nodes, node ids and shape functions differ.
    """

    kind: ElementKind = None

    def __init__(
        self,
        kind: Union[ElementKind, str],
        nodes: Sequence[NodeLike],
        node_ids: Sequence[int],
        material: DiffusionMaterial,
        config: Optional[KernelConfig] = None,
    ):
        self.kind = ElementKind(kind)
        self.config = config if config is not None else DEFAULT_CONFIG
        self.material = material

        definition = SHAPE_LIBRARY[self.kind]
        self.nodes: Tuple[Node, ...] = tuple(n if isinstance(n, Node) else Node(n) for n in nodes)
        self.node_ids: Tuple[int, ...] = tuple(int(i) for i in node_ids)

        if len(self.nodes) != len(self.node_ids):
            raise ShapeMismatchError(
                f"{self.name}: got {len(self.nodes)} nodes but {len(self.node_ids)} node ids",
                expected=len(self.nodes),
                got=len(self.node_ids),
            )
        if len(self.nodes) != definition.node_count:
            raise ShapeMismatchError(
                f"{self.name} requires {definition.node_count} nodes, got {len(self.nodes)}",
                expected=definition.node_count,
                got=len(self.nodes),
            )

        self.reference: ReferenceElement = get_reference_element(
            self.kind, self.config.integration_order(self.kind.value, definition.default_order)
        )
        # Only the components spanned by the reference element enter the mapping
        self.node_coords = np.array([node.coords[: self.dimension] for node in self.nodes])
        self.node_coords.setflags(write=False)

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def dimension(self) -> int:
        return SHAPE_LIBRARY[self.kind].dimension

    @property
    def element_family(self) -> ElementFamily:
        return ElementFamily(self.dimension)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def global_dof_indices(self) -> Tuple[int, ...]:
        """Global degree of freedom of each local node (one unknown per node)."""
        return self.node_ids

    @property
    def xs_a(self) -> float:
        return self.material.xs_a

    @property
    def xs_f(self) -> float:
        return self.material.xs_f

    @property
    def nu(self) -> float:
        return self.material.nu

    @property
    def d(self) -> float:
        return self.material.d

    def compute_inverse_jacobian(self, gp: int) -> Tuple[np.ndarray, float]:
        """Inverse Jacobian and its determinant at quadrature point ``gp``.

        Parameters
        ----------
        gp : int
            Quadrature point index.

        Returns
        -------
        ijac : np.ndarray
            Inverse Jacobian (dimension x dimension).
        det : float
            Jacobian determinant.

        Raises
        ------
        DegenerateGeometryError
            If the determinant is small relative to the Hadamard bound of
            the Jacobian (collapsed element) or negative (inverted element).
        """
        dsh = self.reference.dshapes[:, :, gp]  # (n_nodes, dimension)
        jac = SmallMatrix(dsh.T @ self.node_coords)

        tolerance = self.config.jacobian_tolerance
        try:
            ijac, det = jac.inverse(tolerance)
        except DegenerateGeometryError as exc:
            logger.warning(f"{self!r}: degenerate geometry at quadrature point {gp}")
            raise DegenerateGeometryError(
                f"{self!r}: Jacobian determinant {exc.determinant:.3e} at quadrature point {gp} "
                f"is below relative tolerance {tolerance:.1e}",
                element=self,
                gauss_point=gp,
                determinant=exc.determinant,
            ) from exc

        if det < 0:
            logger.warning(f"{self!r}: inverted element at quadrature point {gp}")
            raise DegenerateGeometryError(
                f"{self!r}: negative Jacobian determinant {det:.3e} at quadrature point {gp}, "
                "check the node ordering",
                element=self,
                gauss_point=gp,
                determinant=det,
            )

        return ijac, det

    def _integrate(self, stiffness: bool, fission: bool) -> Tuple[np.ndarray, np.ndarray]:
        """Accumulate Ae and/or Be over the quadrature points."""
        n = self.node_count
        Ae = np.zeros((n, n))
        Be = np.zeros((n, n))
        ref = self.reference

        for gp, w in enumerate(ref.weights):
            ijac, det = self.compute_inverse_jacobian(gp)
            sh = ref.shapes[:, gp]
            mass = np.outer(sh, sh) * w * det

            if stiffness:
                # dN_n/dx_j = Σ_k ijac[j, k] dN_n/dξ_k
                dsh = ref.dshapes[:, :, gp] @ ijac.T
                Ae += self.d * (dsh @ dsh.T) * w * det + self.xs_a * mass
            if fission:
                Be += self.material.nu_xs_f * mass

        # Symmetrization removes round-off asymmetry from the products above
        return 0.5 * (Ae + Ae.T), 0.5 * (Be + Be.T)

    def _log_matrix(self, label: str, matrix: np.ndarray) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%r %s =\n%s", self, label, format_matrix(matrix))

    def compute_Ae(self) -> np.ndarray:
        """Stiffness/absorption matrix

        Calculated using:
            Ae = ∫(D ∇Nᵢ·∇Nⱼ + Σa NᵢNⱼ) dΩ

        Returns
        -------
        np.ndarray
            Symmetric matrix (n_nodes x n_nodes), row-major.
        """
        Ae, _ = self._integrate(stiffness=True, fission=False)
        self._log_matrix("Ae", Ae)
        return Ae

    def compute_Be(self) -> np.ndarray:
        """Fission source matrix

        Calculated using:
            Be = ∫ν Σf NᵢNⱼ dΩ

        Returns
        -------
        np.ndarray
            Symmetric matrix (n_nodes x n_nodes), row-major.
        """
        _, Be = self._integrate(stiffness=False, fission=True)
        self._log_matrix("Be", Be)
        return Be

    def compute_local_matrices(self) -> Tuple[np.ndarray, np.ndarray]:
        """Ae and Be in a single pass over the quadrature points."""
        Ae, Be = self._integrate(stiffness=True, fission=True)
        self._log_matrix("Ae", Ae)
        self._log_matrix("Be", Be)
        return Ae, Be

    def measure(self) -> float:
        """Length, area or volume of the element."""
        return float(
            sum(w * self.compute_inverse_jacobian(gp)[1] for gp, w in enumerate(self.reference.weights))
        )

    def __repr__(self):
        return f"<{type(self).__name__} kind={self.name} node_ids={list(self.node_ids)}>"


class _BoundElement(DiffusionElement):
    """Element class bound to a fixed kind."""

    def __init__(
        self,
        nodes: Sequence[NodeLike],
        node_ids: Sequence[int],
        material: DiffusionMaterial,
        config: Optional[KernelConfig] = None,
    ):
        super().__init__(type(self).kind, nodes, node_ids, material, config)


class SEGMENT2(_BoundElement):
    """2-node linear segment"""

    kind = ElementKind.SEGMENT2


class SEGMENT3(_BoundElement):
    """3-node quadratic segment (mid node last)"""

    kind = ElementKind.SEGMENT3


class TRI3(_BoundElement):
    """3-node linear triangle"""

    kind = ElementKind.TRI3


class QUAD4(_BoundElement):
    """4-node bilinear quadrilateral"""

    kind = ElementKind.QUAD4


class QUAD8(_BoundElement):
    """8-node serendipity quadrilateral"""

    kind = ElementKind.QUAD8


class QUAD9(_BoundElement):
    """9-node biquadratic quadrilateral"""

    kind = ElementKind.QUAD9


class TETRA4(_BoundElement):
    """4-node linear tetrahedron"""

    kind = ElementKind.TETRA4


class HEXA8(_BoundElement):
    """8-node trilinear hexahedron"""

    kind = ElementKind.HEXA8


class ElementFactory:
    ELEMENT_MAP = {
        ElementKind.SEGMENT2: SEGMENT2,
        ElementKind.SEGMENT3: SEGMENT3,
        ElementKind.TRI3: TRI3,
        ElementKind.QUAD4: QUAD4,
        ElementKind.QUAD8: QUAD8,
        ElementKind.QUAD9: QUAD9,
        ElementKind.TETRA4: TETRA4,
        ElementKind.HEXA8: HEXA8,
    }

    # (dimension, node count) -> kind; 3 nodes in 1D is a quadratic segment
    NODE_COUNT_MAP = {
        (1, 2): ElementKind.SEGMENT2,
        (1, 3): ElementKind.SEGMENT3,
        (2, 3): ElementKind.TRI3,
        (2, 4): ElementKind.QUAD4,
        (2, 8): ElementKind.QUAD8,
        (2, 9): ElementKind.QUAD9,
        (3, 4): ElementKind.TETRA4,
        (3, 8): ElementKind.HEXA8,
    }

    @staticmethod
    def kind_for(dimension: int, node_count: int) -> ElementKind:
        try:
            return ElementFactory.NODE_COUNT_MAP[(dimension, node_count)]
        except KeyError:
            raise ValueError(
                f"No element kind with {node_count} nodes in dimension {dimension}"
            ) from None

    @staticmethod
    def get_element(
        kind: Union[ElementKind, str],
        nodes: Sequence[NodeLike],
        node_ids: Sequence[int],
        material: DiffusionMaterial,
        config: Optional[KernelConfig] = None,
    ) -> DiffusionElement:
        try:
            element = ElementFactory.ELEMENT_MAP[ElementKind(kind)]
        except ValueError:
            raise ValueError(
                f"Unknown element kind: {kind}. Valid: {[k.value for k in ElementKind]}"
            ) from None
        return element(nodes, node_ids, material, config)
