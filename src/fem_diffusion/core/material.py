from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class DiffusionMaterial:
    """
    One-group neutron diffusion material.

    Parameters
    ----------
    name : str
        The name of the material.
    xs_a : float
        Macroscopic absorption cross section.
    xs_f : float
        Macroscopic fission cross section.
    nu : float
        Mean number of neutrons released per fission.
    d : float
        Diffusion coefficient.
    """

    name: str
    xs_a: float
    xs_f: float
    nu: float
    d: float

    def __post_init__(self):
        for field_name in ("xs_a", "xs_f", "nu", "d"):
            value = getattr(self, field_name)
            if not np.isfinite(value):
                raise ValueError(f"{field_name} must be finite: {value}")
            if value < 0:
                raise ValueError(f"{field_name} must be non-negative: {value}")

    @property
    def nu_xs_f(self) -> float:
        """Fission production cross section (nu * xs_f)."""
        return self.nu * self.xs_f
