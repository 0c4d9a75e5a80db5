"""
Element kernel configuration module.

This module provides a YAML-based configuration for the element kernel:
the Jacobian tolerance used to detect degenerate geometry, per element
kind quadrature orders and the log level of the package.

Example YAML configuration:
    jacobian_tolerance: 1.0e-14
    integration_orders:
      QUAD4: 3
      TRI3: 7
    log_level: "INFO"
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class KernelConfig:
    """Configuration of the element kernel.

    Parameters
    ----------
    jacobian_tolerance : float
        Relative threshold on the Jacobian: an element is degenerate when
        ``abs(det J)`` is at or below ``jacobian_tolerance`` times the product
        of the row norms of J (Hadamard bound), which is independent of the
        element size.
    integration_orders : dict of str to int
        Quadrature order overrides keyed by element kind name
        (e.g. ``{"QUAD4": 3}``). Kinds not listed use their default rule.
    log_level : str
        Level applied to the ``fem_diffusion`` logger by ``apply_logging``.
    """

    jacobian_tolerance: float = 1e-14
    integration_orders: Dict[str, int] = field(default_factory=dict)
    log_level: str = "WARNING"

    def __post_init__(self):
        if not math.isfinite(self.jacobian_tolerance) or self.jacobian_tolerance < 0:
            raise ValueError(
                f"jacobian_tolerance must be finite and non-negative: {self.jacobian_tolerance}"
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}. Valid: {LOG_LEVELS}")
        orders = {}
        for kind, order in self.integration_orders.items():
            if int(order) != order or order < 1:
                raise ValueError(f"Integration order for {kind} must be a positive integer: {order}")
            orders[str(getattr(kind, "value", kind)).upper()] = int(order)
        self.integration_orders = orders

    def integration_order(self, kind_name: str, default: int) -> int:
        """Quadrature order configured for ``kind_name``, or ``default``."""
        return self.integration_orders.get(str(getattr(kind_name, "value", kind_name)).upper(), default)

    def apply_logging(self) -> None:
        """Set the level of the package logger hierarchy."""
        logging.getLogger("fem_diffusion").setLevel(self.log_level)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "KernelConfig":
        """Load configuration from YAML file.

        Parameters
        ----------
        yaml_path : str or Path
            Path to the YAML configuration file.

        Returns
        -------
        KernelConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError
            If the YAML file does not exist.
        ValueError
            If the configuration is invalid.
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KernelConfig":
        """Create configuration from dictionary.

        Unknown keys are reported and ignored.
        """
        known = {"jacobian_tolerance", "integration_orders", "log_level"}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", sorted(unknown))

        return cls(
            jacobian_tolerance=float(data.get("jacobian_tolerance", 1e-14)),
            integration_orders=dict(data.get("integration_orders") or {}),
            log_level=data.get("log_level", "WARNING"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jacobian_tolerance": self.jacobian_tolerance,
            "integration_orders": dict(self.integration_orders),
            "log_level": self.log_level,
        }

    def save_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file.

        Parameters
        ----------
        yaml_path : str or Path
            Path to the output YAML file.
        """
        with open(yaml_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate the configuration against the known element kinds.

        Returns
        -------
        list of str
            List of validation warnings (empty if all OK).
        """
        from fem_diffusion.elements.shapes import SHAPE_LIBRARY, ElementKind

        warnings = []
        for name, order in self.integration_orders.items():
            if name not in ElementKind.__members__:
                warnings.append(f"Unknown element kind in integration_orders: {name}")
                continue
            definition = SHAPE_LIBRARY[ElementKind[name]]
            if order < definition.default_order:
                warnings.append(
                    f"{name}: integration order {order} is below {definition.default_order}, "
                    "the local mass matrix will not be integrated exactly"
                )
        return warnings


DEFAULT_CONFIG = KernelConfig()
