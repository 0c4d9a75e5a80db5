"""Tests for kernel configuration, materials and nodes."""

import logging

import numpy as np
import pytest
import yaml

from fem_diffusion.core.config import DEFAULT_CONFIG, KernelConfig
from fem_diffusion.core.entities import Node
from fem_diffusion.core.material import DiffusionMaterial


@pytest.fixture
def package_logger():
    logger = logging.getLogger("fem_diffusion")
    level = logger.level
    yield logger
    logger.setLevel(level)


class TestKernelConfig:
    def test_defaults(self):
        config = KernelConfig()

        assert config.jacobian_tolerance == 1e-14
        assert config.integration_orders == {}
        assert config.log_level == "WARNING"
        assert DEFAULT_CONFIG == config

    def test_integration_order_lookup(self):
        config = KernelConfig(integration_orders={"quad4": 3})

        assert config.integration_orders == {"QUAD4": 3}
        assert config.integration_order("QUAD4", 2) == 3
        assert config.integration_order("HEXA8", 2) == 2

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"jacobian_tolerance": -1.0},
            {"jacobian_tolerance": float("nan")},
            {"jacobian_tolerance": float("inf")},
            {"log_level": "VERBOSE"},
            {"integration_orders": {"QUAD4": 0}},
            {"integration_orders": {"QUAD4": 2.5}},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            KernelConfig(**kwargs)

    def test_yaml_round_trip(self, tmp_path):
        config = KernelConfig(
            jacobian_tolerance=1e-10, integration_orders={"TRI3": 7}, log_level="debug"
        )
        path = tmp_path / "kernel.yaml"
        config.save_yaml(path)

        with open(path) as f:
            data = yaml.safe_load(f)
        assert data["log_level"] == "DEBUG"

        assert KernelConfig.from_yaml(path) == config

    def test_from_yaml_text(self, tmp_path):
        path = tmp_path / "kernel.yaml"
        path.write_text(
            "jacobian_tolerance: 1.0e-12\n"
            "integration_orders:\n"
            "  HEXA8: 3\n"
            "log_level: INFO\n"
        )
        config = KernelConfig.from_yaml(path)

        assert config.jacobian_tolerance == 1e-12
        assert config.integration_order("HEXA8", 2) == 3
        assert config.log_level == "INFO"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert KernelConfig.from_yaml(path) == KernelConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            KernelConfig.from_yaml(tmp_path / "missing.yaml")

    def test_unknown_keys_are_reported(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fem_diffusion"):
            config = KernelConfig.from_dict({"log_level": "ERROR", "solver": "cg"})
        assert config.log_level == "ERROR"
        assert "solver" in caplog.text

    def test_validate(self):
        config = KernelConfig(integration_orders={"QUAD4": 1, "TRI3": 7, "PENTA6": 2})
        warnings = config.validate()

        assert len(warnings) == 2
        assert any("QUAD4" in w for w in warnings)
        assert any("PENTA6" in w for w in warnings)
        assert KernelConfig().validate() == []

    def test_apply_logging(self, package_logger):
        KernelConfig(log_level="DEBUG").apply_logging()
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger("fem_diffusion.elements.elements").isEnabledFor(logging.DEBUG)


class TestDiffusionMaterial:
    def test_nu_xs_f(self):
        material = DiffusionMaterial(name="fuel", xs_a=0.01, xs_f=0.004, nu=2.5, d=1.2)
        assert material.nu_xs_f == pytest.approx(0.01)

    @pytest.mark.parametrize("field", ["xs_a", "xs_f", "nu", "d"])
    @pytest.mark.parametrize("value", [-0.1, float("nan"), float("inf")])
    def test_invalid_parameters(self, field, value):
        params = dict(xs_a=0.01, xs_f=0.004, nu=2.5, d=1.2)
        params[field] = value
        with pytest.raises(ValueError):
            DiffusionMaterial(name="bad", **params)

    def test_is_immutable(self):
        material = DiffusionMaterial(name="fuel", xs_a=0.01, xs_f=0.004, nu=2.5, d=1.2)
        with pytest.raises(AttributeError):
            material.d = 2.0


class TestNode:
    @pytest.mark.parametrize(
        "coords,expected",
        [(1.5, [1.5, 0, 0]), ([1.0, 2.0], [1.0, 2.0, 0.0]), ([1, 2, 3], [1.0, 2.0, 3.0])],
    )
    def test_padding(self, coords, expected):
        node = Node(coords)
        np.testing.assert_array_equal(node.coords, expected)
        assert (node.x, node.y, node.z) == tuple(expected)

    def test_coordinates_are_read_only(self):
        node = Node([1.0, 2.0])
        with pytest.raises(ValueError):
            node.coords[0] = 5.0

    def test_source_array_is_copied(self):
        source = np.array([1.0, 2.0, 3.0])
        node = Node(source)
        source[0] = 10.0
        assert node.x == 1.0

    def test_too_many_coordinates(self):
        with pytest.raises(ValueError):
            Node([1, 2, 3, 4])
