# pylint: disable=redefined-outer-name,unused-argument
"""Unit tests for the YAML configuration layer."""
import pytest

from jarvis_hull.config import CFG, Config
from jarvis_hull.jarvis_march import JarvisMarchConfig


@pytest.mark.unit
def test_config_is_singleton():
    assert Config() is CFG


@pytest.mark.unit
def test_packaged_defaults():
    assert CFG.get_nested("numerical", "epsilon") == pytest.approx(1e-5)
    assert CFG.get_nested("numerical", "coordinate_tolerance") == pytest.approx(1e-6)
    assert CFG.get_nested("walk", "iteration_cap_factor") == 2
    assert CFG.get_nested("output", "winding") is None
    assert "walk" in CFG
    assert CFG["walk"]["validate_triangle"] is False


@pytest.mark.unit
def test_get_nested_missing_keys():
    assert CFG.get_nested("numerical", "missing") is None
    assert CFG.get_nested("missing", "epsilon", default=3) == 3
    assert CFG.get_nested("numerical", "epsilon", "deeper") is None


@pytest.mark.unit
def test_built_in_defaults_match_packaged_file():
    assert CFG._default_config() == CFG._load()


@pytest.mark.unit
def test_repr_lists_sections():
    assert repr(CFG) == "Config(keys=['numerical', 'walk', 'output'])"


@pytest.mark.integration
def test_reload_from_file(tmp_path, restore_config):
    path = tmp_path / "hull.yaml"
    path.write_text(
        "numerical:\n"
        "  epsilon: 0.5\n"
        "walk:\n"
        "  validate_triangle: true\n"
        "output:\n"
        "  winding: cw\n"
    )
    CFG.reload(path)

    config = JarvisMarchConfig.from_config()
    assert config.epsilon == 0.5
    assert config.validate_triangle is True
    assert config.winding == "cw"
    # keys absent from the file fall back to dataclass defaults
    assert config.coordinate_tolerance == pytest.approx(1e-6)
    assert config.iteration_cap_factor == 2


@pytest.mark.integration
def test_reload_restores_packaged_file(tmp_path, restore_config):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    CFG.reload(path)
    assert CFG.get_nested("numerical", "epsilon") is None
    CFG.reload()
    assert CFG.get_nested("numerical", "epsilon") == pytest.approx(1e-5)


@pytest.mark.unit
def test_from_config_overrides_skip_none():
    config = JarvisMarchConfig.from_config(epsilon=None, winding="ccw")
    assert config.epsilon == pytest.approx(1e-5)
    assert config.winding == "ccw"
