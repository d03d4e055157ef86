"""Tests for the TOML run configuration."""

import logging
from pathlib import Path

import pytest

from dwcpn.grid_config import NC_FILL_DOUBLE, GridConfig, load_config, parse_toml_config


def test_defaults_without_file():
    config = load_config(None)
    assert config.cloud == 0.0
    assert config.yel_sub == 0.2
    assert config.use_prochloro is True
    assert config.fill_value == NC_FILL_DOUBLE
    assert config.inputs.chl == "chlor_a"
    assert config.outputs.par_noon_max == "i_star_mean"
    assert config.outputs.pp_prochloro == "prochlorococcus"


def test_dataclass_defaults_are_independent():
    first = GridConfig()
    first.inputs.chl = "chl_oci"
    assert GridConfig().inputs.chl == "chlor_a"


def test_parse_overrides(tmp_path):
    path = tmp_path / "run.toml"
    path.write_text(
        "[model]\n"
        "cloud = 0.3\n"
        "use_prochloro = false\n"
        "\n"
        "[netcdf]\n"
        "profile_dimension = \"z_profile\"\n"
        "\n"
        "[inputs]\n"
        "chl = \"chl_oci\"\n"
        "\n"
        "[outputs]\n"
        "pp = \"primary_production\"\n"
    )
    config = parse_toml_config(path)
    assert config.cloud == pytest.approx(0.3)
    assert config.yel_sub == 0.2
    assert config.use_prochloro is False
    assert config.profile_dimension == "z_profile"
    assert config.inputs.chl == "chl_oci"
    assert config.inputs.par == "par"
    assert config.outputs.pp == "primary_production"


def test_unknown_keys_are_ignored_with_a_warning(tmp_path, caplog):
    path = tmp_path / "run.toml"
    path.write_text("[inputs]\nchlorophyll = \"chl\"\n")
    with caplog.at_level(logging.WARNING, logger="Config"):
        config = parse_toml_config(path)
    assert config.inputs.chl == "chlor_a"
    assert "chlorophyll" in caplog.text


def test_cloud_out_of_range(tmp_path):
    path = tmp_path / "run.toml"
    path.write_text("[model]\ncloud = 2.0\n")
    with pytest.raises(ValueError):
        parse_toml_config(path)


def test_shipped_config_matches_defaults():
    """The example config file in the repository spells out the defaults."""
    shipped = Path(__file__).resolve().parent.parent / "dwcpn_config.toml"
    config = parse_toml_config(shipped)
    assert config == GridConfig()
