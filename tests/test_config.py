import dataclasses

import pytest

from totpqr import EcLevel, InvalidConfiguration, TotpQrConfig


def _config(**overrides):
    kwargs = {"account_name": "user@example.com", "issuer": "MyApp"}
    kwargs.update(overrides)
    return TotpQrConfig(**kwargs)


def test_defaults():
    config = _config()
    assert config.dark_color == "#000000"
    assert config.light_color == "#ffffff"
    assert config.min_dimension == 200
    assert config.version is None
    assert config.ec_level is EcLevel.MEDIUM
    assert config.digits == 6
    assert config.period == 30
    assert config.quiet_zone == 4


@pytest.mark.parametrize("color", ["#abc", "#abcd", "#AABBCC", "#000080", "#ffffcc80", "black", "White", "transparent"])
def test_valid_colors(color):
    assert _config(dark_color=color, light_color=color).dark_color == color


@pytest.mark.parametrize("color", ["", "#12345", "#gggggg", "000000", 'red"/><script', "rgb(0,0,0)", None])
def test_invalid_colors(color):
    with pytest.raises(InvalidConfiguration):
        _config(dark_color=color)
    with pytest.raises(InvalidConfiguration):
        _config(light_color=color)


@pytest.mark.parametrize("dimension", [0, -1, True, 10.5])
def test_min_dimension_must_be_positive(dimension):
    with pytest.raises(InvalidConfiguration):
        _config(min_dimension=dimension)


@pytest.mark.parametrize("version", [1, 5, 40])
def test_valid_versions(version):
    assert _config(version=version).version == version


@pytest.mark.parametrize("version", [0, 41, -1, "5"])
def test_invalid_versions(version):
    with pytest.raises(InvalidConfiguration):
        _config(version=version)


def test_ec_level_must_be_enum():
    with pytest.raises(InvalidConfiguration):
        _config(ec_level="M")


@pytest.mark.parametrize(
    "overrides",
    [
        {"account_name": ""},
        {"account_name": "a:b"},
        {"issuer": "My:App"},
        {"issuer": None},
        {"digits": 0},
        {"digits": 10},
        {"period": 0},
        {"quiet_zone": -1},
    ],
)
def test_invalid_fields(overrides):
    with pytest.raises(InvalidConfiguration):
        _config(**overrides)


def test_empty_issuer_is_allowed():
    assert _config(issuer="").issuer == ""


def test_config_is_immutable():
    config = _config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.min_dimension = 10
