"""Tests for environment driven settings."""

import pytest

from magichome.config import CONNECT_TIMEOUT, READ_TIMEOUT, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.address is None
    assert settings.port == 5577
    assert settings.timeout == CONNECT_TIMEOUT
    assert settings.read_timeout == READ_TIMEOUT


def test_from_env():
    settings = Settings.from_env(
        {
            "MAGICHOME_ADDRESS": "192.168.1.105",
            "MAGICHOME_PORT": "6000",
            "MAGICHOME_TIMEOUT": "1.5",
            "MAGICHOME_READ_TIMEOUT": "0.5",
        }
    )
    assert settings == Settings("192.168.1.105", 6000, 1.5, 0.5)


def test_empty_address_is_unset():
    assert Settings.from_env({"MAGICHOME_ADDRESS": ""}).address is None


def test_bad_port():
    with pytest.raises(ValueError):
        Settings.from_env({"MAGICHOME_PORT": "lamp"})
