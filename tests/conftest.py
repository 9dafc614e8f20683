"""
Shared fixtures for the platform_interface test suite.
"""
from __future__ import annotations

import json

import pytest
import yaml
from rest_framework.test import APIClient

from apps.platform_interface.services.sources import METADATA_VAR, PORT_VAR, SERVICES_VAR


@pytest.fixture(autouse=True)
def off_platform(monkeypatch):
    """Make sure no platform variables leak in from the invoking shell."""
    for var in (METADATA_VAR, SERVICES_VAR, PORT_VAR):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def platform_env(monkeypatch):
    """
    Return a helper that injects platform variables the way Paasmaker does.

    Dicts are JSON-encoded; strings are used verbatim so malformed payloads
    can be simulated.
    """

    def _set(metadata, services, port=None):
        for var, value in ((METADATA_VAR, metadata), (SERVICES_VAR, services)):
            monkeypatch.setenv(var, value if isinstance(value, str) else json.dumps(value))
        if port is not None:
            monkeypatch.setenv(PORT_VAR, str(port))

    return _set


@pytest.fixture
def write_config(tmp_path):
    """
    Return a helper writing *data* to ``tmp_path / name``.

    ``.yml``/``.yaml`` files are YAML-encoded, ``.json`` files JSON-encoded;
    a ``str`` is written verbatim.
    """

    def _write(name: str, data) -> str:
        path = tmp_path / name
        if isinstance(data, str):
            text = data
        elif path.suffix in (".yml", ".yaml"):
            text = yaml.safe_dump(data)
        else:
            text = json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def api_client() -> APIClient:
    """Return an unauthenticated DRF APIClient."""
    return APIClient()
