import importlib

import pytest


@pytest.fixture
def reload_vars():
    # Requested before monkeypatch so the final reload sees the restored environment
    import flyd.vars as vars_module

    yield lambda: importlib.reload(vars_module)
    importlib.reload(vars_module)


def test_defaults(reload_vars, monkeypatch):
    for name in ("PUBLIC_API_URL", "PRIVATE_API_URL", "HOST", "PORT", "FLYD_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    vars_module = reload_vars()

    assert vars_module.PUBLIC_API_URL == "https://api.machines.dev"
    assert vars_module.PRIVATE_API_URL == "http://fly-api.internal:4280"
    assert vars_module.HOST == "0.0.0.0"
    assert vars_module.PORT == 8080
    assert vars_module.FLYD_DEBUG is False


def test_overrides_strip_trailing_slash(reload_vars, monkeypatch):
    monkeypatch.setenv("PRIVATE_API_URL", "http://localhost:4280/")
    monkeypatch.setenv("PORT", "9090")
    vars_module = reload_vars()

    assert vars_module.PRIVATE_API_URL == "http://localhost:4280"
    assert vars_module.PORT == 9090


def test_debug_loads_env_local(reload_vars, monkeypatch, tmp_path):
    (tmp_path / ".env.local").write_text("PUBLIC_API_URL=http://127.0.0.1:9999\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FLYD_DEBUG", "true")
    monkeypatch.setenv("PUBLIC_API_URL", "https://ignored.example.com")
    vars_module = reload_vars()

    assert vars_module.FLYD_DEBUG is True
    assert vars_module.PUBLIC_API_URL == "http://127.0.0.1:9999"
