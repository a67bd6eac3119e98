from server.config.settings import BaseConfig, load_config


def test_load_config_by_name():
    config = load_config("testing")
    assert config["TESTING"] is True
    assert config["DATABASE_PATH"] == ""


def test_unknown_name_falls_back_to_base():
    assert load_config("staging")["DEBUG"] is BaseConfig.DEBUG


def test_environment_overrides_are_coerced(monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("RELOGIN_WORKERS", "8")
    monkeypatch.setenv("SECRET_KEY", "from-env")

    config = load_config("production")
    assert config["DEBUG"] is True
    assert config["RELOGIN_WORKERS"] == 8
    assert config["SECRET_KEY"] == "from-env"
