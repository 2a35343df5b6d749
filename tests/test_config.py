import pytest

from rds.config import Settings, SettingsError, SettingsLoader


@pytest.fixture
def loader(tmp_path, monkeypatch):
    monkeypatch.delenv("RDSTAIL_CONFIG", raising=False)
    return SettingsLoader(config_path=str(tmp_path / "missing.yaml"))


def test_defaults_without_file(loader):
    settings = loader.load()

    assert settings.region is None
    assert settings.profile is None
    assert settings.interval == 5.0
    assert settings.max_portions == 1000


def test_file_from_env_var(loader, tmp_path, monkeypatch):
    path = tmp_path / "rdstail.yaml"
    path.write_text("region: eu-west-1\nprofile: ops\ninterval: 10\nmax_portions: 7\n")
    monkeypatch.setenv("RDSTAIL_CONFIG", str(path))

    settings = loader.load()

    assert settings.region == "eu-west-1"
    assert settings.profile == "ops"
    assert settings.interval == 10.0
    assert settings.max_portions == 7


def test_empty_file_gives_defaults(loader, tmp_path, monkeypatch):
    path = tmp_path / "rdstail.yaml"
    path.write_text("")
    monkeypatch.setenv("RDSTAIL_CONFIG", str(path))

    assert loader.load().interval == 5.0


@pytest.mark.parametrize(
    "content", ["- just\n- a list\n", "interval: soon\n", "region: [unclosed\n"]
)
def test_bad_file(loader, tmp_path, monkeypatch, content):
    path = tmp_path / "rdstail.yaml"
    path.write_text(content)
    monkeypatch.setenv("RDSTAIL_CONFIG", str(path))

    with pytest.raises(SettingsError):
        loader.load()


def test_env_var_pointing_nowhere(loader, tmp_path, monkeypatch):
    monkeypatch.setenv("RDSTAIL_CONFIG", str(tmp_path / "nope.yaml"))

    with pytest.raises(SettingsError):
        loader.load()


def test_override_ignores_none():
    settings = Settings(region="us-east-1", interval=2.0)

    merged = settings.override(region=None, profile="ops", interval=None)

    assert merged.region == "us-east-1"
    assert merged.profile == "ops"
    assert merged.interval == 2.0
    assert settings.profile is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"interval": -1.0},
        {"interval": float("nan")},
        {"interval": float("inf")},
        {"max_portions": 0},
        {"max_portions": -5},
    ],
)
def test_settings_reject_bad_values(kwargs):
    with pytest.raises(SettingsError):
        Settings(**kwargs)

    with pytest.raises(SettingsError):
        Settings().override(**kwargs)


@pytest.mark.parametrize(
    "content", ["interval: -1\n", "interval: .nan\n", "max_portions: 0\n"]
)
def test_bad_values_in_file(loader, tmp_path, monkeypatch, content):
    path = tmp_path / "rdstail.yaml"
    path.write_text(content)
    monkeypatch.setenv("RDSTAIL_CONFIG", str(path))

    with pytest.raises(SettingsError):
        loader.load()


def test_zero_interval_is_allowed():
    assert Settings(interval=0.0).interval == 0.0
