import pytest

from brewup.config import ConfigError, UpdateConfig, validate_config


def test_validate_config_accepts_existing_file_and_v_prefix(formula_file):
    config = UpdateConfig(repo="sbomasm", version="v1.0.4", formula=formula_file)

    assert validate_config(config) is config
    assert config.org == "interlynk-io"
    assert config.dry_run is False
    assert config.jobs == 1


@pytest.mark.parametrize("version", ["1.0.4", "", "V1.0.4"])
def test_validate_config_rejects_version_without_v_prefix(formula_file, version):
    config = UpdateConfig(repo="sbomasm", version=version, formula=formula_file)

    with pytest.raises(ConfigError, match="version must start with 'v'"):
        validate_config(config)


def test_validate_config_rejects_missing_file(tmp_path):
    missing = tmp_path / "nope.rb"
    config = UpdateConfig(repo="sbomasm", version="v1.0.4", formula=missing)

    with pytest.raises(ConfigError, match="formula file does not exist"):
        validate_config(config)


def test_validate_config_rejects_directory(tmp_path):
    config = UpdateConfig(repo="sbomasm", version="v1.0.4", formula=tmp_path)

    with pytest.raises(ConfigError, match="formula file does not exist"):
        validate_config(config)


def test_validate_config_rejects_empty_repo_and_bad_jobs(formula_file):
    with pytest.raises(ConfigError, match="repository"):
        validate_config(UpdateConfig(repo="", version="v1.0.4", formula=formula_file))
    with pytest.raises(ConfigError, match="jobs"):
        validate_config(
            UpdateConfig(repo="sbomasm", version="v1.0.4", formula=formula_file, jobs=0)
        )


def test_config_is_immutable(formula_file):
    config = UpdateConfig(repo="sbomasm", version="v1.0.4", formula=formula_file)

    with pytest.raises(AttributeError):
        config.version = "v9.9.9"
