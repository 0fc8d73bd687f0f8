"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

import eks_tagging.config as config_module
from eks_tagging.config import Settings, get_settings, settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "AWS_REGION",
        "LOG_LEVEL",
        "EKS_CLUSTER_NAME",
        "CLUSTER_NAME",
        "EKS_ADDITIONAL_TAGS",
        "CLOUDWATCH_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_settings", None)


def test_defaults(monkeypatch):
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)

    config = Settings(_env_file=None)

    assert config.aws_region == "us-east-1"
    assert config.log_level == "INFO"
    assert config.cluster_name is None
    assert config.additional_tags == {}
    assert config.cloudwatch_enabled is False
    assert config.cloudwatch_log_group == "/eks/tag-reconciler"


def test_loads_from_environment(test_env):
    config = get_settings()

    assert config.aws_region == "eu-west-1"
    assert config.log_level == "DEBUG"
    assert config.cluster_name == "test-cluster"
    assert config.additional_tags == {"team": "platform"}


def test_default_region_fallback(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-south-1")

    assert Settings(_env_file=None).aws_region == "ap-south-1"


def test_invalid_additional_tags(monkeypatch):
    monkeypatch.setenv("EKS_ADDITIONAL_TAGS", '{"team": ["a", "b"]}')

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_global_settings_are_cached(test_env):
    assert settings() is settings()
