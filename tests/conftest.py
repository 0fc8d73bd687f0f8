"""Pytest configuration and shared fixtures."""

import pytest
from unittest.mock import MagicMock

from eks_tagging.clients.aws_client import TaggingClient
from eks_tagging.models.scope import ClusterScope

from tests.factories import CLUSTER_NAME, REGION


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake AWS credentials so no test can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def test_env(monkeypatch):
    """Set up reconciler environment variables."""
    test_vars = {
        "AWS_REGION": "eu-west-1",
        "LOG_LEVEL": "DEBUG",
        "EKS_CLUSTER_NAME": CLUSTER_NAME,
        "EKS_ADDITIONAL_TAGS": '{"team": "platform"}',
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    return test_vars


# =============================================================================
# Client and Scope Fixtures
# =============================================================================

@pytest.fixture
def mock_client():
    """Mock TaggingClient with AWS-shaped empty responses."""
    client = MagicMock(spec=TaggingClient)
    client.extract_tags.side_effect = TaggingClient.extract_tags
    client.describe_auto_scaling_groups.return_value = []
    client.describe_instances.return_value = []
    client.describe_volumes.return_value = []
    return client


@pytest.fixture
def scope():
    """Cluster scope with one additional tag."""
    return ClusterScope(CLUSTER_NAME, {"team": "platform"})

