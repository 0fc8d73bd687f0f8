"""Unit tests for the tag differ."""

import pytest

from eks_tagging.models.enums import ResourceKind
from eks_tagging.models.tags import TagDiff
from eks_tagging.services.tag_diff import (
    CLUSTER_AUTOSCALER_ENABLED_TAG,
    EKS_CLUSTER_NAME_TAG,
    EKS_NODEGROUP_NAME_TAG,
    get_tag_updates,
    get_tag_updates_with_exemption,
    protected_keys_for,
)


class TestGetTagUpdates:
    """Tests for get_tag_updates."""

    def test_removes_stale_and_adds_missing(self):
        diff = get_tag_updates({"a": "1", "b": "2"}, {"b": "2", "c": "3"})

        assert diff.to_delete == {"a"}
        assert diff.to_upsert == {"c": "3"}

    def test_changed_value_is_upserted_not_deleted(self):
        diff = get_tag_updates({"env": "dev"}, {"env": "prod"})

        assert diff.to_delete == set()
        assert diff.to_upsert == {"env": "prod"}

    def test_identical_sets_give_empty_diff(self):
        tags = {"a": "1", "b": "2"}

        diff = get_tag_updates(tags, dict(tags))

        assert diff == TagDiff()
        assert diff.is_empty

    def test_empty_current(self):
        diff = get_tag_updates({}, {"a": "1"})

        assert diff.to_delete == set()
        assert diff.to_upsert == {"a": "1"}

    def test_empty_desired_deletes_everything(self):
        diff = get_tag_updates({"a": "1", "b": "2"}, {})

        assert diff.to_delete == {"a", "b"}
        assert diff.to_upsert == {}

    def test_empty_value_is_a_real_value(self):
        diff = get_tag_updates({"a": "x"}, {"a": ""})

        assert diff.to_upsert == {"a": ""}

    def test_inputs_are_not_mutated(self):
        current = {"a": "1"}
        desired = {"b": "2"}

        get_tag_updates(current, desired)

        assert current == {"a": "1"}
        assert desired == {"b": "2"}


class TestGetTagUpdatesWithExemption:
    """Tests for get_tag_updates_with_exemption."""

    def test_protected_key_survives(self):
        diff = get_tag_updates_with_exemption(
            {EKS_CLUSTER_NAME_TAG: "x", "stale": "y"},
            {},
            frozenset({EKS_CLUSTER_NAME_TAG}),
        )

        assert diff.to_delete == {"stale"}
        assert diff.to_upsert == {}

    def test_protected_key_redefined_is_upserted(self):
        diff = get_tag_updates_with_exemption(
            {EKS_CLUSTER_NAME_TAG: "x"},
            {EKS_CLUSTER_NAME_TAG: "y"},
            frozenset({EKS_CLUSTER_NAME_TAG}),
        )

        assert diff.to_delete == set()
        assert diff.to_upsert == {EKS_CLUSTER_NAME_TAG: "y"}

    def test_protected_key_absent_from_current_is_ignored(self):
        diff = get_tag_updates_with_exemption({"a": "1"}, {}, {"missing"})

        assert diff.to_delete == {"a"}

    def test_empty_protection_matches_plain_diff(self):
        current = {"a": "1", "b": "2"}
        desired = {"b": "3"}

        assert get_tag_updates_with_exemption(current, desired, frozenset()) == get_tag_updates(
            current, desired
        )


class TestProtectedKeys:
    """Tests for the per-kind protected key table."""

    def test_asg_keys(self):
        keys = protected_keys_for(ResourceKind.AUTO_SCALING_GROUP, "prod")

        assert keys == {
            EKS_CLUSTER_NAME_TAG,
            EKS_NODEGROUP_NAME_TAG,
            "k8s.io/cluster-autoscaler/prod",
            CLUSTER_AUTOSCALER_ENABLED_TAG,
            "kubernetes.io/cluster/prod",
        }

    @pytest.mark.parametrize(
        "kind",
        [kind for kind in ResourceKind if kind is not ResourceKind.AUTO_SCALING_GROUP],
    )
    def test_other_kinds_have_no_protected_keys(self, kind):
        assert protected_keys_for(kind, "prod") == frozenset()
