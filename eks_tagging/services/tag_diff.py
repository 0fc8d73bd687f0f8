# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag diffing between a resource's current and desired tags."""

from ..models.enums import ResourceKind
from ..models.tags import TagDiff
from .tag_builder import cloud_provider_tag_key

EKS_CLUSTER_NAME_TAG = "eks:cluster-name"
EKS_NODEGROUP_NAME_TAG = "eks:nodegroup-name"
CLUSTER_AUTOSCALER_ENABLED_TAG = "k8s.io/cluster-autoscaler/enabled"


def cluster_autoscaler_tag_key(cluster_name: str) -> str:
    return f"k8s.io/cluster-autoscaler/{cluster_name}"


def protected_keys_for(kind: ResourceKind, cluster_name: str) -> frozenset[str]:
    """
    Tag keys that reconciliation must never remove from a resource kind.

    EKS writes these onto a managed nodegroup's Auto Scaling Group itself;
    removing them breaks the nodegroup or the cluster autoscaler. Every
    other kind has no protected keys.

    Args:
        kind: Kind of resource being reconciled
        cluster_name: Name of the owning cluster

    Returns:
        Set of protected tag keys (possibly empty)
    """
    if kind is ResourceKind.AUTO_SCALING_GROUP:
        return frozenset({
            EKS_CLUSTER_NAME_TAG,
            EKS_NODEGROUP_NAME_TAG,
            cluster_autoscaler_tag_key(cluster_name),
            CLUSTER_AUTOSCALER_ENABLED_TAG,
            cloud_provider_tag_key(cluster_name),
        })
    return frozenset()


def get_tag_updates(current: dict[str, str], desired: dict[str, str]) -> TagDiff:
    """
    Compute the tag changes that turn ``current`` into ``desired``.

    Args:
        current: Tags currently on the resource
        desired: Tags the resource should carry

    Returns:
        TagDiff with keys to delete and tags to add or update

    Example:
        >>> diff = get_tag_updates({"a": "1", "b": "2"}, {"b": "2", "c": "3"})
        >>> diff.to_delete, diff.to_upsert
        ({'a'}, {'c': '3'})
    """
    return get_tag_updates_with_exemption(current, desired, frozenset())


def get_tag_updates_with_exemption(
    current: dict[str, str],
    desired: dict[str, str],
    protected: frozenset[str] | set[str],
) -> TagDiff:
    """
    Compute tag changes, never deleting a protected key.

    A protected key missing from ``desired`` is left alone. If ``desired``
    does name it, the key is upserted like any other.

    Args:
        current: Tags currently on the resource
        desired: Tags the resource should carry
        protected: Keys that must survive reconciliation

    Returns:
        TagDiff with keys to delete and tags to add or update
    """
    to_delete = {
        key for key in current
        if key not in desired and key not in protected
    }
    to_upsert = {
        key: value for key, value in desired.items()
        if key not in current or current[key] != value
    }
    return TagDiff(to_delete=to_delete, to_upsert=to_upsert)
