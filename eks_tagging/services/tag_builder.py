# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Construction of the desired tag set from cluster metadata."""

from ..models.enums import ResourceLifecycle
from ..models.tags import BuildParams

NAME_TAG = "Name"
PROVIDER_ROLE_TAG = "sigs.k8s.io/cluster-api-provider-aws/role"
COMMON_ROLE_TAG_VALUE = "common"


def cluster_tag_key(cluster_name: str) -> str:
    """Ownership tag key written by the cluster provider."""
    return f"sigs.k8s.io/cluster-api-provider-aws/cluster/{cluster_name}"


def cloud_provider_tag_key(cluster_name: str) -> str:
    """Ownership tag key read by the Kubernetes AWS cloud provider."""
    return f"kubernetes.io/cluster/{cluster_name}"


def build_tags(params: BuildParams) -> dict[str, str]:
    """
    Assemble the desired tags described by ``params``.

    Additional tags are written first, so the ownership, role and Name
    tags always win when a user tag collides with one of them.

    Args:
        params: Build parameters for the resource

    Returns:
        Desired tag set
    """
    tags = dict(params.additional)
    tags[cluster_tag_key(params.cluster_name)] = params.lifecycle.value
    if params.role is not None:
        tags[PROVIDER_ROLE_TAG] = params.role
    if params.name is not None:
        tags[NAME_TAG] = params.name
    return tags


def cluster_tag_params(
    cluster_name: str,
    arn: str,
    additional: dict[str, str] | None = None,
) -> BuildParams:
    """Build parameters for tagging the EKS cluster itself."""
    return BuildParams(
        cluster_name=cluster_name,
        resource_id=arn,
        lifecycle=ResourceLifecycle.OWNED,
        name=cluster_name,
        role=COMMON_ROLE_TAG_VALUE,
        additional=dict(additional or {}),
    )


def nodegroup_tags(cluster_name: str, additional: dict[str, str] | None = None) -> dict[str, str]:
    """Desired tags for nodegroups, Fargate profiles and their compute resources."""
    tags = dict(additional or {})
    tags[cloud_provider_tag_key(cluster_name)] = ResourceLifecycle.OWNED.value
    return tags
