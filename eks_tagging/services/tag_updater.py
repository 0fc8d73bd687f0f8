# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Apply a computed tag diff through the tagging API of each resource kind."""

from contextlib import contextmanager
from typing import Iterator

from ..clients.aws_client import AWSAPIError, TaggingClient
from ..models.enums import ResourceKind
from ..models.result import TagReconcileResult
from ..models.scope import ClusterScope
from .errors import TagReconciliationError
from .tag_diff import get_tag_updates, get_tag_updates_with_exemption, protected_keys_for

_KIND_LABELS = {
    ResourceKind.CLUSTER: "cluster",
    ResourceKind.NODEGROUP: "nodegroup",
    ResourceKind.FARGATE_PROFILE: "fargate profile",
    ResourceKind.AUTO_SCALING_GROUP: "nodegroup's AutoScalingGroup",
    ResourceKind.INSTANCE: "instance",
    ResourceKind.VOLUME: "volume",
}


def update_eks_tags(
    client: TaggingClient,
    kind: ResourceKind,
    arn: str,
    current: dict[str, str],
    desired: dict[str, str],
) -> TagReconcileResult:
    """
    Converge the tags of an EKS cluster, nodegroup or Fargate profile.

    Args:
        client: Tagging client
        kind: CLUSTER, NODEGROUP or FARGATE_PROFILE
        arn: ARN of the resource
        current: Tags currently on the resource
        desired: Tags the resource should carry

    Returns:
        TagReconcileResult describing the applied diff

    Raises:
        TagReconciliationError: If tagging or untagging fails
    """
    diff = get_tag_updates(current, desired)

    if diff.to_upsert:
        with reconciliation_context(kind, arn, "add"):
            client.tag_eks_resource(arn, diff.to_upsert)

    if diff.to_delete:
        with reconciliation_context(kind, arn, "delete"):
            client.untag_eks_resource(arn, diff.to_delete)

    return TagReconcileResult(kind=kind, resource_id=arn, diff=diff)


def update_ec2_tags(
    client: TaggingClient,
    kind: ResourceKind,
    resource_id: str,
    current: dict[str, str],
    desired: dict[str, str],
) -> TagReconcileResult:
    """Converge the tags of an EC2 instance or EBS volume."""
    diff = get_tag_updates(current, desired)

    if diff.to_upsert:
        with reconciliation_context(kind, resource_id, "add"):
            client.create_ec2_tags([resource_id], diff.to_upsert)

    if diff.to_delete:
        with reconciliation_context(kind, resource_id, "delete"):
            client.delete_ec2_tags([resource_id], diff.to_delete)

    return TagReconcileResult(kind=kind, resource_id=resource_id, diff=diff)


def update_asg_tags(
    client: TaggingClient,
    scope: ClusterScope,
    group_name: str,
    current: dict[str, str],
    desired: dict[str, str],
) -> TagReconcileResult:
    """
    Converge the tags of a nodegroup's Auto Scaling Group.

    Tags EKS manages on the group are exempt from deletion. New tags
    always propagate to instances launched by the group.
    """
    kind = ResourceKind.AUTO_SCALING_GROUP
    diff = get_tag_updates_with_exemption(
        current, desired, protected_keys_for(kind, scope.cluster_name)
    )
    scope.debug(
        "Tags",
        group=group_name,
        tagsToAdd=diff.to_upsert,
        tagsToDelete=sorted(diff.to_delete),
    )

    if diff.to_upsert:
        with reconciliation_context(kind, group_name, "add"):
            client.create_or_update_asg_tags(group_name, diff.to_upsert)

    if diff.to_delete:
        with reconciliation_context(kind, group_name, "delete"):
            client.delete_asg_tags(group_name, diff.to_delete)

    return TagReconcileResult(kind=kind, resource_id=group_name, diff=diff)


@contextmanager
def reconciliation_context(
    kind: ResourceKind,
    resource_id: str,
    operation: str,
    label: str | None = None,
) -> Iterator[None]:
    """
    Wrap AWS failures raised inside the block with reconciliation context.

    Args:
        kind: Kind of resource being reconciled
        resource_id: ARN, name or ID of the resource
        operation: "fetch", "add" or "delete"
        label: Description of what is targeted, replacing the kind's name
            (e.g. "instances of nodegroup" for a batch describe)

    Raises:
        TagReconciliationError: Chained from the underlying AWSAPIError
    """
    try:
        yield
    except AWSAPIError as e:
        label = label or _KIND_LABELS[kind]
        if operation == "add":
            message = f"failed to add tags to {label} {resource_id}"
        elif operation == "delete":
            message = f"failed to delete tags from {label} {resource_id}"
        else:
            message = f"failed to describe {label} {resource_id}"
        raise TagReconciliationError(
            message, kind=kind, resource_id=resource_id, operation=operation
        ) from e
