# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag reconciliation for managed nodegroups and the resources behind them.

Reconciling a nodegroup cascades to its Auto Scaling Groups, to every
instance in those groups and to the EBS volumes attached to each instance.
The order is fixed: all groups first, then each instance followed
immediately by its volumes. A failure stops the cascade; resources already
processed keep their new tags, and a re-run picks up where it stopped.
"""

from typing import Any

from ..clients.aws_client import TaggingClient
from ..models.enums import ResourceKind
from ..models.result import TagReconcileResult
from ..models.scope import ClusterScope
from .tag_builder import nodegroup_tags
from .tag_diff import EKS_CLUSTER_NAME_TAG, EKS_NODEGROUP_NAME_TAG
from .tag_updater import (
    reconciliation_context,
    update_asg_tags,
    update_ec2_tags,
    update_eks_tags,
)


class NodegroupTagService:
    """Keeps a nodegroup and its compute resources tagged for the cluster."""

    def __init__(self, client: TaggingClient, scope: ClusterScope):
        self.client = client
        self.scope = scope

    def _desired_tags(self) -> dict[str, str]:
        return nodegroup_tags(self.scope.cluster_name, self.scope.additional_tags)

    def reconcile_tags(self, nodegroup: dict[str, Any]) -> list[TagReconcileResult]:
        """
        Reconcile a nodegroup's tags and cascade to its ASGs, instances and volumes.

        Args:
            nodegroup: Nodegroup description as returned by DescribeNodegroup

        Returns:
            Results in the order the resources were processed

        Raises:
            TagReconciliationError: On the first failing resource
        """
        results = [
            update_eks_tags(
                self.client,
                ResourceKind.NODEGROUP,
                nodegroup["nodegroupArn"],
                dict(nodegroup.get("tags") or {}),
                self._desired_tags(),
            )
        ]
        groups = self._describe_asgs(nodegroup)
        results.extend(self.reconcile_asg_tags(nodegroup, groups))
        results.extend(self.reconcile_instance_tags(nodegroup, groups))
        return results

    def _describe_asgs(self, nodegroup: dict[str, Any]) -> list[dict[str, Any]]:
        names = [
            asg["name"]
            for asg in (nodegroup.get("resources") or {}).get("autoScalingGroups", [])
            if asg.get("name")
        ]
        with reconciliation_context(
            ResourceKind.AUTO_SCALING_GROUP,
            nodegroup["nodegroupName"],
            "fetch",
            label="AutoScalingGroups of nodegroup",
        ):
            return self.client.describe_auto_scaling_groups(names)

    def reconcile_asg_tags(
        self,
        nodegroup: dict[str, Any],
        groups: list[dict[str, Any]] | None = None,
    ) -> list[TagReconcileResult]:
        """
        Reconcile the tags on the nodegroup's Auto Scaling Groups.

        The desired set is the user's additional tags; tags EKS itself
        manages on the groups are protected from removal.

        Args:
            nodegroup: Nodegroup description
            groups: Already described groups; described from AWS when omitted

        Returns:
            One result per group
        """
        self.scope.info(
            "Reconciling ASG tags",
            cluster_name=self.scope.cluster_name,
            nodegroup_name=nodegroup["nodegroupName"],
        )
        if groups is None:
            groups = self._describe_asgs(nodegroup)

        results = []
        for group in groups:
            current = self.client.extract_tags(group.get("Tags"))
            results.append(
                update_asg_tags(
                    self.client,
                    self.scope,
                    group["AutoScalingGroupName"],
                    current,
                    self.scope.additional_tags,
                )
            )
        return results

    def reconcile_instance_tags(
        self,
        nodegroup: dict[str, Any],
        groups: list[dict[str, Any]] | None = None,
    ) -> list[TagReconcileResult]:
        """
        Reconcile the tags of every instance in the nodegroup's groups.

        Instance tags are only ever added to: the desired set is the
        instance's current tags overlaid with the nodegroup tags. Each
        instance's volumes are reconciled right after the instance.

        Args:
            nodegroup: Nodegroup description
            groups: Already described groups; described from AWS when omitted

        Returns:
            Results for instances and volumes in processing order
        """
        if groups is None:
            groups = self._describe_asgs(nodegroup)

        instance_ids = [
            instance["InstanceId"]
            for group in groups
            for instance in group.get("Instances", [])
        ]
        self.scope.info(
            "instances of autoscaling groups",
            count=len(instance_ids),
            service="tags:NodegroupService",
        )

        with reconciliation_context(
            ResourceKind.INSTANCE,
            nodegroup["nodegroupName"],
            "fetch",
            label="instances of nodegroup",
        ):
            instances = self.client.describe_instances(instance_ids)

        ng_tags = self._desired_tags()
        results = []
        for instance in instances:
            instance_id = instance["InstanceId"]
            current = self.client.extract_tags(instance.get("Tags"))
            desired = {**current, **ng_tags}

            self.scope.info("updating instance tag", instance=instance_id)
            results.append(
                update_ec2_tags(self.client, ResourceKind.INSTANCE, instance_id, current, desired)
            )

            volume_ids = [
                mapping["Ebs"]["VolumeId"]
                for mapping in instance.get("BlockDeviceMappings", [])
                if (mapping.get("Ebs") or {}).get("VolumeId")
            ]
            results.extend(self.reconcile_volume_tags(volume_ids, nodegroup))
        return results

    def reconcile_volume_tags(
        self,
        volume_ids: list[str],
        nodegroup: dict[str, Any],
    ) -> list[TagReconcileResult]:
        """
        Reconcile the tags of EBS volumes attached to a nodegroup instance.

        Volumes gain the EKS cluster and nodegroup identity tags when they
        lack them, plus the nodegroup tags. Existing tags are kept.

        Args:
            volume_ids: IDs of the volumes to reconcile
            nodegroup: Nodegroup description

        Returns:
            One result per volume
        """
        if not volume_ids:
            return []

        with reconciliation_context(
            ResourceKind.VOLUME, ",".join(volume_ids), "fetch", label="volumes"
        ):
            volumes = self.client.describe_volumes(volume_ids)

        identity = {
            EKS_CLUSTER_NAME_TAG: self.scope.cluster_name,
            EKS_NODEGROUP_NAME_TAG: nodegroup["nodegroupName"],
        }
        ng_tags = self._desired_tags()
        results = []
        for volume in volumes:
            current = self.client.extract_tags(volume.get("Tags"))
            desired = {**identity, **current, **ng_tags}
            results.append(
                update_ec2_tags(
                    self.client, ResourceKind.VOLUME, volume["VolumeId"], current, desired
                )
            )
        return results
