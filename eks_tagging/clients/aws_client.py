# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""AWS client wrapper for the EKS, EC2 and Auto Scaling tagging APIs."""

import logging
from typing import Any, Callable

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

ASG_RESOURCE_TYPE = "auto-scaling-group"


class AWSAPIError(Exception):
    """Raised when AWS API calls fail."""

    def __init__(
        self,
        message: str,
        operation: str = "",
        resource_id: str = "",
        error_code: str = "",
    ):
        super().__init__(message)
        self.operation = operation
        self.resource_id = resource_id
        self.error_code = error_code


class TaggingClient:
    """
    Wrapper around the boto3 clients used for tag reconciliation.

    Calls are blocking and issued one at a time. Describe operations drain
    every page before returning. Retries are left to botocore's own
    configuration and to the caller; this layer only attaches context to
    failures.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        boto_config: Config | None = None,
        session: boto3.session.Session | None = None,
    ):
        """
        Initialize AWS clients.

        Args:
            region: AWS region of the cluster
            boto_config: Optional botocore Config applied to every client
            session: Optional boto3 session (defaults to the default session)
        """
        config = boto_config or Config(region_name=region)
        factory = session.client if session is not None else boto3.client

        self.region = region
        self.eks = factory("eks", region_name=region, config=config)
        self.ec2 = factory("ec2", region_name=region, config=config)
        self.autoscaling = factory("autoscaling", region_name=region, config=config)

    def _call(
        self,
        operation: str,
        resource_id: str,
        func: Callable[..., Any],
        **kwargs: Any,
    ) -> Any:
        """
        Call an AWS API, converting botocore failures into AWSAPIError.

        Args:
            operation: Name of the API operation, used in error context
            resource_id: Resource the call targets, used in error context
            func: Bound boto3 client method or paginator.paginate
            **kwargs: Keyword arguments for the method

        Returns:
            Response from AWS API

        Raises:
            AWSAPIError: If the API call fails
        """
        try:
            return func(**kwargs)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            raise AWSAPIError(
                f"AWS API error during {operation} on {resource_id}: {error_code} - {e}",
                operation=operation,
                resource_id=resource_id,
                error_code=error_code,
            ) from e
        except BotoCoreError as e:
            raise AWSAPIError(
                f"Boto3 error during {operation} on {resource_id}: {e}",
                operation=operation,
                resource_id=resource_id,
            ) from e

    def _paginate(
        self,
        client: Any,
        operation: str,
        resource_id: str,
        result_key: str,
        **kwargs: Any,
    ) -> list[dict[str, Any]]:
        """Drain every page of a paginated operation into a single list."""
        def drain(**params: Any) -> list[dict[str, Any]]:
            items: list[dict[str, Any]] = []
            for page in client.get_paginator(operation).paginate(**params):
                items.extend(page.get(result_key, []))
            return items

        items = self._call(operation, resource_id, drain, **kwargs)
        logger.debug(f"{operation} returned {len(items)} {result_key}")
        return items

    @staticmethod
    def extract_tags(tag_list: list[dict[str, str]] | None) -> dict[str, str]:
        """
        Convert AWS tag list format to dictionary.

        Args:
            tag_list: List of tags in AWS format [{"Key": "...", "Value": "..."}]

        Returns:
            Dictionary of tag key-value pairs
        """
        if not tag_list:
            return {}

        result = {}
        for tag in tag_list:
            key = tag.get("Key")
            value = tag.get("Value")
            if key and value is not None:
                result[key] = value
        return result

    # -------------------------------------------------------------------------
    # EKS
    # -------------------------------------------------------------------------

    def describe_cluster(self, name: str) -> dict[str, Any]:
        response = self._call("DescribeCluster", name, self.eks.describe_cluster, name=name)
        return response["cluster"]

    def describe_nodegroup(self, cluster_name: str, nodegroup_name: str) -> dict[str, Any]:
        response = self._call(
            "DescribeNodegroup",
            nodegroup_name,
            self.eks.describe_nodegroup,
            clusterName=cluster_name,
            nodegroupName=nodegroup_name,
        )
        return response["nodegroup"]

    def describe_fargate_profile(self, cluster_name: str, profile_name: str) -> dict[str, Any]:
        response = self._call(
            "DescribeFargateProfile",
            profile_name,
            self.eks.describe_fargate_profile,
            clusterName=cluster_name,
            fargateProfileName=profile_name,
        )
        return response["fargateProfile"]

    def list_nodegroups(self, cluster_name: str) -> list[str]:
        return self._paginate(
            self.eks, "list_nodegroups", cluster_name, "nodegroups", clusterName=cluster_name
        )

    def list_fargate_profiles(self, cluster_name: str) -> list[str]:
        return self._paginate(
            self.eks,
            "list_fargate_profiles",
            cluster_name,
            "fargateProfileNames",
            clusterName=cluster_name,
        )

    def tag_eks_resource(self, arn: str, tags: dict[str, str]) -> None:
        """Add or overwrite tags on an EKS cluster, nodegroup or Fargate profile."""
        self._call("TagResource", arn, self.eks.tag_resource, resourceArn=arn, tags=dict(tags))

    def untag_eks_resource(self, arn: str, keys: set[str] | list[str]) -> None:
        """Remove tag keys from an EKS cluster, nodegroup or Fargate profile."""
        self._call(
            "UntagResource", arn, self.eks.untag_resource, resourceArn=arn, tagKeys=sorted(keys)
        )

    # -------------------------------------------------------------------------
    # Auto Scaling
    # -------------------------------------------------------------------------

    def describe_auto_scaling_groups(self, names: list[str]) -> list[dict[str, Any]]:
        """
        Describe Auto Scaling Groups by name.

        Args:
            names: Group names; an empty list returns [] without calling AWS

        Returns:
            Group descriptions from every page
        """
        if not names:
            return []
        return self._paginate(
            self.autoscaling,
            "describe_auto_scaling_groups",
            ",".join(names),
            "AutoScalingGroups",
            AutoScalingGroupNames=list(names),
        )

    def create_or_update_asg_tags(
        self,
        group_name: str,
        tags: dict[str, str],
        propagate_at_launch: bool = True,
    ) -> None:
        """
        Add or overwrite tags on an Auto Scaling Group.

        Args:
            group_name: Name of the Auto Scaling Group
            tags: Tags to write
            propagate_at_launch: Whether instances launched by the group inherit the tags
        """
        request = [
            {
                "Key": key,
                "Value": value,
                "PropagateAtLaunch": propagate_at_launch,
                "ResourceId": group_name,
                "ResourceType": ASG_RESOURCE_TYPE,
            }
            for key, value in tags.items()
        ]
        self._call(
            "CreateOrUpdateTags", group_name, self.autoscaling.create_or_update_tags, Tags=request
        )

    def delete_asg_tags(self, group_name: str, keys: set[str] | list[str]) -> None:
        request = [
            {"Key": key, "ResourceId": group_name, "ResourceType": ASG_RESOURCE_TYPE}
            for key in sorted(keys)
        ]
        self._call("DeleteTags", group_name, self.autoscaling.delete_tags, Tags=request)

    # -------------------------------------------------------------------------
    # EC2
    # -------------------------------------------------------------------------

    def describe_instances(self, instance_ids: list[str]) -> list[dict[str, Any]]:
        """
        Describe EC2 instances by ID.

        Args:
            instance_ids: Instance IDs; an empty list returns [] without calling
                AWS, which would otherwise describe every instance in the region

        Returns:
            Instances flattened out of every reservation on every page
        """
        if not instance_ids:
            return []
        reservations = self._paginate(
            self.ec2,
            "describe_instances",
            ",".join(instance_ids),
            "Reservations",
            InstanceIds=list(instance_ids),
        )
        return [
            instance
            for reservation in reservations
            for instance in reservation.get("Instances", [])
        ]

    def describe_volumes(self, volume_ids: list[str]) -> list[dict[str, Any]]:
        """Describe EBS volumes by ID; an empty list returns [] without calling AWS."""
        if not volume_ids:
            return []
        return self._paginate(
            self.ec2,
            "describe_volumes",
            ",".join(volume_ids),
            "Volumes",
            VolumeIds=list(volume_ids),
        )

    def create_ec2_tags(self, resource_ids: list[str], tags: dict[str, str]) -> None:
        request = [{"Key": key, "Value": value} for key, value in tags.items()]
        self._call(
            "CreateTags",
            ",".join(resource_ids),
            self.ec2.create_tags,
            Resources=list(resource_ids),
            Tags=request,
        )

    def delete_ec2_tags(self, resource_ids: list[str], keys: set[str] | list[str]) -> None:
        request = [{"Key": key} for key in sorted(keys)]
        self._call(
            "DeleteTags",
            ",".join(resource_ids),
            self.ec2.delete_tags,
            Resources=list(resource_ids),
            Tags=request,
        )
