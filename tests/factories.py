"""Builders for AWS-shaped describe responses used across tests."""

CLUSTER_NAME = "test-cluster"
ACCOUNT = "123456789012"
REGION = "us-east-1"


def make_nodegroup(name="ng-1", asg_names=(), tags=None):
    """Build a DescribeNodegroup-shaped nodegroup."""
    return {
        "nodegroupName": name,
        "nodegroupArn": f"arn:aws:eks:{REGION}:{ACCOUNT}:nodegroup/{CLUSTER_NAME}/{name}/abc",
        "clusterName": CLUSTER_NAME,
        "tags": dict(tags or {}),
        "resources": {"autoScalingGroups": [{"name": n} for n in asg_names]},
    }


def make_cluster(tags=None):
    """Build a DescribeCluster-shaped cluster."""
    return {
        "name": CLUSTER_NAME,
        "arn": f"arn:aws:eks:{REGION}:{ACCOUNT}:cluster/{CLUSTER_NAME}",
        "tags": dict(tags or {}),
    }


def make_fargate_profile(name="fp-1", tags=None):
    """Build a DescribeFargateProfile-shaped profile."""
    return {
        "fargateProfileName": name,
        "fargateProfileArn": (
            f"arn:aws:eks:{REGION}:{ACCOUNT}:fargateprofile/{CLUSTER_NAME}/{name}/abc"
        ),
        "clusterName": CLUSTER_NAME,
        "tags": dict(tags or {}),
    }


def make_asg(name, instance_ids=(), tags=None):
    """Build a DescribeAutoScalingGroups-shaped group."""
    return {
        "AutoScalingGroupName": name,
        "Instances": [{"InstanceId": i} for i in instance_ids],
        "Tags": [
            {
                "Key": k,
                "Value": v,
                "ResourceId": name,
                "ResourceType": "auto-scaling-group",
                "PropagateAtLaunch": True,
            }
            for k, v in (tags or {}).items()
        ],
    }


def make_instance(instance_id, volume_ids=(), tags=None):
    """Build a DescribeInstances-shaped instance."""
    return {
        "InstanceId": instance_id,
        "Tags": [{"Key": k, "Value": v} for k, v in (tags or {}).items()],
        "BlockDeviceMappings": [
            {"DeviceName": f"/dev/xvd{chr(97 + n)}", "Ebs": {"VolumeId": v}}
            for n, v in enumerate(volume_ids)
        ],
    }


def make_volume(volume_id, tags=None):
    """Build a DescribeVolumes-shaped volume."""
    return {
        "VolumeId": volume_id,
        "Tags": [{"Key": k, "Value": v} for k, v in (tags or {}).items()],
    }
