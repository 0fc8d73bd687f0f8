# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag set data models."""

from pydantic import BaseModel, Field

from .enums import ResourceLifecycle

TagSet = dict[str, str]


class TagDiff(BaseModel):
    """Changes needed to move a resource's current tags to the desired tags."""

    to_delete: set[str] = Field(
        default_factory=set,
        description="Tag keys to remove from the resource"
    )
    to_upsert: dict[str, str] = Field(
        default_factory=dict,
        description="Tags to add or whose values must change"
    )

    @property
    def is_empty(self) -> bool:
        """True when the resource already carries the desired tags."""
        return not self.to_delete and not self.to_upsert

    def apply(self, current: TagSet) -> TagSet:
        """
        Apply this diff to a tag set without mutating it.

        Deletions run before upserts, matching the order in which the
        reconcilers would call the tagging APIs if both were issued.

        Args:
            current: Tags currently on the resource

        Returns:
            New tag set with the diff applied
        """
        result = {k: v for k, v in current.items() if k not in self.to_delete}
        result.update(self.to_upsert)
        return result


class BuildParams(BaseModel):
    """Inputs used to construct the desired tags of a resource."""

    cluster_name: str = Field(..., description="Kubernetes cluster name")
    resource_id: str = Field(..., description="ARN or ID of the tagged resource")
    lifecycle: ResourceLifecycle = Field(
        ResourceLifecycle.OWNED,
        description="Whether the cluster owns or shares the resource"
    )
    name: str | None = Field(None, description="Value for the Name tag")
    role: str | None = Field(None, description="Value for the provider role tag")
    additional: dict[str, str] = Field(
        default_factory=dict,
        description="User-supplied tags merged into the desired set"
    )
