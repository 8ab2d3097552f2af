from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrackedInstance(BaseModel):
    """One instance of a resource recorded in the state file."""

    model_config = ConfigDict(extra="allow")

    schema_version: Optional[int] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    private: Optional[str] = None
    index_key: Optional[Any] = None


class TrackedResource(BaseModel):
    model_config = ConfigDict(extra="allow")

    mode: str = "managed"
    type: str
    name: str
    provider: Optional[str] = None
    module: Optional[str] = None
    instances: List[TrackedInstance] = Field(default_factory=list)


class TerraformState(BaseModel):
    model_config = ConfigDict(extra="allow")

    version: Optional[int] = None
    terraform_version: Optional[str] = None
    serial: Optional[int] = None
    lineage: Optional[str] = None
    resources: List[TrackedResource] = Field(default_factory=list)

    def instances_of(self, resource_type: str) -> List[TrackedInstance]:
        """Returns every tracked instance of the given type, in state order."""
        return [
            instance
            for resource in self.resources
            if resource.type == resource_type
            for instance in resource.instances
        ]
