import dataclasses
import re
from typing import Any, Dict, Optional

from tfimporter import exceptions

_INVALID_TF_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def to_tf_name(identifier: str) -> str:
    """Turns a remote identifier into a valid Terraform local name."""
    name = _INVALID_TF_NAME_CHARS.sub("_", identifier)
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = f"r_{name}"
    return name


@dataclasses.dataclass(frozen=True)
class ResourceDescriptor:
    # None when the remote item has no usable key and cannot be imported
    identifier: Optional[str]


@dataclasses.dataclass(frozen=True)
class ResourceInfo:
    resource_type: str
    identifier: Optional[str]

    def __str__(self) -> str:
        return f"{self.resource_type}/{self.identifier}"

    @classmethod
    def from_ref(cls, reference: str) -> "ResourceInfo":
        """Parses a `<type>/<identifier>` reference.

        Only the first `/` separates the two parts since some identifiers
        (api gateway deployments for example) contain slashes themselves.
        """
        resource_type, sep, identifier = reference.partition("/")
        if not sep or not resource_type or not identifier:
            raise exceptions.InvalidResourceReference(reference)
        return cls(resource_type=resource_type, identifier=identifier)


@dataclasses.dataclass(frozen=True)
class TerraformResourceElement:
    resource_type: str
    resource_id: str
    attributes: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def address(self) -> str:
        return f"{self.resource_type}.{self.resource_id}"

    @property
    def filename(self) -> str:
        return f"{self.resource_type}.{self.resource_id}.tf"


def resource(
    resource_type: str, identifier: str, attributes: Optional[Dict[str, Any]] = None
) -> TerraformResourceElement:
    return TerraformResourceElement(
        resource_type=resource_type,
        resource_id=to_tf_name(identifier),
        attributes=attributes or {},
    )


@dataclasses.dataclass(frozen=True)
class ImportResult:
    # The id passed to `<state-tool> import`, usually the remote identifier
    name: str
    resource: TerraformResourceElement
