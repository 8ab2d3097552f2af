from typing import Dict, List, Optional, Type

import boto3

from tfimporter import exceptions
from tfimporter.descriptors.api_gateway import DeploymentAdapter, RestApiAdapter
from tfimporter.descriptors.base import ImportAdapter
from tfimporter.descriptors.iam import RoleAdapter
from tfimporter.descriptors.route53 import HostedZoneAdapter
from tfimporter.descriptors.s3 import BucketAdapter

# NOTE: The order here is the order resources are listed and imported in
DESCRIPTORS: List[Type[ImportAdapter]] = [
    RestApiAdapter,
    DeploymentAdapter,
    HostedZoneAdapter,
    BucketAdapter,
    RoleAdapter,
]

RESOURCE_TYPES: List[str] = [descriptor.resource_type for descriptor in DESCRIPTORS]


def build_registry(
    session: boto3.session.Session, resource_types: Optional[List[str]] = None
) -> Dict[str, ImportAdapter]:
    """Creates one adapter per registered resource type.

    If `resource_types` is set only those types are included, still in
    registration order.
    """
    if resource_types is not None:
        for resource_type in resource_types:
            if resource_type not in RESOURCE_TYPES:
                raise exceptions.UnregisteredResourceType(resource_type)
    registry: Dict[str, ImportAdapter] = {}
    for descriptor in DESCRIPTORS:
        if resource_types is None or descriptor.resource_type in resource_types:
            registry[descriptor.resource_type] = descriptor(session)
    return registry
