from typing import Any, Dict, List, Optional

from tfimporter.descriptors.base import ImportAdapter
from tfimporter.models.resource import ImportResult, ResourceDescriptor, resource
from tfimporter.models.state import TrackedInstance

_HOSTED_ZONE_PREFIX = "/hostedzone/"


def _zone_name(name: Optional[str]) -> Optional[str]:
    # Route53 returns fully qualified names, terraform stores them without the dot
    if name is None:
        return None
    return name.rstrip(".")


class HostedZoneAdapter(ImportAdapter[Dict[str, Any]]):
    resource_type = "aws_route53_zone"
    service_name = "route53"

    def _fetch(self) -> List[Dict[str, Any]]:
        return self._paginate("list_hosted_zones", "HostedZones")

    def describe(self, item: Dict[str, Any]) -> ResourceDescriptor:
        zone_id = item.get("Id")
        if zone_id is None:
            return ResourceDescriptor(identifier=None)
        if zone_id.startswith(_HOSTED_ZONE_PREFIX):
            zone_id = zone_id[len(_HOSTED_ZONE_PREFIX) :]
        return ResourceDescriptor(identifier=zone_id)

    def matches(self, item: Dict[str, Any], instance: TrackedInstance) -> bool:
        name = _zone_name(item.get("Name"))
        tracked_name = instance.attributes.get("name")
        if name is None or not isinstance(tracked_name, str):
            return False
        return name == _zone_name(tracked_name)

    def _do_import(self, identifier: str) -> List[ImportResult]:
        zone = self.client.get_hosted_zone(Id=identifier)["HostedZone"]
        name = _zone_name(zone["Name"])
        return [
            ImportResult(
                name=identifier,
                resource=resource(
                    self.resource_type,
                    name,
                    {
                        "name": name,
                        "comment": zone.get("Config", {}).get("Comment"),
                    },
                ),
            )
        ]
