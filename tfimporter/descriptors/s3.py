from typing import Any, Dict, List

from botocore.exceptions import ClientError

from tfimporter.descriptors.base import ImportAdapter, error_code
from tfimporter.models.resource import ImportResult, ResourceDescriptor, resource
from tfimporter.models.state import TrackedInstance


class BucketAdapter(ImportAdapter[Dict[str, Any]]):
    resource_type = "aws_s3_bucket"
    service_name = "s3"

    def _fetch(self) -> List[Dict[str, Any]]:
        response = self.client.list_buckets()
        return response.get("Buckets") or []

    def describe(self, item: Dict[str, Any]) -> ResourceDescriptor:
        return ResourceDescriptor(identifier=item.get("Name"))

    def matches(self, item: Dict[str, Any], instance: TrackedInstance) -> bool:
        name = item.get("Name")
        return name is not None and name == instance.attributes.get("id")

    def _do_import(self, identifier: str) -> List[ImportResult]:
        # Fails with a 404 if the bucket was deleted since it was listed
        self.client.head_bucket(Bucket=identifier)
        try:
            tag_set = self.client.get_bucket_tagging(Bucket=identifier)["TagSet"]
        except ClientError as e:
            if error_code(e) != "NoSuchTagSet":
                raise
            tag_set = []
        tags = {tag["Key"]: tag["Value"] for tag in tag_set}
        return [
            ImportResult(
                name=identifier,
                resource=resource(
                    self.resource_type,
                    identifier,
                    {"bucket": identifier, "tags": tags or None},
                ),
            )
        ]
