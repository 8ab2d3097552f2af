import json
import urllib.parse
from typing import Any, Dict, List, Union

from tfimporter.descriptors.base import ImportAdapter
from tfimporter.models.resource import ImportResult, ResourceDescriptor, resource
from tfimporter.models.state import TrackedInstance


def _policy_document(document: Union[str, Dict[str, Any]]) -> str:
    # boto3 usually decodes the document for us, older endpoints return it url encoded
    if isinstance(document, str):
        return urllib.parse.unquote(document)
    return json.dumps(document)


class RoleAdapter(ImportAdapter[Dict[str, Any]]):
    """Imports a role along with every managed policy attached to it."""

    resource_type = "aws_iam_role"
    service_name = "iam"

    def _fetch(self) -> List[Dict[str, Any]]:
        return self._paginate("list_roles", "Roles")

    def describe(self, item: Dict[str, Any]) -> ResourceDescriptor:
        return ResourceDescriptor(identifier=item.get("RoleName"))

    def matches(self, item: Dict[str, Any], instance: TrackedInstance) -> bool:
        role_name = item.get("RoleName")
        return role_name is not None and role_name == instance.attributes.get("id")

    def _do_import(self, identifier: str) -> List[ImportResult]:
        role = self.client.get_role(RoleName=identifier)["Role"]
        role_name = role["RoleName"]
        results = [
            ImportResult(
                name=role_name,
                resource=resource(
                    self.resource_type,
                    role_name,
                    {
                        "name": role_name,
                        "path": role.get("Path"),
                        "description": role.get("Description"),
                        "max_session_duration": role.get("MaxSessionDuration"),
                        "assume_role_policy": _policy_document(
                            role["AssumeRolePolicyDocument"]
                        ),
                    },
                ),
            )
        ]

        attached_policies = self._paginate(
            "list_attached_role_policies", "AttachedPolicies", RoleName=role_name
        )
        for policy in attached_policies:
            results.append(
                ImportResult(
                    name=f"{role_name}/{policy['PolicyArn']}",
                    resource=resource(
                        "aws_iam_role_policy_attachment",
                        f"{role_name}-{policy['PolicyName']}",
                        {"role": role_name, "policy_arn": policy["PolicyArn"]},
                    ),
                )
            )
        return results
