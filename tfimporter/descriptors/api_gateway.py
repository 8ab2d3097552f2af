from typing import Any, Dict, List

from tfimporter import exceptions
from tfimporter.descriptors.base import ImportAdapter
from tfimporter.models.resource import ImportResult, ResourceDescriptor, resource
from tfimporter.models.state import TrackedInstance


class RestApiAdapter(ImportAdapter[Dict[str, Any]]):
    resource_type = "aws_api_gateway_rest_api"
    service_name = "apigateway"

    def _fetch(self) -> List[Dict[str, Any]]:
        return self._paginate("get_rest_apis", "items")

    def describe(self, item: Dict[str, Any]) -> ResourceDescriptor:
        return ResourceDescriptor(identifier=item.get("id"))

    def matches(self, item: Dict[str, Any], instance: TrackedInstance) -> bool:
        name = item.get("name")
        return name is not None and name == instance.attributes.get("name")

    def _do_import(self, identifier: str) -> List[ImportResult]:
        api = self.client.get_rest_api(restApiId=identifier)
        return [
            ImportResult(
                name=identifier,
                resource=resource(
                    self.resource_type,
                    # Rest api names are not unique
                    f"{api['name']}_{identifier}",
                    {
                        "name": api["name"],
                        "description": api.get("description"),
                    },
                ),
            )
        ]


class DeploymentAdapter(ImportAdapter[Dict[str, Any]]):
    """Deployments are listed per rest api.

    Their identifier is `<rest api id>/<deployment id>`, the same format
    terraform expects when importing them.
    """

    resource_type = "aws_api_gateway_deployment"
    service_name = "apigateway"

    def _fetch(self) -> List[Dict[str, Any]]:
        deployments = []
        for api in self._paginate("get_rest_apis", "items"):
            for deployment in self._paginate(
                "get_deployments", "items", restApiId=api["id"]
            ):
                deployments.append({**deployment, "restApiId": api["id"]})
        return deployments

    def describe(self, item: Dict[str, Any]) -> ResourceDescriptor:
        rest_api_id = item.get("restApiId")
        deployment_id = item.get("id")
        if rest_api_id is None or deployment_id is None:
            return ResourceDescriptor(identifier=None)
        return ResourceDescriptor(identifier=f"{rest_api_id}/{deployment_id}")

    def matches(self, item: Dict[str, Any], instance: TrackedInstance) -> bool:
        deployment_id = item.get("id")
        return deployment_id is not None and deployment_id == instance.attributes.get(
            "id"
        )

    def _do_import(self, identifier: str) -> List[ImportResult]:
        rest_api_id, _, deployment_id = identifier.partition("/")
        if not rest_api_id or not deployment_id:
            raise exceptions.ResourceImportFailure(
                self.resource_type,
                identifier,
                "expected an identifier in the format `<rest api id>/<deployment id>`",
            )
        deployment = self.client.get_deployment(
            restApiId=rest_api_id, deploymentId=deployment_id
        )
        return [
            ImportResult(
                name=identifier,
                resource=resource(
                    self.resource_type,
                    f"{rest_api_id}_{deployment_id}",
                    {
                        "rest_api_id": rest_api_id,
                        "description": deployment.get("description"),
                    },
                ),
            )
        ]
