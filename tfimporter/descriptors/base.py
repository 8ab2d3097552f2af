from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, TypeVar

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tfimporter import exceptions
from tfimporter.models.resource import ImportResult, ResourceDescriptor
from tfimporter.models.state import TrackedInstance

T = TypeVar("T", bound=Dict[str, Any])

_NOT_FOUND_ERROR_CODES = {
    "NoSuchEntity",
    "NoSuchBucket",
    "NoSuchHostedZone",
    "NotFound",
    "NotFoundException",
    "404",
}


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class ImportAdapter(ABC, Generic[T]):
    """Knows how to list, match and import one type of AWS resource.

    Subclasses implement `_fetch` and `_do_import` against boto3; the public
    `fetch` and `do_import` translate AWS errors into tfimporter exceptions.
    `describe` and `matches` must be pure and never raise.
    """

    resource_type: str
    service_name: str

    def __init__(self, session: boto3.session.Session) -> None:
        self.client = session.client(self.service_name)

    def fetch(self) -> List[T]:
        try:
            return self._fetch()
        except (ClientError, BotoCoreError) as e:
            raise exceptions.ResourceFetchFailure(self.resource_type, str(e))

    def do_import(self, identifier: str) -> List[ImportResult]:
        try:
            return self._do_import(identifier)
        except ClientError as e:
            if error_code(e) in _NOT_FOUND_ERROR_CODES:
                raise exceptions.RemoteResourceNotFound(self.resource_type, identifier)
            raise exceptions.ResourceImportFailure(
                self.resource_type, identifier, str(e)
            )
        except BotoCoreError as e:
            raise exceptions.ResourceImportFailure(
                self.resource_type, identifier, str(e)
            )

    @abstractmethod
    def _fetch(self) -> List[T]:
        raise NotImplementedError

    @abstractmethod
    def describe(self, item: T) -> ResourceDescriptor:
        raise NotImplementedError

    @abstractmethod
    def matches(self, item: T, instance: TrackedInstance) -> bool:
        raise NotImplementedError

    @abstractmethod
    def _do_import(self, identifier: str) -> List[ImportResult]:
        raise NotImplementedError

    def _paginate(self, operation: str, result_key: str, **kwargs) -> List[T]:
        items: List[T] = []
        paginator = self.client.get_paginator(operation)
        for page in paginator.paginate(**kwargs):
            items.extend(page.get(result_key) or [])
        return items
