import asyncio
import dataclasses
from typing import Any, Dict, List, Optional

from tfimporter import exceptions
from tfimporter.descriptors.base import ImportAdapter
from tfimporter.logger import logger
from tfimporter.models.resource import ResourceInfo
from tfimporter.models.state import TerraformState


@dataclasses.dataclass
class ReconcileReport:
    untracked: List[ResourceInfo] = dataclasses.field(default_factory=list)
    tracked_count: int = 0
    # Untracked items that have no identifier and so can never be imported
    skipped_count: int = 0
    failed_types: List[str] = dataclasses.field(default_factory=list)


async def _fetch_all(
    registry: Dict[str, ImportAdapter]
) -> List[Optional[List[Any]]]:
    """Lists every registered type concurrently.

    Results come back in registry order. A type that failed to list is
    returned as None.
    """
    loop = asyncio.get_event_loop()
    tasks = [loop.run_in_executor(None, adapter.fetch) for adapter in registry.values()]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    fetched: List[Optional[List[Any]]] = []
    for resource_type, result in zip(registry.keys(), results):
        if isinstance(result, exceptions.ResourceFetchFailure):
            logger.error("%s Skipping `%s`.", result, resource_type)
            fetched.append(None)
        elif isinstance(result, BaseException):
            raise result
        else:
            fetched.append(result)
    return fetched


def _classify(
    resource_type: str,
    adapter: ImportAdapter,
    items: List[Any],
    state: TerraformState,
    report: ReconcileReport,
):
    tracked_instances = state.instances_of(resource_type)
    for item in items:
        description = adapter.describe(item)
        if any(adapter.matches(item, instance) for instance in tracked_instances):
            logger.debug(
                "Found existing resource: %s/%s", resource_type, description.identifier
            )
            report.tracked_count += 1
            continue
        if description.identifier is None:
            logger.warning(
                "Found a new `%s` resource without an identifier, it cannot be imported.",
                resource_type,
            )
            report.skipped_count += 1
            continue
        logger.info("Found new resource: %s/%s", resource_type, description.identifier)
        report.untracked.append(
            ResourceInfo(resource_type=resource_type, identifier=description.identifier)
        )


async def build_reconcile_report(
    registry: Dict[str, ImportAdapter], state: TerraformState
) -> ReconcileReport:
    report = ReconcileReport()
    fetched = await _fetch_all(registry)
    for (resource_type, adapter), items in zip(registry.items(), fetched):
        if items is None:
            report.failed_types.append(resource_type)
            continue
        _classify(resource_type, adapter, items, state, report)
    return report


async def reconcile(
    registry: Dict[str, ImportAdapter], state: TerraformState
) -> List[ResourceInfo]:
    """Returns every remote resource that is not tracked in the state.

    Ordered by registry order then by the order each type was listed in.
    """
    report = await build_reconcile_report(registry, state)
    return report.untracked
