import asyncio
import dataclasses
import os
from typing import Dict, List, Optional, Set

from rich.console import Console

from tfimporter import exceptions
from tfimporter.commands.tf_commands import TFImportCommand
from tfimporter.descriptors.base import ImportAdapter
from tfimporter.generator import write_resource
from tfimporter.logger import logger
from tfimporter.models.resource import ImportResult, ResourceInfo

ERROR_SUFFIX = ".error"


@dataclasses.dataclass
class CommitOutcome:
    result: ImportResult
    # Where the artifact ended up, None if it was removed after a failure
    path: Optional[str]
    # AdoptionFailure or ArtifactAlreadyExists
    error: Optional[exceptions.TfImporterException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclasses.dataclass
class ImportReport:
    outcomes: List[CommitOutcome] = dataclasses.field(default_factory=list)

    @property
    def committed(self) -> List[CommitOutcome]:
        return [outcome for outcome in self.outcomes if outcome.succeeded]

    @property
    def failed(self) -> List[CommitOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]


def _unique_result(result: ImportResult, seen: Set[str]) -> ImportResult:
    """Suffixes the resource id with `_2`, `_3`... until its address is unused.

    Local names are sanitised so distinct identifiers (`my.bucket` and
    `my_bucket`) can end up with the same address.
    """
    element = result.resource
    resource_id = element.resource_id
    suffix = 2
    while f"{element.resource_type}.{resource_id}" in seen:
        resource_id = f"{element.resource_id}_{suffix}"
        suffix += 1
    if resource_id != element.resource_id:
        logger.warning(
            "`%s` is already used in this batch, importing %s as `%s`",
            element.address,
            result.name,
            resource_id,
        )
        element = dataclasses.replace(element, resource_id=resource_id)
        result = dataclasses.replace(result, resource=element)
    seen.add(element.address)
    return result


async def resolve_imports(
    queue: List[ResourceInfo], registry: Dict[str, ImportAdapter]
) -> List[ImportResult]:
    """Reads every queued resource from AWS, one at a time.

    Any failure aborts the whole batch before anything is written. Every
    returned result has a distinct address.
    """
    loop = asyncio.get_event_loop()
    results: List[ImportResult] = []
    seen: Set[str] = set()
    for resource_info in queue:
        adapter = registry.get(resource_info.resource_type)
        if adapter is None:
            raise exceptions.UnregisteredResourceType(resource_info.resource_type)
        if resource_info.identifier is None:
            raise exceptions.MissingIdentifier(resource_info.resource_type)
        try:
            imported = await loop.run_in_executor(
                None, adapter.do_import, resource_info.identifier
            )
        except exceptions.TfImporterException as e:
            raise exceptions.ImportResolveFailure(str(resource_info), e)
        logger.debug("Resolved %s into %d resource(s)", resource_info, len(imported))
        results.extend(_unique_result(result, seen) for result in imported)
    return results


async def commit_import_result(
    result: ImportResult,
    *,
    output_dir: str,
    state_tool: str,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> CommitOutcome:
    """Writes one artifact and registers it in state.

    If the import command fails the written file is removed, or renamed with
    an `.error` suffix when verbose is set. A file that already exists under
    the artifact's name is never touched and the commit is reported as failed.
    """
    if console is None:
        console = Console()
    address = result.resource.address
    try:
        path = write_resource(result.resource, output_dir)
    except FileExistsError as e:
        error = exceptions.ArtifactAlreadyExists(e.filename)
        logger.error("Failed to import %s (%s): %s", address, result.name, error)
        return CommitOutcome(result=result, path=None, error=error)

    command = TFImportCommand(
        state_tool=state_tool,
        working_dir=output_dir,
        resource=address,
        resource_id=result.name,
    )
    try:
        await command.run()
    except exceptions.AdoptionFailure as e:
        if verbose:
            error_path = f"{path}{ERROR_SUFFIX}"
            os.replace(path, error_path)
            if e.output:
                logger.error("Output of the import for %s:\n%s", address, e.output)
            logger.error(
                "Failed to import %s (%s), kept %s: %s",
                address,
                result.name,
                error_path,
                e,
            )
            return CommitOutcome(result=result, path=error_path, error=e)
        os.remove(path)
        logger.error(
            "Failed to import %s (%s), removed %s: %s", address, result.name, path, e
        )
        return CommitOutcome(result=result, path=None, error=e)

    console.print(f"[green]✓[/green] Imported [bold]{address}[/bold] into {path}")
    return CommitOutcome(result=result, path=path)


async def import_all(
    queue: List[ResourceInfo],
    registry: Dict[str, ImportAdapter],
    *,
    output_dir: str,
    state_tool: str,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> ImportReport:
    if console is None:
        console = Console()
    results = await resolve_imports(queue, registry)

    report = ImportReport()
    # NOTE: commits run in resolve order, some adapters emit a parent before its children
    for result in results:
        outcome = await commit_import_result(
            result,
            output_dir=output_dir,
            state_tool=state_tool,
            verbose=verbose,
            console=console,
        )
        report.outcomes.append(outcome)
    return report


async def import_one(
    resource_ref: str,
    registry: Dict[str, ImportAdapter],
    *,
    output_dir: str,
    state_tool: str,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> ImportReport:
    """Imports a single `<type>/<identifier>` resource."""
    resource_info = ResourceInfo.from_ref(resource_ref)
    return await import_all(
        [resource_info],
        registry,
        output_dir=output_dir,
        state_tool=state_tool,
        verbose=verbose,
        console=console,
    )
