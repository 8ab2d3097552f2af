from typing import Optional


class TfImporterException(Exception):
    pass


class InvalidConfigFile(TfImporterException):
    def __init__(self, config_path: str, reason: str) -> None:
        super().__init__(f"Invalid config file `{config_path}`: {reason}")


class StateFileNotFound(TfImporterException):
    def __init__(self, state_path: str) -> None:
        super().__init__(f"State file `{state_path}` does not exist.")
        self.state_path = state_path


class InvalidStateFile(TfImporterException):
    def __init__(self, state_path: str, reason: str) -> None:
        super().__init__(f"State file `{state_path}` could not be parsed: {reason}")
        self.state_path = state_path


class UnregisteredResourceType(TfImporterException):
    def __init__(self, resource_type: str) -> None:
        super().__init__(
            f"Resource type `{resource_type}` is not registered. Run `tfimporter types` to see the supported types."
        )
        self.resource_type = resource_type


class MissingIdentifier(TfImporterException):
    def __init__(self, resource_type: str) -> None:
        super().__init__(
            f"A `{resource_type}` resource was queued for import without an identifier."
        )
        self.resource_type = resource_type


class InvalidResourceReference(TfImporterException):
    def __init__(self, reference: str) -> None:
        super().__init__(
            f"Invalid resource reference `{reference}`. It must be in the format `<type>/<identifier>`."
        )
        self.reference = reference


class ResourceFetchFailure(TfImporterException):
    def __init__(self, resource_type: str, reason: str) -> None:
        super().__init__(f"Failed to list `{resource_type}` resources: {reason}")
        self.resource_type = resource_type


class RemoteResourceNotFound(TfImporterException):
    def __init__(self, resource_type: str, identifier: str) -> None:
        super().__init__(
            f"`{resource_type}/{identifier}` was not found. It may have been deleted since it was listed."
        )
        self.resource_type = resource_type
        self.identifier = identifier


class ResourceImportFailure(TfImporterException):
    def __init__(self, resource_type: str, identifier: str, reason: str) -> None:
        super().__init__(
            f"Failed to read `{resource_type}/{identifier}` for import: {reason}"
        )
        self.resource_type = resource_type
        self.identifier = identifier


class ImportResolveFailure(TfImporterException):
    """Raised when a queued resource could not be resolved into artifacts.

    This aborts the whole batch: nothing has been written when it is raised.
    """

    def __init__(self, resource_ref: str, cause: Exception) -> None:
        super().__init__(f"Failed to import `{resource_ref}`: {cause}")
        self.resource_ref = resource_ref
        self.cause = cause


class AdoptionFailure(TfImporterException):
    """A single artifact could not be registered in state.

    These are returned inside commit outcomes and are never raised out of the
    commit phase.
    """

    def __init__(
        self, address: str, return_code: Optional[int], output: str = ""
    ) -> None:
        if return_code is None:
            message = f"Failed to run the import command for `{address}`"
        else:
            message = f"Import of `{address}` exited with status {return_code}"
        super().__init__(message)
        self.address = address
        self.return_code = return_code
        self.output = output


class ArtifactAlreadyExists(TfImporterException):
    """The artifact file is already present in the output directory.

    Like adoption failures this is recoverable: the existing file is left
    untouched and the commit phase moves on to the next artifact.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Refusing to overwrite existing file `{path}`")
        self.path = path
