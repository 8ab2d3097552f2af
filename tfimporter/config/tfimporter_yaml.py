import os
from dataclasses import dataclass
from typing import List, Optional

import yaml

from tfimporter import exceptions

CONFIG_FILE_NAME = "tfimporter.yaml"


@dataclass(frozen=True)
class TfImporterDotYaml:
    config_path: str
    state_file: Optional[str] = None
    output_dir: Optional[str] = None
    state_tool: Optional[str] = None
    aws_region: Optional[str] = None
    aws_profile: Optional[str] = None
    resource_types: Optional[List[str]] = None

    @property
    def project_directory_abs_path(self):
        return os.path.dirname(os.path.abspath(self.config_path))

    def resolve_path(self, path: str) -> str:
        """Paths in the yaml file are relative to the file itself."""
        if os.path.isabs(path):
            return path
        return os.path.join(self.project_directory_abs_path, path)

    @classmethod
    def load_from_cwd(cls, start_path="."):
        file_path = _find_tfimporter_yaml(start_path)
        if file_path is None:
            raise FileNotFoundError(f"Could not find '{CONFIG_FILE_NAME}' file.")
        return cls.load_from_file(file_path)

    @classmethod
    def load_from_file(cls, file_path: str):
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"The file '{file_path}' does not exist.")

        with open(file_path, "r") as file:
            try:
                data = yaml.safe_load(file) or {}
            except yaml.YAMLError as e:
                raise exceptions.InvalidConfigFile(file_path, str(e))

        if not isinstance(data, dict):
            raise exceptions.InvalidConfigFile(
                file_path, "the top level must be a mapping"
            )

        resource_types = data.get("resource_types")
        if resource_types is not None and (
            not isinstance(resource_types, list)
            or not all(isinstance(t, str) for t in resource_types)
        ):
            raise exceptions.InvalidConfigFile(
                file_path, "`resource_types` must be a list of strings"
            )

        return cls(
            config_path=file_path,
            state_file=data.get("state_file"),
            output_dir=data.get("output_dir"),
            state_tool=data.get("state_tool"),
            aws_region=data.get("aws_region"),
            aws_profile=data.get("aws_profile"),
            resource_types=resource_types,
        )


def _find_tfimporter_yaml(start_path="."):
    current_path = os.path.abspath(start_path)

    while True:
        file_path = os.path.join(current_path, CONFIG_FILE_NAME)
        if os.path.isfile(file_path):
            return file_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            break

        current_path = parent_path

    return None


def load_tfimporter_dot_yaml() -> Optional[TfImporterDotYaml]:
    try:
        return TfImporterDotYaml.load_from_cwd()
    except FileNotFoundError:
        return None
