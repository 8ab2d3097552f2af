import dataclasses
import os
from typing import Dict, List, Optional

from tfimporter.config.tfimporter_env import TfImporterEnvVars, load_tfimporter_env
from tfimporter.config.tfimporter_yaml import (
    TfImporterDotYaml,
    load_tfimporter_dot_yaml,
)

DEFAULT_STATE_FILE = "terraform.tfstate"
DEFAULT_OUTPUT_DIR = "."
DEFAULT_STATE_TOOL = "terraform"
DEFAULT_AWS_REGION = "eu-west-1"


@dataclasses.dataclass
class TfImporterConfig:
    env: TfImporterEnvVars
    # Values passed on the command line, these win over everything else
    overrides: Dict[str, Optional[str]] = dataclasses.field(default_factory=dict)

    @property
    def tfimporter_yaml(self) -> Optional[TfImporterDotYaml]:
        """This is a property so it can be lazily loaded."""
        return load_tfimporter_dot_yaml()

    def _resolve(self, key: str, default: Optional[str], is_path: bool = False):
        override = self.overrides.get(key)
        if override is not None:
            return override
        # Environment variable takes precedence over tfimporter.yaml
        env_value = getattr(self.env, key)
        if env_value is not None:
            return env_value
        tfimporter_yaml = self.tfimporter_yaml
        if tfimporter_yaml is not None:
            yaml_value = getattr(tfimporter_yaml, key)
            if yaml_value is not None:
                if is_path:
                    return tfimporter_yaml.resolve_path(yaml_value)
                return yaml_value
        return default

    @property
    def state_file(self) -> str:
        return self._resolve("state_file", DEFAULT_STATE_FILE, is_path=True)

    @property
    def output_dir(self) -> str:
        return self._resolve("output_dir", DEFAULT_OUTPUT_DIR, is_path=True)

    @property
    def state_tool(self) -> str:
        return self._resolve("state_tool", DEFAULT_STATE_TOOL)

    @property
    def aws_region(self) -> str:
        return self._resolve("aws_region", DEFAULT_AWS_REGION)

    @property
    def aws_profile(self) -> Optional[str]:
        return self._resolve("aws_profile", None)

    @property
    def resource_types(self) -> Optional[List[str]]:
        tfimporter_yaml = self.tfimporter_yaml
        if tfimporter_yaml is None:
            return None
        return tfimporter_yaml.resource_types

    def set_override(self, key: str, value: Optional[str]):
        if not hasattr(self.env, key):
            raise ValueError(f"Unknown config key: {key}")
        if value is not None and key in ("state_file", "output_dir"):
            value = os.path.abspath(value)
        self.overrides[key] = value

    @classmethod
    def load(cls):
        return cls(env=load_tfimporter_env())
