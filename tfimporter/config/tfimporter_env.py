import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class TfImporterEnvVars:
    state_file: Optional[str] = None
    output_dir: Optional[str] = None
    state_tool: Optional[str] = None
    aws_region: Optional[str] = None
    aws_profile: Optional[str] = None

    @classmethod
    def load_from_env(cls):
        """
        Loads the object's properties from environment variables.

        Returns:
            An instance of TfImporterEnvVars with properties populated from environment variables.
        """
        return cls(
            state_file=os.getenv("TFIMPORTER_STATE_FILE", None),
            output_dir=os.getenv("TFIMPORTER_OUTPUT_DIR", None),
            state_tool=os.getenv("TFIMPORTER_STATE_TOOL", None),
            aws_region=os.getenv("TFIMPORTER_AWS_REGION", None),
            aws_profile=os.getenv("TFIMPORTER_AWS_PROFILE", None),
        )


tfimporter_env_vars = None


# NOTE: We use a global variable so its only loaded once
def load_tfimporter_env():
    global tfimporter_env_vars
    if tfimporter_env_vars is None:
        tfimporter_env_vars = TfImporterEnvVars.load_from_env()
    return tfimporter_env_vars
