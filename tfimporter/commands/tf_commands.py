import asyncio
import dataclasses
import os
from typing import List

from tfimporter import exceptions
from tfimporter.logger import logger


@dataclasses.dataclass
class TFImportCommand:
    # The terraform / tofu binary to invoke
    state_tool: str
    # The directory holding the configuration the resource is imported into
    working_dir: str
    # The resource address, i.e. aws_iam_role.admin
    resource: str
    # The remote id terraform uses to look the resource up
    resource_id: str

    def tf_import_command(self) -> List[str]:
        return [
            self.state_tool,
            "import",
            "-input=false",
            self.resource,
            self.resource_id,
        ]

    async def run(self) -> str:
        """Runs the import and returns its combined stdout / stderr.

        Raises AdoptionFailure if the command exits non-zero or cannot be started.
        """
        command = self.tf_import_command()
        logger.info(f"Running import command: {command}")
        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                cwd=self.working_dir,
                # Stops the child process from receiving signals sent to the parent
                preexec_fn=os.setpgrp,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            raise exceptions.AdoptionFailure(self.resource, None, str(e))

        stdout, _ = await proc.communicate()
        output = stdout.decode(errors="replace") if stdout else ""
        if proc.returncode != 0:
            raise exceptions.AdoptionFailure(self.resource, proc.returncode, output)
        logger.debug(output)
        return output
