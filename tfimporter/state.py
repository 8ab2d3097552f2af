import json

import pydantic

from tfimporter import exceptions
from tfimporter.logger import logger
from tfimporter.models.state import TerraformState


def load_state(state_path: str) -> TerraformState:
    """Reads the tracked resources from a terraform state file.

    The snapshot is read once per run and never written back.
    """
    try:
        with open(state_path, "r") as f:
            raw_state = json.load(f)
    except FileNotFoundError:
        raise exceptions.StateFileNotFound(state_path)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise exceptions.InvalidStateFile(state_path, str(e))

    if not isinstance(raw_state, dict):
        raise exceptions.InvalidStateFile(state_path, "expected a JSON object")

    try:
        state = TerraformState.model_validate(raw_state)
    except pydantic.ValidationError as e:
        raise exceptions.InvalidStateFile(state_path, str(e))

    logger.debug(
        "Loaded %d tracked resources from %s", len(state.resources), state_path
    )
    return state
