import pytest

from tfimporter.config import config


@pytest.fixture(autouse=True)
def reset_config_overrides():
    # The CLI stores its options on the global config
    yield
    config.overrides.clear()
