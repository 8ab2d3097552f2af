import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("tfimporter")
logger.setLevel(logging.WARNING)

# Logs go to stderr so they never mix with the resources `list` prints
_handler = RichHandler(
    console=Console(stderr=True), show_path=False, markup=False, rich_tracebacks=True
)
_handler.setFormatter(logging.Formatter("%(message)s"))
logger.addHandler(_handler)
logger.propagate = False
