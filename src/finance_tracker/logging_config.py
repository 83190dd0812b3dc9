import logging
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"

def configure_logging(verbose: bool = False) -> None:
    """
    Route log records through rich.

    WARNING by default, DEBUG when verbose. Safe to call more than once.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
