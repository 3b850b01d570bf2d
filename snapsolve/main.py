"""Entry point - wires Config → backend → Solver → TelegramClient."""
import logging

from rich.logging import RichHandler

from snapsolve.backends.factory import make_backend
from snapsolve.config import Config
from snapsolve.constants import MSG_BOT_STARTING
from snapsolve.solver import Solver
from snapsolve.telegram.client import TelegramClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))
    # httpx logs every request line at INFO, including the request URL.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING)

    solver = Solver(config, make_backend(config))
    client = TelegramClient(config)
    client.run(solver.solve)


if __name__ == "__main__":
    main()
