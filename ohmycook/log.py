import logging

from rich.logging import RichHandler

from ohmycook.config import Config, Env


def configure(config: Config | None = None) -> None:
    config = Config() if config is None else config
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=config.env is not Env.prod)],
        force=True,
    )
