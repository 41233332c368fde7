import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, str(level or "INFO").upper(), logging.INFO),
    )
