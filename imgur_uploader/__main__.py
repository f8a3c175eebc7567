import logging
import os
import sys

import coloredlogs

from .upload import upload


def setup_logging(logger):
    if os.getenv("DEBUG") == "1":
        level = logging.DEBUG
    else:
        level = logging.INFO

    coloredlogs.install(
        level=level,
        logger=logger,
        isatty=True,
        fmt="%(asctime)s %(levelname)-8s %(message)s",
        stream=sys.stdout,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # connection pool messages
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main():
    logger = logging.getLogger(__package__)
    setup_logging(logger)

    upload(prog_name="imgur-uploader")


if __name__ == "__main__":
    main()
