import logging, json, sys, time, os


def get_logger(name="gitcosign", level=None, to_file=None):
    """Unified structured logger for all gitcosign components.

    Writes JSON lines to stderr; stdout belongs to command output.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = os.getenv("GITCOSIGN_LOG_LEVEL", "INFO").upper()
    bad_level = isinstance(level, str) and not isinstance(logging.getLevelName(level), int)
    logger.setLevel(logging.INFO if bad_level else level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # Use UTC timestamps
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        to_file = to_file or os.getenv("GITCOSIGN_LOG_FILE")
        if to_file:
            # Ensure the directory exists before writing
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    if bad_level:
        logger.warning(f"Unknown log level {level!r}, using INFO")
    return logger
