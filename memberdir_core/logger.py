import logging, json, sys, time, os

_LEVEL_ENV = "MEMBERDIR_LOG_LEVEL"
_FILE_ENV = "MEMBERDIR_LOG_FILE"


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ts, level, name, msg (+ exc when present)."""

    converter = time.gmtime

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False)


def get_logger(name="memberdir", level=None, to_file=None):
    """Structured logger shared by store, directory, storage and client.

    `level` and `to_file` fall back to MEMBERDIR_LOG_LEVEL / MEMBERDIR_LOG_FILE.
    Handlers are attached once per logger name.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = os.getenv(_LEVEL_ENV, "INFO").upper()
    logger.setLevel(level)

    if not logger.handlers:
        formatter = JsonLineFormatter()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        to_file = to_file or os.getenv(_FILE_ENV)
        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
