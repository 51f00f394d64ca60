import json
import logging
from datetime import datetime, timezone
from typing import Any

_DEFAULT_LEVEL = logging.INFO


def configure_logging(level: str | int = _DEFAULT_LEVEL) -> None:
    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("leadgrid"):
            logging.getLogger(name).setLevel(_DEFAULT_LEVEL)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(_DEFAULT_LEVEL)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    record_id: Any,
    outcome: str,
    **extra: Any,
) -> None:
    level = logging.WARNING if outcome in {"warning", "failure"} else logging.INFO
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "record_id": record_id,
                "outcome": outcome,
                **extra,
            },
            ensure_ascii=False,
            default=str,
        ),
    )
