import json
import logging
from datetime import datetime, timezone
from typing import Any


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    resource: str | None,
    trace_id: str | None,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "resource": resource,
        "trace_id": trace_id,
        "outcome": outcome,
    }
    payload.update(context)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))
