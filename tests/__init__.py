import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

from eventq.layout import yload


def load_cfg(cfg):  # pylint: disable=redefined-outer-name
    cfg = Path(cfg)
    if not cfg.is_absolute():
        cfg = Path(__file__).parent / cfg
    if not cfg.exists():  # pragma: no cover
        raise RuntimeError(f"Config file {str(cfg)!r} not found")

    with cfg.open("r", encoding="utf-8") as f:
        cfg = yload(f)

    from logging.config import dictConfig

    cfg["disable_existing_loggers"] = False
    dictConfig(cfg)
    logging.captureWarnings(True)
    logger.debug("Test %s", "starting up")
    return cfg


cfg = load_cfg(os.environ.get("LOG_CFG", "logging.cfg"))
