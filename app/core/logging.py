import logging
import sys
from typing import Optional

from app.core.config import settings

_HANDLER_NAME = "personalization-console"

def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure console logging for the engine.
    
    Idempotent: calling it again only updates the level. The thread name
    is included because debounced writes run on a timer thread.
    
    Args:
        level: Log level override. Defaults to settings.log_level.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())
    
    if any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        return
    
    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        
    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(name)s] [%(threadName)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    
    # Silence noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
