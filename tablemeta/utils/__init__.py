"""Utils package for tablemeta."""

from tablemeta.utils.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
