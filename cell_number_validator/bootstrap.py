import logging

from .config import Settings
from .logging_config import configure_logging


def initialize(settings: Settings, *, verbose: bool = False) -> None:
    """Configure logging from the application settings."""
    configure_logging(
        level=logging.DEBUG if verbose else settings.log_level,
        fmt=settings.log_format,
        log_file=settings.log_file,
        json_format=settings.log_json,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    # the Twilio SDK logs every request at INFO
    logging.getLogger("twilio.http_client").setLevel(logging.WARNING)
