# Core module exports
from formcheck.core.config import settings, get_settings
from formcheck.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    generate_correlation_id,
    validation_logger,
    cli_logger,
)
