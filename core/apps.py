"""
App configuration for the core app.
"""

import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that never serve traffic
_SKIP_SETUP_COMMANDS = {"migrate", "makemigrations", "collectstatic", "check", "createsuperuser"}


class CoreConfig(AppConfig):
    """Sets up tracing and event handlers once the app registry is ready."""

    name = "core"
    verbose_name = "Core"

    def ready(self):
        """Called when Django starts."""
        if len(sys.argv) > 1 and sys.argv[1] in _SKIP_SETUP_COMMANDS:
            return

        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_tracing

        setup_tracing()
        register_event_handlers()
        logger.info("Observability setup complete")
