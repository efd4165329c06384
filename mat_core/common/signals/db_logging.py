# mat_core/common/signals/db_logging.py
import logging

from django.db.backends.signals import connection_created
from django.dispatch import receiver

DB_LOGGER = "django.db.backends"


@receiver(connection_created, dispatch_uid="mat_core.force_query_logging")
def force_query_logging(sender, connection, **kwargs):
    """
    Django only logs SQL through a debug cursor, which it otherwise enables
    only when settings.DEBUG is True.
    """
    if logging.getLogger(DB_LOGGER).isEnabledFor(logging.DEBUG):
        connection.force_debug_cursor = True
