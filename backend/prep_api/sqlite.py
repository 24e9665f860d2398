from django.conf import settings
from django.db.backends.signals import connection_created
from django.dispatch import receiver


@receiver(connection_created)
def set_sqlite_pragma(sender, connection, **kwargs):
    """Switch SQLite to WAL journaling and wait on locked writes instead of failing."""
    if connection.vendor != "sqlite":
        return
    timeout = int(getattr(settings, "SQLITE_BUSY_TIMEOUT_MS", 30000))
    with connection.cursor() as cursor:
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
        cursor.execute(f"PRAGMA busy_timeout={timeout};")
