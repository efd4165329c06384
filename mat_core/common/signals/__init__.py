from . import db_logging  # noqa: F401
