from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow():
    # Stored naive so values read back from any backend compare cleanly.
    return datetime.now(timezone.utc).replace(tzinfo=None)
