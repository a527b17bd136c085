# app/db/base.py
# Alembic model registry — imports Base + every model so Alembic detects all tables.
# Do NOT import this file from model files (use app.db.base_class instead).
# This file is only imported by:
#   - alembic/env.py        (schema detection)
#   - app/main.py           (mapper configuration before the first request)

from app.db.base_class import Base  # noqa: F401

# ── Import all models here so Alembic can detect them ────────────────────────
# Order matters: parent tables before child tables (foreign key dependencies)

from app.models.student import Student, Profile                          # noqa: F401, E402
from app.models.content import Thread, Comment                           # noqa: F401, E402
from app.models.notification import Notification                         # noqa: F401, E402
from app.models.follower import Follower                                 # noqa: F401, E402
