"""Settings shared by every environment."""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow_db"),
}

# Provident fund ceiling applied to both employee and employer contributions
PF_CAP = os.getenv("PF_CAP", "1800")

DEFAULT_GRACE_MINUTES = int(os.getenv("DEFAULT_GRACE_MINUTES", "15"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
