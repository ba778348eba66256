"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration at all; in a deployment you
override them via the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Bookkeeping API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is installed.
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # JSON file mirroring the transaction collection.  It is read once at
    # startup and fully rewritten after every successful mutation.
    storage_path: str = os.getenv("TRANSACTIONS_FILE", "transactions.json")

    # Address used by ``run.py`` when serving the application.
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "3000"))

    def resolved_storage_path(self) -> Path:
        """Return ``storage_path`` as an absolute path.

        Relative paths are resolved against the current working
        directory, which is where the service was started from.
        """
        return Path(self.storage_path).expanduser().resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
