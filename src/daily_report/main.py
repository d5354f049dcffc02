from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .common.logging_utils import setup_logging
from .config import get_settings_module
from .container import Container, build_container, build_memory_container
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_container(settings_module: Optional[str] = None) -> Container:
    """Composition root: read settings, set up logging, wire the services."""
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_file=getattr(settings, "LOG_FILE", None))

    storage = getattr(settings, "STORAGE", "mysql")
    hash_method = getattr(settings, "PASSWORD_HASH_METHOD", "scrypt")

    if storage == "memory":
        logger.info("settings=%s storage=memory", settings_module)
        return build_memory_container(password_hash_method=hash_method)

    if storage != "mysql":
        raise ValueError(f"Unknown STORAGE setting: {storage!r}")

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    return build_container(db_config=db_config, password_hash_method=hash_method)
