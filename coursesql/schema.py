"""
Schema Descriptor

Text description of the course database handed to the model with every
question. The default ships as package data and can be replaced with a
file of the same shape when the database schema migrates.
"""

from importlib import resources
from pathlib import Path
from typing import Optional

from loguru import logger

from .errors import ConfigurationError

DEFAULT_SCHEMA_RESOURCE = "schema.sql"


def load_schema_descriptor(path: Optional[str] = None) -> str:
    """
    Load the schema descriptor text.

    Args:
        path: Optional file overriding the bundled descriptor

    Returns:
        Descriptor text, verbatim
    """
    if path:
        logger.debug(f"Loading schema descriptor from {path}")
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not read schema descriptor {path}") from e

    return resources.files("coursesql").joinpath(DEFAULT_SCHEMA_RESOURCE).read_text(encoding="utf-8")
