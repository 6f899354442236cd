"""
Loading and saving of the operations file.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from marshmallow import ValidationError

from potsweep.automation import Operation
from potsweep.errors import ConfigError
from potsweep.validation_schemas import dump_operation, load_operations

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "potsweep" / "config.json"


def config_path(path: Optional[str] = None) -> Path:
    """The operations file: ``path``, else $POTSWEEP_CONFIG, else the default location."""
    return Path(path or os.getenv("POTSWEEP_CONFIG") or DEFAULT_CONFIG_PATH).expanduser()


def load_operations_file(path: Optional[str] = None) -> List[Operation]:
    """
    Read and validate the operations file.

    A missing file is created empty, so a first run has nothing to do.

    Raises:
        ConfigError: The file is not valid JSON or fails validation
    """
    file_path = config_path(path)
    if not file_path.exists():
        logger.warning(f"No operations file at {file_path}, creating an empty one")
        save_operations_file([], str(file_path))
        return []

    try:
        with open(file_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{file_path} is not valid JSON: {e}") from e

    try:
        operations = load_operations(data)
    except ValidationError as e:
        raise ConfigError(f"{file_path} is invalid: {e.messages}") from e

    logger.info(f"Loaded {len(operations)} operations from {file_path}")
    return operations


def save_operations_file(operations: List[Operation], path: Optional[str] = None) -> Path:
    file_path = config_path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w") as f:
        json.dump([dump_operation(op) for op in operations], f, indent=2)
    return file_path
