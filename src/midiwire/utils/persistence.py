"""JSON storage for the midiwire configuration file.

Writes keep the previous file as `<name>.bak` and go through a temp file
renamed into place, so an interrupted save never leaves a truncated config.
A missing file reads as defaults and is not created.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from midiwire.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _sibling(path: Path, suffix: str) -> Path:
    return path.with_suffix(path.suffix + suffix)


def read_model(path: Path, model_type: type[M]) -> M:
    """
    Parse `path` as JSON and validate it into `model_type`.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigFileInvalidError: If the file is empty, unreadable or not JSON
        ConfigValidationError: If a value is rejected by the model
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigFileInvalidError(str(path), f"Not UTF-8 text: {e}") from e
    if not text.strip():
        raise ConfigFileInvalidError(str(path), "File is empty")

    try:
        model = model_type.model_validate_json(text)
    except ValidationError as e:
        logger.error(f"{path} rejected by {model_type.__name__}: {e}")
        raise wrap_pydantic_error(e, str(path)) from e

    logger.debug(f"Read {model_type.__name__} from {path}")
    return model


def read_model_or_default(
    path: Path, model_type: type[M], default_factory: Callable[[], M] | None = None
) -> M:
    """Like read_model, but a missing file yields `default_factory()` (or `model_type()`)."""
    try:
        return read_model(path, model_type)
    except FileNotFoundError:
        logger.info(f"No config at {path}, using defaults")
        return default_factory() if default_factory else model_type()


def write_model(model: BaseModel, path: Path, backup: bool = True) -> None:
    """
    Write `model` to `path` as indented JSON.

    Raises:
        OSError: If the directory or file cannot be written
        ConfigurationError: If the model cannot be serialized
    """
    try:
        text = model.model_dump_json(indent=2)
    except Exception as e:
        raise ConfigurationError(
            user_message=f"Failed to save configuration to {path}",
            technical_message=f"Serializing {type(model).__name__} failed: {e}",
        ) from e

    path.parent.mkdir(parents=True, exist_ok=True)
    if backup and path.exists():
        shutil.copy2(path, _sibling(path, ".bak"))

    temp_path = _sibling(path, ".tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        temp_path.replace(path)
    finally:
        temp_path.unlink(missing_ok=True)

    logger.debug(f"Wrote {type(model).__name__} to {path}")
