"""Config file loader - loads the user's config.json from the ringring config directory."""

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from utils.colored_logger import setup_logger

logger = setup_logger(__name__)


class UserConfig(BaseModel):
    """User configuration (config.json). Every field is optional."""

    mode: Optional[str] = None
    theme: Optional[str] = None
    random_pool: List[str] = Field(default_factory=list)
    workspaces: Dict[str, str] = Field(default_factory=dict)

    @field_validator("random_pool", "workspaces", mode="before")
    @classmethod
    def _null_as_empty(cls, value, info):
        # "random_pool": null behaves like a missing key
        if value is None:
            return [] if info.field_name == "random_pool" else {}
        return value


def load_user_config(config_path: Path) -> UserConfig:
    """
    Load config.json.

    Args:
        config_path: Path to config.json

    Returns:
        UserConfig; all defaults when the file is missing, unreadable or malformed
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return UserConfig()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {config_path}: {e}")
        return UserConfig()

    try:
        return UserConfig.model_validate_json(content)
    except ValidationError as e:
        # Silently fall back - config is optional
        logger.warning(f"Ignoring malformed config {config_path}: {e.error_count()} error(s)")
        return UserConfig()


def save_user_config(user_config: UserConfig, config_path: Path) -> None:
    """
    Write config.json (pretty printed, unset optional fields omitted).

    Args:
        user_config: Configuration to persist
        config_path: Destination path; parent directories are created
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = user_config.model_dump(exclude_none=True)
    config_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def create_example_config(config_path: Path, overwrite: bool = False) -> bool:
    """
    Create an example config.json with every available setting.

    Args:
        config_path: Where to write the example
        overwrite: Replace an existing file

    Returns:
        bool: True if the file was written, False if one already existed
    """
    if config_path.exists() and not overwrite:
        return False

    example = UserConfig(
        mode="random",
        theme="peon",
        random_pool=["peon", "aoe2"],
        workspaces={str(Path.home() / "projects" / "example"): "aoe2"},
    )
    save_user_config(example, config_path)
    return True
