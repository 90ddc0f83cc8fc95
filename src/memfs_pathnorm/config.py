"""Configuration models and multi-source loader."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Type, TypeVar, get_origin

import platformdirs
import toml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .logging import get_logger
from .logging_config import LoggingConfig
from .profile import Normalization, NormalizationProfile

logger = get_logger(__name__)

APP_NAME = "memfs-pathnorm"

T = TypeVar('T', bound=BaseModel)


class NormalizationConfig(BaseModel):
    """Name equivalence options for one file system."""

    model_config = ConfigDict(extra='forbid')

    options: List[Normalization] = Field(
        default_factory=list,
        description="Normalization options: nfc, nfd, case_fold_unicode, case_fold_ascii"
    )

    @field_validator('options', mode='before')
    @classmethod
    def parse_options(cls, v: Any) -> Any:
        """Accept option names in any case, as a list or a comma-separated string."""
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        if isinstance(v, (list, tuple, set, frozenset)):
            return [
                Normalization.parse(item) if isinstance(item, str) else item
                for item in v
            ]
        return v

    @model_validator(mode='after')
    def check_compatible(self) -> "NormalizationConfig":
        """Reject contradictory option sets at load time."""
        NormalizationProfile.create(self.options)
        return self

    def to_profile(self) -> NormalizationProfile:
        """Build the profile these options describe."""
        return NormalizationProfile.create(self.options)


class PathNormConfig(BaseModel):
    """Root configuration for memfs-pathnorm."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)


class ConfigLoader:
    """Loads configuration from multiple sources with priority."""

    def __init__(self, app_name: str = APP_NAME, config_class: Type[T] = PathNormConfig) -> None:
        self.app_name = app_name
        self.config_class = config_class

    def load(self, defaults_path: Optional[Path] = None) -> T:
        """Load configuration from all sources.

        Args:
            defaults_path: Optional path to defaults.toml file

        Returns:
            Validated configuration object

        Raises:
            pydantic.ValidationError: If the merged configuration is invalid
        """
        # 1. Start with defaults
        config_dict = self._load_defaults(defaults_path)

        # 2. Merge system config
        system_config = self._load_system_config()
        if system_config:
            config_dict = self._deep_merge(config_dict, system_config)

        # 3. Merge user config
        user_config = self._load_user_config()
        if user_config:
            config_dict = self._deep_merge(config_dict, user_config)

        # 4. Override with environment variables
        config_dict = self._apply_env_overrides(config_dict)

        # 5. Validate
        return self.config_class(**config_dict)

    def _load_defaults(self, defaults_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load default configuration."""
        if defaults_path:
            if defaults_path.exists():
                logger.debug(f"Loading defaults from {defaults_path}")
                return toml.load(defaults_path)
            logger.warning(f"Config file not found: {defaults_path}, using default locations")

        possible_paths = [
            Path.cwd() / "config" / "defaults.toml",
            Path.home() / ".config" / self.app_name / "defaults.toml",
        ]

        for path in possible_paths:
            if path.exists():
                logger.debug(f"Loading defaults from {path}")
                return toml.load(path)

        logger.debug(f"No defaults found, searched: {[str(p) for p in possible_paths]}")
        return {}

    def _load_system_config(self) -> Optional[Dict[str, Any]]:
        """Load system-wide configuration."""
        if os.name == "nt":
            system_path = (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        else:
            system_path = Path(f"/etc/{self.app_name}/config.toml")

        if system_path.exists():
            logger.debug(f"Loading system config from {system_path}")
            return toml.load(system_path)

        return None

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """Load user-specific configuration."""
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        user_config_path = Path(user_config_dir) / "config.toml"

        if user_config_path.exists():
            logger.debug(f"Loading user config from {user_config_path}")
            return toml.load(user_config_path)

        logger.debug(f"User config not found at {user_config_path}")
        return None

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Override config with environment variables."""
        # MEMFS_PATHNORM_NORMALIZATION_OPTIONS -> normalization.options
        prefix = f"{self.app_name.upper().replace('-', '_')}_"
        list_fields = self._list_fields()

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            key_path = env_key[len(prefix):].lower().split("_", 1)
            if len(key_path) < 2:
                continue

            section, final_key = key_path
            current = config.setdefault(section, {})
            current[final_key] = self._convert_env_value(
                env_value, as_list=(section, final_key) in list_fields
            )

        return config

    def _list_fields(self) -> Set[Tuple[str, str]]:
        """(section, key) pairs whose values are lists."""
        fields = set()
        for section, section_field in self.config_class.model_fields.items():
            section_model = section_field.annotation
            if not (isinstance(section_model, type) and issubclass(section_model, BaseModel)):
                continue
            for key, field in section_model.model_fields.items():
                if get_origin(field.annotation) is list:
                    fields.add((section, key))
        return fields

    def _convert_env_value(self, value: str, as_list: bool = False) -> Any:
        """Convert string environment variable to appropriate type.

        Only list-typed keys are split on commas, so paths may contain them.
        """
        if as_list:
            return [v.strip() for v in value.split(",") if v.strip()]

        # Boolean
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        # Number
        try:
            return int(value)
        except ValueError:
            pass

        return value
