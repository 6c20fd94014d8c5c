import logging
import tomllib
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.CONFIG_FILE:
            self._load_from_toml(Path(self.CONFIG_FILE))

    def _load_from_toml(self, path: Path):
        """Override defaults with the ``[guwen]`` table of a TOML file."""
        try:
            with path.open("rb") as handle:
                config = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load TOML config from {path}: {e}")
            self._set_defaults()
            return

        guwen_config = config.get('guwen', {})
        try:
            timeout = float(guwen_config.get('timeout_seconds', self.HTTP_TIMEOUT_SEC))
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid timeout_seconds in {path}: {e}")
            self._set_defaults()
            return

        self.GUWEN_API_URL = guwen_config.get('api_url', self.GUWEN_API_URL)
        self.HTTP_TIMEOUT_SEC = timeout
        self.HTTP_USER_AGENT = guwen_config.get('user_agent', self.HTTP_USER_AGENT)

        if 'logging' in guwen_config:
            logging_config = guwen_config['logging']
            self.LOG_LEVEL = logging_config.get('level', self.LOG_LEVEL)
            self.LOG_JSON = bool(logging_config.get('json', self.LOG_JSON))

    def _set_defaults(self):
        """Set default values if TOML loading fails."""
        self.GUWEN_API_URL = "https://www.caoxingyu.club/guwen"
        self.HTTP_TIMEOUT_SEC = 20.0
        self.HTTP_USER_AGENT = "guwen-reader/0.3"
        self.LOG_LEVEL = "INFO"
        self.LOG_JSON = False

    # Default values (may be overridden by the TOML config)
    GUWEN_API_URL: str = "https://www.caoxingyu.club/guwen"
    HTTP_TIMEOUT_SEC: float = 20.0
    HTTP_USER_AGENT: str = "guwen-reader/0.3"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    CONFIG_FILE: Optional[str] = None
