"""Configuration for the CLI and the dashboard widget host.

Values are resolved with precedence: explicit overrides (CLI flags) >
JSON config file > environment variables > defaults.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .client import API_URL, TwitterAPIClient

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = 'TWDASH_'
DEFAULT_TIMEOUT = 10.0


@dataclass
class ClientConfig:
    api_url: str = API_URL
    username: str = ''
    password: str = ''
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = 'INFO'
    api_key: str = ''


def _read_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load the first existing config file among `path` and ./config.json"""
    candidates = []
    if path:
        candidates.append(path)
    candidates.append(os.path.join(os.getcwd(), 'config.json'))

    for cfg_path in candidates:
        if not os.path.exists(cfg_path):
            continue
        with open(cfg_path, 'r', encoding='utf-8') as cf:
            config = json.load(cf)
        if not isinstance(config, dict):
            raise ValueError(f"Config file {cfg_path} must contain a JSON object")
        LOGGER.info("Loaded config from %s", cfg_path)
        return config

    if path:
        raise FileNotFoundError(f"Config file not found: {path}")
    return {}


def _normalize(config: Dict[str, Any]) -> Dict[str, Any]:
    # Support older key names like 'base_url' and 'user'
    return {
        'api_url': config.get('api_url') or config.get('base_url'),
        'username': config.get('username') or config.get('user'),
        'password': config.get('password'),
        'timeout': config.get('timeout'),
        'log_level': config.get('log_level'),
        'api_key': config.get('api_key'),
    }


def load_config(path: Optional[str] = None,
                overrides: Optional[Dict[str, Any]] = None) -> ClientConfig:
    """
    Resolve the client configuration

    Args:
        path: Optional JSON config file; ./config.json is tried otherwise
        overrides: Values that win over everything else (None entries are ignored)

    Returns:
        The resolved ClientConfig
    """
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    file_cfg = _normalize(_read_config_file(path))
    defaults = ClientConfig()

    def resolve(key: str) -> Any:
        if key in overrides:
            return overrides[key]
        if file_cfg.get(key) is not None:
            return file_cfg[key]
        env_value = os.environ.get(ENV_PREFIX + key.upper())
        if env_value is not None:
            return env_value
        return getattr(defaults, key)

    try:
        timeout = float(resolve('timeout'))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timeout: {resolve('timeout')!r}") from e

    return ClientConfig(
        api_url=str(resolve('api_url')),
        username=str(resolve('username')),
        password=str(resolve('password')),
        timeout=timeout,
        log_level=str(resolve('log_level')).upper(),
        api_key=str(resolve('api_key')),
    )


def build_client(config: ClientConfig) -> TwitterAPIClient:
    """Create a TwitterAPIClient from a resolved config"""
    return TwitterAPIClient(
        username=config.username,
        password=config.password,
        base_url=config.api_url,
        timeout=config.timeout,
    )
