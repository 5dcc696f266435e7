from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config" / "defaults.yaml"
load_dotenv()

ENV_PREFIX = "FRESHPOWDER_"


def _bool_from_env(value: str | None) -> Optional[bool]:
    if value is None:
        return None
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _float_from_env(value: str | None) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _merge_dicts(base: Dict, overrides: Mapping) -> Dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            merged[key] = _merge_dicts(base[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json: bool = True


@dataclass
class HttpConfig:
    timeout: float = 10.0
    user_agent: str = "Mozilla/5.0 (compatible; FreshPowderBot/1.0)"


@dataclass
class ResortSettings:
    """A resort row as written in the YAML registry."""

    id: str
    name: str
    location: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    baseline: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AppConfig:
    resorts: List[ResortSettings] = field(default_factory=list)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(*, config_path: str | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    env = dict(os.environ if env is None else env)
    data = _load_yaml(_DEFAULT_CONFIG_PATH)

    explicit_path = config_path or env.get(f"{ENV_PREFIX}CONFIG_PATH")
    if explicit_path:
        data = _merge_dicts(data, _load_yaml(Path(explicit_path)))

    logging_data = dict(data.get("logging") or {})
    level_override = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if level_override:
        logging_data["level"] = level_override
    json_override = _bool_from_env(env.get(f"{ENV_PREFIX}LOG_JSON"))
    if json_override is not None:
        logging_data["json"] = json_override

    http_data = dict(data.get("http") or {})
    timeout_override = _float_from_env(env.get(f"{ENV_PREFIX}HTTP_TIMEOUT"))
    if timeout_override is not None:
        http_data["timeout"] = timeout_override
    agent_override = env.get(f"{ENV_PREFIX}USER_AGENT")
    if agent_override:
        http_data["user_agent"] = agent_override

    resorts = [ResortSettings(**resort) for resort in data.get("resorts") or []]

    return AppConfig(
        resorts=resorts,
        http=HttpConfig(**http_data) if http_data else HttpConfig(),
        logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
    )


app_config = load_config()
