"""
Configuration loader for the delay queue.
Reads settings from YAML file with environment variable substitution.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from job_queue.delay_queue import DequeueConfig


@dataclass
class QueueConfig:
    backend: str = "memory"             # "memory" for dev, "redis" for production
    redis_url: str = "redis://localhost:6379"
    name: str = "delayq"                # sorted-set key
    poll_period: float = 1.0            # seconds between range queries

    def dequeue_config(self) -> DequeueConfig:
        return DequeueConfig(poll_period=self.poll_period)

    def store_config(self) -> dict[str, Any]:
        return {"backend": self.backend, "redis_url": self.redis_url}


@dataclass
class Settings:
    debug: bool = False
    queue: QueueConfig = field(default_factory=QueueConfig)


_settings: Optional[Settings] = None


def _substitute_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} patterns with environment variable values."""
    pattern = re.compile(r'\$\{(\w+)\}')
    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))
    return pattern.sub(replacer, value)


def _process_values(obj: Any) -> Any:
    """Recursively substitute env vars in all string values."""
    if isinstance(obj, str):
        return _substitute_env_vars(obj)
    elif isinstance(obj, dict):
        return {k: _process_values(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_process_values(v) for v in obj]
    return obj


def load_settings(config_path: str = None) -> Settings:
    """Load settings from YAML file. Missing file or sections fall back to defaults."""
    global _settings

    if config_path is None:
        config_path = os.environ.get(
            "DELAYQ_CONFIG",
            str(Path(__file__).parent / "settings.yaml"),
        )

    settings = Settings()

    if Path(config_path).exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        raw = _process_values(raw)

        settings.debug = bool(raw.get("debug") or settings.debug)

        if "queue" in raw:
            q = raw["queue"] or {}
            redis_url = q.get("redis_url") or settings.queue.redis_url
            if redis_url.startswith("${"):
                # unset env var left unsubstituted
                redis_url = QueueConfig.redis_url
            poll_period = q.get("poll_period")
            if poll_period is None:
                poll_period = settings.queue.poll_period
            settings.queue = QueueConfig(
                backend=q.get("backend") or settings.queue.backend,
                redis_url=redis_url,
                name=q.get("name") or settings.queue.name,
                poll_period=float(poll_period),
            )

    _settings = settings
    return settings


def get_settings() -> Settings:
    """Return cached settings or load from default path."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
