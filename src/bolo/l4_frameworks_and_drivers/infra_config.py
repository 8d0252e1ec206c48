"""Built-in configuration defaults, merged under user YAML before validation."""

from __future__ import annotations

import copy

from bolo.l1_entities.config import AppConfig
from bolo.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'session': {
        'default_language': 'hinglish',
        'settle_delay': 0.25,
        'restart_burst_limit': 5,
        'restart_burst_window': 2.0,
    },
    'recognition': {
        'model': 'large-v3-turbo-q8_0',
        'models': {},
        'silence_threshold': 0.01,
        'pause_duration': 0.8,
        'max_utterance': 15.0,
        'interim_interval': 1.0,
        'no_speech_timeout': 8.0,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
