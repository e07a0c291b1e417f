"""
Configuration Manager
"""

import copy
import json
from pathlib import Path
from typing import Dict, Any, Optional


DEFAULT_CONFIG_FILE = 'config.json'


class ConfigManager:
    """Manages configuration"""

    DEFAULTS = {
        'workers': 500,
        'queue_size': 1000,
        'ranges': {
            'file': 'ip.conf',
            'label': 'cloudflare',
            'source_urls': ['https://www.cloudflare.com/ips-v4'],
            'timeout': 30,
            'max_retries': 3,
            'retry_delay': 2
        }
    }

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = Path(config_file) if config_file else None
        self.config = self._load_config()
        self._validate()

    @classmethod
    def discover(cls, config_file: Optional[str] = None) -> 'ConfigManager':
        """Use the given config file, or config.json from the working directory if present"""
        if config_file:
            path = Path(config_file)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            return cls(str(path))

        default_path = Path(DEFAULT_CONFIG_FILE)
        return cls(str(default_path) if default_path.exists() else None)

    def _load_config(self) -> Dict:
        defaults = copy.deepcopy(self.DEFAULTS)
        if self.config_file and self.config_file.exists():
            user_config = self._load_json(self.config_file)
            if not isinstance(user_config, dict):
                raise ValueError(f"Config must be a JSON object: {self.config_file}")
            return self._deep_merge(defaults, user_config)
        return defaults

    def _load_json(self, path: Path) -> Dict:
        for encoding in ['utf-8-sig', 'utf-8', 'utf-16', 'latin-1']:
            try:
                with open(path, 'r', encoding=encoding) as f:
                    return json.load(f)
            except (UnicodeDecodeError, UnicodeError):
                continue
        raise ValueError(f"Could not decode: {path}")

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _validate(self):
        for key in ('workers', 'queue_size'):
            value = self.config.get(key)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"'{key}' must be a positive integer, got {value!r}")

    def get(self, *keys, default: Any = None) -> Any:
        value = self.config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, *keys, value: Any):
        """Override a nested value, e.g. from a command line flag"""
        target = self.config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value
        self._validate()
