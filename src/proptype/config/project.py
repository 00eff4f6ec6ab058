"""Project Configuration for proptype

Manages .proptype/config.json settings for naming, version ordering and
validation behaviour.
"""

import json
from pathlib import Path


class ProjectConfig:
    """Manages project configuration for proptype"""

    DEFAULT_CONFIG = {
        "namespace": "Google",
        "version_order": ["ga", "beta", "alpha"],
        "default_update_verb": "PUT",
        "collect_sibling_errors": True,
    }

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = base_dir or Path.cwd()
        self.config_dir = self.base_dir / ".proptype"
        self.config_file = self.config_dir / "config.json"

    def exists(self) -> bool:
        """Check if config file exists"""
        return self.config_file.exists()

    def load(self) -> dict:
        """Load config, returning defaults if not exists"""
        merged = dict(self.DEFAULT_CONFIG)
        merged["version_order"] = list(self.DEFAULT_CONFIG["version_order"])
        if not self.config_file.exists():
            return merged

        with open(self.config_file) as f:
            config = json.load(f)

        # Merge with defaults for missing keys
        merged.update(config)
        return merged

    def save(self, config: dict) -> None:
        """Save config to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w') as f:
            json.dump(config, f, indent=2, ensure_ascii=False)

    def init(self, namespace: str = "Google", version_order: list[str] | None = None) -> dict:
        """Initialize project config"""
        config = self.load()
        config["namespace"] = namespace
        if version_order:
            config["version_order"] = list(version_order)
        self.save(config)
        return config
