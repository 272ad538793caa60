"""Configuration loader for SVCS.

Handles loading and merging configuration from multiple sources.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..utils.env import get_global_svcs_dir
from ..utils.fs import safe_json_load
from .types import SvcsConfig


PROJECT_CONFIG_NAME = ".svcs.json"


class ConfigLoader:
    """Loads and manages SVCS configuration."""
    
    def __init__(self, project_root: Path | None = None):
        """Initialize config loader.
        
        Args:
            project_root: Repository root (for project-local config)
        """
        self.project_root = project_root
    
    def load(self) -> SvcsConfig:
        """Load configuration from all sources.
        
        Priority (highest to lowest):
        1. Project-local config (<root>/.svcs.json)
        2. Global config (~/.svcs/config.json)
        3. Default values
        
        Returns:
            Merged SvcsConfig
        """
        merged: dict[str, Any] = {}
        
        global_config_path = get_global_svcs_dir() / "config.json"
        if global_config_path.exists():
            global_data = safe_json_load(global_config_path, {})
            if isinstance(global_data, dict):
                merged = self._deep_merge(merged, global_data)
        
        # Project config overrides global
        if self.project_root:
            project_config_path = self.project_root / PROJECT_CONFIG_NAME
            if project_config_path.exists():
                project_data = safe_json_load(project_config_path, {})
                if isinstance(project_data, dict):
                    merged = self._deep_merge(merged, project_data)
        
        return SvcsConfig.from_dict(merged)
    
    def save_config(self, config: SvcsConfig, scope: str = "project") -> Path:
        """Save configuration to file.
        
        Args:
            config: Configuration to save
            scope: "project" or "global"
            
        Returns:
            Path where config was saved
        """
        if scope == "global":
            config_path = get_global_svcs_dir() / "config.json"
        else:
            if not self.project_root:
                raise ValueError("No project root set for project-scope config")
            config_path = self.project_root / PROJECT_CONFIG_NAME
        
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        
        return config_path
    
    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.
        
        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)
            
        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
