"""
Managers for configuration
"""

from .config_manager import ConfigManager, deep_merge

__all__ = ['ConfigManager', 'deep_merge']
