"""
Configuration management module for trackrdf.

This module provides functionality for loading, validating, and managing
configuration settings for an RDF run.
"""
import copy
import yaml
from pathlib import Path
import logging
from typing import Dict, Any, Optional, Union

from ..core.rdf_calculator import VALID_NORMALIZATIONS, VALID_OUT_OF_RANGE
from ..io.loader import TRACK_FILENAME, VALID_ON_ERROR
from .helpers import update_dict_recursively

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'trajectory': {'directory': '.', 'filename': TRACK_FILENAME, 'on_error': 'raise'},
    'groups': {'type_a': 1, 'type_b': 2},
    'rdf': {'bin_width': 0.1, 'normalization': 'shell', 'out_of_range': 'raise', 'n_workers': 1, 'chunk_size': 512},
    'output': {'directory': '.', 'text_file': 'rdf_out.txt', 'save_npz': False, 'save_summary': False,
               'save_config': False},
    'plotting': {'enabled': False, 'filename': 'rdf.png', 'title': 'Radial Distribution Function',
                 'theme': 'light', 'dpi': 300},
}


class ConfigManager:
    """Class for managing trackrdf configuration settings."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager with defaults.

        Args:
            config_file: Path to a YAML file overriding the defaults (optional)
        """
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if config_file is not None:
            self.load_config(config_file)

    def load_config(self, config_file: Union[str, Path]) -> None:
        """
        Merge settings from a YAML file over the current configuration.

        Args:
            config_file: Path to the configuration file
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        logger.info(f"Loading configuration from {config_path}")
        with open(config_path, 'r') as f:
            user_cfg = yaml.safe_load(f)

        if user_cfg is None:
            logger.warning(f"Configuration file {config_path} is empty; using defaults.")
            return
        if not isinstance(user_cfg, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping at top level.")
        self.update_config(user_cfg)

    def _validate_config(self) -> None:
        """Validate the current configuration."""
        for key in DEFAULT_CONFIG:
            if not isinstance(self.config.get(key), dict):
                raise ValueError(f"Missing required configuration section: {key}")

        unknown = set(self.config) - set(DEFAULT_CONFIG)
        if unknown:
            logger.warning(f"Ignoring unknown configuration sections: {sorted(unknown)}")

        traj_cfg = self.config['trajectory']
        if traj_cfg['on_error'] not in VALID_ON_ERROR:
            raise ValueError(f"trajectory.on_error must be one of {VALID_ON_ERROR}")

        groups_cfg = self.config['groups']
        for key in ('type_a', 'type_b'):
            if not isinstance(groups_cfg[key], int) or isinstance(groups_cfg[key], bool):
                raise ValueError(f"groups.{key} must be an integer type tag")
        if groups_cfg['type_a'] == groups_cfg['type_b']:
            raise ValueError("groups.type_a and groups.type_b must differ")

        rdf_cfg = self.config['rdf']
        if not isinstance(rdf_cfg['bin_width'], (int, float)) or not 0 < rdf_cfg['bin_width'] < float('inf'):
            raise ValueError("rdf.bin_width must be a positive finite number")
        if rdf_cfg['normalization'] not in VALID_NORMALIZATIONS:
            raise ValueError(f"rdf.normalization must be one of {VALID_NORMALIZATIONS}")
        if rdf_cfg['out_of_range'] not in VALID_OUT_OF_RANGE:
            raise ValueError(f"rdf.out_of_range must be one of {VALID_OUT_OF_RANGE}")
        for key in ('n_workers', 'chunk_size'):
            if not isinstance(rdf_cfg[key], int) or rdf_cfg[key] < 1:
                raise ValueError(f"rdf.{key} must be an integer >= 1")

    def get_trajectory_config(self) -> Dict[str, Any]:
        return self.config['trajectory']

    def get_groups_config(self) -> Dict[str, Any]:
        return self.config['groups']

    def get_rdf_config(self) -> Dict[str, Any]:
        return self.config['rdf']

    def get_output_config(self) -> Dict[str, Any]:
        return self.config['output']

    def get_plotting_config(self) -> Dict[str, Any]:
        return self.config['plotting']

    def update_config(self, updates: Dict[str, Any]) -> None:
        """
        Update configuration settings.

        Args:
            updates: Dictionary of configuration updates
        """
        update_dict_recursively(self.config, updates)
        self._validate_config()

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the current configuration as a dictionary.

        Returns:
            Deep copy of the current configuration
        """
        return copy.deepcopy(self.config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ConfigManager':
        """
        Create a ConfigManager instance from a dictionary merged over the defaults.

        Args:
            config_dict: Dictionary of configuration settings

        Returns:
            ConfigManager instance
        """
        instance = cls()
        instance.update_config(copy.deepcopy(config_dict))
        return instance
