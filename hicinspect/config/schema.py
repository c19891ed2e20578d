"""
HiCInspect v0.1.0

Configuration schema for HiCInspect.

Defines all analysis parameters with defaults and validation.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Insulation / TAD boundaries
    # ========================================================================
    'insulation': {
        'window_size': 10,  # Square window half-width in overview pixels
        'boundary_prominence': 0.1,  # Minimum prominence on the [0, 1] profile
    },

    # ========================================================================
    # A/B Compartments
    # ========================================================================
    'compartments': {
        'max_iterations': 100,
        'tolerance': 1e-6,
        'bin_size': 4,  # Downsample factor before the eigen-decomposition
    },

    # ========================================================================
    # Contact Decay P(s)
    # ========================================================================
    'decay': {
        'max_distance': None,  # Default: size // 2
        'min_count_for_fit': 10,
    },

    # ========================================================================
    # Inversion / Translocation Patterns
    # ========================================================================
    'patterns': {
        'inversion_threshold': 2.0,  # Anti-diagonal / diagonal ratio
        'translocation_threshold': 2.0,  # Block mean / background ratio
    },

    # ========================================================================
    # Misassembly Fusion
    # ========================================================================
    'misassembly': {
        'edge_margin': 2,
        'merge_radius': 3,
    },

    # ========================================================================
    # Execution
    # ========================================================================
    'execution': {
        'threads': None,  # Auto-detect from system
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'format': 'json',
        'include_profiles': True,  # Per-pixel insulation/eigenvector arrays

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,
        },
    },
}

VALID_TEMPLATES = ['default', 'high_resolution', 'low_coverage']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                user_config = yaml.safe_load(f)

            if user_config:
                # Deep merge user config into defaults
                config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def build_template(template: str = 'default') -> Dict[str, Any]:
    """
    Configuration dictionary for a named template.

    Args:
        template: Template type ('default', 'high_resolution', 'low_coverage')
    """
    if template not in VALID_TEMPLATES:
        raise ValueError(f"Unknown template '{template}'. Choose from {VALID_TEMPLATES}")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'high_resolution':
        config['insulation']['window_size'] = 20
        config['insulation']['boundary_prominence'] = 0.05
        config['compartments']['bin_size'] = 8
        config['misassembly']['merge_radius'] = 5

    elif template == 'low_coverage':
        config['insulation']['window_size'] = 5
        config['insulation']['boundary_prominence'] = 0.2
        config['compartments']['bin_size'] = 2
        config['patterns']['inversion_threshold'] = 3.0
        config['patterns']['translocation_threshold'] = 3.0

    return config


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'high_resolution', 'low_coverage')
    """
    config = build_template(template)

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def _check_number(errors: List[str], config: Dict[str, Any], section: str, key: str,
                  minimum: float, integer: bool = False, allow_none: bool = False):
    value = config.get(section, {}).get(key)
    if value is None:
        if not allow_none:
            errors.append(f"Missing value: {section}.{key}")
        return
    expected = int if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, expected):
        errors.append(f"Invalid {section}.{key}: expected a number, got {value!r}")
    elif value < minimum:
        errors.append(f"Invalid {section}.{key}: must be >= {minimum}, got {value}")


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    _check_number(errors, config, 'insulation', 'window_size', 1, integer=True)
    _check_number(errors, config, 'insulation', 'boundary_prominence', 0)

    _check_number(errors, config, 'compartments', 'max_iterations', 1, integer=True)
    _check_number(errors, config, 'compartments', 'tolerance', 0)
    _check_number(errors, config, 'compartments', 'bin_size', 1, integer=True)

    _check_number(errors, config, 'decay', 'max_distance', 1, integer=True, allow_none=True)
    _check_number(errors, config, 'decay', 'min_count_for_fit', 0, integer=True)

    _check_number(errors, config, 'patterns', 'inversion_threshold', 0)
    _check_number(errors, config, 'patterns', 'translocation_threshold', 0)

    _check_number(errors, config, 'misassembly', 'edge_margin', 0, integer=True)
    _check_number(errors, config, 'misassembly', 'merge_radius', 0, integer=True)

    _check_number(errors, config, 'execution', 'threads', 1, integer=True, allow_none=True)

    output_format = config.get('output', {}).get('format', 'json')
    if output_format != 'json':
        errors.append(f"Invalid output format: {output_format}")

    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
