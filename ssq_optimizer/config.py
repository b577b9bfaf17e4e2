import copy
import logging
from typing import Dict

import yaml

from .models import ITERATION_COUNT, MAX_RECORDS, PREDICTION_COUNT

logger = logging.getLogger(__name__)

# ======================
# DEFAULT CONFIGURATION
# ======================
DEFAULT_CONFIG = {
    'data': {
        'data_dir': 'data',
        'csv_filename': 'ssq_history.csv',
        'max_records': MAX_RECORDS
    },
    'fetch': {
        'url': 'https://datachart.500.com/ssq/history/newinc/history.php',
        'max_count': MAX_RECORDS,
        'timeout': 60,
        'user_agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
    },
    'generation': {
        'iterations': ITERATION_COUNT,
        'prediction_count': PREDICTION_COUNT
    },
    'logging': {
        'level': 'INFO'
    }
}


def merge(base: Dict, override: Dict) -> Dict:
    """Deep merge `override` into `base` in place"""
    for k, v in override.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str = 'config.yaml') -> Dict:
    """Load YAML config with defaults"""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.debug(f"Config {config_path} not found, using defaults")
        return merged
    except yaml.YAMLError as e:
        raise ValueError(f"Config {config_path} is not valid YAML: {str(e)}")

    if not isinstance(config, dict):
        raise ValueError(f"Config {config_path} must be a mapping of sections")
    return merge(merged, config)
