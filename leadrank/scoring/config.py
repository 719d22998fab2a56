"""
Scoring config — YAML with hardcoded fallback.

Every rule table the scorers consult (area-code whitelist, intake keywords,
tier thresholds, terminal statuses) is data loaded here, never a literal in
branching logic. Scoring functions take an optional ``cfg`` dict; when it is
omitted they use the cached process-wide config.
"""
import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

from leadrank.config import SCORING_CONFIG_PATH

logger = logging.getLogger('scoring.config')

_scoring_config = None


def _default_config() -> Dict[str, Any]:
    """Hardcoded fallback if YAML is missing."""
    return {
        'version': 'default',
        'high_value_area_codes': ['809', '829', '849'],
        'intake_months': {
            'feb': 2,
            'may': 5,
            'oct': 10,
        },
        'tiers': [
            {'name': 'High', 'min_score': 85},
            {'name': 'Medium', 'min_score': 55},
            {'name': 'Low', 'min_score': 35},
            {'name': 'Very Low', 'min_score': 0},
        ],
        'recency': {
            'neutral_default': 5,
            'max_score': 10,
        },
        'terminal_statuses': [
            'converted',
            'disqualified',
            'unqualified',
            'not_interested',
            'wrong_number',
            'archived',
        ],
        'never_contacted_statuses': ['not_contacted'],
        'write_attempts': 2,
        'nanp_area_codes': {
            '809': 'Dominican Republic',
            '829': 'Dominican Republic',
            '849': 'Dominican Republic',
            '787': 'Puerto Rico',
            '939': 'Puerto Rico',
        },
        'country_codes': {},
    }


def _config_path() -> str:
    if SCORING_CONFIG_PATH:
        return SCORING_CONFIG_PATH
    return os.path.join(os.path.dirname(__file__), 'scoring_config.yaml')


def load_scoring_config() -> Dict[str, Any]:
    """Load scoring config from YAML, with in-memory cache and hardcoded fallback."""
    global _scoring_config
    if _scoring_config is not None:
        return _scoring_config

    config_path = _config_path()
    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"expected a mapping, got {type(loaded).__name__}")
        merged = _default_config()
        merged.update(loaded)
        _scoring_config = merged
        logger.info("Config loaded from YAML (version=%s)", _scoring_config.get('version', '?'))
    except Exception as e:
        logger.warning("YAML config not loaded (%s), using defaults", e)
        _scoring_config = _default_config()

    return _scoring_config


def reset_scoring_config():
    """Drop the cached config so the next load re-reads the YAML."""
    global _scoring_config
    _scoring_config = None


def config_value(cfg: Optional[Dict[str, Any]], key: str) -> Any:
    """
    Look up one rule table.

    An explicit ``cfg`` wins; keys it lacks fall back to the defaults so tests
    can pass only the table they care about.
    """
    if cfg is None:
        cfg = load_scoring_config()
    if key in cfg:
        return cfg[key]
    return copy.deepcopy(_default_config()[key])
