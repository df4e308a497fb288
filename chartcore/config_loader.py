"""
YAML configuration loader for charts.

Loads chart configurations from YAML files, allowing easy sharing and
modification of indicator sets without code changes.
"""
import yaml
from pathlib import Path
from typing import Any, Dict, List, Union

from .config import ChartConfig, IndicatorSetting
from .shared.defaults import DAYS_TO_SHOW


def _parse_indicators(raw: Any, yaml_path: Path) -> List[IndicatorSetting]:
    if not isinstance(raw, list):
        raise ValueError(f"'indicators' must be a list in {yaml_path}")
    settings = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict) or 'type' not in entry:
            raise ValueError(f"Indicator #{i + 1} in {yaml_path} needs a 'type' field")
        params: Dict[str, Any] = dict(entry)
        kind = params.pop('type')
        visible = params.pop('visible', True)
        settings.append(IndicatorSetting(kind=kind, params=params, visible=bool(visible)))
    return settings


def load_config_from_yaml(yaml_path: Union[str, Path]) -> ChartConfig:
    """
    Load chart configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        ChartConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or has out-of-range values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config root must be a mapping: {yaml_path}")

    data_params = config_dict.get('data', {}) or {}
    chart = config_dict.get('chart', {}) or {}
    engine = config_dict.get('engine', {}) or {}

    kwargs: Dict[str, Any] = dict(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', ''),
        symbol=data_params.get('symbol'),
        data_path=data_params.get('path'),
        column=data_params.get('column', 'close'),
        days_to_show=chart.get('days_to_show', DAYS_TO_SHOW),
        max_workers=engine.get('max_workers'),
    )
    if 'indicators' in config_dict:
        kwargs['indicators'] = _parse_indicators(config_dict['indicators'], yaml_path)

    return ChartConfig(**kwargs)
