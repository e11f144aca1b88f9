"""Config loader - parses YAML files of settings, conditions and condition blocks."""

import yaml
from pathlib import Path
from typing import Any, Dict, List

from ..core.config import EvaluatorSettings
from ..schemas import ComparisonOperator, Condition, ConditionBlock, LogicalOperator


OPERATOR_VALUES = {op.value for op in ComparisonOperator}
LOGICAL_VALUES = {op.value for op in LogicalOperator}


class ConfigError(ValueError):
    """Raised when a config file fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("Invalid condition config:\n" + "\n".join(f"  - {e}" for e in errors))


def load_config_file(path: str) -> dict:
    """Load YAML config file."""
    config_path = Path(path)
    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def parse_settings(data: dict) -> EvaluatorSettings:
    """Parse evaluator settings from config."""
    return EvaluatorSettings(**data.get("settings", {}))


def parse_conditions(data: dict) -> Dict[str, Condition]:
    """Parse named conditions from config."""
    return {
        name: Condition.model_validate(cond_data)
        for name, cond_data in data.get("conditions", {}).items()
    }


def parse_blocks(data: dict) -> Dict[str, ConditionBlock]:
    """Parse named condition blocks from config."""
    blocks = {}
    for name, block_data in data.get("blocks", {}).items():
        block_data = {"id": name, **block_data}
        blocks[name] = ConditionBlock.model_validate(block_data)
    return blocks


def load_settings_file(path: str) -> EvaluatorSettings:
    """Load and validate evaluator settings."""
    data = load_config_file(path)
    errors = validate_config(data)
    if errors:
        raise ConfigError(errors)
    return parse_settings(data)


def load_conditions_file(path: str) -> Dict[str, Any]:
    """Load and validate a config file.

    Returns a dict with "settings", "conditions" and "blocks" keys.
    """
    data = load_config_file(path)
    errors = validate_config(data)
    if errors:
        raise ConfigError(errors)
    return {
        "settings": parse_settings(data),
        "conditions": parse_conditions(data),
        "blocks": parse_blocks(data),
    }


def validate_config(data: Any) -> List[str]:
    """Validate config structure and return list of error messages."""
    if not isinstance(data, dict):
        return ["config must be a mapping"]

    errors = []

    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        errors.append("settings must be a dictionary")
    else:
        threshold = settings.get("similarity_threshold")
        if threshold is not None:
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
                errors.append("settings.similarity_threshold must be a number")
            elif not 0 <= threshold <= 1:
                errors.append("settings.similarity_threshold must be between 0 and 1")
        log_format = settings.get("log_format")
        if log_format is not None and log_format not in ("text", "json"):
            errors.append("settings.log_format must be 'text' or 'json'")
        unknown = set(settings) - set(EvaluatorSettings.model_fields)
        for key in sorted(unknown):
            errors.append(f"settings.{key} is not a known setting")

    conditions = data.get("conditions", {})
    if not isinstance(conditions, dict):
        errors.append("conditions must be a dictionary")
    else:
        for name, cond_data in conditions.items():
            errors.extend(_validate_condition(cond_data, f"conditions.{name}"))

    blocks = data.get("blocks", {})
    if not isinstance(blocks, dict):
        errors.append("blocks must be a dictionary")
    else:
        for name, block_data in blocks.items():
            path = f"blocks.{name}"
            if not isinstance(block_data, dict):
                errors.append(f"{path} must be a dictionary")
                continue
            items = block_data.get("items", [])
            if not isinstance(items, list):
                errors.append(f"{path}.items must be a list")
                continue
            for i, item in enumerate(items):
                item_path = f"{path}.items[{i}]"
                if not isinstance(item, dict):
                    errors.append(f"{item_path} must be a dictionary")
                    continue
                if not isinstance(item.get("id"), str):
                    errors.append(f"{item_path} must have a string 'id' field")
                if item.get("content") is not None:
                    errors.extend(_validate_condition(item["content"], f"{item_path}.content"))

    return errors


def _validate_condition(cond_data: Any, path: str) -> List[str]:
    if not isinstance(cond_data, dict):
        return [f"{path} must be a dictionary"]

    errors = []
    logical = cond_data.get("logicalOperator", LogicalOperator.AND.value)
    if logical not in LOGICAL_VALUES:
        errors.append(f"{path}.logicalOperator must be one of {sorted(LOGICAL_VALUES)}")

    comparisons = cond_data.get("comparisons")
    if comparisons is None:
        return errors
    if not isinstance(comparisons, list):
        errors.append(f"{path}.comparisons must be a list")
        return errors

    for i, comp in enumerate(comparisons):
        comp_path = f"{path}.comparisons[{i}]"
        if comp is None:
            continue
        if not isinstance(comp, dict):
            errors.append(f"{comp_path} must be a dictionary")
            continue
        operator = comp.get("comparisonOperator")
        if operator is not None and operator not in OPERATOR_VALUES:
            errors.append(f"{comp_path}.comparisonOperator '{operator}' is not a known operator")
        value = comp.get("value")
        if value is not None and not isinstance(value, str):
            errors.append(f"{comp_path}.value must be a string, quote it in YAML")
    return errors
