"""flowconditions - comparison conditions for branching chatbot flows."""

from .schemas import (
    ComparisonOperator,
    LogicalOperator,
    Variable,
    Comparison,
    Condition,
    ConditionItem,
    ConditionBlock,
)
from .state import Bindings
from .core.config import EvaluatorSettings
from .routing.evaluator import ConditionEvaluator, evaluate_condition
from .routing.router import ConditionRouter, RouteResult
from .utils.config_loader import ConfigError, load_conditions_file, load_settings_file
from .utils.regex_literal import RegexLiteral, parse_regex_literal

__all__ = [
    "ComparisonOperator",
    "LogicalOperator",
    "Variable",
    "Comparison",
    "Condition",
    "ConditionItem",
    "ConditionBlock",
    "Bindings",
    "EvaluatorSettings",
    "ConditionEvaluator",
    "evaluate_condition",
    "ConditionRouter",
    "RouteResult",
    "ConfigError",
    "load_conditions_file",
    "load_settings_file",
    "RegexLiteral",
    "parse_regex_literal",
]
