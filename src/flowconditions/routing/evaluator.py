"""Condition evaluator - resolves comparisons and folds them with AND/OR."""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from ..core.config import EvaluatorSettings
from ..core.operators import OperatorContext, apply_operator
from ..schemas import Comparison, Condition, LogicalOperator, Variable, VariableValue
from ..state import Bindings
from ..utils.logger import ConditionLogger

logger = logging.getLogger(__name__)

NULL_LITERALS = ("undefined", "null")

Variables = Union[Bindings, Iterable[Union[Variable, Dict[str, Any]]], None]


class ConditionEvaluator:
    """Evaluates conditions against variable bindings.

    Evaluation is total: missing fields, unparseable numbers or dates and
    invalid regexes all produce a boolean instead of raising.
    """

    def __init__(self, settings: Optional[EvaluatorSettings] = None,
                 trace_logger: Optional[ConditionLogger] = None):
        self.settings = settings or EvaluatorSettings()
        # An explicit trace logger turns tracing on by itself
        if trace_logger is None and self.settings.trace:
            trace_logger = ConditionLogger(format_type=self.settings.log_format)
        self.tracer = trace_logger
        self._ctx = OperatorContext(
            similarity_threshold=self.settings.similarity_threshold,
            tracer=self.tracer,
        )

    def evaluate(self, condition: Union[Condition, Dict[str, Any]], variables: Variables = None) -> bool:
        """Evaluate a condition; False when it has no comparisons list."""
        if not isinstance(condition, Condition):
            condition = Condition.model_validate(condition)
        if condition.comparisons is None:
            return False

        bindings = Bindings.coerce(variables)
        results = (self.evaluate_comparison(c, bindings) for c in condition.comparisons)
        if condition.logical_operator == LogicalOperator.AND:
            result = all(results)
        else:
            result = any(results)

        if self.tracer:
            self.tracer.condition_evaluated(
                condition.logical_operator.value, len(condition.comparisons), result
            )
        return result

    def evaluate_comparison(self, comparison: Optional[Comparison], variables: Variables = None) -> bool:
        """Evaluate a single comparison against the bindings."""
        if comparison is None or not comparison.variable_id:
            return False
        bindings = Bindings.coerce(variables)

        input_value = bindings.get(comparison.variable_id)
        target = self.resolve_target(comparison.value, bindings)
        if comparison.comparison_operator is None:
            logger.debug("Comparison on %s has no operator", comparison.variable_id)
            return False

        result = apply_operator(comparison.comparison_operator, input_value, target, self._ctx)
        if self.tracer:
            self.tracer.comparison_evaluated(
                comparison.variable_id, comparison.comparison_operator.value,
                input_value, target, result
            )
        return result

    @staticmethod
    def resolve_target(value: Optional[str], bindings: Bindings) -> VariableValue:
        """Right-hand side of a comparison: null literal, {{variable}} value or interpolated text."""
        if value in NULL_LITERALS:
            return None
        variable = bindings.find_unique_variable(value)
        if variable is not None and variable.value is not None:
            return variable.value
        return bindings.resolve_template(value)


_default_evaluator = ConditionEvaluator()


def evaluate_condition(condition: Union[Condition, Dict[str, Any]], variables: Variables = None,
                       settings: Optional[EvaluatorSettings] = None) -> bool:
    """Evaluate `condition` against `variables`."""
    evaluator = _default_evaluator if settings is None else ConditionEvaluator(settings)
    return evaluator.evaluate(condition, variables)
