"""Comparison operators - one handler per ComparisonOperator member."""

from typing import Callable, Dict, NamedTuple, Optional

from ..schemas import ComparisonOperator, VariableValue
from ..utils.logger import ConditionLogger
from ..utils.regex_literal import compile_regex
from ..utils.similarity import best_similarity
from .values import compare, fold, is_sequence, normalize, parse_date_or_number, to_number


class OperatorContext(NamedTuple):
    """Per-evaluator options handed to every operator."""
    similarity_threshold: float = 0.8
    tracer: Optional[ConditionLogger] = None


Handler = Callable[[VariableValue, VariableValue, OperatorContext], bool]

HANDLERS: Dict[ComparisonOperator, Handler] = {}


def handles(operator: ComparisonOperator):
    """Register a handler for an operator."""
    def register(func: Handler) -> Handler:
        HANDLERS[operator] = func
        return func
    return register


def apply_operator(operator: ComparisonOperator, input_value: VariableValue,
                   target: VariableValue, ctx: OperatorContext = OperatorContext()) -> bool:
    """Evaluate one operator against already-resolved operands."""
    return HANDLERS[operator](input_value, target, ctx)


# ---------- equality ----------

def _equal(a, b) -> bool:
    if isinstance(a, str) and isinstance(b, str):
        return normalize(a) == normalize(b)
    return a == b


def _not_equal(a, b) -> bool:
    return not _equal(a, b)


@handles(ComparisonOperator.EQUAL)
def _eval_equal(input_value, target, ctx) -> bool:
    return compare(_equal, input_value, target)


@handles(ComparisonOperator.NOT_EQUAL)
def _eval_not_equal(input_value, target, ctx) -> bool:
    return compare(_not_equal, input_value, target)


# ---------- containment ----------

def _contains(a, b) -> bool:
    if not a or not b:
        return False
    return fold(b) in fold(a)


def _not_contains(a, b) -> bool:
    if not a or not b:
        return True
    return fold(b) not in fold(a)


@handles(ComparisonOperator.CONTAINS)
def _eval_contains(input_value, target, ctx) -> bool:
    if is_sequence(input_value):
        return compare(_equal, input_value, target, "some")
    return compare(_contains, input_value, target, "some")


@handles(ComparisonOperator.NOT_CONTAINS)
def _eval_not_contains(input_value, target, ctx) -> bool:
    if is_sequence(input_value):
        return compare(_not_equal, input_value, target)
    return compare(_not_contains, input_value, target)


# ---------- ordering ----------

def _ordering_operands(input_value, target):
    """Numbers to compare for GREATER/LESS, or None when either side is unset."""
    if input_value is None or target is None:
        return None
    if isinstance(input_value, str):
        if isinstance(target, str):
            return parse_date_or_number(input_value), parse_date_or_number(target)
        return to_number(input_value), float(len(target))
    if isinstance(target, str):
        return float(len(input_value)), to_number(target)
    return float(len(input_value)), float(len(target))


@handles(ComparisonOperator.GREATER)
def _eval_greater(input_value, target, ctx) -> bool:
    operands = _ordering_operands(input_value, target)
    if operands is None:
        return False
    left, right = operands
    # NaN compares False either way
    return left > right


@handles(ComparisonOperator.LESS)
def _eval_less(input_value, target, ctx) -> bool:
    operands = _ordering_operands(input_value, target)
    if operands is None:
        return False
    left, right = operands
    return left < right


# ---------- presence ----------

@handles(ComparisonOperator.IS_SET)
def _eval_is_set(input_value, target, ctx) -> bool:
    return input_value is not None and len(input_value) > 0


@handles(ComparisonOperator.IS_EMPTY)
def _eval_is_empty(input_value, target, ctx) -> bool:
    return input_value is None or len(input_value) == 0


# ---------- prefix / suffix ----------

def _starts_with(a, b) -> bool:
    if not a or not b:
        return False
    return fold(a).startswith(fold(b))


def _ends_with(a, b) -> bool:
    if not a or not b:
        return False
    return fold(a).endswith(fold(b))


@handles(ComparisonOperator.STARTS_WITH)
def _eval_starts_with(input_value, target, ctx) -> bool:
    return compare(_starts_with, input_value, target)


@handles(ComparisonOperator.ENDS_WITH)
def _eval_ends_with(input_value, target, ctx) -> bool:
    return compare(_ends_with, input_value, target)


# ---------- regex ----------

def _matches_regex(a, b) -> bool:
    if not a or not b:
        return False
    regex = compile_regex(b)
    if regex is None:
        return False
    return regex.test(a)


def _not_matches_regex(a, b) -> bool:
    return not _matches_regex(a, b)


@handles(ComparisonOperator.MATCHES_REGEX)
def _eval_matches_regex(input_value, target, ctx) -> bool:
    return compare(_matches_regex, input_value, target, "some")


@handles(ComparisonOperator.NOT_MATCH_REGEX)
def _eval_not_match_regex(input_value, target, ctx) -> bool:
    return compare(_not_matches_regex, input_value, target)


# ---------- fuzzy ----------

@handles(ComparisonOperator.STRING_SIMILARITY)
def _eval_string_similarity(input_value, target, ctx) -> bool:
    if not isinstance(input_value, str) or not isinstance(target, str) or not target:
        return False
    candidates = [fold(candidate) for candidate in target.split("|")]
    score, candidate = best_similarity(fold(input_value), candidates)
    if ctx.tracer:
        ctx.tracer.similarity_scored(input_value, candidate, score, ctx.similarity_threshold)
    return score > ctx.similarity_threshold


_missing = set(ComparisonOperator) - set(HANDLERS)
if _missing:
    raise RuntimeError(f"No handler for operators: {sorted(op.name for op in _missing)}")
