"""Pytest configuration and fixtures for flowconditions tests."""

import pytest

from flowconditions import ComparisonOperator, Condition, EvaluatorSettings, ConditionEvaluator


@pytest.fixture
def sample_variables():
    """Variables as the flow runtime hands them over."""
    return [
        {"id": "v1", "name": "answer", "value": "42"},
        {"id": "v2", "name": "nickname", "value": "x"},
        {"id": "v_greeting", "name": "greeting", "value": "  Hello World  "},
        {"id": "v_tags", "name": "tags", "value": ["vip", "Beta"]},
        {"id": "v_empty", "name": "empty", "value": ""},
        {"id": "v_none", "name": "nothing", "value": None},
        {"id": "v_threshold", "name": "threshold", "value": "40"},
    ]


@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        "settings": {
            "similarity_threshold": 0.75,
        },
        "conditions": {
            "is_adult": {
                "logicalOperator": "AND",
                "comparisons": [
                    {"variableId": "age", "comparisonOperator": "Greater than", "value": "17"},
                ],
            },
            "said_hello": {
                "logicalOperator": "OR",
                "comparisons": [
                    {"variableId": "reply", "comparisonOperator": "String similarity", "value": "hello|hi"},
                    {"variableId": "reply", "comparisonOperator": "Contains", "value": "hey"},
                ],
            },
        },
        "blocks": {
            "route_by_answer": {
                "outgoingEdgeId": "edge_fallback",
                "items": [
                    {
                        "id": "item_yes",
                        "outgoingEdgeId": "edge_yes",
                        "content": {
                            "comparisons": [
                                {"variableId": "reply", "comparisonOperator": "Equal to", "value": "yes"},
                            ],
                        },
                    },
                ],
            },
        },
    }


@pytest.fixture
def evaluator():
    return ConditionEvaluator(EvaluatorSettings())


@pytest.fixture
def check(evaluator):
    """Evaluate one comparison of `operator` between `input_value` and `target`.

    A list target is bound to a second variable and referenced as {{target}}.
    """
    def _check(operator: ComparisonOperator, input_value, target=None) -> bool:
        variables = [{"id": "input", "value": input_value}]
        if isinstance(target, list):
            variables.append({"id": "target", "value": target})
            target = "{{target}}"
        condition = Condition(comparisons=[{
            "variableId": "input",
            "comparisonOperator": operator,
            "value": target,
        }])
        return evaluator.evaluate(condition, variables)
    return _check
