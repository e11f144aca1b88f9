"""Tests for condition block routing."""

import logging

from flowconditions import (
    ConditionBlock,
    ConditionEvaluator,
    ConditionRouter,
    EvaluatorSettings,
    RouteResult,
)


def make_block():
    return ConditionBlock.model_validate({
        "id": "block_1",
        "outgoingEdgeId": "edge_fallback",
        "items": [
            {"id": "item_empty", "outgoingEdgeId": "edge_never"},
            {
                "id": "item_yes",
                "outgoingEdgeId": "edge_yes",
                "content": {
                    "logicalOperator": "OR",
                    "comparisons": [
                        {"variableId": "reply", "comparisonOperator": "Equal to", "value": "yes"},
                        {"variableId": "reply", "comparisonOperator": "String similarity", "value": "yeah|yep"},
                    ],
                },
            },
            {
                "id": "item_any",
                "outgoingEdgeId": "edge_any",
                "content": {
                    "comparisons": [
                        {"variableId": "reply", "comparisonOperator": "Is set"},
                    ],
                },
            },
        ],
    })


class TestConditionRouter:

    def test_first_match_wins(self):
        router = ConditionRouter()
        result = router.route(make_block(), [{"id": "reply", "value": "yes"}])
        assert result == RouteResult("item_yes", "edge_yes", True)

    def test_later_item_matches(self):
        router = ConditionRouter()
        result = router.route(make_block(), [{"id": "reply", "value": "maybe"}])
        assert result.item_id == "item_any"
        assert result.outgoing_edge_id == "edge_any"

    def test_fallback_when_nothing_matches(self):
        router = ConditionRouter()
        result = router.route(make_block(), [])
        assert result == RouteResult(None, "edge_fallback", False)

    def test_item_without_content_never_matches(self):
        router = ConditionRouter()
        assert "item_empty" not in router.matching_items(make_block(), [{"id": "reply", "value": "yes"}])

    def test_matching_items(self):
        router = ConditionRouter()
        assert router.matching_items(make_block(), [{"id": "reply", "value": "yes"}]) == ["item_yes", "item_any"]

    def test_route_accepts_dict_block(self):
        router = ConditionRouter()
        block = make_block().model_dump(by_alias=True)
        assert router.route(block, [{"id": "reply", "value": "yep"}]).item_id == "item_yes"

    def test_route_trace(self, caplog):
        router = ConditionRouter(ConditionEvaluator(EvaluatorSettings(trace=True)))
        with caplog.at_level(logging.DEBUG, logger="flowconditions.trace"):
            router.route(make_block(), [{"id": "reply", "value": "yes"}])
        assert "route_selected" in caplog.text
        assert "condition_evaluated" in caplog.text
