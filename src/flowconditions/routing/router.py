"""Condition router - picks the outgoing edge of a condition block."""

from typing import Any, Dict, NamedTuple, Optional, Union

from ..schemas import ConditionBlock
from ..state import Bindings
from .evaluator import ConditionEvaluator, Variables


class RouteResult(NamedTuple):
    """Which item of a block matched and where the flow goes next."""
    item_id: Optional[str]
    outgoing_edge_id: Optional[str]
    matched: bool


class ConditionRouter:
    """Evaluates block items in order; the first match wins."""

    def __init__(self, evaluator: Optional[ConditionEvaluator] = None):
        self.evaluator = evaluator or ConditionEvaluator()

    def route(self, block: Union[ConditionBlock, Dict[str, Any]], variables: Variables = None) -> RouteResult:
        """Return the first matching item's edge, or the block's fallback edge."""
        if not isinstance(block, ConditionBlock):
            block = ConditionBlock.model_validate(block)
        bindings = Bindings.coerce(variables)

        result = RouteResult(None, block.outgoing_edge_id, False)
        for item in block.items:
            if item.content is None:
                continue
            if self.evaluator.evaluate(item.content, bindings):
                result = RouteResult(item.id, item.outgoing_edge_id, True)
                break

        tracer = self.evaluator.tracer
        if tracer:
            tracer.route_selected(block.id, result.item_id, result.outgoing_edge_id)
        return result

    def matching_items(self, block: Union[ConditionBlock, Dict[str, Any]], variables: Variables = None) -> list:
        """Ids of every item whose condition currently holds."""
        if not isinstance(block, ConditionBlock):
            block = ConditionBlock.model_validate(block)
        bindings = Bindings.coerce(variables)
        return [
            item.id for item in block.items
            if item.content is not None and self.evaluator.evaluate(item.content, bindings)
        ]
