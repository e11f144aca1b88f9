"""Pydantic schemas for flow conditions."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


VariableValue = Union[str, List[str], None]


class ComparisonOperator(str, Enum):
    """Operators a comparison can apply (values are the flow-builder labels)."""
    EQUAL = "Equal to"
    NOT_EQUAL = "Not equal"
    CONTAINS = "Contains"
    NOT_CONTAINS = "Does not contain"
    GREATER = "Greater than"
    LESS = "Less than"
    IS_SET = "Is set"
    IS_EMPTY = "Is empty"
    STARTS_WITH = "Starts with"
    ENDS_WITH = "Ends with"
    MATCHES_REGEX = "Matches regex"
    NOT_MATCH_REGEX = "Does not match regex"
    STRING_SIMILARITY = "String similarity"


class LogicalOperator(str, Enum):
    """How the comparisons of a condition are combined."""
    AND = "AND"
    OR = "OR"


class _FlowModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Variable(_FlowModel):
    """Runtime variable binding."""
    id: str
    name: Optional[str] = None
    value: VariableValue = None

    @property
    def ref_name(self) -> str:
        """Name used by {{placeholders}}; falls back to the id."""
        return self.name or self.id


class Comparison(_FlowModel):
    """One (variable, operator, value) triple."""
    id: Optional[str] = None
    variable_id: Optional[str] = Field(default=None, alias="variableId")
    comparison_operator: Optional[ComparisonOperator] = Field(default=None, alias="comparisonOperator")
    value: Optional[str] = None


class Condition(_FlowModel):
    """Comparisons combined by a single logical operator."""
    logical_operator: LogicalOperator = Field(default=LogicalOperator.AND, alias="logicalOperator")
    comparisons: Optional[List[Optional[Comparison]]] = None


class ConditionItem(_FlowModel):
    """A branch of a condition block."""
    id: str
    content: Optional[Condition] = None
    outgoing_edge_id: Optional[str] = Field(default=None, alias="outgoingEdgeId")


class ConditionBlock(_FlowModel):
    """Ordered branches plus a fallback edge."""
    id: str
    items: List[ConditionItem] = []
    outgoing_edge_id: Optional[str] = Field(default=None, alias="outgoingEdgeId")
