"""Bindings - read-only variable lookup with {{name}} template resolution."""

import json
import re
from typing import Any, Dict, Iterable, List, Optional, Union

from .schemas import Variable, VariableValue


PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")
UNIQUE_PLACEHOLDER_PATTERN = re.compile(r"^\{\{([^{}]+)\}\}$")


class Bindings:
    """Snapshot of the variables visible to a condition.

    Variables are looked up by id for the left-hand side of a comparison and
    by name for {{placeholders}} in the right-hand side.
    """

    def __init__(self, variables: Iterable[Union[Variable, Dict[str, Any]]] = None):
        self._variables: List[Variable] = [
            v if isinstance(v, Variable) else Variable.model_validate(v)
            for v in (variables or [])
        ]
        self._by_id: Dict[str, Variable] = {}
        self._by_name: Dict[str, Variable] = {}
        for var in self._variables:
            # First binding wins, like a linear find over the list
            self._by_id.setdefault(var.id, var)
            self._by_name.setdefault(var.ref_name, var)

    @classmethod
    def coerce(cls, variables: Any) -> "Bindings":
        """Accept a Bindings instance or anything Bindings() accepts."""
        if isinstance(variables, Bindings):
            return variables
        return cls(variables)

    def get(self, variable_id: str, default: VariableValue = None) -> VariableValue:
        """Get the current value of a variable by id."""
        var = self._by_id.get(variable_id)
        if var is None or var.value is None:
            return default
        return var.value

    def find_unique_variable(self, text: Optional[str]) -> Optional[Variable]:
        """Return the variable that `text` names when it is exactly one {{placeholder}}."""
        if not text:
            return None
        match = UNIQUE_PLACEHOLDER_PATTERN.match(text.strip())
        if not match:
            return None
        return self._by_name.get(match.group(1).strip())

    def resolve_template(self, text: Optional[str]) -> str:
        """Resolve {{name}} placeholders in a string.

        Examples:
            "Hello {{user_name}}" -> "Hello John"
            "{{tags}}" -> '["a", "b"]'
            "{{unknown}}" -> ""
        """
        if not text:
            return ""

        def replacer(match):
            var = self._by_name.get(match.group(1).strip())
            if var is None:
                return ""
            return _stringify(var.value)

        return PLACEHOLDER_PATTERN.sub(replacer, text)

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables)

    def to_dict(self) -> Dict[str, VariableValue]:
        """Export bindings as id -> value."""
        return {var.id: var.value for var in self._variables}

    def __contains__(self, variable_id: str) -> bool:
        return variable_id in self._by_id

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self):
        return f"Bindings({self.to_dict()})"


def _stringify(value: VariableValue) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)
