"""Evaluator settings - immutable options shared by every evaluation."""

import os
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


ENV_PREFIX = "FLOWCONDITIONS_"

_TRUTHY = {"1", "true", "yes", "on"}


class EvaluatorSettings(BaseModel):
    """Holds the similarity threshold and trace/logging options."""
    model_config = ConfigDict(frozen=True)

    similarity_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    trace: bool = False
    log_format: Literal["text", "json"] = "text"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: Any) -> "EvaluatorSettings":
        """Build settings from FLOWCONDITIONS_* environment variables (.env honoured)."""
        load_dotenv(dotenv_path)
        values: Dict[str, Any] = {}

        threshold = os.getenv(ENV_PREFIX + "SIMILARITY_THRESHOLD")
        if threshold:
            values["similarity_threshold"] = float(threshold)

        trace = os.getenv(ENV_PREFIX + "TRACE")
        if trace is not None:
            values["trace"] = trace.strip().lower() in _TRUTHY

        log_format = os.getenv(ENV_PREFIX + "LOG_FORMAT")
        if log_format:
            values["log_format"] = log_format.strip().lower()

        values.update(overrides)
        return cls(**values)

    def to_dict(self) -> dict:
        return self.model_dump()
