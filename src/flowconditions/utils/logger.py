"""Structured trace logging for condition evaluation."""

import logging
import json
from typing import Dict, Any, Optional
from datetime import datetime


class ConditionLogger:
    """Structured logger with configurable output, used when tracing is on."""

    def __init__(self, name: str = "flowconditions.trace", level: int = logging.DEBUG,
                 format_type: str = "text", output_file: Optional[str] = None):
        """Initialize logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            format_type: "json" or "text"
            output_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.format_type = format_type

        # Replace handlers left by an earlier instance on the same logger
        self.close()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(self._formatter())
        self.logger.addHandler(console_handler)

        if output_file:
            file_handler = logging.FileHandler(output_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(self._formatter())
            self.logger.addHandler(file_handler)

    def close(self):
        """Detach and close every handler on the underlying logger."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def _formatter(self) -> logging.Formatter:
        if self.format_type == "json":
            return JSONFormatter()
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def log_event(self, event_type: str, data: Dict[str, Any], level: str = "debug"):
        """Log a structured event.

        Args:
            event_type: Type of event (e.g., "comparison_evaluated")
            data: Event data
            level: Log level (debug, info, warning, error)
        """
        log_data = {
            "event_type": event_type,
            "timestamp": datetime.now().isoformat(),
            **data
        }

        log_func = getattr(self.logger, level.lower())
        if self.format_type == "json":
            log_func(json.dumps(log_data, default=str))
        else:
            log_func(f"[{event_type}] {json.dumps(data, default=str)}")

    def comparison_evaluated(self, variable_id: Optional[str], operator: Optional[str],
                             input_value: Any, target: Any, result: bool):
        """Log a single comparison result."""
        self.log_event("comparison_evaluated", {
            "variable_id": variable_id,
            "operator": operator,
            "input_value": input_value,
            "target": target,
            "result": result
        })

    def similarity_scored(self, input_value: str, candidate: str, score: float, threshold: float):
        """Log the best fuzzy match of a similarity comparison."""
        self.log_event("similarity_scored", {
            "input_value": input_value,
            "candidate": candidate,
            "score": round(score, 4),
            "threshold": threshold
        })

    def condition_evaluated(self, logical_operator: str, comparison_count: int, result: bool):
        """Log an aggregated condition result."""
        self.log_event("condition_evaluated", {
            "logical_operator": logical_operator,
            "comparisons": comparison_count,
            "result": result
        })

    def route_selected(self, block_id: str, item_id: Optional[str], edge_id: Optional[str]):
        """Log the branch a condition block took."""
        self.log_event("route_selected", {"block_id": block_id, "item_id": item_id, "edge_id": edge_id})


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logs."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)
