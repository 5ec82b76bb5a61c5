"""Run logger for recording intermediate lookup results to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from score_lookup.data import Usage


class StageRecord(BaseModel):
    """Record of a single pipeline stage execution."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    usage: dict[str, Any] | None = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete lookup request."""

    run_id: str
    operation: str
    query: str
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    final_result_count: int = 0
    total_usage: dict[str, Any] | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Usage objects include their token totals.
    """
    if obj is None:
        return None
    if isinstance(obj, Usage):
        return {
            "api_calls": [_serialize(c) for c in obj.api_calls],
            "archive_searches": obj.archive_searches,
            "page_fetches": obj.page_fetches,
            "input_tokens": obj.input_tokens,
            "output_tokens": obj.output_tokens,
        }
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    return obj


class RunLogger:
    """Accumulates stage records and writes one JSON log file per request.

    Pipelines without a logger skip run logging entirely.

    Args:
        log_dir: Directory to write JSON log files.
    """

    def __init__(self, log_dir: Path) -> None:
        self._log_dir = log_dir
        self._record: RunRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    def start_run(self, operation: str, query: str) -> None:
        """Initialize a new run record.

        Args:
            operation: Pipeline operation (``"search"`` or ``"check"``).
            query: The raw user query.
        """
        self._record = RunRecord(
            run_id=str(uuid.uuid4()),
            operation=operation,
            query=query,
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_stage(
        self,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        usage: Usage | None,
        duration_seconds: float,
    ) -> None:
        """Append a stage record to the current run.

        Args:
            stage: Stage name (e.g. "query_generation", "search").
            component: Component class name.
            input_data: Stage input (will be serialized).
            output_data: Stage output (will be serialized).
            usage: Usage for this stage (None for local stages).
            duration_seconds: Wall-clock time for this stage.
        """
        if self._record is None:
            return

        self._record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                usage=_serialize(usage) if usage is not None else None,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(self, results: list[Any], usage: Usage | None) -> Path | None:
        """Write the run record to a JSON file.

        Args:
            results: Final results produced by the pipeline.
            usage: Total accumulated usage.

        Returns:
            Path to the written JSON file, or None if no run was started.
        """
        if self._record is None:
            return None

        self._record.completed_at = datetime.now(tz=UTC).isoformat()
        self._record.final_result_count = len(results)
        self._record.total_usage = _serialize(usage) if usage is not None else None

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00_<id>.json; colons are not portable in filenames
        ts = self._record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filename = f"run_{ts}_{self._record.run_id[:8]}.json"
        filepath = self._log_dir / filename

        filepath.write_text(self._record.model_dump_json(indent=2))
        self._last_log_path = filepath
        self._record = None
        return filepath
