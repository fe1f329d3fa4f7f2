# ABOUTME: Persists discovery diagnostics as JSON artifacts and loads them back for offline summaries.
# ABOUTME: Uses one directory per run id so repeated test runs never overwrite each other.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from uuid import uuid4

from discovery_harness.tracing.contracts import DiscoveryDiagnostics


DIAGNOSTICS_FILENAME = "diagnostics.json"


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True, default=str), encoding="utf-8")


def write_diagnostics(
    diagnostics: DiscoveryDiagnostics,
    *,
    run_id: str | None = None,
    artifacts_root: str | Path,
) -> Path:
    active_run_id = run_id or str(uuid4())
    path = Path(artifacts_root) / active_run_id / DIAGNOSTICS_FILENAME
    _write_json(path, diagnostics.to_dict())
    return path


def load_diagnostics(path: str | Path) -> DiscoveryDiagnostics:
    payload: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Diagnostics artifact must be a JSON object.")
    return DiscoveryDiagnostics.from_dict(payload)
