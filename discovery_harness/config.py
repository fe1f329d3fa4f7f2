# ABOUTME: Loads diagnostics settings from the environment after reading the repository .env file.
# ABOUTME: Centralizes artifact locations and summary glyph choices shared by the CLI and test bed.

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_ARTIFACTS_DIR = "artifacts/discovery_diagnostics"
ARTIFACTS_DIR_ENV = "DISCOVERY_DIAGNOSTICS_ARTIFACTS_DIR"
ASCII_ENV = "DISCOVERY_DIAGNOSTICS_ASCII"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SummaryGlyphs:
    passed: str = "✅"
    failed: str = "❌"


UNICODE_GLYPHS = SummaryGlyphs()
ASCII_GLYPHS = SummaryGlyphs(passed="PASS", failed="FAIL")


@dataclass(frozen=True)
class DiagnosticsSettings:
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
    ascii_glyphs: bool = False

    @property
    def glyphs(self) -> SummaryGlyphs:
        return ASCII_GLYPHS if self.ascii_glyphs else UNICODE_GLYPHS


def _ensure_env_loaded() -> None:
    load_dotenv(REPO_ROOT / ".env", override=False)


def load_settings() -> DiagnosticsSettings:
    _ensure_env_loaded()
    artifacts_dir = os.getenv(ARTIFACTS_DIR_ENV, DEFAULT_ARTIFACTS_DIR).strip() or DEFAULT_ARTIFACTS_DIR
    ascii_glyphs = os.getenv(ASCII_ENV, "").strip().lower() in _TRUTHY
    return DiagnosticsSettings(artifacts_dir=artifacts_dir, ascii_glyphs=ascii_glyphs)
