"""Caller-facing summaries and the recorded-case replay harness."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from verdict.analyzers.fixture import FixtureImageAnalyzer, FixtureTextAnalyzer
from verdict.engine.taxonomy import DEFAULT_TAXONOMIES, Taxonomy, TaxonomyDomain
from verdict.errors import ConfigurationError
from verdict.models.result import ImageModerationResult, ModerationResult
from verdict.service import ImageModerationService, TextModerationService


def summarize(result: ModerationResult) -> dict[str, Any]:
    """Flatten a verdict into a JSON-friendly record."""
    summary: dict[str, Any] = {
        "kind": result.kind,
        "isAppropriate": result.is_appropriate,
        "recommendation": result.recommendation.value,
        "reasons": [r.name for r in result.reasons],
        "warnings": list(result.warnings),
        "flags": list(result.flags),
    }
    if isinstance(result, ImageModerationResult):
        summary["safeSearch"] = result.payload.safe_search.as_dict()
        summary["labels"] = [
            {"name": label.name, "confidence": f"{round(label.confidence * 100)}%"}
            for label in result.payload.labels
        ]
    else:
        payload = result.payload
        summary["text"] = payload.text
        summary["sentiment"] = {
            "score": payload.sentiment.score,
            "magnitude": payload.sentiment.magnitude,
        }
        summary["categories"] = [
            {"name": c.name, "confidence": c.confidence} for c in payload.categories
        ]
    return summary


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


@dataclass
class ReplayCase:
    """One recorded moderation input with the signals the analyzer returned."""

    description: str
    kind: str  # "image" | "text"
    content: str = ""
    image: str = ""  # path to an image file, relative to the cases file
    safe_search: Optional[dict] = None
    labels: list[dict] = field(default_factory=list)
    sentiment: Optional[dict] = None
    categories: list[dict] = field(default_factory=list)
    fail: list[str] = field(default_factory=list)
    base_dir: Path = field(default_factory=Path)

    def image_bytes(self) -> bytes:
        if self.image:
            return (self.base_dir / self.image).read_bytes()
        return self.content.encode("utf-8")


def load_cases(path: str | Path) -> list[ReplayCase]:
    """Load replay cases from a YAML file with a top-level ``cases`` list."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read cases file {path}: {exc}") from exc

    cases = []
    for i, entry in enumerate(data.get("cases", []), start=1):
        kind = entry.get("kind", "text")
        if kind not in ("image", "text"):
            raise ConfigurationError(f"Case {i}: unknown kind {kind!r}")
        cases.append(
            ReplayCase(
                description=entry.get("description", f"case {i}"),
                kind=kind,
                content=entry.get("content", entry.get("text", "")) or "",
                image=entry.get("image", ""),
                safe_search=entry.get("safe_search"),
                labels=entry.get("labels", []) or [],
                sentiment=entry.get("sentiment"),
                categories=entry.get("categories", []) or [],
                fail=entry.get("fail", []) or [],
                base_dir=path.parent,
            )
        )
    return cases


def run_case(
    case: ReplayCase,
    taxonomies: Optional[dict[TaxonomyDomain, Taxonomy]] = None,
) -> ModerationResult:
    """Moderate *case* against its recorded signals."""
    taxonomies = taxonomies or DEFAULT_TAXONOMIES
    if case.kind == "image":
        analyzer = FixtureImageAnalyzer(case.safe_search, case.labels, case.fail)
        service = ImageModerationService(analyzer, taxonomies[TaxonomyDomain.IMAGE])
        return service.moderate(case.image_bytes())
    analyzer = FixtureTextAnalyzer(case.sentiment, case.categories, case.fail)
    service = TextModerationService(analyzer, taxonomies[TaxonomyDomain.TEXT])
    return service.moderate(case.content)
