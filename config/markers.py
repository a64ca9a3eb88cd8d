"""YAML-driven marker configuration and text analysis helpers."""
from __future__ import annotations

import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

CONFIG_PATH = os.environ.get("MARKERS_CONFIG", str(Path(__file__).with_name("markers.yaml")))


FALLBACK_CONFIG = {
    "version": 1,
    "precedence": ["edge_case", "confusion", "tangent"],
    "categories": {},
    "normalizers": ["strip_whitespace", "collapse_spaces", "to_lower"],
}


@dataclass
class MatchHit:
    """One pattern occurrence inside a candidate answer."""

    category: str
    pattern: str
    span: Tuple[int, int]
    excerpt: str


@dataclass
class MarkerFinding:
    """Winning marker category plus per-category hit counts."""

    category: Optional[str]
    hits: List[MatchHit]
    counts: Dict[str, int] = field(default_factory=dict)


def _read_config(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _lowered(mapping: Optional[dict], lower_keys: bool = False) -> Dict[str, List[str]]:
    return {
        (key.lower() if lower_keys else key): [str(term).lower() for term in terms or []]
        for key, terms in (mapping or {}).items()
    }


class MarkerEngine:
    """Behaviour markers, term lists and category keywords loaded from YAML."""

    def __init__(self, path: str = CONFIG_PATH):
        self.path = path
        self._loaded_at = 0.0
        self._config: dict = {}
        self._patterns: Dict[str, List[re.Pattern[str]]] = {}
        self._order: List[str] = []
        self._allow_phrases: List[str] = []
        self._terms: Dict[str, List[str]] = {}
        self._category_keywords: Dict[str, List[str]] = {}
        self.reload_if_changed(force=True)

    def reload_if_changed(self, force: bool = False) -> None:
        """Re-read the YAML file if it was modified since the last load."""

        try:
            modified = os.path.getmtime(self.path)
        except FileNotFoundError:
            if force or not self._config:
                self._apply(dict(FALLBACK_CONFIG))
                self._loaded_at = time.time()
            return
        if force or modified > self._loaded_at:
            self._apply(_read_config(self.path))
            self._loaded_at = modified

    def _apply(self, cfg: dict) -> None:
        self._config = cfg
        self._order = list(cfg.get("precedence") or [])
        self._allow_phrases = [phrase.lower() for phrase in cfg.get("allow_phrases") or []]
        self._patterns = {}
        for name, body in (cfg.get("categories") or {}).items():
            self._patterns[name] = [re.compile(expr) for expr in (body or {}).get("patterns", [])]
        self._terms = _lowered(cfg.get("term_lists"))
        self._category_keywords = _lowered(cfg.get("category_keywords"), lower_keys=True)

    def normalize(self, text: str) -> str:
        steps = self._config.get("normalizers", [])
        out = text or ""
        if "strip_whitespace" in steps:
            out = out.strip()
        if "collapse_spaces" in steps:
            out = " ".join(out.split())
        if "straighten_quotes" in steps:
            out = out.replace("’", "'").replace("‘", "'")
        if "to_lower" in steps:
            out = out.lower()
        return out

    def _blank_allowed(self, sample: str) -> str:
        # Allowed phrases are masked in place so spans stay aligned.
        for phrase in self._allow_phrases:
            sample = sample.replace(phrase, " " * len(phrase))
        return sample

    def terms(self, name: str) -> List[str]:
        self.reload_if_changed()
        return list(self._terms.get(name, []))

    def category_keywords(self, category: str) -> List[str]:
        self.reload_if_changed()
        return list(self._category_keywords.get((category or "").strip().lower(), []))

    def _scan(self, sample: str) -> List[MatchHit]:
        hits: List[MatchHit] = []
        for category, patterns in self._patterns.items():
            for compiled in patterns:
                for found in compiled.finditer(sample):
                    lo, hi = found.span()
                    context = sample[max(0, lo - 20) : hi + 20]
                    hits.append(MatchHit(category, compiled.pattern, (lo, hi), context.strip()))
        return hits

    def analyze(self, text: str) -> MarkerFinding:
        self.reload_if_changed()
        hits = self._scan(self._blank_allowed(self.normalize(text or "")))
        counts = {name: 0 for name in self._patterns}
        for hit in hits:
            counts[hit.category] += 1

        ranked = [name for name in self._order if counts.get(name)]
        if not ranked:
            return MarkerFinding(category=None, hits=[], counts=counts)
        winner = ranked[0]
        return MarkerFinding(
            category=winner,
            hits=[hit for hit in hits if hit.category == winner],
            counts=counts,
        )

    def count(self, text: str, category: str) -> int:
        return self.analyze(text).counts.get(category, 0)

    def count_terms(self, text: str, name: str = "technical") -> int:
        """Number of distinct terms from ``name`` present in ``text``."""

        sample = f" {re.sub(r'[^a-z0-9/+#-]+', ' ', self.normalize(text or '').lower())} "
        return sum(1 for term in self.terms(name) if f" {term} " in sample)


_engine: Optional[MarkerEngine] = None


def marker_engine() -> MarkerEngine:
    global _engine
    if _engine is None:
        _engine = MarkerEngine()
    return _engine


def match_markers(text: str) -> MarkerFinding:
    """Analyse ``text`` with the shared engine."""

    return marker_engine().analyze(text)


def count_markers(text: str, category: str) -> int:
    return marker_engine().count(text, category)


__all__ = [
    "CONFIG_PATH",
    "MarkerEngine",
    "MarkerFinding",
    "MatchHit",
    "count_markers",
    "marker_engine",
    "match_markers",
]
