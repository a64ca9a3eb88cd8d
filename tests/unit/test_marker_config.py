from __future__ import annotations

from config.markers import MarkerEngine, marker_engine, match_markers

YAML = """
version: 1
precedence: [edge_case, confusion, tangent]
normalizers: [strip_whitespace, collapse_spaces, to_lower]
allow_phrases:
  - skip list
categories:
  edge_case:
    patterns:
      - "\\\\bskip\\\\b"
  confusion:
    patterns:
      - "\\\\bconfused\\\\b"
  tangent:
    patterns:
      - "\\\\bby the way\\\\b"
  connector:
    patterns:
      - "\\\\bthen\\\\b"
term_lists:
  technical: [python, ci/cd, load balancer]
category_keywords:
  Coding: [loop, recursion]
"""


def _engine(tmp_path):
    cfg_path = tmp_path / "markers.yaml"
    cfg_path.write_text(YAML, encoding="utf-8")
    return MarkerEngine(str(cfg_path))


def test_precedence_picks_edge_case_over_confusion(tmp_path):
    engine = _engine(tmp_path)
    finding = engine.analyze("I am CONFUSED so I will skip this")
    assert finding.category == "edge_case"
    assert finding.counts["confusion"] == 1
    assert finding.hits and all(hit.category == "edge_case" for hit in finding.hits)


def test_allow_phrase_is_blanked_before_matching(tmp_path):
    engine = _engine(tmp_path)
    finding = engine.analyze("A skip list gives logarithmic search")
    assert finding.category is None
    assert finding.counts["edge_case"] == 0


def test_non_ranked_categories_are_counted_only(tmp_path):
    engine = _engine(tmp_path)
    assert engine.count("First this, then that, then done.", "connector") == 2
    assert engine.analyze("then").category is None


def test_term_and_keyword_lookups(tmp_path):
    engine = _engine(tmp_path)
    assert engine.count_terms("We used Python behind a load balancer with CI/CD.") == 3
    assert engine.count_terms("pythonic code") == 0
    assert engine.category_keywords("coding") == ["loop", "recursion"]
    assert engine.category_keywords("unknown") == []


def test_missing_file_falls_back_to_empty_config(tmp_path):
    engine = MarkerEngine(str(tmp_path / "absent.yaml"))
    assert engine.analyze("skip").category is None
    assert engine.terms("technical") == []


def test_packaged_config_and_helpers():
    finding = match_markers("Can you explain what you mean?")
    assert finding.category == "confusion"
    assert "python" in marker_engine().terms("technical")
