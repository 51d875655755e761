"""witness_complex.io

JSON serialisation helpers for built complexes.

The complex itself lives in a GUDHI SimplexTree. We still provide helpers to:
- flatten it into plain dicts + lists (vertices, dimension, filtration)
- save it to disk with provenance metadata intact
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import json

from .config import get_library_versions
from .pretty import complex_summary
from .schema import ComplexDocument
from .simplex_tree import SimplexTreeSink
from .utils import to_jsonable


def complex_to_dict(sink: SimplexTreeSink, config: Optional[Dict[str, Any]] = None) -> ComplexDocument:
    """Flatten a complex; simplices are ordered by (filtration, dimension, vertices)."""
    rows = sorted(sink.get_simplices(), key=lambda sf: (sf[1], len(sf[0]), sf[0]))
    doc: ComplexDocument = {
        "summary": complex_summary(sink),
        "simplices": [
            {"vertices": list(simplex), "dim": len(simplex) - 1, "filtration": filt}
            for simplex, filt in rows
        ],
        "library_versions": get_library_versions(),
    }
    if config is not None:
        doc["config"] = dict(config)
    return doc


def complex_to_json(sink: SimplexTreeSink, config: Optional[Dict[str, Any]] = None, indent: int = 2) -> str:
    """Convert a complex to a JSON string."""
    return json.dumps(to_jsonable(complex_to_dict(sink, config=config)), indent=indent, ensure_ascii=False)


def save_complex(
    sink: SimplexTreeSink,
    path: str | Path,
    config: Optional[Dict[str, Any]] = None,
    indent: int = 2,
) -> Path:
    """Save a complex to JSON on disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(complex_to_json(sink, config=config, indent=indent), encoding="utf-8")
    return path
