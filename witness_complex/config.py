"""witness_complex.config

Centralised configuration + provenance helpers.
"""

from __future__ import annotations

from typing import Any, Dict

import importlib.metadata as md


def default_config() -> Dict[str, Any]:
    """Return a *copy* of the default configuration.

    The defaults build the strict (unrelaxed) weak witness complex with no
    dimension cap:
    - max_alpha_square = 0: a landmark is admitted only if no closer landmark
      was left out of the simplex
    - limit_dimension = None: grow until no witness contributes any more

    You can override any key in the returned dict.
    """
    return {
        # --- relaxation / dimension ---
        "max_alpha_square": 0.0,        # squared relaxation budget (alpha^2 >= 0)
        "limit_dimension": None,        # None for no limit, else an int >= 0

        # --- nearest landmark search ---
        "kdtree_leafsize": 16,          # scipy cKDTree leafsize
        "initial_neighbors": 8,         # first chunk of the incremental k-NN query (doubles on demand)
    }


def get_library_versions() -> Dict[str, str]:
    """Collect versions of key libraries for provenance."""
    versions: Dict[str, str] = {}

    def _add(pkg: str) -> None:
        try:
            versions[pkg] = md.version(pkg)
        except md.PackageNotFoundError:
            pass

    for pkg in ["numpy", "scipy", "gudhi"]:
        _add(pkg)
    return versions
