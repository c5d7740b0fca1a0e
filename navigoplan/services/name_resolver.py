# path: navigoplan-api/navigoplan/services/name_resolver.py

from __future__ import annotations

from typing import Callable, List, Optional

from navigoplan.models.port_models import PortRecord
from navigoplan.services.port_catalog import PortCatalog
from navigoplan.services.text_norm import normalize, strip_parentheticals


Resolver = Callable[[str], Optional[PortRecord]]


def resolve(catalog: PortCatalog, query: Optional[str]) -> Optional[PortRecord]:
    """
    Find the catalog entry for free-text input. First hit wins:
      1) exact normalized name/alias
      2) exact normalized display label, with or without its parenthetical
      3) substring of name/label/alias, in catalog order (not ranked)
    Returns None when nothing matches.
    """
    key = normalize(query)
    if not key:
        return None

    hit = catalog.by_key.get(key)
    if hit is not None:
        return hit

    for r in catalog.records:
        label = catalog.label_of(r)
        if key == normalize(label) or key == normalize(strip_parentheticals(label)):
            return r

    for r in catalog.records:
        if key in normalize(r.name) or key in normalize(catalog.label_of(r)):
            return r
        if any(key in normalize(a) for a in r.aliases):
            return r
    return None


def make_resolver(catalog: PortCatalog) -> Resolver:
    return lambda name: resolve(catalog, name)


def port_options(catalog: PortCatalog) -> List[str]:
    """Every name and alias, sorted; the list a picker (or an LLM prompt) offers."""
    seen = set()
    out = []
    for r in catalog.records:
        for s in [r.name, *r.aliases]:
            if s not in seen:
                seen.add(s)
                out.append(s)
    out.sort(key=lambda s: (normalize(s), s))
    return out
