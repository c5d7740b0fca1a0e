# path: navigoplan-api/navigoplan/services/text_norm.py

"""
Name heuristics shared by the catalog builder and the resolver.

All of these are string heuristics over hand-maintained keyword tables. They
decide whether a string from the source data looks like a place name or like an
operational note that leaked into a name/alias field.
"""

from __future__ import annotations

from typing import List, Optional
import re
import unicodedata


# Words that mark a parenthetical as a hazard/logistics note, not a place.
BANNED_IN_PARENS = (
    "traffic", "change-over", "change over", "crowd", "crowded", "meltemi", "swell",
    "fuel", "water", "power", "notes",
    "πολύ", "παρασκευή", "σάββατο", "άνεμο", "άνεμοι", "κύμα", "ρηχ", "βράχ", "τηλέφ", "σημείωση",
)

# Sentence openers that show up when free-text notes are stored as aliases.
NOTE_STARTS = (
    "Άφιξη", "Αφιξη", "Είσοδος", "Έξοδος", "Exodos", "Βάθη", "Καλύτερα",
    "Επικοινωνία", "Προσοχή", "Σημείωση", "Arrival", "Entrance", "Depth", "Better", "Notes", "Call",
)

MAX_ALIAS_CHARS = 40
MAX_ALIAS_WORDS = 6
MAX_PAREN_CHARS = 28
MAX_PAREN_WORDS = 3

_ws_re = re.compile(r"\s+")
_paren_re = re.compile(r"\(([^)]+)\)")
_paren_strip_re = re.compile(r"\s*\([^)]+\)")
_paren_bad_chars_re = re.compile(r"[0-9!:;.,/\\#@%&*=_+<>?|]")
_NAME_PUNCT = set("()'-")


def normalize(s: Optional[str]) -> str:
    """Lower-case, strip diacritics (NFD, drop combining marks), trim."""
    s = (s or "").lower()
    s = unicodedata.normalize("NFD", s)
    s = "".join(ch for ch in s if unicodedata.category(ch) != "Mn")
    return s.strip()


def contains_greek(s: str) -> bool:
    for ch in s or "":
        if "\u0370" <= ch <= "\u03ff" or "\u1f00" <= ch <= "\u1fff":
            return True
    return False


def is_name_like(raw: Optional[str]) -> bool:
    """True if the string looks like a place name rather than a sentence/note."""
    s = (raw or "").strip()
    if not s:
        return False
    if len(s) > MAX_ALIAS_CHARS:
        return False
    if len(s.split()) > MAX_ALIAS_WORDS:
        return False
    low = s.lower()
    if any(low.startswith(w.lower()) for w in NOTE_STARTS):
        return False
    for ch in s:
        if ch.isspace() or ch in _NAME_PUNCT or unicodedata.category(ch) == "Mn":
            continue
        if not ch.isalpha():
            return False
    return True


def is_clean_paren(inner: Optional[str]) -> bool:
    """True if a parenthetical reads like a disambiguating place, e.g. "(Aegina)"."""
    s = (inner or "").strip().lower()
    if not s:
        return False
    if any(w in s for w in BANNED_IN_PARENS):
        return False
    if _paren_bad_chars_re.search(s):
        return False
    if len(s.split()) > MAX_PAREN_WORDS:
        return False
    if len(s) > MAX_PAREN_CHARS:
        return False
    return True


def strip_parentheticals(s: str) -> str:
    return _ws_re.sub(" ", _paren_strip_re.sub("", s or "")).strip()


def sanitize_name(raw: Optional[str]) -> str:
    """
    Keep at most one clean parenthetical and drop the rest:
      "Agia Marina (Aegina) (crowded Sat)" -> "Agia Marina (Aegina)"
      "Poros (fuel 24h)"                   -> "Poros"
    """
    s = _ws_re.sub(" ", (raw or "").strip())
    if not s:
        return s
    parens: List[str] = _paren_re.findall(s)
    if not parens:
        return s
    base = strip_parentheticals(s)
    clean = next((p for p in parens if is_clean_paren(p)), None)
    if clean is None:
        return base
    return f"{base} ({clean.strip()})"


def clean_parenthetical(s: str) -> Optional[str]:
    """Return the first clean parenthetical of `s`, if any."""
    for inner in _paren_re.findall(s or ""):
        if is_clean_paren(inner):
            return inner.strip()
    return None
