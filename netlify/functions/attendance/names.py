import re
from typing import List, Optional, Pattern, Tuple

# -------------------- cleaning rules --------------------

# (pattern, replacement) pairs, applied top to bottom
DISPLAY_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(r"\(?\s*(BCR|CMBCR)\s*\d+\s*\)?", re.I), ""),
    (re.compile(r"\s+"), " "),
]

MATCHING_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(r"\s+cm\s*$"), ""),
    (re.compile(r"mohammed"), "muhammed"),
    (re.compile(r"mohammad"), "muhammed"),
    (re.compile(r"muhammad"), "muhammed"),
    (re.compile(r"\s+"), ""),
]

BATCH_CODE_RE = re.compile(r"(BCR|CMBCR)\s*\d+", re.I)


def _apply_rules(s: str, rules: List[Tuple[Pattern, str]]) -> str:
    for pat, repl in rules:
        s = pat.sub(repl, s)
    return s

# -------------------- name normalization --------------------

def to_title_case(s: str) -> str:
    return " ".join(tok.capitalize() for tok in s.split(" "))

def clean_student_name(name) -> str:
    """Display form of a name: batch codes stripped, spaces collapsed, title case."""
    if name is None: return ""
    s = str(name)
    # stripping one code can splice the neighbours into another one
    while True:
        out = _apply_rules(s, DISPLAY_RULES)
        if out == s: break
        s = out
    return to_title_case(s.strip())

def normalize_for_matching(name) -> str:
    """Comparison-only form: lowercase, no spaces, spelling variants unified.

    Batch codes are *not* removed here; callers clean the name first.
    """
    if not name: return ""
    return _apply_rules(str(name).lower(), MATCHING_RULES).strip()

# -------------------- batch codes --------------------

def _strip_cm(code: str) -> str:
    return code[2:] if code.startswith("CM") else code

def extract_batch_code(name) -> Optional[str]:
    if not name: return None
    m = BATCH_CODE_RE.search(str(name))
    if not m: return None
    return _strip_cm(re.sub(r"\s", "", m.group(0)).upper())

def normalize_batch_target(target: str) -> str:
    return _strip_cm(re.sub(r"[\s()]", "", target).upper())

def matches_batch(name, target_batch: Optional[str]) -> bool:
    if not target_batch or not target_batch.strip():
        return True
    code = extract_batch_code(name)
    if not code:
        return False
    target = normalize_batch_target(target_batch)
    return code == target or target in code or code in target
