# factexplorer/facts/query.py
"""
Filter term grammar.

A pill is one or more terms separated by ``|`` (any may match). Each term is,
in order of precedence:

  key<op>value   op in != >= <= > < = ; key is a suffix of the fact path,
                 or ``host``/``hostname`` to compare against the host
  "exact"        host, fact path or value equals the quoted text
  free text      case-insensitive regex, or a plain substring if the
                 text is not a valid regex

Nothing in here raises on a malformed term; a half-typed query simply
matches less.
"""
import operator
import re
from functools import lru_cache
from typing import Callable, Iterable, Optional

from .types import FactRow, to_comparable_number, to_comparable_string

Predicate = Callable[[FactRow], bool]

# Two-char operators listed first so ">=" is never read as ">" followed by "=value"
_OPERATOR = re.compile(r"^(.*?)\s*(!=|>=|<=|>|<|=)\s*(.*)$")
_HOST_KEYS = {"host", "hostname"}
_NUMERIC_OPS = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def _always(row: FactRow) -> bool:
    return True


def _never(row: FactRow) -> bool:
    return False


def _unquote(value: str) -> str:
    """Strip one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _searchable_fields(row: FactRow) -> Iterable[str]:
    yield row.host
    yield row.fact_path
    yield to_comparable_string(row.value)
    if row.modified:
        yield str(row.modified)


# -------------------------------------------------------------------
# Term compilers
# -------------------------------------------------------------------
def _compile_comparison(key: str, op: str, value: str) -> Predicate:
    lower_key = key.lower()
    lower_value = value.lower()

    if lower_key in _HOST_KEYS:
        if op == "=":
            return lambda row: row.host.lower() == lower_value
        if op == "!=":
            return lambda row: row.host.lower() != lower_value
        return _never

    def _on_key(row: FactRow) -> bool:
        return row.fact_path.lower().endswith(lower_key)

    if op == "=":
        return lambda row: _on_key(row) and to_comparable_string(row.value).lower() == lower_value
    if op == "!=":
        return lambda row: _on_key(row) and to_comparable_string(row.value).lower() != lower_value

    compare = _NUMERIC_OPS[op]
    wanted = to_comparable_number(value)
    if wanted is None:
        return _never

    def _numeric(row: FactRow) -> bool:
        if not _on_key(row):
            return False
        actual = to_comparable_number(row.value)
        return actual is not None and compare(actual, wanted)

    return _numeric


def _compile_exact(text: str) -> Predicate:
    wanted = text.lower()
    return lambda row: (
        row.host.lower() == wanted
        or row.fact_path.lower() == wanted
        or to_comparable_string(row.value).lower() == wanted
    )


def _compile_free_text(term: str) -> Predicate:
    try:
        pattern = re.compile(term, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError):
        # huge repeat counts and deep nesting fail outside re.error
        needle = term.lower()
        return lambda row: any(needle in field.lower() for field in _searchable_fields(row))
    return lambda row: any(pattern.search(field) for field in _searchable_fields(row))


# -------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------
@lru_cache(maxsize=1024)
def compile_term(term: str) -> Predicate:
    """Compile a single (already OR-split) term into a row predicate."""
    term = term.strip()
    if not term:
        return _never

    m = _OPERATOR.match(term)
    if m:
        key, op, value = (g.strip() for g in m.groups())
        if key and value:
            return _compile_comparison(key, op, _unquote(value))

    if len(term) > 2 and term.startswith('"') and term.endswith('"'):
        return _compile_exact(term[1:-1])

    return _compile_free_text(term)


@lru_cache(maxsize=1024)
def compile_pill(pill: str) -> Predicate:
    """Compile a whole pill; ``a|b`` matches when either side does. Blank pills match all."""
    pill = pill.strip()
    if not pill:
        return _always
    terms = [compile_term(t) for t in pill.split("|")]
    if len(terms) == 1:
        return terms[0]
    return lambda row: any(p(row) for p in terms)


def matches(row: FactRow, term: str) -> bool:
    return compile_pill(term)(row)


def match_all(pills: Iterable[str]) -> Optional[Predicate]:
    """AND together several pills. Returns None when there is nothing to apply."""
    predicates = [compile_pill(p) for p in pills]
    if not predicates:
        return None
    if len(predicates) == 1:
        return predicates[0]
    return lambda row: all(p(row) for p in predicates)
