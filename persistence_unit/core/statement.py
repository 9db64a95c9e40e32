"""Statement specs, the fluent builder, and outcome classification."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Sequence

from .errors import PersistenceFailure
from .types import PositionalArgs
from .validation import has_arguments, require_at_least_one_argument, require_non_null


class StatementKind(str, Enum):
    """Outcome family of a statement, deciding which result shape is populated."""

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    OTHER = "other"


_LEADING_KEYWORDS = {
    "SELECT": StatementKind.SELECT,
    "VALUES": StatementKind.SELECT,
    "TABLE": StatementKind.SELECT,
    "SHOW": StatementKind.SELECT,
    "PRAGMA": StatementKind.SELECT,
    "EXPLAIN": StatementKind.SELECT,
    "DESCRIBE": StatementKind.SELECT,
    "INSERT": StatementKind.INSERT,
    "REPLACE": StatementKind.INSERT,
    "UPDATE": StatementKind.UPDATE,
    "DELETE": StatementKind.DELETE,
}

# Keywords that can follow a CTE list.
_MAIN_KEYWORDS = {
    "SELECT": StatementKind.SELECT,
    "VALUES": StatementKind.SELECT,
    "INSERT": StatementKind.INSERT,
    "UPDATE": StatementKind.UPDATE,
    "DELETE": StatementKind.DELETE,
}

_TOKEN = re.compile(
    r"""
      (?P<comment>--[^\n]*|/\*.*?\*/)
    | (?P<literal>'(?:[^']|'')*'|"(?:[^"]|"")*"|`[^`]*`)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<word>[A-Za-z_][A-Za-z0-9_$]*)
    """,
    re.VERBOSE | re.DOTALL,
)


def _words(text: str) -> Iterator[tuple[str, int]]:
    """Yield upper-cased bare words with their parenthesis depth."""

    depth = 0
    for match in _TOKEN.finditer(text):
        group = match.lastgroup
        if group == "open":
            depth += 1
        elif group == "close":
            depth = max(depth - 1, 0)
        elif group == "word":
            yield match.group().upper(), depth


def coerce_kind(kind: StatementKind | str) -> StatementKind:
    """Return `kind` as a `StatementKind`, accepting names in any case."""

    if isinstance(kind, StatementKind):
        return kind
    try:
        return StatementKind(str(kind).lower())
    except ValueError as exc:
        raise PersistenceFailure(f"'{kind}' is not a valid statement kind", exc) from exc


def classify_statement(text: str) -> StatementKind:
    """Classify SQL text by its leading keyword.

    Comments, quoted literals and quoted identifiers never take part, so a
    `SELECT` mentioning `'UPDATE'` in a string stays a select. For `WITH`
    statements the first main keyword after the CTE list decides.
    """

    words = _words(text)
    first = next(words, None)
    if first is None:
        return StatementKind.OTHER
    keyword, base_depth = first
    if keyword != "WITH":
        return _LEADING_KEYWORDS.get(keyword, StatementKind.OTHER)
    for word, depth in words:
        if depth == base_depth and word in _MAIN_KEYWORDS:
            return _MAIN_KEYWORDS[word]
    return StatementKind.OTHER


@dataclass(frozen=True)
class StatementSpec:
    """Immutable SQL text plus positional bind values.

    Args:
        text: Non-blank SQL text, using the driver's positional placeholder style.
        args: Optional positional values; when given it must hold at least one value.
        kind: Explicit outcome kind; when omitted it is derived from `text`.
    """

    text: str
    args: Optional[Sequence[Any]] = None
    kind: Optional[StatementKind] = None

    def __post_init__(self) -> None:
        text = require_non_null(self.text, "text")
        if not isinstance(text, str) or not text.strip():
            raise PersistenceFailure("The 'text' parameter must be non-empty SQL text")
        if self.kind is not None:
            object.__setattr__(self, "kind", coerce_kind(self.kind))
        if self.args is None:
            object.__setattr__(self, "args", ())
            return
        if isinstance(self.args, (str, bytes)):
            raise PersistenceFailure("The 'args' parameter must be a sequence of values")
        object.__setattr__(self, "args", require_at_least_one_argument(self.args, "args"))

    @property
    def bind_args(self) -> PositionalArgs:
        return tuple(self.args or ())

    @property
    def has_args(self) -> bool:
        return has_arguments(self.args)

    @property
    def outcome_kind(self) -> StatementKind:
        if self.kind is not None:
            return self.kind
        return classify_statement(self.text)


class QueryBuilder:
    """Fluent builder handed to statement callbacks; `build()` freezes it."""

    def __init__(self) -> None:
        self._query: Optional[str] = None
        self._args: Optional[PositionalArgs] = None
        self._kind: Optional[StatementKind] = None

    def set_query(self, query: str) -> QueryBuilder:
        self._query = require_non_null(query, "query")
        return self

    def set_args(self, *args: Any) -> QueryBuilder:
        self._args = require_at_least_one_argument(args, "args")
        return self

    def set_kind(self, kind: StatementKind | str) -> QueryBuilder:
        self._kind = coerce_kind(require_non_null(kind, "kind"))
        return self

    def build(self) -> StatementSpec:
        return StatementSpec(
            text=require_non_null(self._query, "query"),
            args=self._args,
            kind=self._kind,
        )
