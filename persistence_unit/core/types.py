"""Shared core type aliases used across contracts, collector, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

PositionalArgs = Tuple[Any, ...]

RowMapping = Mapping[str, Any]
Row = Dict[str, Any]
Rows = List[Row]
MaybeRow = Optional[Row]
GeneratedKeys = List[Any]
