from __future__ import annotations

import unittest

from persistence_unit import (
    MappedResult,
    PersistenceFailure,
    ResultShape,
    all_rows,
    first_generated_key,
    first_row,
    generated_keys,
    rows_affected,
    scalar,
)


def _rows_result(rows: list[dict]) -> MappedResult:
    result = MappedResult()
    result._set_rows(rows)
    return result


def _keys_result(keys: list) -> MappedResult:
    result = MappedResult()
    result._set_generated_keys(keys)
    return result


def _count_result(count: int) -> MappedResult:
    result = MappedResult()
    result._set_rows_affected(count)
    return result


class MappedResultCursorTests(unittest.TestCase):
    def test_empty_result_cannot_advance(self) -> None:
        result = MappedResult()
        self.assertIs(result.shape, ResultShape.EMPTY)
        with self.assertRaises(PersistenceFailure):
            result.advance()

    def test_column_requires_advance(self) -> None:
        result = _rows_result([{"id": 1}])
        with self.assertRaises(PersistenceFailure) as ctx:
            result.column("id")
        self.assertIn("advance()", str(ctx.exception))

    def test_rows_iterate_in_order_then_exhaust(self) -> None:
        result = _rows_result([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
        seen = []
        while result.advance():
            seen.append((result.column("id"), result.column("name")))
        self.assertEqual(seen, [(1, "a"), (2, "b")])
        self.assertFalse(result.advance())
        with self.assertRaises(PersistenceFailure):
            result.column("id")

    def test_row_returns_copy_in_column_order(self) -> None:
        result = _rows_result([{"b": 2, "a": 1}])
        self.assertTrue(result.advance())
        row = result.row()
        self.assertEqual(list(row), ["b", "a"])
        row["b"] = 99
        self.assertEqual(result.column("b"), 2)

    def test_unknown_column_fails(self) -> None:
        result = _rows_result([{"id": 1}])
        result.advance()
        with self.assertRaises(PersistenceFailure):
            result.column("missing")

    def test_none_values_are_returned(self) -> None:
        result = _rows_result([{"email": None}])
        result.advance()
        self.assertIsNone(result.column("email"))

    def test_generated_keys_discipline(self) -> None:
        result = _keys_result([10, 11])
        self.assertIs(result.shape, ResultShape.GENERATED_KEYS)
        with self.assertRaises(PersistenceFailure):
            result.generated_key()
        with self.assertRaises(PersistenceFailure):
            result.column("id")
        self.assertTrue(result.has_next())
        self.assertEqual(result.generated_key(), 10)
        self.assertTrue(result.advance())
        self.assertEqual(result.generated_key(), 11)
        self.assertFalse(result.advance())

    def test_rows_affected_sentinel(self) -> None:
        with self.assertRaises(PersistenceFailure):
            _rows_result([]).rows_affected()
        zero = _count_result(0)
        self.assertIs(zero.shape, ResultShape.ROWS_AFFECTED)
        self.assertEqual(zero.rows_affected(), 0)
        with self.assertRaises(PersistenceFailure):
            zero.advance()

    def test_only_one_shape_can_be_populated(self) -> None:
        result = _keys_result([1])
        with self.assertRaises(PersistenceFailure):
            result._set_rows([{"id": 1}])
        with self.assertRaises(PersistenceFailure):
            result._set_rows_affected(1)


class MapperTests(unittest.TestCase):
    def test_row_mappers(self) -> None:
        rows = [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
        self.assertEqual(all_rows(_rows_result(rows)), rows)
        self.assertEqual(first_row(_rows_result(rows)), rows[0])
        self.assertIsNone(first_row(_rows_result([])))
        self.assertEqual(scalar(_rows_result([{"total": 5}])), 5)
        self.assertIsNone(scalar(_rows_result([])))

    def test_key_and_count_mappers(self) -> None:
        self.assertEqual(generated_keys(_keys_result([3, 4])), [3, 4])
        self.assertEqual(first_generated_key(_keys_result([3, 4])), 3)
        self.assertIsNone(first_generated_key(_keys_result([])))
        self.assertEqual(rows_affected(_count_result(2)), 2)

    def test_row_mapper_on_keys_fails(self) -> None:
        with self.assertRaises(PersistenceFailure):
            all_rows(_keys_result([1]))


if __name__ == "__main__":
    unittest.main()
