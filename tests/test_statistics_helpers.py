import math
import unittest

import numpy as np
import pandas as pd

from corrgen.schema.models import CorrelationSpec, VariableKind, VariableSpec
from corrgen.scoring.report import build_correlation_report, summarize_correlation_report
from corrgen.scoring.statistics import (
    BooleanStatistics,
    NumericStatistics,
    compute_statistics,
    describe_table,
    pearson_correlation,
)


class StatisticsTests(unittest.TestCase):
    def test_numeric_statistics(self):
        stats = compute_statistics([3, 1, 2, 4], "integer")

        self.assertIsInstance(stats, NumericStatistics)
        self.assertEqual((stats.count, stats.min, stats.max), (4, 1.0, 4.0))
        self.assertEqual(stats.mean, 2.5)
        self.assertEqual(stats.median, 2.5)

    def test_display_rounds_mean_and_median_only(self):
        stats = compute_statistics([1, 2, 10], VariableKind.FLOAT)
        shown = stats.display()

        self.assertAlmostEqual(stats.mean, 13 / 3)
        self.assertEqual(shown["mean"], 4.33)
        self.assertEqual(shown["median"], 2.0)
        self.assertEqual(shown["max"], 10.0)

    def test_boolean_statistics(self):
        stats = compute_statistics([True, False, True], "boolean")

        self.assertIsInstance(stats, BooleanStatistics)
        self.assertEqual((stats.true_count, stats.false_count), (2, 1))
        self.assertEqual(stats.count, 3)
        self.assertEqual(stats.display(), {"true_count": 2, "false_count": 1})

    def test_string_columns_have_no_statistics(self):
        self.assertIsNone(compute_statistics(["a", "b"], "string"))

    def test_empty_column_raises(self):
        with self.assertRaises(ValueError):
            compute_statistics([], "float")

    def test_describe_table_skips_unknown_columns(self):
        table = pd.DataFrame(
            {"n": [1, 2, 3], "flag": [True, False, False], "extra": [0, 0, 0]}
        )
        variables = [
            VariableSpec("n", VariableKind.INTEGER),
            VariableSpec("flag", VariableKind.BOOLEAN),
        ]

        summary = describe_table(table, variables)

        self.assertEqual(sorted(summary), ["flag", "n"])
        self.assertEqual(summary["n"].median, 2.0)
        self.assertEqual(summary["flag"].true_count, 1)

    def test_describe_empty_table(self):
        table = pd.DataFrame({"n": pd.Series([], dtype=float)})
        summary = describe_table(table, [VariableSpec("n", VariableKind.FLOAT)])
        self.assertEqual(summary, {"n": None})


class PearsonTests(unittest.TestCase):
    def test_perfect_linear_relationships(self):
        self.assertAlmostEqual(pearson_correlation([1, 2, 3, 4], [2, 4, 6, 8]), 1.0)
        self.assertAlmostEqual(pearson_correlation([1, 2, 3, 4], [8, 6, 4, 2]), -1.0)

    def test_matches_numpy(self):
        rng = np.random.default_rng(12)
        x = rng.standard_normal(200)
        y = 0.3 * x + rng.standard_normal(200)

        self.assertAlmostEqual(
            pearson_correlation(x, y), float(np.corrcoef(x, y)[0, 1]), places=12
        )

    def test_constant_input_is_undefined(self):
        self.assertTrue(math.isnan(pearson_correlation([5, 5, 5], [1, 2, 3])))
        self.assertTrue(math.isnan(pearson_correlation([1, 2, 3], [0, 0, 0])))

    def test_length_requirements(self):
        with self.assertRaises(ValueError):
            pearson_correlation([1, 2, 3], [1, 2])
        with self.assertRaises(ValueError):
            pearson_correlation([1], [1])


class CorrelationReportTests(unittest.TestCase):
    @staticmethod
    def _variables():
        return [
            VariableSpec("x", VariableKind.FLOAT),
            VariableSpec("y", VariableKind.FLOAT),
            VariableSpec("c", VariableKind.INTEGER),
            VariableSpec("label", VariableKind.STRING),
        ]

    def test_report_lists_target_and_realized(self):
        table = pd.DataFrame(
            {
                "x": [1.0, 2.0, 3.0],
                "y": [2.0, 4.0, 6.0],
                "c": [7, 7, 7],
                "label": list("abc"),
            }
        )
        correlations = [
            CorrelationSpec("x", "y", 0.5),
            CorrelationSpec("x", "c", 0.2),
            CorrelationSpec("x", "label", 0.9),
        ]

        report = build_correlation_report(table, self._variables(), correlations)

        self.assertEqual(len(report), 2)
        first, second = report
        self.assertEqual((first["var1"], first["var2"]), ("x", "y"))
        self.assertAlmostEqual(first["realized"], 1.0)
        self.assertAlmostEqual(first["deviation"], 0.5)
        self.assertFalse(second["defined"])
        self.assertIsNone(second["deviation"])

        summary = summarize_correlation_report(report)
        self.assertEqual(summary["pairs"], 2)
        self.assertEqual(summary["undefined"], 1)
        self.assertAlmostEqual(summary["max_deviation"], 0.5)

    def test_repeated_pair_keeps_last_target(self):
        table = pd.DataFrame({"x": [1.0, 2.0, 3.0], "y": [3.0, 1.0, 2.0]})
        correlations = [CorrelationSpec("x", "y", 0.1), CorrelationSpec("y", "x", 0.7)]

        report = build_correlation_report(table, self._variables(), correlations)

        self.assertEqual(len(report), 1)
        self.assertEqual(report[0]["target"], 0.7)

    def test_short_table_reports_undefined(self):
        table = pd.DataFrame({"x": [1.0], "y": [2.0]})
        report = build_correlation_report(
            table, self._variables(), [CorrelationSpec("x", "y", 0.4)]
        )

        self.assertTrue(math.isnan(report[0]["realized"]))
        self.assertIsNone(summarize_correlation_report(report)["max_deviation"])


if __name__ == "__main__":
    unittest.main()
