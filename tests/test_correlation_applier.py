import unittest

import numpy as np

from corrgen.engine.correlation import apply_correlations, checked_rho
from corrgen.schema.validation import ConfigurationError


def _matrix(names, pairs):
    matrix = {a: {b: 1.0 if a == b else 0.0 for b in names} for a in names}
    for a, b, rho in pairs:
        matrix[a][b] = rho
        matrix[b][a] = rho
    return matrix


class CorrelationApplierTests(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(5)
        self.normals = {"a": rng.standard_normal(50), "b": rng.standard_normal(50)}

    def test_identity_matrix_leaves_sequences_unchanged(self):
        out = apply_correlations(self.normals, _matrix(["a", "b"], []))

        np.testing.assert_array_equal(out["a"], self.normals["a"])
        np.testing.assert_array_equal(out["b"], self.normals["b"])

    def test_unique_pass_applies_symmetric_pair_once(self):
        out = apply_correlations(
            self.normals, _matrix(["a", "b"], [("a", "b", 0.8)]), pass_mode="unique"
        )

        expected_b = 0.8 * self.normals["a"] + 0.6 * self.normals["b"]
        np.testing.assert_allclose(out["a"], self.normals["a"])
        np.testing.assert_allclose(out["b"], expected_b)

    def test_ordered_pass_applies_mirror_pair_too(self):
        out = apply_correlations(
            self.normals, _matrix(["a", "b"], [("a", "b", 0.8)]), pass_mode="ordered"
        )

        new_b = 0.8 * self.normals["a"] + 0.6 * self.normals["b"]
        new_a = 0.8 * new_b + 0.6 * self.normals["a"]
        np.testing.assert_allclose(out["b"], new_b)
        np.testing.assert_allclose(out["a"], new_a)

    def test_rho_one_copies_base_sequence(self):
        out = apply_correlations(self.normals, _matrix(["a", "b"], [("a", "b", 1.0)]))
        np.testing.assert_allclose(out["b"], self.normals["a"])

    def test_inputs_are_not_mutated(self):
        before = {name: values.copy() for name, values in self.normals.items()}
        apply_correlations(self.normals, _matrix(["a", "b"], [("a", "b", 0.5)]))

        for name, values in before.items():
            np.testing.assert_array_equal(self.normals[name], values)

    def test_out_of_range_rho_is_rejected(self):
        for rho in (1.5, -1.01, float("nan")):
            with self.subTest(rho=rho):
                with self.assertRaises(ConfigurationError):
                    apply_correlations(
                        self.normals, _matrix(["a", "b"], [("a", "b", rho)])
                    )

    def test_unknown_pass_mode_raises(self):
        with self.assertRaises(ValueError):
            apply_correlations(self.normals, _matrix(["a", "b"], []), pass_mode="twice")

    def test_length_mismatch_raises(self):
        normals = {"a": np.zeros(3), "b": np.zeros(4)}
        with self.assertRaises(ValueError):
            apply_correlations(normals, _matrix(["a", "b"], [("a", "b", 0.5)]))

    def test_matrix_names_without_sequences_are_skipped(self):
        matrix = _matrix(["a", "b", "ghost"], [("a", "ghost", 0.9)])
        out = apply_correlations(self.normals, matrix)

        self.assertEqual(sorted(out), ["a", "b"])
        np.testing.assert_array_equal(out["a"], self.normals["a"])

    def test_checked_rho_accepts_numeric_text(self):
        self.assertEqual(checked_rho("0.25", "a", "b"), 0.25)
        with self.assertRaises(ConfigurationError):
            checked_rho("strong", "a", "b")


if __name__ == "__main__":
    unittest.main()
