import tempfile
import unittest
from pathlib import Path

import numpy as np

from corrgen import (
    CorrgenSynthesizer,
    DatasetSession,
    RunConfig,
    get_sample_config,
    pearson_correlation,
)


class WorkflowSmokeTests(unittest.TestCase):
    def test_correlated_sample_hits_target(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            run_cfg = RunConfig(log_dir=temp_dir, log_level="quiet", save_output=False)
            config = get_sample_config("correlated")
            result = CorrgenSynthesizer(config, run_cfg).generate()

        table = result.dataframe
        self.assertEqual(len(table), 5000)
        self.assertTrue(table["x"].between(0, 1).all())
        self.assertTrue(table["y"].between(0, 1).all())
        realized = pearson_correlation(table["x"], table["y"])
        self.assertAlmostEqual(realized, 0.8, delta=0.15)
        self.assertLess(result.max_correlation_deviation(), 0.15)

    def test_constrained_sample_stays_in_bounds_and_near_targets(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            run_cfg = RunConfig(log_dir=temp_dir, log_level="quiet", save_output=False)
            config = get_sample_config("constrained")
            result = CorrgenSynthesizer(config, run_cfg).generate()

        salary = result.dataframe["salary"].to_numpy()
        tenure = result.dataframe["tenure_years"].to_numpy()
        self.assertTrue(np.all(salary == np.round(salary)))
        self.assertGreaterEqual(salary.min(), 20000)
        self.assertLessEqual(salary.max(), 150000)
        self.assertAlmostEqual(result.statistics["tenure_years"].median, 8.0, delta=0.5)

    def test_generate_export_import_cycle(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            run_cfg = RunConfig(
                n_rows=250,
                log_dir=temp_dir,
                log_level="quiet",
                output_path=str(Path(temp_dir) / "mixed.csv"),
            )
            session = DatasetSession()
            generated = session.generate(get_sample_config("mixed"), run_cfg)
            session.load_csv(generated.output_path)

        self.assertEqual(len(session.table), 250)
        self.assertEqual(list(session.table.columns), list(generated.dataframe.columns))
        self.assertEqual(
            session.table["smoker"].tolist(), generated.dataframe["smoker"].tolist()
        )
        np.testing.assert_array_equal(
            session.table["height_cm"].to_numpy(),
            generated.dataframe["height_cm"].to_numpy(),
        )


if __name__ == "__main__":
    unittest.main()
