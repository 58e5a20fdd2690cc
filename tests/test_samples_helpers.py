import unittest

from corrgen.schema.config import validate_config
from corrgen.schema.samples import (
    available_sample_configs,
    get_sample_config,
    get_sample_yaml,
    load_config,
)


class SamplesHelpersTests(unittest.TestCase):
    def test_load_config_and_lookup_errors(self):
        cfg = load_config("metadata: {}\nvariables: []")
        self.assertIn("variables", cfg)

        with self.assertRaises(ValueError):
            load_config("")
        with self.assertRaises(ValueError):
            load_config("- just\n- a\n- list")
        with self.assertRaises(TypeError):
            load_config(123)

        names = available_sample_configs()
        self.assertEqual(names, ["basic", "constrained", "correlated", "mixed"])

        with self.assertRaises(ValueError) as exc:
            get_sample_config("missing_name")
        self.assertIn("Available:", str(exc.exception))

    def test_dict_configs_are_copied(self):
        original = {"variables": [{"name": "x"}]}
        loaded = load_config(original)
        loaded["variables"][0]["name"] = "changed"
        self.assertEqual(original["variables"][0]["name"], "x")

    def test_every_sample_validates(self):
        for name in available_sample_configs():
            with self.subTest(sample=name):
                warnings = validate_config(get_sample_config(name))
                self.assertIsInstance(warnings, list)

    def test_sample_lookup_is_case_insensitive(self):
        self.assertEqual(get_sample_config(" Mixed "), get_sample_config("mixed"))
        self.assertTrue(get_sample_yaml("correlated").startswith("metadata:"))


if __name__ == "__main__":
    unittest.main()
