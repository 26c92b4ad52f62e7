import os
import unittest
from unittest.mock import patch

from cachematrix import ResolverConfig
from cachematrix._internal import config as _config


class TestResolverConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = ResolverConfig()
        self.assertEqual(cfg.condition_warn_threshold, _config.DEFAULT_CONDITION_WARN_THRESHOLD)
        self.assertIsNone(cfg.condition_limit)
        self.assertTrue(cfg.trace_enabled)

    def test_rejects_non_positive_thresholds(self):
        with self.assertRaises(ValueError):
            ResolverConfig(condition_limit=0)
        with self.assertRaises(ValueError):
            ResolverConfig(condition_warn_threshold=-5.0)

    def test_from_env_empty(self):
        cfg = ResolverConfig.from_env({})
        self.assertEqual(cfg, ResolverConfig())

    def test_from_env_values(self):
        cfg = ResolverConfig.from_env(
            {
                _config.ENV_CONDITION_WARN_THRESHOLD: "1e8",
                _config.ENV_CONDITION_LIMIT: "1e14",
                _config.ENV_TRACE: "off",
            }
        )
        self.assertEqual(cfg.condition_warn_threshold, 1e8)
        self.assertEqual(cfg.condition_limit, 1e14)
        self.assertFalse(cfg.trace_enabled)

    def test_from_env_none_disables(self):
        cfg = ResolverConfig.from_env({_config.ENV_CONDITION_WARN_THRESHOLD: "None"})
        self.assertIsNone(cfg.condition_warn_threshold)

    def test_from_env_invalid_values_name_variable(self):
        for env in (
            {_config.ENV_CONDITION_LIMIT: "lots"},
            {_config.ENV_CONDITION_LIMIT: "-1"},
            {_config.ENV_TRACE: "maybe"},
        ):
            with self.subTest(env=env):
                with self.assertRaises(ValueError) as ctx:
                    ResolverConfig.from_env(env)
                self.assertIn(next(iter(env)), str(ctx.exception))

    def test_from_env_reads_process_environment(self):
        with patch.dict(os.environ, {_config.ENV_TRACE: "1", _config.ENV_CONDITION_LIMIT: "500"}):
            cfg = ResolverConfig.from_env()
        self.assertTrue(cfg.trace_enabled)
        self.assertEqual(cfg.condition_limit, 500.0)


if __name__ == "__main__":
    unittest.main()
