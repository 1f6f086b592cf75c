"""
Test Suite for Utilities

Tests:
- SeedManager
- SampleWriter
- LoggerConfig
"""

import json
import logging
from datetime import date

import pandas as pd
import pytest

from anondata.config import DEFAULT_SEED
from anondata.utils import LoggerConfig, SampleWriter, SeedManager


class TestSeedManager:
    """Test reproducible random sources"""

    def test_default_seed(self):
        assert SeedManager().get_seed() == DEFAULT_SEED

    def test_same_seed_same_stream(self):
        first = SeedManager(5).create_generator()
        second = SeedManager(5).create_generator()

        assert first.random() == second.random()

    def test_reset_seed(self):
        manager = SeedManager(5)
        value = manager.create_generator(9).random()

        assert manager.reset_seed().random() != value
        assert manager.get_seed() == 5

    def test_derive_seed(self):
        seed = SeedManager.derive_seed(SeedManager(1).create_generator())

        assert 0 <= seed < 2**32
        assert seed == SeedManager.derive_seed(SeedManager(1).create_generator())


class TestSampleWriter:
    """Test sample export"""

    def test_to_frame(self):
        frame = SampleWriter.to_frame([1, "a", date(2020, 1, 1)], column="sample")

        assert list(frame.columns) == ["sample"]
        assert frame["sample"].tolist() == [1, "a", "datetime.date(2020, 1, 1)"]

    def test_csv(self, tmp_path):
        path = tmp_path / "out" / "values.csv"
        SampleWriter.write([1, 2, 3], path)

        assert pd.read_csv(path)["value"].tolist() == [1, 2, 3]

    def test_json(self, tmp_path):
        path = tmp_path / "values.json"
        SampleWriter.write(["x", "y"], path)

        assert json.loads(path.read_text()) == [{"value": "x"}, {"value": "y"}]

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported file format"):
            SampleWriter.write([1], tmp_path / "values.parquet")


class TestLoggerConfig:
    """Test logging setup"""

    def test_console_handler(self):
        logger = LoggerConfig.setup_logger(name="anondata.test", level=logging.DEBUG)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "anondata.log"
        logger = LoggerConfig.setup_logger(name="anondata.test.file", log_file=log_file, log_to_console=False)

        logger.info("written")
        for handler in logger.handlers:
            handler.flush()

        assert "written" in log_file.read_text()

    def test_setup_is_idempotent(self):
        LoggerConfig.setup_logger(name="anondata.test.repeat")
        logger = LoggerConfig.setup_logger(name="anondata.test.repeat")

        assert len(logger.handlers) == 1

    def test_get_logger_configures_once(self):
        logger = LoggerConfig.get_logger("anondata.test.fresh")

        assert len(logger.handlers) == 1
        assert LoggerConfig.get_logger("anondata.test.fresh") is logger
        assert len(logger.handlers) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
