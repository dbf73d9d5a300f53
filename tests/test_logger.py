"""Tests for logging utilities."""

import logging
from bullseye.utils.logger import create_session_log_file, setup_logger


class TestLogger:
    """Test logger setup."""

    def test_setup_logger(self):
        """Test console handler and level."""
        logger = setup_logger('bullseye.test_console', logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup(self):
        """Test handlers are not duplicated."""
        setup_logger('bullseye.test_repeat')
        logger = setup_logger('bullseye.test_repeat')
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        """Test logging to a session file."""
        log_file = create_session_log_file(str(tmp_path / "logs"))
        assert log_file.startswith(str(tmp_path / "logs"))
        logger = setup_logger('bullseye.test_file', log_file=log_file)
        logger.info("detected 1 marker")
        for handler in logger.handlers:
            handler.flush()
        with open(log_file) as f:
            assert "detected 1 marker" in f.read()

    def test_repeated_setup_with_file(self, tmp_path):
        """Test a later file handler joins the existing console handler."""
        setup_logger('bullseye.test_repeat_file')
        logger = setup_logger('bullseye.test_repeat_file', log_file=str(tmp_path / "run.log"))
        assert len(logger.handlers) == 2
        assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1
        for handler in logger.handlers:
            handler.close()
