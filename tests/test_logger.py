import logging
import os
import tempfile
import unittest

from pyskycheck.logger import (
    TRACE, ColoredFormatter, LogContext, LoggerConfig, get_logger, setup_logger,
    setup_logger_from_config
)


class TestLogger(unittest.TestCase):

    def tearDown(self):
        logger = logging.getLogger("pyskycheck")
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        logger.setLevel(logging.NOTSET)

    def test_trace_level(self):
        self.assertEqual(TRACE, 5)
        self.assertEqual(logging.getLevelName(TRACE), "TRACE")

    def test_file_logging(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "integrity.log")
            logger = setup_logger("pyskycheck", level="DEBUG", log_file=path, console=False)
            get_logger("pyskycheck.validation.consensus").debug("excluded magnetometer")
            for handler in logger.handlers:
                handler.flush()
                handler.close()
            with open(path) as f:
                text = f.read()
        self.assertIn("excluded magnetometer", text)
        self.assertIn("DEBUG", text)

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            setup_logger("pyskycheck", level="VERBOSE", console=False)

    def test_log_context_restores_level(self):
        logger = logging.getLogger("pyskycheck.test_context")
        logger.setLevel(logging.WARNING)
        with LogContext(logger, "TRACE") as inner:
            self.assertEqual(inner.level, TRACE)
        self.assertEqual(logger.level, logging.WARNING)

    def test_colored_formatter_leaves_record_untouched(self):
        record = logging.LogRecord("pyskycheck", logging.WARNING, __file__, 1, "spoofing", None, None)
        text = ColoredFormatter('%(levelname)s %(message)s').format(record)
        self.assertIn("\033[33m", text)
        self.assertEqual(record.levelname, "WARNING")

    def test_config_module_levels(self):
        config = LoggerConfig()
        config.configure_from_dict({
            'default_level': 'WARNING',
            'console': False,
            'module_levels': {'pyskycheck.celestial.solar': 'DEBUG'},
        })
        self.assertEqual(config.get_level_for_module('pyskycheck.celestial.solar'), 'DEBUG')
        self.assertEqual(config.get_level_for_module('pyskycheck.validation'), 'WARNING')
        root = config.setup_all_loggers()
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual(logging.getLogger('pyskycheck.celestial.solar').level, logging.DEBUG)

    def test_setup_from_config(self):
        root = setup_logger_from_config({'default_level': 'ERROR', 'console': True})
        self.assertEqual(root.name, "pyskycheck")
        self.assertEqual(root.level, logging.ERROR)
        self.assertEqual(len(root.handlers), 1)


if __name__ == '__main__':
    unittest.main()
