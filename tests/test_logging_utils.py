import logging
import unittest

from utils import logging_utils
from utils.logging_utils import EnsureTagFilter, build_logging_config, get_tagged_logger


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        self.records.append(record)


class TestLoggingUtils(unittest.TestCase):
    def test_build_logging_config_routes_by_level(self):
        cfg = build_logging_config(service_name="ecospace-test")
        self.assertEqual(set(cfg["handlers"]), {"stdout", "stderr"})
        self.assertEqual(cfg["handlers"]["stderr"]["level"], "WARNING")
        self.assertIn("stdout_max_info", cfg["handlers"]["stdout"]["filters"])
        self.assertEqual(cfg["filters"]["service_name"]["service_name"], "ecospace-test")

    def test_get_tagged_logger_injects_tag(self):
        handler = _ListHandler()
        logger = get_tagged_logger("ecospace.forecast_generator", tag="forecast")
        base_logger = logger.logger
        base_logger.setLevel(logging.DEBUG)
        base_logger.addHandler(handler)
        base_logger.propagate = False
        try:
            logger.info("generated")
        finally:
            base_logger.removeHandler(handler)
            base_logger.propagate = True

        self.assertEqual(handler.records[-1].tag, "forecast")

    def test_default_tag_is_last_name_segment(self):
        logger = get_tagged_logger("ecospace.api")
        self.assertEqual(logger.extra["tag"], "api")

    def test_ensure_tag_filter_fills_missing_tag(self):
        record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, "hi", None, None)
        self.assertTrue(EnsureTagFilter().filter(record))
        self.assertEqual(record.tag, "access")

    def test_setup_logging_override_applies_filters(self):
        root = logging.getLogger()
        orig_handlers = root.handlers[:]
        orig_level = root.level
        try:
            logging_utils.setup_logging(level="INFO", service_name="ecospace-test", override_existing=True)
            self.assertTrue(
                any(
                    any(f.__class__.__name__ == "ServiceNameFilter" for f in h.filters)
                    for h in root.handlers
                )
            )
        finally:
            root.handlers = orig_handlers
            root.setLevel(orig_level)
            logging_utils._CONFIGURED = False


if __name__ == "__main__":
    unittest.main()
