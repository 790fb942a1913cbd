import json
import logging
import unittest

from fastapi.testclient import TestClient

from inventory_api.application import create_app
from inventory_api.config import Settings
from inventory_api.core.logging import JsonFormatter, setup_logging


class LoggingTest(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level

    def tearDown(self):
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)

    def test_json_formatter(self):
        record = logging.LogRecord(
            "inventory_api.test", logging.WARNING, __file__, 1, "stock at %s", (3,), None
        )
        payload = json.loads(JsonFormatter().format(record))

        self.assertEqual(payload["level"], "WARNING")
        self.assertEqual(payload["logger"], "inventory_api.test")
        self.assertEqual(payload["message"], "stock at 3")
        self.assertIn("timestamp", payload)
        self.assertNotIn("product_id", payload)

    def test_json_formatter_includes_context_fields(self):
        record = logging.LogRecord(
            "inventory_api.services", logging.INFO, __file__, 1, "Added stock", (), None
        )
        record.product_id = 7
        record.quantity = 5
        record.stock_quantity = 15

        payload = json.loads(JsonFormatter().format(record))

        self.assertEqual(payload["product_id"], 7)
        self.assertEqual(payload["quantity"], 5)
        self.assertEqual(payload["stock_quantity"], 15)

    def test_request_log_carries_request_context(self):
        app = create_app(
            Settings(_env_file=None, DATABASE_URL="sqlite:///:memory:", RATE_LIMIT_ENABLED=False),
            configure_logging=False,
        )
        client = TestClient(app)

        with self.assertLogs("inventory_api.middleware.timing", level="INFO") as captured:
            client.get("/api/products")

        record = captured.records[-1]
        self.assertEqual(record.method, "GET")
        self.assertEqual(record.path, "/api/products")
        self.assertEqual(record.status_code, 200)
        self.assertGreaterEqual(record.duration_ms, 0)
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["path"], "/api/products")
        app.state.engine.dispose()

    def test_setup_logging_installs_single_handler(self):
        settings = Settings(_env_file=None, LOG_LEVEL="debug", LOG_JSON=True)

        setup_logging(settings)
        setup_logging(settings)

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)


if __name__ == "__main__":
    unittest.main()
