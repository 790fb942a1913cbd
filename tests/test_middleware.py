import unittest

from fastapi.testclient import TestClient

from inventory_api.application import create_app
from inventory_api.config import Settings


def _client(**overrides):
    values = {
        "DATABASE_URL": "sqlite:///:memory:",
        "RATE_LIMIT_ENABLED": False,
    }
    values.update(overrides)
    app = create_app(Settings(_env_file=None, **values), configure_logging=False)
    return TestClient(app)


class HealthTest(unittest.TestCase):
    def test_health_check(self):
        response = _client().get("/health")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "API is running")
        self.assertIn("timestamp", body)


class RoutingTest(unittest.TestCase):
    def test_unknown_route(self):
        client = _client()
        for method, path in (("GET", "/nope"), ("POST", "/api/unknown"), ("POST", "/health")):
            with self.subTest(method=method, path=path):
                response = client.request(method, path)
                self.assertEqual(response.status_code, 404)
                self.assertEqual(
                    response.json(), {"success": False, "message": "Route not found"}
                )

    def test_custom_prefix(self):
        client = _client(API_PREFIX="/v2/items")
        self.assertEqual(client.get("/v2/items").status_code, 200)
        self.assertEqual(client.get("/api/products").status_code, 404)


class HeadersTest(unittest.TestCase):
    def test_security_headers(self):
        response = _client().get("/health")

        self.assertEqual(response.headers["x-content-type-options"], "nosniff")
        self.assertEqual(response.headers["x-frame-options"], "SAMEORIGIN")
        self.assertEqual(response.headers["referrer-policy"], "no-referrer")
        self.assertIn("strict-transport-security", response.headers)

    def test_process_time_header(self):
        response = _client().get("/health")
        self.assertIn("x-process-time", response.headers)

    def test_cors_allows_any_origin_by_default(self):
        response = _client().get("/health", headers={"Origin": "https://shop.example.com"})
        self.assertEqual(response.headers["access-control-allow-origin"], "*")

    def test_cors_preflight(self):
        response = _client().options(
            "/api/products",
            headers={
                "Origin": "https://shop.example.com",
                "Access-Control-Request-Method": "PATCH",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("PATCH", response.headers["access-control-allow-methods"])

    def test_cors_restricted_origins(self):
        client = _client(CORS_ORIGINS="https://admin.example.com")
        allowed = client.get("/health", headers={"Origin": "https://admin.example.com"})
        denied = client.get("/health", headers={"Origin": "https://evil.example.com"})

        self.assertEqual(
            allowed.headers["access-control-allow-origin"], "https://admin.example.com"
        )
        self.assertNotIn("access-control-allow-origin", denied.headers)


class BodySizeLimitTest(unittest.TestCase):
    def test_oversized_body_is_rejected(self):
        client = _client(MAX_BODY_BYTES=64)

        response = client.post(
            "/api/products",
            json={
                "name": "Big",
                "description": "x" * 200,
                "stock_quantity": 1,
                "low_stock_threshold": 1,
            },
        )

        self.assertEqual(response.status_code, 413)
        self.assertEqual(
            response.json(), {"success": False, "message": "Request body too large"}
        )
        self.assertEqual(client.get("/api/products").json()["count"], 0)

    def test_streamed_body_over_the_limit_is_rejected(self):
        client = _client(MAX_BODY_BYTES=64)

        def chunks():
            yield b'{"name": "Big", "description": "'
            yield b"x" * 100
            yield b'", "stock_quantity": 1, "low_stock_threshold": 1}'

        response = client.post(
            "/api/products",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(response.status_code, 413)
        self.assertEqual(
            response.json(), {"success": False, "message": "Request body too large"}
        )
        self.assertEqual(client.get("/api/products").json()["count"], 0)

    def test_small_body_passes(self):
        client = _client(MAX_BODY_BYTES=1024)
        response = client.post(
            "/api/products",
            json={
                "name": "Small",
                "description": "Fits",
                "stock_quantity": 1,
                "low_stock_threshold": 1,
            },
        )
        self.assertEqual(response.status_code, 201)


class RateLimitTest(unittest.TestCase):
    def _limited_client(self, limit=2):
        return _client(
            RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX=limit, RATE_LIMIT_WINDOW_SECONDS=60
        )

    def test_requests_over_the_limit_are_rejected(self):
        client = self._limited_client()

        statuses = [client.get("/api/products").status_code for _ in range(3)]

        self.assertEqual(statuses, [200, 200, 429])
        response = client.get("/api/products")
        self.assertEqual(response.status_code, 429)
        self.assertEqual(
            response.json(),
            {"success": False, "message": "Too many requests, please try again later."},
        )
        self.assertGreaterEqual(int(response.headers["retry-after"]), 1)
        self.assertEqual(response.headers["x-content-type-options"], "nosniff")

    def test_ceiling_is_shared_across_routes(self):
        client = self._limited_client()

        statuses = [
            client.get("/api/products").status_code,
            client.get("/api/products/low-stock").status_code,
            client.get("/api/products/low-stock").status_code,
            client.post("/api/products", json={}).status_code,
        ]

        self.assertEqual(statuses, [200, 200, 429, 429])

    def test_health_is_exempt(self):
        client = self._limited_client(limit=1)
        self.assertEqual(client.get("/api/products").status_code, 200)
        self.assertEqual(client.get("/api/products").status_code, 429)

        statuses = {client.get("/health").status_code for _ in range(3)}

        self.assertEqual(statuses, {200})

    def test_disabled_limiter_lets_everything_through(self):
        client = _client(RATE_LIMIT_ENABLED=False, RATE_LIMIT_MAX=1)
        statuses = {client.get("/api/products").status_code for _ in range(5)}
        self.assertEqual(statuses, {200})


if __name__ == "__main__":
    unittest.main()
