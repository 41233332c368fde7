import unittest

from fastapi.testclient import TestClient

from eduai_api.api import actions
from eduai_api.domain.ai import AllProvidersExhausted, ProviderCallFailed
from eduai_api.main import app
from eduai_api.services.learning import generation_service as gs
from eduai_api.services.rate_limit import InMemoryRateLimitStore, RateLimiter


_ROADMAP = {
    "title": "SQL Basics",
    "months": [
        {
            "name": "Month 1",
            "weeks": [{"name": "Week 1", "weeklyGoal": "SELECT", "days": [{"day": 1, "topic": "SELECT", "task": "Query"}]}],
        }
    ],
}


class _StaticAIService:
    def __init__(self, result):
        self.result = result

    def generate_json(self, *, system_prompt: str, user_prompt: str, use_search: bool = False) -> dict:
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result

    def call_ai_model(self, prompt: str, system_prompt: str = "", json_mode: bool = False, use_search: bool = False) -> str:
        return "Sure."


class ActionRouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self._original_get_ai_service = gs._get_ai_service
        self._original_get_rate_limiter = actions._get_rate_limiter
        limiter = RateLimiter(InMemoryRateLimitStore(), window_ms=5000)
        actions._get_rate_limiter = lambda: limiter
        gs._get_ai_service = lambda: _StaticAIService(_ROADMAP)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        gs._get_ai_service = self._original_get_ai_service
        actions._get_rate_limiter = self._original_get_rate_limiter

    def test_health(self) -> None:
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_legacy_envelope_accepts_top_level_fields(self) -> None:
        response = self.client.post(
            "/api",
            json={"action": "generateRoadmap", "goal": "Learn SQL", "duration": 1, "intensity": "Beginner"},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["title"], "SQL Basics")
        self.assertEqual(body["data"]["months"][0]["weeks"][0]["days"][0]["completed"], False)

    def test_validate_url_action(self) -> None:
        response = self.client.post("/api", json={"action": "validate_url", "data": {"url": "https://kaggle.com/learn"}})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["confidence"], 90)

    def test_unknown_action_is_bad_request(self) -> None:
        response = self.client.post("/api", json={"action": "delete_everything"})

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"], "Invalid action: delete_everything")
        self.assertEqual(body["error_code"], "bad_request")

    def test_missing_fields_are_bad_request(self) -> None:
        response = self.client.post("/api", json={"action": "fetch_article", "data": {"task": "no topic"}})

        self.assertEqual(response.status_code, 400)
        self.assertIn("topic", response.json()["error"])

    def test_body_validation_error_uses_error_envelope(self) -> None:
        response = self.client.post("/api", json={"action": "validate_url", "data": None})

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error_code"], "bad_request")
        self.assertEqual(body["error"], "Missing or invalid fields: data")

    def test_unknown_route_uses_error_envelope(self) -> None:
        response = self.client.get("/api/nope")

        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])
        self.assertEqual(response.json()["error"], "Not Found")

    def test_numeric_user_id_is_accepted(self) -> None:
        response = self.client.post(
            "/api/ai", json={"action": "validateUrl", "userId": 42, "data": {"url": "https://web.dev"}}
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["result"]["valid"])

    def test_user_action_requires_user_id(self) -> None:
        response = self.client.post("/api/ai", json={"action": "chat", "data": {"messages": []}})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "User ID required")

    def test_user_action_wraps_result(self) -> None:
        response = self.client.post(
            "/api/ai",
            json={"action": "chat", "userId": "u1", "data": {"messages": [{"role": "user", "content": "hi"}]}},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"result": {"content": "Sure."}})

    def test_second_request_within_window_is_rate_limited(self) -> None:
        payload = {"action": "validate_url", "userId": "u1", "data": {"url": "https://web.dev"}}

        first = self.client.post("/api/ai", json=payload)
        second = self.client.post("/api/ai", json=payload)
        other_user = self.client.post("/api/ai", json={**payload, "userId": "u2"})

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 429)
        self.assertEqual(second.json()["error"], "Too many requests")
        self.assertTrue(second.json()["retryable"])
        self.assertEqual(other_user.status_code, 200)

    def test_provider_failure_payload_is_structured(self) -> None:
        gs._get_ai_service = lambda: _StaticAIService(
            AllProvidersExhausted(last_error=ProviderCallFailed("mistral_http_error:503"), attempts=15)
        )

        response = self.client.post(
            "/api", json={"action": "generate_roadmap", "data": {"goal": "Learn SQL"}}, headers={"x-trace-id": "t-1"}
        )

        self.assertEqual(response.status_code, 502)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error_code"], "provider_error")
        self.assertEqual(body["trace_id"], "t-1")
        self.assertTrue(body["detail"].startswith("roadmap_generate_failed:provider_error:"))


if __name__ == "__main__":
    unittest.main()
