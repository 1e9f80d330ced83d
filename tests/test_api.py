"""Tests for the scoring API handler."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest
from tests.conftest import make_performance, make_technical

from api.score import handler


def make_request(data=None, method="POST", content_type="application/json", body=None):
    request = MagicMock()
    request.method = method
    request.headers = {"content-type": content_type}
    request.body = body if body is not None else json.dumps(data or {}).encode("utf-8")
    return request


def call(data, **kwargs):
    response = handler(make_request(data, **kwargs))
    return response["statusCode"], json.loads(response["body"])


@pytest.fixture
def competitors():
    return [
        make_technical("Alice", 35, submitted_at="2025-03-01T10:00:00").to_dict(),
        make_technical("Bob", 45, submitted_at="2025-03-01T10:05:00").to_dict(),
        make_performance("Eve", {"control": 5}, submitted_at="2025-03-01T11:00:00").to_dict(),
    ]


class TestRequestHandling:
    def test_options(self):
        response = handler(make_request(method="OPTIONS"))
        assert response["statusCode"] == 204
        assert response["headers"]["Access-Control-Allow-Methods"] == "POST, OPTIONS"

    def test_get_not_allowed(self):
        status, body = call({}, method="GET")
        assert status == 405

    def test_wrong_content_type(self):
        status, body = call({}, content_type="text/plain")
        assert status == 400
        assert "Unsupported content type" in body["error"]

    def test_invalid_json(self):
        status, body = call(None, body=b"{not json")
        assert status == 400
        assert "Invalid JSON" in body["error"]

    def test_unknown_action(self):
        status, body = call({"action": "export"})
        assert status == 400
        assert "Unknown action" in body["error"]

    def test_unexpected_error_is_500(self):
        with patch("api.score.score_attempt", side_effect=RuntimeError("boom")):
            status, body = call({"action": "score"})
        assert status == 500
        assert "boom" in body["error"]


class TestScoreAction:
    def test_full_attempt(self):
        status, body = call({"action": "score", "attempt": {
            "trick": "Toss/High",
            "tier": "2D",
            "level": 2,
            "features": ["Turn 360"],
            "grade": 1,
            "deductions": ["Unintentional Drop"],
        }})
        assert status == 200
        assert body["final_score"] == pytest.approx(6.84)
        assert body["display"] == "6.84"
        assert body["identifier"] == "2TL2T1E+1Drop"
        assert body["description"] == "T(2D) ×L2 ×T1 ×E+1 +Drop"

    def test_empty_attempt(self):
        status, body = call({"action": "score"})
        assert status == 200
        assert body["final_score"] == 0
        assert body["identifier"] == ""

    def test_unknown_trick(self):
        status, body = call({"action": "score", "attempt": {"trick": "Cradle", "tier": "2D"}})
        assert status == 400
        assert "Unknown trick" in body["error"]

    @pytest.mark.parametrize("field,value", [("grade", "high"), ("level", "two"), ("level", [2])])
    def test_non_integer_level_or_grade(self, field, value):
        attempt = {"trick": "Toss/High", "tier": "2D", field: value}
        status, body = call({"action": "score", "attempt": attempt})
        assert status == 400
        assert "Unknown" in body["error"]


class TestRankingsAction:
    def test_ranked(self, competitors):
        status, body = call({"action": "rankings", "competitors": competitors})
        assert status == 200
        technical = body["rankings"]["technical"]["standings"]
        assert [s["name"] for s in technical] == ["Bob", "Alice"]
        assert technical[0]["score"] == pytest.approx(70)
        performance = body["rankings"]["performance"]["standings"]
        assert [s["name"] for s in performance] == ["Eve"]

    def test_submission_order(self, competitors):
        status, body = call({"action": "rankings", "competitors": competitors, "order": "submission"})
        technical = body["rankings"]["technical"]
        assert technical["ordered_by"] == "submission"
        assert [s["name"] for s in technical["standings"]] == ["Alice", "Bob"]

    def test_unknown_order(self, competitors):
        status, body = call({"action": "rankings", "competitors": competitors, "order": "name"})
        assert status == 400

    def test_missing_competitors(self):
        status, body = call({"action": "rankings"})
        assert status == 400
        assert "competitors" in body["error"]

    def test_invalid_competitor(self):
        status, body = call({"action": "rankings", "competitors": [{"name": "Alice"}]})
        assert status == 400
        assert "Invalid competitor record" in body["error"]

    def test_fetch_from_url(self, competitors):
        with patch("api.score.httpx.Client") as mock_client_cls:
            client = mock_client_cls.return_value.__enter__.return_value
            client.get.return_value.json.return_value = competitors
            status, body = call({"action": "rankings", "url": "https://example.com/saved.json"})

        assert status == 200
        client.get.assert_called_once_with("https://example.com/saved.json")
        assert [s["name"] for s in body["rankings"]["technical"]["standings"]] == ["Bob", "Alice"]

    def test_fetch_error(self):
        with patch("api.score.httpx.Client") as mock_client_cls:
            client = mock_client_cls.return_value.__enter__.return_value
            client.get.side_effect = httpx.ConnectError("connection refused")
            status, body = call({"action": "rankings", "url": "https://example.com/saved.json"})

        assert status == 400
        assert "Error fetching URL" in body["error"]

    def test_invalid_url_scheme(self):
        status, body = call({"action": "rankings", "url": "ftp://example.com/saved.json"})
        assert status == 400
        assert "Invalid URL scheme" in body["error"]


class TestFinalRankingsAction:
    def setup_method(self):
        self.assignments = [
            {"competitor_name": "Ben", "tech1": 10, "tech2": 10, "tech3": 10, "perf1": 20, "perf2": 22},
            {"competitor_name": "Ana", "tech1": 20, "tech2": 25, "tech3": 15, "perf1": 26, "perf2": 26},
        ]

    def test_final(self):
        status, body = call({"action": "final-rankings", "assignments": self.assignments})
        assert status == 200
        assert body["highest_technical_total"] == 60
        assert [s["name"] for s in body["standings"]] == ["Ana", "Ben"]
        assert body["standings"][0]["final_score"] == pytest.approx(96)

    def test_view(self):
        status, body = call({"action": "final-rankings", "assignments": self.assignments, "view": "perf2"})
        assert body["title"] == "Performance Judge 2 Rankings"

    def test_unknown_view(self):
        status, body = call({"action": "final-rankings", "assignments": self.assignments, "view": "best"})
        assert status == 400
        assert "Unknown final ranking view" in body["error"]

    def test_invalid_assignment(self):
        status, body = call({"action": "final-rankings", "assignments": [{"tech1": 5}]})
        assert status == 400
