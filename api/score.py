"""Vercel serverless function for scoring attempts and ranking competitors."""

import json
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import diabolo modules
sys.path.insert(0, str(Path(__file__).parent.parent))

# Import ranking views to register them
from diabolo.ranking import technical  # noqa: F401
from diabolo.ranking import performance  # noqa: F401

from diabolo.config import configure_logging, load_settings
from diabolo.engine import build_description, build_identifier, compute_final_score
from diabolo.models import SavedCompetitor, format_score
from diabolo.ranking import get_all_ranking_views
from diabolo.ranking.final import JudgeAssignment, calculate_final_rankings
from diabolo.rules import UnknownSelectionError
from diabolo.selection import Selection

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("diabolo.api")


class RequestError(Exception):
    """Error in the request that should be reported back to the caller."""
    pass


def handler(request):
    """Handle incoming scoring requests.

    Accepts POST with a JSON body whose "action" is one of:
    - "score": {"attempt": {"trick", "tier", "level", "features", "grade", "deductions"}}
    - "rankings": {"competitors": [...]} or {"url": "https://..."}, optional "order"
      ("rank" or "submission")
    - "final-rankings": {"assignments": [...]}, optional "view"

    Returns JSON with the computed score or rankings.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        data = json.loads(request.body.decode("utf-8"))
        action = data.get("action")

        if action == "score":
            body = score_attempt(data.get("attempt") or {})
        elif action == "rankings":
            body = rank_competitors(data)
        elif action == "final-rankings":
            body = rank_final(data)
        else:
            return create_response(
                {"error": f"Unknown action: {action!r}"},
                status=400,
            )

        return create_response(body)

    except (RequestError, UnknownSelectionError) as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        logger.exception("Unhandled error")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def score_attempt(attempt: dict) -> dict:
    selection = Selection.from_dict(attempt)
    final_score = compute_final_score(selection)
    return {
        "final_score": final_score,
        "display": format_score(final_score),
        "identifier": build_identifier(selection),
        "description": build_description(selection),
    }


def rank_competitors(data: dict) -> dict:
    if data.get("url"):
        competitors_data = fetch_competitors(data["url"])
    else:
        competitors_data = data.get("competitors")
    if not isinstance(competitors_data, list):
        raise RequestError("Missing 'competitors' list or 'url' in request body")

    try:
        competitors = [SavedCompetitor.from_dict(item) for item in competitors_data]
    except (KeyError, TypeError, ValueError) as e:
        raise RequestError(f"Invalid competitor record: {e}") from e

    order = data.get("order", "rank")
    if order not in ("rank", "submission"):
        raise RequestError(f"Unknown order: {order!r}")

    results = {}
    for view in get_all_ranking_views():
        if order == "submission":
            result = view.submission_order(competitors)
        else:
            result = view.rank(competitors)
        results[view.category] = result.to_dict()
    return {"rankings": results}


def rank_final(data: dict) -> dict:
    try:
        assignments = [JudgeAssignment.from_dict(item) for item in data.get("assignments", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise RequestError(f"Invalid judge assignment: {e}") from e

    view = data.get("view", "final")
    try:
        return calculate_final_rankings(assignments).to_dict(view)
    except (KeyError, ValueError) as e:
        raise RequestError(f"Unknown final ranking view: {view!r}") from e


def fetch_competitors(url: str) -> list:
    """Fetch a saved-competitors JSON export from another judging station."""
    # Validate URL
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise RequestError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=settings.fetch_timeout) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        raise RequestError(f"HTTP error fetching URL: {e.response.status_code}")
    except httpx.RequestError as e:
        raise RequestError(f"Error fetching URL: {e}")
    except json.JSONDecodeError as e:
        raise RequestError(f"URL did not return JSON: {e}")


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
