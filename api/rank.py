"""Vercel serverless function for ranking leaderboards.

A leaderboard arrives as JSON ``{"url": ..., "output": ...}`` or as a
multipart upload with a ``file`` field and optional ``filename`` and
``output`` fields. ``output`` picks the response:

    json      ranked competitors, tie groups and statistics (default)
    xlsx      the sorted leaderboard workbook, tied players in red
    detailed  the workbook with every event score
    summary   the one-sheet statistics workbook

Failures map to a status by cause:

    400  malformed request, or a leaderboard the parser cannot read
    415  no parser recognises the leaderboard
    422  the leaderboard parsed but its competitors cannot be ranked
    502  the leaderboard URL could not be downloaded
"""

import base64
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import leaderboard modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from leaderboard.analyze import (
    AnalysisError,
    AnalysisResult,
    UnknownFormatError,
    UnrankableLeaderboardError,
    analyze_leaderboard,
)
from leaderboard.render import (
    build_detailed_workbook,
    build_leaderboard_workbook,
    build_summary_workbook,
    workbook_to_bytes,
)

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": "Content-Disposition, X-Tied-Players",
}

WORKBOOK_OUTPUTS = {
    "xlsx": (build_leaderboard_workbook, "sorted_leaderboard.xlsx"),
    "detailed": (build_detailed_workbook, "detailed_leaderboard.xlsx"),
    "summary": (build_summary_workbook, "leaderboard_summary.xlsx"),
}
OUTPUT_FORMATS = ("json", *WORKBOOK_OUTPUTS)


class RequestError(Exception):
    """The request is malformed; nothing was fetched or ranked."""
    pass


class FetchError(AnalysisError):
    """The leaderboard URL could not be downloaded."""
    pass


# Most specific first
ERROR_STATUSES = [
    (RequestError, 400),
    (FetchError, 502),
    (UnknownFormatError, 415),
    (UnrankableLeaderboardError, 422),
    (AnalysisError, 400),
]


@dataclass
class RankRequest:
    """What to rank and how to return it."""
    output: str
    url: str | None = None
    source: str | None = None
    content: bytes | None = None

    def load(self) -> tuple[str, bytes]:
        """Return (source, content), downloading the URL if one was given."""
        if self.url is not None:
            return fetch_url(self.url)
        return self.source, self.content


def handler(request):
    """Handle incoming requests to rank a leaderboard."""
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return error_response("Method not allowed. Use POST.", 405)

    try:
        rank_request = read_request(request)
        source, content = rank_request.load()
        result = analyze_leaderboard(source, content)
        return leaderboard_response(result, rank_request.output)
    except (RequestError, AnalysisError) as e:
        status = status_for(e)
        logger.warning("Rejected leaderboard request (%d): %s", status, e)
        return error_response(str(e), status)
    except Exception as e:
        logger.exception("Unexpected error while ranking leaderboard")
        return error_response(f"Internal error: {e}", 500)


def read_request(request) -> RankRequest:
    """Pull the leaderboard source and requested output out of a request.

    Raises:
        RequestError: If the body is not usable
    """
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            data = json.loads(request.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RequestError(f"Invalid JSON: {e}") from e
        if not isinstance(data, dict) or not data.get("url"):
            raise RequestError("Missing 'url' in request body")
        return RankRequest(output=_check_output(data.get("output")), url=data["url"])

    if "multipart/form-data" in content_type:
        upload = request.files.get("file")
        if not upload:
            raise RequestError("Missing 'file' in form data")
        return RankRequest(
            output=_check_output(request.form.get("output")),
            source=request.form.get("filename") or upload.filename or "upload",
            content=upload.read(),
        )

    raise RequestError(f"Unsupported content type: {content_type}")


def _check_output(output: str | None) -> str:
    output = (output or "json").lower()
    if output not in OUTPUT_FORMATS:
        raise RequestError(
            f"Unknown output {output!r}; choose one of: {', '.join(OUTPUT_FORMATS)}"
        )
    return output


def fetch_url(url: str) -> tuple[str, bytes]:
    """Download a leaderboard.

    Returns (source_identifier, content_bytes).
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise RequestError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=30.0) as client:
            response = client.get(url)
            response.raise_for_status()
            return url, response.content
    except httpx.HTTPStatusError as e:
        raise FetchError(f"HTTP error fetching URL: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise FetchError(f"Error fetching URL: {e}") from e


def status_for(error: Exception) -> int:
    for error_class, status in ERROR_STATUSES:
        if isinstance(error, error_class):
            return status
    return 500


def leaderboard_response(result: AnalysisResult, output: str) -> dict:
    """Return the ranked leaderboard as JSON or as a workbook download."""
    tied = {"X-Tied-Players": str(result.leaderboard.stats.tied_count)}
    if output == "json":
        return create_response(result.to_dict(), headers=tied)

    build, filename = WORKBOOK_OUTPUTS[output]
    content = workbook_to_bytes(build(result.leaderboard))
    response = create_response(
        base64.b64encode(content).decode("ascii"),
        headers={
            **tied,
            "Content-Type": XLSX_MEDIA_TYPE,
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )
    response["isBase64Encoded"] = True
    return response


def error_response(message: str, status: int) -> dict:
    return create_response({"error": message}, status=status)


def create_response(body, status: int = 200, headers: dict | None = None) -> dict:
    """Create a response object for Vercel."""
    response_headers = {"Content-Type": "application/json", **CORS_HEADERS}
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
