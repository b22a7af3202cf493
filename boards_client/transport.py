"""
HTTP transport for boards-client: one call in, one classified result out.

Transport never retries and never decodes. It sorts every call into one
of three outcomes:
  - ConnectionFailedError: no response was obtained;
  - RequestFailedError: status >= 300 (except 304), whole body read eagerly;
  - RawResult: 2xx or 304, body left open for the caller.
"""

from __future__ import annotations

import hashlib
import http.client
import json
import sys
import time
import types
import urllib.error
import urllib.parse
import urllib.request
import uuid
from dataclasses import dataclass, field

from boards_client import config
from boards_client.exceptions import (
    ConnectionFailedError,
    DecodeError,
    RequestFailedError,
    TransportError,
)

_DRAIN_CHUNK = 64 * 1024
_SENSITIVE_QUERY_KEYS = {"token", "read_token", "readtoken"}


# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SENSITIVE_QUERY_KEYS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Response:
    """Status and headers of a finished call, without the body."""

    status_code: int
    headers: object = field(default_factory=dict)


def _status_of(resp):
    status = getattr(resp, "status", None)
    if status is None:
        status = resp.code
    return status


def _release(resp):
    """Discard unread bytes, then close the underlying connection."""
    if resp is None:
        return
    try:
        while resp.read(_DRAIN_CHUNK):
            pass
    except (OSError, http.client.HTTPException):
        # The connection is unusable either way; closing below is what matters.
        pass
    finally:
        resp.close()


class RawResult:
    """Classified success: status, headers and a single-reader body stream.

    Use as a context manager, or call close(), so the connection is released.
    """

    def __init__(self, status_code, headers, body=None):
        self.status_code = status_code
        self.headers = headers if headers is not None else {}
        self._body = body
        self.closed = body is None

    @property
    def response(self):
        return Response(self.status_code, self.headers)

    @property
    def not_modified(self):
        return self.status_code == http.HTTPStatus.NOT_MODIFIED

    def read(self, amt=None):
        if self.closed:
            return b""
        if amt is None:
            return self._body.read()
        return self._body.read(amt)

    def close(self):
        if self.closed:
            return
        self.closed = True
        _release(self._body)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"RawResult(status_code={self.status_code}, closed={self.closed})"


def decode_json(result, context="response"):
    """Read, close and JSON-decode a RawResult.

    Returns None for 304 Not Modified. Raises DecodeError for an empty or
    malformed body.
    """
    with result:
        if result.not_modified:
            return None
        raw = result.read()
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(e, context=context) from e


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


def _encode_body(body):
    if body is None or body == "" or body == b"":
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body).encode("utf-8")


class Transport:
    """Executes requests against ``<url>/api/v2`` with a bearer token.

    Configuration is fixed at construction; instances hold no per-call
    state and can be shared between threads.
    """

    def __init__(self, url, token="", *, headers=None, timeout=None, opener=None):
        self._url = url.rstrip("/")
        self._api_url = self._url + config.API_URL_SUFFIX
        self._token = token or ""
        self._headers = types.MappingProxyType({**config.DEFAULT_HEADERS, **(headers or {})})
        self._timeout = timeout if timeout is not None else config.HTTP_TIMEOUT_SECONDS
        self._opener = opener or urllib.request.build_opener()

    @property
    def url(self):
        return self._url

    @property
    def api_url(self):
        return self._api_url

    @property
    def token(self):
        return self._token

    @property
    def headers(self):
        return self._headers

    @property
    def timeout(self):
        return self._timeout

    def __repr__(self):
        return f"Transport(url={self._url!r}, token={_mask_token(self._token)!r})"

    def _build_headers(self, extra, has_body):
        headers = {"User-Agent": config.USER_AGENT, **self._headers}
        if self._token:
            headers["Authorization"] = "Bearer " + self._token
        headers["X-Request-Id"] = str(uuid.uuid4())
        if has_body:
            headers["Content-Type"] = "application/json"
        # Caller headers go last so they can override any of the above.
        headers.update(extra or {})
        return headers

    def execute(self, method, path, body=None, headers=None):
        """Send one request and classify the outcome.

        *path* is relative to the API root and may carry a query string.
        Returns a RawResult on 2xx/304; raises ConnectionFailedError or
        RequestFailedError otherwise.
        """
        url = self._api_url + path
        data = _encode_body(body)
        request_headers = self._build_headers(headers, has_body=data is not None)
        request_id = request_headers.get("X-Request-Id")
        safe_url = _sanitize_url_for_log(url)
        sampled = _is_sampled_request(request_id)

        req = urllib.request.Request(url, data=data, headers=request_headers, method=method)
        start = time.perf_counter()
        if sampled:
            _log_http_event(
                phase="request",
                method=method,
                url=safe_url,
                request_id=request_id,
                timeout_seconds=self._timeout,
            )
        try:
            resp = self._opener.open(req, timeout=self._timeout)
        except urllib.error.HTTPError as e:
            # Non-2xx statuses arrive as exceptions that double as responses.
            resp = e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            cause = getattr(e, "reason", e)
            if sampled:
                _log_http_event(
                    phase="network_error",
                    method=method,
                    url=safe_url,
                    error=str(cause),
                    request_id=request_id,
                )
            raise ConnectionFailedError(cause, url=safe_url) from e

        status = _status_of(resp)
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=status,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        return self._classify(resp, status)

    def _classify(self, resp, status):
        headers = getattr(resp, "headers", None) or {}
        if status == http.HTTPStatus.NOT_MODIFIED:
            return RawResult(status, headers, resp)

        if status >= http.HTTPStatus.MULTIPLE_CHOICES:
            try:
                raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            except (OSError, http.client.HTTPException) as e:
                raise TransportError(
                    f"[ERROR] Error when reading response with code {status}: {e}"
                ) from e
            finally:
                _release(resp)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise TransportError(
                    f"[ERROR] Response with code {status} too large "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            raise RequestFailedError(status, raw, headers, reason=getattr(resp, "reason", ""))

        return RawResult(status, headers, resp)

    # Convenience verbs, mirroring the HTTP method names.

    def get(self, path, headers=None):
        return self.execute("GET", path, headers=headers)

    def post(self, path, body=None, headers=None):
        return self.execute("POST", path, body, headers)

    def patch(self, path, body=None, headers=None):
        return self.execute("PATCH", path, body, headers)

    def put(self, path, body=None, headers=None):
        return self.execute("PUT", path, body, headers)

    def delete(self, path, body=None, headers=None):
        return self.execute("DELETE", path, body, headers)
