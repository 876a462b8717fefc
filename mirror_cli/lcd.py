from __future__ import annotations

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from .cli_shared import OpError

log = logging.getLogger(__name__)

BROADCAST_MODES = ("block", "sync", "async")


def _http_request(
    *,
    method: str,
    url: str,
    headers: dict[str, str],
    body: bytes | None = None,
    timeout_seconds: int = 30,
) -> tuple[int, dict[str, str], bytes]:
    req = Request(url, data=body, method=str(method).upper())
    for k, v in headers.items():
        req.add_header(k, v)
    try:
        with urlopen(req, timeout=timeout_seconds) as resp:
            status = getattr(resp, "status", 200)
            hdrs = {k.lower(): v for k, v in dict(resp.headers).items()}
            data = resp.read()
            return int(status), hdrs, data
    except HTTPError as e:
        hdrs = {k.lower(): v for k, v in dict(e.headers).items()}
        data = e.read() if hasattr(e, "read") else b""
        return int(getattr(e, "code", 0) or 0), hdrs, data
    except (OSError, HTTPException) as e:
        raise OpError(f"http request failed: {e}") from e


def _json_or_error(*, raw: bytes, label: str) -> Any:
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except Exception as e:
        raise OpError(f"invalid JSON from {label}: {e}; body={text}") from e


def _lcd_error_message(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")
    try:
        doc = json.loads(text)
    except Exception:
        return text
    if isinstance(doc, dict):
        return str(doc.get("error") or doc.get("message") or text)
    return text


class LCDClient:
    """Minimal LCD REST client: contract store queries, account lookup, tx broadcast."""

    def __init__(self, url: str, chain_id: str, *, timeout_seconds: int = 30) -> None:
        self.url = str(url).rstrip("/")
        self.chain_id = chain_id
        self.timeout_seconds = timeout_seconds

    def _request(self, method: str, path: str, *, body_obj: Any = None, label: str) -> Any:
        url = f"{self.url}{path}"
        body = None
        headers = {"Accept": "application/json"}
        if body_obj is not None:
            body = json.dumps(body_obj, separators=(",", ":")).encode("utf-8")
            headers["Content-Type"] = "application/json"
        log.debug("%s %s", method, url)
        status, _hdrs, raw = _http_request(
            method=method,
            url=url,
            headers=headers,
            body=body,
            timeout_seconds=self.timeout_seconds,
        )
        if status < 200 or status >= 300:
            raise OpError(f"{label} failed: status={status} error={_lcd_error_message(raw)}")
        return _json_or_error(raw=raw, label=label)

    def contract_query(self, contract: str, query_msg: dict[str, Any]) -> Any:
        qs = urlencode({"query_msg": json.dumps(query_msg, separators=(",", ":"))})
        doc = self._request("GET", f"/wasm/contracts/{quote(contract)}/store?{qs}", label="contract query")
        if not isinstance(doc, dict) or "result" not in doc:
            raise OpError("invalid contract query response: missing result")
        return doc["result"]

    def account_info(self, address: str) -> tuple[int, int]:
        doc = self._request("GET", f"/auth/accounts/{quote(address)}", label="account lookup")
        result = doc.get("result") if isinstance(doc, dict) else None
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, dict):
            raise OpError(f"invalid account response for {address}")
        try:
            return int(value.get("account_number") or 0), int(value.get("sequence") or 0)
        except (TypeError, ValueError) as e:
            raise OpError(f"invalid account response for {address}: {e}") from e

    def broadcast(self, signed_tx: dict[str, Any], *, mode: str = "block") -> dict[str, Any]:
        if mode not in BROADCAST_MODES:
            raise OpError(f"unsupported broadcast mode: {mode}")
        tx = signed_tx.get("value", signed_tx)
        doc = self._request("POST", "/txs", body_obj={"tx": tx, "mode": mode}, label="tx broadcast")
        if not isinstance(doc, dict):
            raise OpError("invalid broadcast response: expected object")
        return doc
