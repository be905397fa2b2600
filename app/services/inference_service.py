# app/services/inference_service.py
import logging
from typing import Optional

import httpx

from app.core.exceptions import InferenceError

logger = logging.getLogger(__name__)

QA_API = "/api/get_qa"


class InferenceService:
    """
    Thin client for the inference server.

    One blocking POST per call, no retries. The response body is returned
    as text and stored verbatim by the caller.
    """

    def __init__(self, base_url: Optional[str], client: Optional[httpx.Client] = None):
        self.base_url = (base_url or "").strip()
        self._client = client

    def _post(self, url: str, body: dict) -> httpx.Response:
        headers = {"Content-Type": "application/json"}
        if self._client is not None:
            return self._client.post(url, json=body, headers=headers)
        with httpx.Client() as client:
            return client.post(url, json=body, headers=headers)

    def _build_url(self, api: str) -> httpx.URL:
        # api is a path on the configured server, it may never move the request elsewhere
        if not api or not api.startswith("/") or api.startswith("//"):
            raise InferenceError(f"invalid inference api path: {api!r}")
        try:
            base = httpx.URL(self.base_url)
            url = httpx.URL(self.base_url + api)
        except httpx.InvalidURL as e:
            raise InferenceError(f"invalid inference url: {e}") from e
        if (url.scheme, url.userinfo, url.host, url.port) != (base.scheme, base.userinfo, base.host, base.port):
            raise InferenceError(f"inference api path changes the target host: {api!r}")
        return url

    def invoke(self, api: str, body: dict) -> str:
        if not self.base_url:
            raise InferenceError("inference server host is not configured")
        url = self._build_url(api)
        try:
            resp = self._post(url, body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("inference server returned %s for %s", e.response.status_code, url)
            raise InferenceError(f"inference server returned {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("failed to call inference server %s: %s", url, e)
            raise InferenceError() from e
        logger.debug("inference result %s", resp.text)
        return resp.text

    def analyze(self, markdown: str, api: str) -> str:
        return self.invoke(api, {"data": markdown or ""})

    def ask(self, markdown: str, question: str, api: str = QA_API) -> str:
        return self.invoke(api or QA_API, {"input": markdown or "", "question": question})
