from __future__ import annotations

import logging

import requests
from requests import Response

from .config import Credentials
from .errors import TransportError


class JiraClient:
    def __init__(self, credentials: Credentials, timeout_seconds: int = 30) -> None:
        self.credentials = credentials
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger(__name__)
        self.session = requests.Session()
        self.session.auth = (credentials.username, credentials.password)
        self.session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    def _response_body(self, resp: Response) -> str:
        return resp.text.strip()[:2000]

    def fetch_createmeta(self) -> bytes:
        """GET the create-metadata document with projects, issue types and fields expanded."""
        url = self.credentials.createmeta_url
        self.logger.info("fetching createmeta", extra={"extra": {"url": url}})
        try:
            resp = self.session.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise TransportError(f"Jira request failed: {url}: {exc}") from exc
        if resp.status_code > 299:
            raise TransportError(f"jira status: {resp.status_code} body={self._response_body(resp)}")
        self.logger.info(
            "createmeta fetched",
            extra={"extra": {"status": resp.status_code, "bytes": len(resp.content)}},
        )
        return resp.content

    def close(self) -> None:
        self.session.close()
