#!/usr/bin/env python3
"""
Probe HTTP Client
Shared requests session used by every probe worker. Transport failures are
returned as None instead of raised, so a dead host never aborts a run.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import ProbeConfig


logger = logging.getLogger('ProbeHTTPClient')


@dataclass
class ProbeResponse:
    """Status and body of a completed probe request"""
    url: str
    status_code: int
    text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx statuses"""
        return 200 <= self.status_code < 300


class ProbeHTTPClient:
    """
    requests.Session wrapper with:
    - Per-request (connect, read) timeouts plus a wall-clock deadline
    - Body reads capped at max_body_bytes
    - Connection pool sized to the worker pool
    - Optional urllib3 retry on connection errors
    """

    def __init__(self, config: Optional[ProbeConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client

        Args:
            config: Probe configuration (timeouts, pool size, user agent, retries)
            session: Pre-built session, mainly for tests
        """
        self.config = config or ProbeConfig()
        self.timeout = self.config.timeout

        if session is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=self.config.retries,
                connect=self.config.retries,
                read=0,
                status=0,
                backoff_factor=0.5,
                allowed_methods=["GET", "PUT"],
                raise_on_status=False,
            )
            adapter = HTTPAdapter(
                max_retries=retry_strategy,
                pool_connections=self.config.max_workers,
                pool_maxsize=self.config.max_workers,
            )
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session
        self.session.headers.update({'User-Agent': self.config.user_agent})

    def send(self, request) -> Optional[ProbeResponse]:
        """
        Perform a probe request

        The whole exchange, body included, must finish within config.deadline
        seconds.

        Args:
            request: ProbeRequest (method, url, body, headers, allow_redirects)

        Returns:
            ProbeResponse, or None on any transport failure (DNS, refused,
            timeout, deadline exceeded, ...)
        """
        result = {}
        worker = threading.Thread(target=self._fetch, args=(request, result), daemon=True)
        worker.start()
        worker.join(self.config.deadline)
        if worker.is_alive():
            # Left to finish on its own; it stops at the byte cap or the next deadline check
            logger.debug(f"{request.method} {request.url} exceeded {self.config.deadline}s deadline")
            return None
        return result.get('response')

    def _fetch(self, request, result: dict):
        deadline = time.monotonic() + self.config.deadline
        try:
            response = self.session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers or None,
                timeout=self.timeout,
                allow_redirects=request.allow_redirects,
                stream=True,
            )
        except requests.RequestException as e:
            logger.debug(f"{request.method} {request.url} failed: {e}")
            return

        try:
            body = self._read_body(response, deadline)
        except requests.RequestException as e:
            # Body read can still time out or be cut off after the headers arrive
            logger.debug(f"{request.method} {request.url} body read failed: {e}")
            return
        finally:
            response.close()

        if body is None:
            logger.debug(f"{request.method} {request.url} body exceeded {self.config.deadline}s deadline")
            return

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        result['response'] = ProbeResponse(
            url=request.url,
            status_code=response.status_code,
            text=self._decode(body, response.encoding),
            headers=dict(response.headers),
        )

    def _read_body(self, response, deadline: float) -> Optional[bytes]:
        """Up to max_body_bytes of the body, or None once the deadline passes"""
        limit = self.config.max_body_bytes
        chunks = []
        size = 0
        for chunk in response.iter_content(chunk_size=1024):
            if time.monotonic() > deadline:
                return None
            chunks.append(chunk)
            size += len(chunk)
            if size >= limit:
                break
        return b"".join(chunks)[:limit]

    @staticmethod
    def _decode(body: bytes, encoding: Optional[str]) -> str:
        try:
            return body.decode(encoding or 'utf-8', errors='replace')
        except LookupError:
            return body.decode('utf-8', errors='replace')

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
