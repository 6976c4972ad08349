from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Mapping

import aiohttp
import structlog
import yarl

from .normalize import TransportFailure, classify_response
from .request import PurgeRequest, build_requests
from .settings import BASE_URL, CloudflareSettings
from .task_pool import KeyedTaskPool
from .zone import Zone

logger = structlog.getLogger(__name__)



class CloudflareClient:
    def __init__(
        self,
        base_url: str = BASE_URL,
        token: str | None = None,
        email: str | None = None,
        key: str | None = None,
        timeout: float | None = 30.0,
    ) -> None:
        self.base_url: yarl.URL = yarl.URL(base_url.rstrip("/"))
        self.token = token
        self.email = email
        self.key = key
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_settings(cls, settings: CloudflareSettings) -> CloudflareClient:
        return cls(
            base_url=settings.base_url,
            token=settings.token,
            email=settings.email,
            key=settings.key,
            timeout=settings.timeout,
        )

    def _auth_headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        headers = {}
        if self.email:
            headers["X-Auth-Email"] = self.email
        if self.key:
            headers["X-Auth-Key"] = self.key
        return headers

    def _new_session(self, **kwargs) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            headers=self._auth_headers(),
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            **kwargs,
        )

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def connect(self):
        if self._session is None:
            self._session = self._new_session()

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("Not connected")
        return self._session

    def url_for(self, request: PurgeRequest) -> yarl.URL:
        # request.path is already encoded, keep the zone identifier a single segment
        return self.base_url.with_path(f"{self.base_url.raw_path.rstrip('/')}/{request.path}", encoded=True)

    async def purge(self, zones: Mapping[str, Zone]) -> dict[str, Zone]:
        """Purges all the given zones concurrently.

        Every request is started before any of them is awaited, and the
        call returns only once each one succeeded or failed. The result is
        keyed by zone identifier in the order of the given zones.
        """
        pool: KeyedTaskPool[str, Zone] = KeyedTaskPool()
        for identifier, request in build_requests(zones).items():
            pool.add(identifier, self._purge_zone(request))

        results = await pool.settle()
        logger.info(
            "Purge requests settled",
            zones=len(results),
            succeeded=sum(1 for zone in results.values() if zone.success),
        )
        return results

    async def _purge_zone(self, request: PurgeRequest) -> Zone:
        url = self.url_for(request)
        logger.debug("Purging zone", zone=request.identifier, payload=request.payload)
        try:
            async with self.session.delete(url, json=request.payload) as resp:
                body = await resp.text(errors="replace")
                outcome = classify_response(resp.status, resp.reason, str(url), body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            outcome = TransportFailure.from_exception(e)

        if isinstance(outcome, Zone):
            return outcome

        self._log_failure(request.identifier, outcome)
        return outcome.to_zone()

    def _log_failure(self, identifier: str, failure: TransportFailure) -> None:
        # Failing to log must never change the purge result
        with suppress(Exception):
            logger.error(
                failure.message,
                zone=identifier,
                kind=failure.kind.value,
                code=failure.code,
                body=failure.body,
                exc_info=failure.exception,
            )
