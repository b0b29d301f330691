"""
Device-State Store - addressable key/value access to device states.

Devices are controlled by writing a value ("1"/"0") to an address such
as "light1/turn"; the door's trust flag is read from "camera/isOwner".
This module defines that get/set contract and its backends.

Backends:
=========
- FirebaseDeviceStore: Firebase Realtime Database through its REST API
  (GET/PUT {database_url}/{address}.json). Devices subscribe to the
  same database and react to the writes.
- InMemoryDeviceStore: a dict, for local development and tests.

A store handle is created once per process (see build_store) and passed
to whoever needs it. There is no module-level client.

Every failure (network, HTTP status, undecodable body) is raised as
StoreError. Nothing is retried here.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

from homeintent.core.config import Settings
from homeintent.core.errors import StoreError

logger = logging.getLogger("homeintent.devices.store")


class DeviceStore(ABC):
    """
    Abstract device-state store.

    Usage:
        store = build_store(settings)
        await store.set("light1/turn", "1")
        flag = await store.get("camera/isOwner")
        await store.close()
    """

    name: str = "base"

    @abstractmethod
    async def get(self, address: str) -> Any:
        """
        Read the value stored at an address.

        Returns:
            The decoded JSON value, or None when nothing is stored there

        Raises:
            StoreError: if the read fails
        """
        pass

    @abstractmethod
    async def set(self, address: str, value: Any) -> None:
        """
        Overwrite the value stored at an address.

        Raises:
            StoreError: if the write fails
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the store."""
        return None


# ---------------------------------------------------------------------------
# FIREBASE REALTIME DATABASE
# ---------------------------------------------------------------------------

class FirebaseDeviceStore(DeviceStore):
    """
    Firebase Realtime Database backend using the REST API.

    Args:
        database_url: Root URL of the database
        auth_token: Optional database secret / ID token ("auth" query param)
        timeout: Per-request timeout in seconds
        client: Optional pre-built httpx.AsyncClient (tests inject one
            with an httpx.MockTransport)
    """

    name = "firebase"

    def __init__(
        self,
        database_url: str,
        auth_token: str = "",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not database_url:
            raise ValueError("database_url is required for the Firebase store")
        self.database_url = database_url.rstrip("/")
        self._params = {"auth": auth_token} if auth_token else {}
        self._client = client or httpx.AsyncClient(timeout=timeout)
        logger.info(f"Firebase store initialized for {self.database_url}")

    def _url(self, address: str) -> str:
        return f"{self.database_url}/{address.strip('/')}.json"

    async def get(self, address: str) -> Any:
        try:
            response = await self._client.get(self._url(address), params=self._params)
        except httpx.HTTPError as e:
            logger.error(f"Network error reading '{address}': {e}")
            raise StoreError(address, "get", f"network error: {e}") from e

        self._check_status(address, "get", response)

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(address, "get", f"invalid JSON body: {e}") from e

    async def set(self, address: str, value: Any) -> None:
        try:
            response = await self._client.put(
                self._url(address),
                params=self._params,
                content=json.dumps(value),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Network error writing '{address}': {e}")
            raise StoreError(address, "set", f"network error: {e}") from e

        self._check_status(address, "set", response)
        logger.debug(f"Wrote {value!r} to '{address}'")

    @staticmethod
    def _check_status(address: str, operation: str, response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            error_msg = response.json().get("error", response.text)
        except (ValueError, AttributeError):
            error_msg = response.text
        logger.error(f"Firebase {operation} '{address}' failed ({response.status_code}): {error_msg}")
        raise StoreError(address, operation, f"HTTP {response.status_code}: {error_msg}")

    async def close(self) -> None:
        await self._client.aclose()


# ---------------------------------------------------------------------------
# IN-MEMORY STORE
# ---------------------------------------------------------------------------

class InMemoryDeviceStore(DeviceStore):
    """
    Dict-backed store.

    Besides holding values it records every call, and can be told to fail
    on chosen addresses, which is what the dispatcher tests rely on.

    Args:
        initial: Seed values, e.g. {"camera/isOwner": "1"}
        fail_on: Addresses whose get/set raise StoreError
    """

    name = "memory"

    def __init__(
        self,
        initial: Optional[Dict[str, Any]] = None,
        fail_on: Optional[Iterable[str]] = None,
    ):
        self.values: Dict[str, Any] = dict(initial or {})
        self.fail_on = set(fail_on or ())
        self.reads: List[str] = []
        self.writes: List[Tuple[str, Any]] = []

    async def get(self, address: str) -> Any:
        self.reads.append(address)
        if address in self.fail_on:
            raise StoreError(address, "get", "simulated failure")
        return self.values.get(address)

    async def set(self, address: str, value: Any) -> None:
        if address in self.fail_on:
            raise StoreError(address, "set", "simulated failure")
        self.writes.append((address, value))
        self.values[address] = value

    @property
    def call_count(self) -> int:
        return len(self.reads) + len(self.writes)


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------

def build_store(settings: Settings) -> DeviceStore:
    """
    Create the store selected by settings.DEVICE_STORE.

    Raises:
        ValueError: for an unknown backend name
    """
    backend = settings.DEVICE_STORE.lower()
    if backend == FirebaseDeviceStore.name:
        return FirebaseDeviceStore(
            database_url=settings.FIREBASE_DATABASE_URL,
            auth_token=settings.FIREBASE_AUTH_TOKEN,
            timeout=settings.STORE_REQUEST_TIMEOUT,
        )
    if backend == InMemoryDeviceStore.name:
        logger.warning("Using in-memory device store; states are not persisted")
        return InMemoryDeviceStore()
    raise ValueError(f"Unknown DEVICE_STORE backend: {settings.DEVICE_STORE!r}")
