"""Employee repository backed by the payroll REST API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import aiohttp

from payroll_app.core.config import Settings
from payroll_app.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)

LIST_FAILED = "Failed to load employees"
CREATE_FAILED = "Failed to create employee"
UPDATE_FAILED = "Failed to update employee"


class EmployeeRepository(Protocol):
    """List, create and update raw employee records (server key convention).

    Writes return the stored record, or None when the response body is unreadable.
    """

    async def list_employees(self) -> list[dict[str, Any]]: ...

    async def create_employee(self, payload: dict[str, Any]) -> dict[str, Any] | None: ...

    async def update_employee(self, employee_id: int | str, payload: dict[str, Any]) -> dict[str, Any] | None: ...


class HttpEmployeeRepository:
    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.token = ""
        self.timeout = 30.0
        self.page_size = 100

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.EMPLOYEE_API_BASE_URL:
            logger.warning("Employee API base URL missing — HttpEmployeeRepository not initialized")
            return

        self.base_url = settings.EMPLOYEE_API_BASE_URL.rstrip("/")
        self.token = settings.EMPLOYEE_API_TOKEN
        self.timeout = settings.EMPLOYEE_API_TIMEOUT
        self.page_size = settings.EMPLOYEE_LIST_PAGE_SIZE
        self.initialized = True
        logger.info("HttpEmployeeRepository initialized (base_url=%s)", self.base_url)

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.token = ""

    async def list_employees(self) -> list[dict[str, Any]]:
        # Only the first page is requested
        params = {"page": 1, "page_size": self.page_size}
        data = await self._request("GET", self._collection_url(), LIST_FAILED, params=params)

        if isinstance(data, dict):
            data = data.get("results")
        if not isinstance(data, list):
            raise RepositoryError(LIST_FAILED)
        return data

    async def create_employee(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        data = await self._request("POST", self._collection_url(), CREATE_FAILED, json=payload)
        logger.info("Created employee number=%s", payload.get("employee_number"))
        return data if isinstance(data, dict) else None

    async def update_employee(self, employee_id: int | str, payload: dict[str, Any]) -> dict[str, Any] | None:
        data = await self._request("PUT", self._item_url(employee_id), UPDATE_FAILED, json=payload)
        logger.info("Updated employee id=%s", employee_id)
        return data if isinstance(data, dict) else None

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False

        try:
            timeout = aiohttp.ClientTimeout(total=10)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    "GET",
                    self._collection_url(),
                    headers=self._headers(),
                    params={"page": 1, "page_size": 1},
                ) as response:
                    return response.status == 200
        except Exception:
            logger.exception("HttpEmployeeRepository connection check failed")
            return False

    def _collection_url(self) -> str:
        return f"{self.base_url}/employees/"

    def _item_url(self, employee_id: int | str) -> str:
        return f"{self.base_url}/employees/{employee_id}/"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, url: str, failure_message: str, **kwargs: Any) -> Any:
        if not self.initialized:
            raise RuntimeError("HttpEmployeeRepository not initialized")

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, headers=self._headers(), **kwargs) as response:
                    if 200 <= response.status < 300:
                        if response.status == 204:
                            return {}
                        data = await self._read_json(response)
                        if data is None:
                            logger.warning("%s %s returned %s with an unreadable body", method, url, response.status)
                        return data

                    payload = await self._read_json(response)
                    logger.warning("%s %s failed: %s", method, url, response.status)
                    raise RepositoryError.from_payload(payload, failure_message, status=response.status)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as err:
            logger.exception("%s %s failed", method, url)
            raise RepositoryError(failure_message) from err

    async def _read_json(self, response: Any) -> Any:
        try:
            return await response.json(content_type=None)
        except (aiohttp.ClientError, ValueError):
            return None


employee_repository = HttpEmployeeRepository()
