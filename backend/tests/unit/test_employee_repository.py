from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from payroll_app.core.config import Settings
from payroll_app.core.exceptions import RepositoryError
from payroll_app.services.employee_repository import HttpEmployeeRepository
from tests.conftest import SAMPLE_RAW_EMPLOYEE


def _make_settings(**overrides) -> Settings:
    values = {
        "EMPLOYEE_API_BASE_URL": "https://payroll.example.com/api/",
        "EMPLOYEE_API_TOKEN": "test-token",
        "EMPLOYEE_API_TIMEOUT": 5.0,
        "EMPLOYEE_LIST_PAGE_SIZE": 100,
    }
    values.update(overrides)
    return Settings(**values)


def _response(status: int, body=None, json_error: Exception | None = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=body)
    return response


def _mock_session(response: MagicMock) -> MagicMock:
    mock_request_context = AsyncMock()
    mock_request_context.__aenter__.return_value = response
    mock_request_context.__aexit__.return_value = None

    session = MagicMock()
    session.request.return_value = mock_request_context
    return session


def _mock_client_session(session: MagicMock) -> AsyncMock:
    mock_client_session = AsyncMock()
    mock_client_session.__aenter__.return_value = session
    mock_client_session.__aexit__.return_value = None
    return mock_client_session


async def _initialized(**overrides) -> HttpEmployeeRepository:
    repository = HttpEmployeeRepository()
    await repository.initialize(_make_settings(**overrides))
    return repository


@pytest.mark.anyio
async def test_initialize_without_base_url_stays_uninitialized():
    repository = HttpEmployeeRepository()

    await repository.initialize(Settings(EMPLOYEE_API_BASE_URL=""))

    assert repository.initialized is False


@pytest.mark.anyio
async def test_list_employees_requests_first_page():
    repository = await _initialized()
    session = _mock_session(_response(200, [SAMPLE_RAW_EMPLOYEE]))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        results = await repository.list_employees()

    assert results == [SAMPLE_RAW_EMPLOYEE]
    method, url = session.request.call_args.args
    assert method == "GET"
    assert url == "https://payroll.example.com/api/employees/"
    assert session.request.call_args.kwargs["params"] == {"page": 1, "page_size": 100}
    assert session.request.call_args.kwargs["headers"]["Authorization"] == "Bearer test-token"


@pytest.mark.anyio
async def test_list_employees_unwraps_paginated_results():
    repository = await _initialized()
    session = _mock_session(_response(200, {"count": 1, "results": [SAMPLE_RAW_EMPLOYEE]}))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        results = await repository.list_employees()

    assert results == [SAMPLE_RAW_EMPLOYEE]


@pytest.mark.anyio
async def test_list_employees_rejects_unexpected_body():
    repository = await _initialized()
    session = _mock_session(_response(200, "oops"))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(RepositoryError, match="Failed to load employees"):
            await repository.list_employees()


@pytest.mark.anyio
async def test_create_employee_posts_payload():
    repository = await _initialized(EMPLOYEE_API_TOKEN="")
    payload = {"employee_number": 2001, "first_name": "Carol"}
    session = _mock_session(_response(201, {**payload, "id": 9}))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        created = await repository.create_employee(payload)

    assert created["id"] == 9
    method, url = session.request.call_args.args
    assert method == "POST"
    assert url == "https://payroll.example.com/api/employees/"
    assert session.request.call_args.kwargs["json"] == payload
    assert "Authorization" not in session.request.call_args.kwargs["headers"]


@pytest.mark.anyio
async def test_update_employee_puts_to_item_url():
    repository = await _initialized()
    session = _mock_session(_response(200, SAMPLE_RAW_EMPLOYEE))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        updated = await repository.update_employee(7, {"first_name": "Alice"})

    assert updated == SAMPLE_RAW_EMPLOYEE
    method, url = session.request.call_args.args
    assert method == "PUT"
    assert url == "https://payroll.example.com/api/employees/7/"


@pytest.mark.anyio
async def test_no_content_response_returns_empty_record():
    repository = await _initialized()
    session = _mock_session(_response(204))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        assert await repository.update_employee(7, {}) == {}


@pytest.mark.anyio
async def test_error_uses_server_detail():
    repository = await _initialized()
    session = _mock_session(_response(409, {"detail": "Employee number 1001 already exists"}))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(RepositoryError) as exc_info:
            await repository.create_employee({"employee_number": 1001})

    assert exc_info.value.message == "Employee number 1001 already exists"
    assert exc_info.value.status == 409


@pytest.mark.anyio
@pytest.mark.parametrize(
    "body",
    [{"employee_number": ["must be unique"]}, {"detail": ""}, None],
)
async def test_error_without_detail_uses_generic_message(body):
    repository = await _initialized()
    session = _mock_session(_response(400, body))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(RepositoryError) as exc_info:
            await repository.update_employee(7, {})

    assert exc_info.value.message == "Failed to update employee"
    assert exc_info.value.status == 400


@pytest.mark.anyio
async def test_error_with_unreadable_body_uses_generic_message():
    repository = await _initialized()
    session = _mock_session(_response(500, json_error=ValueError("not json")))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(RepositoryError, match="Failed to create employee"):
            await repository.create_employee({})


@pytest.mark.anyio
@pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()])
async def test_transport_error_becomes_repository_error(error):
    repository = await _initialized()
    session = MagicMock()
    session.request.side_effect = error

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(RepositoryError, match="Failed to load employees"):
            await repository.list_employees()


@pytest.mark.anyio
async def test_request_not_initialized():
    repository = HttpEmployeeRepository()

    with pytest.raises(RuntimeError):
        await repository.list_employees()


@pytest.mark.anyio
async def test_check_connection_success():
    repository = await _initialized()
    session = _mock_session(_response(200, []))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        assert await repository.check_connection() is True


@pytest.mark.anyio
async def test_check_connection_failure():
    repository = await _initialized()
    session = MagicMock()
    session.request.side_effect = aiohttp.ClientConnectionError("refused")

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        assert await repository.check_connection() is False


@pytest.mark.anyio
async def test_check_connection_not_initialized():
    assert await HttpEmployeeRepository().check_connection() is False


@pytest.mark.anyio
async def test_close_resets_state():
    repository = await _initialized()

    await repository.close()

    assert repository.initialized is False
    assert repository.base_url == ""


@pytest.mark.anyio
async def test_create_with_unreadable_success_body_is_not_a_failure():
    repository = await _initialized()
    session = _mock_session(_response(201, json_error=ValueError("not json")))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        created = await repository.create_employee({"employee_number": 2001})

    assert created is None
    session.request.assert_called_once()


@pytest.mark.anyio
async def test_update_with_non_object_success_body_returns_none():
    repository = await _initialized()
    session = _mock_session(_response(200, ["unexpected"]))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        assert await repository.update_employee(7, {}) is None


@pytest.mark.anyio
@pytest.mark.parametrize(
    "body",
    [{"detail": "Try again later"}, {"data": [SAMPLE_RAW_EMPLOYEE]}, {"results": "none"}],
)
async def test_list_employees_rejects_object_without_results_list(body):
    repository = await _initialized()
    session = _mock_session(_response(200, body))

    with patch(
        "payroll_app.services.employee_repository.aiohttp.ClientSession",
        return_value=_mock_client_session(session),
    ):
        with pytest.raises(RepositoryError, match="Failed to load employees"):
            await repository.list_employees()
