from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from backend.api import api_error_response, install_exception_handlers
from backend.errors import api_error_from_validation_errors
from backend.gri import validate_gri_data_item
from backend.internal_core.config import ContractsConfig
from backend.internal_core.contracts import GriDataItemDto, InvalidArgument
from backend.pagination import build_page_response

FIXED = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _config(expose: bool = False) -> ContractsConfig:
    return ContractsConfig(
        ESG_DEFAULT_PAGE_SIZE=10,
        ESG_MAX_PAGE_SIZE=100,
        ESG_DEFAULT_SORT="id",
        ESG_AUDIT_DETAIL_MAX_CHARS=500,
        ESG_EXPOSE_INTERNAL_ERRORS=expose,
    )


def _app(expose: bool = False) -> FastAPI:
    app = FastAPI()
    install_exception_handlers(app, config=_config(expose), clock=lambda: FIXED)

    @app.get("/pages")
    def pages(page: int, size: int):
        return build_page_response([], page, size, 5).to_wire()

    @app.post("/gri")
    def create_item(item: GriDataItemDto):
        errors = validate_gri_data_item(item)
        if errors is not None:
            return api_error_response(api_error_from_validation_errors(errors, clock=lambda: FIXED))
        return item.to_wire()

    @app.get("/missing")
    def missing():
        raise HTTPException(status_code=404, detail="GRI item 9 not found")

    @app.get("/boom")
    def boom():
        raise RuntimeError("database unavailable")

    return app


def test_invalid_argument_returns_400_api_error() -> None:
    client = TestClient(_app())
    response = client.get("/pages", params={"page": -1, "size": 10})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == 400
    assert body["error"] == "Bad Request"
    assert "page must be >= 0" in body["message"]
    assert body["timestamp"] == "2024-06-01T12:00:00+00:00"
    assert "details" not in body


def test_request_validation_returns_field_map() -> None:
    client = TestClient(_app())
    response = client.get("/pages", params={"page": "first", "size": 10})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_FAILED"
    assert "page" in body["details"]


def test_business_validation_returns_all_violations() -> None:
    client = TestClient(_app())
    response = client.post(
        "/gri",
        json={
            "disclosureCode": "305-1",
            "disclosureValue": "1200",
            "companyId": 1,
            "reportingPeriodStart": "2023-12-31",
            "reportingPeriodEnd": "2023-01-01",
        },
    )
    assert response.status_code == 400
    details = response.json()["details"]
    assert set(details) == {"standardCode", "reportingPeriodEnd"}


def test_valid_submission_echoes_wire_shape() -> None:
    client = TestClient(_app())
    payload = {
        "standardCode": "GRI 305",
        "disclosureCode": "305-1",
        "disclosureValue": "1200",
        "companyId": 1,
    }
    response = client.post("/gri", json=payload)
    assert response.status_code == 200
    assert response.json() == {**payload, "timeSeriesData": []}


def test_http_exception_keeps_status_and_message() -> None:
    client = TestClient(_app())
    response = client.get("/missing")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Not Found"
    assert body["message"] == "GRI item 9 not found"


def test_unknown_route_is_rendered_as_api_error() -> None:
    client = TestClient(_app())
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json()["status"] == 404


def test_unhandled_error_hides_details_by_default() -> None:
    client = TestClient(_app(), raise_server_exceptions=False)
    response = client.get("/boom")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "INTERNAL_ERROR"
    assert "details" not in body


def test_unhandled_error_exposes_details_when_enabled() -> None:
    client = TestClient(_app(expose=True), raise_server_exceptions=False)
    response = client.get("/boom")
    assert response.status_code == 500
    assert response.json()["details"] == "database unavailable"


def test_invalid_argument_is_a_value_error() -> None:
    assert issubclass(InvalidArgument, ValueError)
