"""
Mock Device Server - HTTP Contract Tests
========================================

What:  End-to-end checks of the route table through the full middleware stack.
How:   HTTPX AsyncClient over ASGITransport; randomized fields are checked by
       type, range and format, never by value.

What we test:
    ✅ Every documented endpoint answers 200 with the expected shape
    ✅ 400 bodies, including the work-shift asymmetry
    ✅ 404 fallback for unknown paths and wrong methods
    ✅ CORS headers, OPTIONS short-circuit, request ID echo and log correlation
    ✅ Malformed JSON rejected on every path before any generator runs
"""

import logging
import re

import pytest

from mock_device_server.main import app
from mock_device_server.middleware.request_id import RequestIDLogFilter
from mock_device_server.routes import AVAILABLE_ROUTES
from mock_device_server.schemas.devices import RouteNotFoundResponse

ISO_UTC = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")

MALFORMED_BODY = {"success": False, "message": "Некорректный JSON в теле запроса"}
JSON_HEADERS = {"Content-Type": "application/json"}


class TestDevices:
    """Tests for GET /devices."""

    @pytest.mark.asyncio
    async def test_device_list(self, test_client):
        """Both devices should be listed with an active work shift."""
        response = await test_client.get("/devices")
        assert response.status_code == 200
        assert response.json() == [
            {"type": "cash-register", "details": {"isWorkShiftActive": True}},
            {"type": "pos-terminal", "details": {"isWorkShiftActive": True}},
        ]


class TestWorkShift:
    """Tests for PUT /devices/cash-register/work-shift."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("is_active,message", [(True, "Смена открыта"), (False, "Смена закрыта")])
    async def test_toggle(self, test_client, is_active, message):
        """The message should follow isActive; shift ID and timestamp are fresh."""
        response = await test_client.put(
            "/devices/cash-register/work-shift", json={"isActive": is_active}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == message
        assert isinstance(body["shiftId"], int)
        assert 0 <= body["shiftId"] < 10000
        assert ISO_UTC.fullmatch(body["timestamp"])

    @pytest.mark.asyncio
    async def test_empty_array_opens(self, test_client):
        """An empty array is a set value and opens the shift."""
        response = await test_client.put(
            "/devices/cash-register/work-shift", json={"isActive": []}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Смена открыта"

    @pytest.mark.asyncio
    async def test_missing_is_active(self, test_client):
        """A body without isActive should get the bare {message} 400."""
        response = await test_client.put("/devices/cash-register/work-shift", json={})
        assert response.status_code == 400
        assert response.json() == {"message": "Поле isActive обязательно"}

    @pytest.mark.asyncio
    async def test_empty_body(self, test_client):
        """No body at all should be treated like an empty object."""
        response = await test_client.put("/devices/cash-register/work-shift")
        assert response.status_code == 400
        assert response.json() == {"message": "Поле isActive обязательно"}


class TestReceipts:
    """Tests for receipt and non-fiscal printing."""

    @pytest.mark.asyncio
    async def test_fiscal_receipt(self, test_client):
        """A valid receipt should echo the total and carry the fiscal constants."""
        payload = {
            "items": [{"name": "Хлеб", "price": 45.5, "quantity": 2}],
            "payment": {"sum": 91},
            "type": "sell",
        }
        response = await test_client.post("/devices/cash-register/receipts", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 91
        assert body["receiptType"] == "sell"
        assert body["fnNumber"] == "9960440300757395"
        assert body["fnsUrl"] == "www.nalog.gov.ru"
        assert body["registrationNumber"] == "0004622719017597"
        assert isinstance(body["fiscalDocumentNumber"], int)
        assert isinstance(body["fiscalDocumentSign"], str)
        assert body["fiscalDocumentDateTime"].endswith("+03:00")

    @pytest.mark.asyncio
    async def test_receipt_without_items(self, test_client):
        """A receipt without items should be rejected with success=false."""
        response = await test_client.post(
            "/devices/cash-register/receipts", json={"payment": {"sum": 10}, "type": "sell"}
        )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Поле items обязательно и должно содержать массив позиций",
        }

    @pytest.mark.asyncio
    async def test_receipt_with_empty_array_type(self, test_client):
        """An empty array type is set and echoed back."""
        payload = {"items": [{"name": "Хлеб"}], "payment": {"sum": 10}, "type": []}
        response = await test_client.post("/devices/cash-register/receipts", json=payload)
        assert response.status_code == 200
        assert response.json()["receiptType"] == []

    @pytest.mark.asyncio
    async def test_non_fiscal(self, test_client):
        """An array body should be printed and counted."""
        response = await test_client.post(
            "/devices/cash-register/non-fiscals", json=[{"text": "Добро пожаловать"}]
        )
        assert response.status_code == 200
        body = response.json()
        assert body["itemsCount"] == 1
        assert body["documentType"] == "non-fiscal"
        assert body["deviceId"] == "cash-register-mock-001"

    @pytest.mark.asyncio
    async def test_non_fiscal_object_rejected(self, test_client):
        """An object body is not a document and should be rejected."""
        response = await test_client.post(
            "/devices/cash-register/non-fiscals", json={"text": "x"}
        )
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestPayments:
    """Tests for POS payments and refunds."""

    @pytest.mark.asyncio
    async def test_zero_amount(self, test_client):
        """A zero amount should be rejected."""
        response = await test_client.post("/devices/pos/payments", json={"amount": 0})
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Неверная сумма платежа"}

    @pytest.mark.asyncio
    async def test_amount_echoed(self, test_client):
        """The amount should be echoed and printed on the slip."""
        response = await test_client.post("/devices/pos/payments", json={"amount": 250})
        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == 250
        assert body["status"] == "COMPLETED"
        assert "Сумма: 250 руб." in body["slip"]
        assert body["transactionNumber"].startswith("100")

    @pytest.mark.asyncio
    async def test_refund_requires_transaction(self, test_client):
        """A refund without transactionNumber should be rejected."""
        response = await test_client.post("/devices/pos/refunds", json={"amount": 100})
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Номер транзакции обязателен"}

    @pytest.mark.asyncio
    async def test_refund(self, test_client):
        """A valid refund should echo the transaction number."""
        response = await test_client.post(
            "/devices/pos/refunds", json={"amount": 100, "transactionNumber": "1005550001"}
        )
        assert response.status_code == 200
        body = response.json()
        assert re.fullmatch(r"REF_\d+_\d+", body["refundId"])
        assert body["transactionNumber"] == "1005550001"
        assert body["success"] is True

    @pytest.mark.asyncio
    async def test_refund_with_empty_object_transaction(self, test_client):
        """An empty object counts as a transaction number."""
        response = await test_client.post(
            "/devices/pos/refunds", json={"amount": 100, "transactionNumber": {}}
        )
        assert response.status_code == 200
        assert response.json()["transactionNumber"] == {}


class TestReports:
    """Tests for the report endpoints, which take no input."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path,report_type,device_type",
        [
            ("/devices/pos/reports/z", "Z", "POS"),
            ("/devices/pos/reports/x", "X", "POS"),
            ("/devices/cash-register/reports/x", "X", "CASH_REGISTER"),
        ],
    )
    async def test_reports_always_succeed(self, test_client, path, report_type, device_type):
        """Reports should succeed without a body."""
        response = await test_client.post(path)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["reportType"] == report_type
        assert body["deviceType"] == device_type

    @pytest.mark.asyncio
    async def test_shift_totals(self, test_client):
        """Shift totals should return the fixed figures."""
        response = await test_client.get("/devices/cash-register/shift-totals")
        assert response.status_code == 200
        assert response.json()["incomes"]["electronically"] == 4000.68

    @pytest.mark.asyncio
    async def test_repeat_calls_same_shape(self, test_client):
        """Two X-reports should differ in values only, never in keys."""
        first = (await test_client.post("/devices/pos/reports/x")).json()
        second = (await test_client.post("/devices/pos/reports/x")).json()
        assert first.keys() == second.keys()
        assert first["summary"].keys() == second["summary"].keys()


class TestServiceRoutes:
    """Tests for /healthz, the index page and the route inventory."""

    @pytest.mark.asyncio
    async def test_healthz(self, test_client):
        """/healthz should report ok and list the endpoints."""
        response = await test_client.get("/healthz")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["endpoints"]
        assert all(isinstance(e, str) for e in body["endpoints"])

    @pytest.mark.asyncio
    async def test_index_is_html(self, test_client):
        """The root path should serve the HTML route listing."""
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<code>POST /devices/pos/refunds</code>" in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entry", AVAILABLE_ROUTES)
    async def test_documented_route_answers(self, test_client, entry):
        """Every listed route should reach a handler, never the 404 fallback."""
        method, path = entry.split(" ", 1)
        response = await test_client.request(method, path)
        assert response.status_code != 404
        assert "availableRoutes" not in response.json()

    @pytest.mark.parametrize("entry", AVAILABLE_ROUTES)
    def test_documented_route_in_openapi(self, entry):
        """Every listed route should appear in the OpenAPI document."""
        method, path = entry.split(" ", 1)
        assert method.lower() in app.openapi()["paths"][path]

    def test_openapi_documents_fallback_body(self):
        """Device routes should document the 404 route-listing body."""
        operation = app.openapi()["paths"]["/devices/pos/payments"]["post"]
        schema_ref = operation["responses"]["404"]["content"]["application/json"]["schema"]["$ref"]
        assert schema_ref.endswith("/RouteNotFoundResponse")


class TestFallback:
    """Tests for the 404 answer to unknown method+path pairs."""

    @pytest.mark.asyncio
    async def test_unknown_path(self, test_client):
        """An unknown path should list the available routes."""
        response = await test_client.get("/unknown/path")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Route GET /unknown/path not found"
        assert body["availableRoutes"] == list(AVAILABLE_ROUTES)
        assert "POST /devices/pos/payments" in body["availableRoutes"]

    @pytest.mark.asyncio
    async def test_body_matches_model(self, test_client):
        """The 404 body should be exactly the RouteNotFoundResponse shape."""
        response = await test_client.post("/devices/printer")
        parsed = RouteNotFoundResponse.model_validate(response.json())
        assert parsed.model_dump(by_alias=True) == response.json()

    @pytest.mark.asyncio
    async def test_wrong_method_on_known_path(self, test_client):
        """A known path with the wrong method should get the same 404."""
        response = await test_client.get("/devices/pos/payments")
        assert response.status_code == 404
        assert response.json()["message"] == "Route GET /devices/pos/payments not found"

    @pytest.mark.asyncio
    async def test_query_string_in_message(self, test_client):
        """The query string should be kept in the 404 message."""
        response = await test_client.delete("/nope?x=1")
        assert response.status_code == 404
        assert response.json()["message"] == "Route DELETE /nope?x=1 not found"


class TestJSONBody:
    """Tests for strict JSON body parsing ahead of routing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("POST", "/devices/pos/payments"),
            ("POST", "/devices/pos/reports/z"),
            ("POST", "/devices/cash-register/reports/x"),
            ("GET", "/devices"),
            ("POST", "/no/such/route"),
        ],
    )
    async def test_truncated_body_rejected_on_any_path(self, test_client, method, path):
        """A truncated JSON body should be a 400, whether or not the route reads it."""
        response = await test_client.request(
            method, path, content=b'{"amount": ', headers=JSON_HEADERS
        )
        assert response.status_code == 400
        assert response.json() == MALFORMED_BODY

    @pytest.mark.asyncio
    async def test_infinity_literal_rejected(self, test_client):
        """Infinity is not JSON, so a receipt carrying it should not be printed."""
        raw = b'{"items": [{"name": "x"}], "payment": {"sum": Infinity}, "type": "sell"}'
        response = await test_client.post(
            "/devices/cash-register/receipts", content=raw, headers=JSON_HEADERS
        )
        assert response.status_code == 400
        assert response.json() == MALFORMED_BODY

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b'{"amount": NaN}', b'{"amount": -Infinity}'])
    async def test_other_non_json_constants_rejected(self, test_client, raw):
        """NaN and -Infinity should be rejected the same way."""
        response = await test_client.post("/devices/pos/payments", content=raw, headers=JSON_HEADERS)
        assert response.status_code == 400
        assert response.json() == MALFORMED_BODY

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b"250", b'"sell"', b"null", b"true"])
    async def test_top_level_scalar_rejected(self, test_client, raw):
        """Only an object or an array is accepted as a body."""
        response = await test_client.post("/devices/pos/payments", content=raw, headers=JSON_HEADERS)
        assert response.status_code == 400
        assert response.json() == MALFORMED_BODY

    @pytest.mark.asyncio
    async def test_charset_parameter_still_parsed(self, test_client):
        """A charset parameter on the content type should not skip the check."""
        response = await test_client.post(
            "/devices/pos/reports/x",
            content=b"{",
            headers={"Content-Type": "application/json; charset=utf-8"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_non_json_content_type_ignored(self, test_client):
        """Bodies that are not declared as JSON are left alone."""
        response = await test_client.post(
            "/devices/pos/reports/z", content=b"{", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_empty_json_body_allowed(self, test_client):
        """An empty body declared as JSON is no body at all."""
        response = await test_client.post(
            "/devices/pos/reports/z", content=b"", headers=JSON_HEADERS
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_rejection_keeps_cors_and_request_id(self, test_client):
        """The 400 should still leave with CORS headers and the request ID."""
        response = await test_client.post(
            "/devices/pos/payments",
            content=b"{",
            headers={"Content-Type": "application/json", "X-Request-ID": "bench-13"},
        )
        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["x-request-id"] == "bench-13"


class TestMiddleware:
    """Tests for CORS, request IDs and the access log."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path,kwargs",
        [
            ("GET", "/devices", {}),
            ("POST", "/devices/pos/payments", {"json": {"amount": 0}}),
            ("GET", "/missing", {}),
        ],
    )
    async def test_cors_headers_on_every_response(self, test_client, method, path, kwargs):
        """200, 400 and 404 responses should all carry the CORS headers."""
        response = await test_client.request(method, path, **kwargs)
        assert response.headers["access-control-allow-origin"] == "*"
        assert "DELETE" in response.headers["access-control-allow-methods"]
        assert "Authorization" in response.headers["access-control-allow-headers"]
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_options_short_circuits(self, test_client):
        """OPTIONS on any path should answer 200 with an empty body."""
        response = await test_client.options("/anything/at/all")
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-max-age"] == "86400"
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        """A client-supplied X-Request-ID should be echoed back."""
        response = await test_client.get("/devices", headers={"X-Request-ID": "bench-42"})
        assert response.headers["x-request-id"] == "bench-42"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        """Without one, an eight-character ID should be generated."""
        response = await test_client.get("/devices")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_access_line_names_device(self, test_client, caplog):
        """The access line should carry the request ID and the addressed device."""
        caplog.set_level(logging.INFO, logger="mock_device_server.access")
        await test_client.post("/devices/pos/reports/z", headers={"X-Request-ID": "bench-8"})
        record = next(r for r in caplog.records if r.name == "mock_device_server.access")
        assert record.request_id == "bench-8"
        assert record.device == "pos"
        assert record.status == 200
        assert "POST /devices/pos/reports/z 200" in record.getMessage()

    @pytest.mark.asyncio
    async def test_generator_lines_share_request_id(self, test_client, caplog):
        """Payment body and response lines should carry the caller's X-Request-ID."""
        caplog.handler.addFilter(RequestIDLogFilter())
        caplog.set_level(logging.INFO, logger="mock_device_server")
        await test_client.post(
            "/devices/pos/payments", json={"amount": 250}, headers={"X-Request-ID": "bench-7"}
        )
        lines = [r for r in caplog.records if r.name == "mock_device_server.services.pos"]
        assert [r.getMessage().split(":")[0] for r in lines] == ["Payment request", "Payment response"]
        assert {r.request_id for r in lines} == {"bench-7"}
