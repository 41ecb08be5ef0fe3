import io
import json

import openpyxl
import pytest
from fastapi.testclient import TestClient

from orderscan.app.api.routes import get_adapter
from orderscan.app.main import app
from orderscan.services.extraction import ORDER_EXTRACTION_FAILED_MESSAGE, OrderExtractionAdapter

ROWS = [
    {"vendorName": "위드맘", "productName": "젖병", "quantity": "10"},
    {"vendorName": "", "productName": "젖꼭지", "quantity": "20"},
    {"vendorName": "씨엘로", "productName": "쿠션", "quantity": "5"},
]


@pytest.fixture
def make_client(fake_client_factory):
    created = {}

    def _make(text=None, error=None):
        fake = fake_client_factory(text=text, error=error)
        created["fake"] = fake
        adapter = OrderExtractionAdapter(fake, model="test-model", carry_down_vendors=True)
        app.dependency_overrides[get_adapter] = lambda: adapter
        return TestClient(app), fake

    yield _make
    app.dependency_overrides.clear()


def test_health() -> None:
    assert TestClient(app).get("/health").json() == {"status": "ok"}


def test_extract_from_text(make_client) -> None:
    client, fake = make_client(text=json.dumps(ROWS, ensure_ascii=False))
    response = client.post("/orders/extract", data={"text": "위드맘 젖병 10"})

    assert response.status_code == 200
    body = response.json()
    assert [o["vendorName"] for o in body["orders"]] == ["위드맘", "위드맘", "씨엘로"]
    assert body["vendors"] == [{"vendorName": "위드맘", "count": 2}, {"vendorName": "씨엘로", "count": 1}]
    assert fake.models.calls[0]["contents"][0].text == "Raw Text:\n위드맘 젖병 10"


def test_extract_from_uploaded_image(make_client) -> None:
    client, fake = make_client(text="[]")
    response = client.post(
        "/orders/extract",
        files={"image": ("orders.jpg", b"\xff\xd8\xff", "image/jpeg")},
    )

    assert response.status_code == 200
    assert response.json() == {"orders": [], "vendors": []}
    image_part = fake.models.calls[0]["contents"][0]
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert image_part.inline_data.data == b"\xff\xd8\xff"


def test_extract_requires_exactly_one_input(make_client) -> None:
    client, fake = make_client(text="[]")
    assert client.post("/orders/extract", data={}).status_code == 400
    response = client.post(
        "/orders/extract",
        data={"text": "a", "image_data_url": "data:image/png;base64,AAAA"},
    )
    assert response.status_code == 400
    assert fake.models.calls == []


def test_extract_failure_returns_fixed_message(make_client) -> None:
    client, _ = make_client(error=RuntimeError("boom"))
    response = client.post("/orders/extract", data={"image_data_url": "data:image/png;base64,AAAA"})

    assert response.status_code == 422
    assert response.json() == {"detail": ORDER_EXTRACTION_FAILED_MESSAGE}


def test_extract_excel_download(make_client) -> None:
    client, _ = make_client(text=json.dumps(ROWS, ensure_ascii=False))
    response = client.post("/orders/extract/excel", data={"text": "발주"})

    assert response.status_code == 200
    assert response.headers["content-disposition"].startswith("attachment; filename=orders_")
    wb = openpyxl.load_workbook(io.BytesIO(response.content))
    rows = list(wb.active.iter_rows(values_only=True))
    assert len(rows) == 4
    assert rows[2][0] == "위드맘"


def test_startup_fails_without_api_key(monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="Missing GEMINI_API_KEY/GOOGLE_API_KEY"):
        with TestClient(app):
            pass


def test_startup_builds_adapter(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GENAI_MODEL", "test-model")
    with TestClient(app) as client:
        assert isinstance(app.state.adapter, OrderExtractionAdapter)
        assert app.state.adapter.model == "test-model"
        assert client.get("/health").json() == {"status": "ok"}
