"""
Tests for the invoice pipeline endpoints.

- /receipts/process: base64 upload → invoice + carbon/GITA entries
- /invoices/extract: base64/data URI only; paths and URLs → 400
- /invoices/categorise, /invoices/carbon-entry, /invoices/gita-entry
"""
import base64
from unittest.mock import patch

import pytest

from kira.agents.invoice.types import (
    CarbonEntry,
    GreenIncentiveEntry,
    Invoice,
)
from kira.errors import MalformedOutput


@pytest.fixture
def pipeline_model(make_model, sample_invoice):
    """Model stub answering every pipeline schema with canned values."""
    def handler(prompt, output_schema=None, **kwargs):
        if output_schema is Invoice:
            return sample_invoice
        if output_schema is CarbonEntry:
            return CarbonEntry(scope=2, activity_data=100, grid_emission_factor=0.774, co2e_emission=77.4)
        if output_schema is GreenIncentiveEntry:
            return GreenIncentiveEntry(
                tier=2,
                sector="Renewable Energy System",
                technology="Solar PV",
                asset="Solar Photovoltaic System",
                allowance_amount=18000.0,
            )
        raise AssertionError(f"Unexpected schema {output_schema}")

    return make_model(handler)


class TestProcessReceipt:
    def test_process_receipt_success(self, client, override_context, make_context, pipeline_model):
        override_context(make_context(model=pipeline_model))
        image = base64.b64encode(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR").decode()

        response = client.post("/receipts/process", json={"userId": "user123", "imageBytes": image})

        assert response.status_code == 200
        data = response.json()
        assert data["invoice"]["invoice_number"] == "INV-2026-0042"
        assert len(data["carbon_entries"]) == 2
        assert len(data["gita_entries"]) == 1
        assert data["gita_entries"][0]["tier"] == 2
        assert pipeline_model.calls[0]["media"][0].startswith("data:image/png;base64,")

    def test_explicit_mime_type(self, client, override_context, make_context, pipeline_model):
        override_context(make_context(model=pipeline_model))
        pdf = base64.b64encode(b"%PDF-1.7").decode()

        response = client.post("/receipts/process", json={
            "userId": "user123",
            "imageBytes": pdf,
            "mimeType": "application/pdf",
        })

        assert response.status_code == 200
        assert pipeline_model.calls[0]["media"][0].startswith("data:application/pdf;base64,")

    def test_missing_image_bytes(self, client, override_context, make_context):
        override_context(make_context())

        response = client.post("/receipts/process", json={"userId": "user123"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_invalid_base64(self, client, override_context, make_context, make_model):
        model = make_model()
        override_context(make_context(model=model))

        response = client.post("/receipts/process", json={"userId": "user123", "imageBytes": "***"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert set(response.json()) == {"error", "message"}
        assert model.calls == []

    def test_extraction_failure_is_500(self, client, override_context, make_context, make_model):
        def handler(prompt, **kwargs):
            raise MalformedOutput("not json", raw_response="sorry, I can't read this")

        override_context(make_context(model=make_model(handler)))
        image = base64.b64encode(b"\xff\xd8\xff").decode()

        response = client.post("/receipts/process", json={"userId": "user123", "imageBytes": image})

        assert response.status_code == 500
        assert response.json() == {"error": "extraction_failed", "message": "Extraction failed."}


class TestExtractInvoiceEndpoint:
    def test_extract_data_uri(self, client, override_context, make_context, pipeline_model):
        override_context(make_context(model=pipeline_model))

        response = client.post("/invoices/extract", json={"file": "data:application/pdf;base64,JVBERi0xLjcK"})

        assert response.status_code == 200
        assert response.json()["supplier"] == "Mixed Supplies Sdn Bhd"
        assert pipeline_model.calls[0]["media"] == ["data:application/pdf;base64,JVBERi0xLjcK"]

    def test_extract_bare_base64_is_sniffed(self, client, override_context, make_context, pipeline_model):
        override_context(make_context(model=pipeline_model))

        response = client.post("/invoices/extract", json={"file": "JVBERi0xLjcK"})

        assert response.status_code == 200
        assert pipeline_model.calls[0]["media"][0].startswith("data:application/pdf;base64,")

    @pytest.mark.parametrize("file", [
        "/etc/passwd",
        "/etc/hostname",
        "http://169.254.169.254/",
        "http://169.254.169.254/latest/meta-data/iam/",
        "file:///etc/passwd",
    ])
    def test_paths_and_urls_rejected(self, client, override_context, make_context, pipeline_model, file):
        override_context(make_context(model=pipeline_model))

        with patch("kira.llm.media.httpx.get") as mock_get:
            response = client.post("/invoices/extract", json={"file": file})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        mock_get.assert_not_called()
        assert pipeline_model.calls == []

    def test_server_file_is_never_read(self, client, override_context, make_context, pipeline_model, tmp_path):
        override_context(make_context(model=pipeline_model))
        secrets = tmp_path / ".env"
        secrets.write_text("GOOGLE_API_KEY=super-secret\n")

        response = client.post("/invoices/extract", json={"file": str(secrets)})

        assert response.status_code == 400
        assert pipeline_model.calls == []

    def test_invalid_data_uri(self, client, override_context, make_context, pipeline_model):
        override_context(make_context(model=pipeline_model))

        response = client.post("/invoices/extract", json={"file": "data:application/pdf,plain"})

        assert response.status_code == 400
        assert pipeline_model.calls == []


class TestCategoriseEndpoints:
    def test_categorise(self, client, override_context, make_context, pipeline_model, sample_invoice):
        override_context(make_context(model=pipeline_model))

        response = client.post("/invoices/categorise", json=sample_invoice.model_dump(mode="json"))

        assert response.status_code == 200
        data = response.json()
        assert len(data["carbon_entries"]) == 2
        assert len(data["gita_entries"]) == 1

    def test_categorise_rejects_invalid_invoice(self, client, override_context, make_context):
        override_context(make_context())

        response = client.post("/invoices/categorise", json={"invoice_number": "INV-1"})

        assert response.status_code == 400

    def test_carbon_entry(self, client, override_context, make_context, pipeline_model, diesel_item):
        override_context(make_context(model=pipeline_model))

        response = client.post("/invoices/carbon-entry", json=diesel_item.model_dump(mode="json"))

        assert response.status_code == 200
        assert response.json()["scope"] == 2
        assert response.json()["co2e_emission"] == 77.4

    def test_gita_entry(self, client, override_context, make_context, pipeline_model, solar_item):
        override_context(make_context(model=pipeline_model))

        response = client.post("/invoices/gita-entry", json=solar_item.model_dump(mode="json"))

        assert response.status_code == 200
        assert response.json()["allowance_amount"] == 18000.0

    def test_malformed_carbon_entry_is_500(self, client, override_context, make_context, make_model, diesel_item):
        def handler(prompt, **kwargs):
            raise MalformedOutput("scope must be 1, 2 or 3")

        override_context(make_context(model=make_model(handler)))

        response = client.post("/invoices/carbon-entry", json=diesel_item.model_dump(mode="json"))

        assert response.status_code == 500
        assert response.json()["error"] == "categorization_failed"
