import io
import zipfile
import pytest
from fastapi import status

PERIOD = {"month": "March", "year": 2025, "working_days": 31, "actual_working_days": 29}

def test_get_single_payslip(client):
    response = client.get(
        "/api/payslips/generate",
        params={"month": "March", "year": 2025, "employee_id": "RAV001"}
    )
    assert response.status_code == status.HTTP_200_OK

    data = response.json()["data"]
    assert data["gross_earnings"] == 30000
    assert data["total_deductions"] == 2000
    assert data["net_salary"] == 28000
    assert data["working_days"] == 30
    assert data["employee"]["employee_id"] == "RAV001"

def test_get_single_payslip_unknown_employee(client):
    response = client.get(
        "/api/payslips/generate",
        params={"month": "March", "year": 2025, "employee_id": "NOPE001"}
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["code"] == "EMPLOYEE_NOT_FOUND"

def test_get_single_payslip_requires_period(client):
    response = client.get("/api/payslips/generate", params={"employee_id": "RAV001"})
    assert response.status_code == 422

    response = client.get(
        "/api/payslips/generate",
        params={"month": "  ", "year": 2025, "employee_id": "RAV001"}
    )
    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "month"

def test_generate_all_with_partial_failure(client):
    response = client.post("/api/payslips/generate", json=PERIOD)
    assert response.status_code == 200

    body = response.json()
    meta = body["metadata"]
    assert meta["count"] == 3
    assert meta["requested"] == 4
    assert meta["failed"] == 1
    assert meta["failed_employees"][0].startswith("Al (ValidationError: ")
    assert meta["summary"] == {
        "total_gross_earnings": 60500,
        "total_deductions": 3680,
        "total_net_salary": 56820,
    }
    assert [p["employee"]["employee_id"] for p in body["data"]] == ["RAV001", "MEE002", "UNK004"]
    assert body["data"][0]["actual_working_days"] == 29

def test_generate_selected_employees(client):
    response = client.post(
        "/api/payslips/generate",
        json={**PERIOD, "employee_ids": ["MEE002", "RAV001"]}
    )
    body = response.json()
    assert body["metadata"]["count"] == 2
    assert "failed_employees" not in body["metadata"]
    assert [p["employee"]["name"] for p in body["data"]] == ["Ravi Kumar", "Meena"]

def test_generate_every_selected_employee_failed(client):
    response = client.post("/api/payslips/generate", json={**PERIOD, "employee_ids": ["ALX003"]})
    assert response.status_code == 400

    error = response.json()["errors"][0]
    assert error["code"] == "BATCH_FAILED"
    assert len(error["details"]["failed_employees"]) == 1

def test_generate_unknown_ids(client):
    response = client.post("/api/payslips/generate", json={**PERIOD, "employee_ids": ["NOPE001"]})
    assert response.status_code == 404

@pytest.mark.parametrize("payload", [
    {"year": 2025},
    {"month": "   ", "year": 2025},
    {"month": "March"},
    {"month": "March", "year": 2025, "working_days": 0},
])
def test_generate_rejects_bad_period(client, payload):
    response = client.post("/api/payslips/generate", json=payload)
    assert response.status_code == 422
    assert response.json()["success"] is False

def test_single_payslip_document(client):
    response = client.post(
        "/api/payslips/pdf",
        json={"month": "March", "year": 2025, "employee_id": "RAV001"}
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'filename="payslip-RAV001-March-2025.html"' in response.headers["content-disposition"]
    assert "Twenty Eight Thousand Only" in response.text
    assert "Green Valley School" in response.text

def test_single_payslip_document_unknown(client):
    response = client.post(
        "/api/payslips/pdf",
        json={"month": "March", "year": 2025, "employee_id": "NOPE001"}
    )
    assert response.status_code == 404

def test_bulk_document(client):
    response = client.post(
        "/api/payslips/bulk-pdf",
        json={**PERIOD, "employee_ids": ["RAV001", "ALX003", "MEE002"]}
    )
    assert response.status_code == 200
    assert response.headers["X-Requested-Count"] == "3"
    assert response.headers["X-Generated-Count"] == "2"
    assert response.headers["X-Failed-Count"] == "1"
    assert "payslips-2-employees-March-2025.html" in response.headers["content-disposition"]
    assert response.text.count("SALARY SLIP") == 2

def test_bulk_document_requires_ids(client):
    response = client.post("/api/payslips/bulk-pdf", json=PERIOD)
    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "VALIDATION_ERROR"

def test_bulk_document_all_failed(client):
    response = client.post("/api/payslips/bulk-pdf", json={**PERIOD, "employee_ids": ["ALX003"]})
    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "BATCH_FAILED"

def test_bulk_zip(client):
    response = client.post(
        "/api/payslips/bulk-zip",
        json={**PERIOD, "employee_ids": ["RAV001", "MEE002"]}
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'attachment; filename="payslips-March-2025.zip"' == response.headers["content-disposition"]

    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert sorted(archive.namelist()) == [
            "payslip-MEE002-March-2025.html",
            "payslip-RAV001-March-2025.html",
        ]

def test_amount_in_words(client):
    response = client.post("/api/payslips/amount-in-words", json={"amount": 1234567})
    assert response.status_code == 200
    assert response.json()["words"] == "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Only"

def test_amount_in_words_rejects_text(client):
    response = client.post("/api/payslips/amount-in-words", json={"amount": "lots"})
    assert response.status_code == 422
