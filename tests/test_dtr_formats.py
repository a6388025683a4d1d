import pytest
from app.models.dtr_format import DtrFormat, UnknownDtrFormat

def _queue(client, headers, company_id=None):
    return client.post("/api/unknown-dtr-formats", headers=headers, json={
        "raw_text": "NAME: J. DELA CRUZ\nIN 08:00 OUT 17:00",
        "parsed_data": {"time_in": "08:00"},
        "company_id": company_id,
    })

def test_create_and_list_formats(client, admin_headers, company):
    response = client.post("/api/dtr-formats", headers=admin_headers, json={
        "name": "Acme biometric export",
        "company_id": company.id,
        "pattern": r"IN (\d\d:\d\d) OUT (\d\d:\d\d)",
        "extraction_rules": {"time_in": 1, "time_out": 2},
    })
    assert response.status_code == 201
    listing = client.get("/api/dtr-formats", headers=admin_headers, params={"companyId": company.id}).json()
    assert [f["name"] for f in listing] == ["Acme biometric export"]

def test_approve_unknown_format(client, admin_headers, company, db_session):
    unknown_id = _queue(client, admin_headers, company.id).json()["id"]

    response = client.post(
        f"/api/unknown-dtr-formats/{unknown_id}/approve", headers=admin_headers, json={"name": "Acme paper sheet"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["company_id"] == company.id
    assert data["example"].startswith("NAME: J. DELA CRUZ")

    assert db_session.get(UnknownDtrFormat, unknown_id).is_processed
    assert client.get("/api/unknown-dtr-formats", headers=admin_headers).json() == []

def test_already_processed_format_is_400(client, admin_headers, db_session):
    unknown_id = _queue(client, admin_headers).json()["id"]
    client.post(f"/api/unknown-dtr-formats/{unknown_id}/approve", headers=admin_headers, json={"name": "Sheet"})
    response = client.post(f"/api/unknown-dtr-formats/{unknown_id}/approve", headers=admin_headers, json={"name": "Sheet"})
    assert response.status_code == 400
    assert db_session.query(DtrFormat).count() == 1

def test_approve_missing_format_is_404(client, admin_headers):
    response = client.post("/api/unknown-dtr-formats/9999/approve", headers=admin_headers, json={"name": "Sheet"})
    assert response.status_code == 404
