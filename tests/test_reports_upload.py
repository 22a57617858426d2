def _upload(client, payload):
    return client.post("/api/reports/upload", json=payload)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_upload_simple_report(client, simple_payload):
    response = _upload(client, simple_payload)
    assert response.status_code == 201

    data = response.json()["data"]
    assert data["report_id"].startswith("report_")
    assert data["patient_name"] == "Jane Doe"
    assert data["test_date"] == "2024-01-15"
    assert data["insights"]["flagged_count"] == 3
    assert data["insights"]["out_of_range_count"] == 2
    assert set(data["insights"]["risk_tags"]) == {"blood_health", "metabolic"}
    assert data["warnings"] == []


def test_uploaded_report_can_be_fetched(client, complex_payload):
    report_id = _upload(client, complex_payload).json()["data"]["report_id"]

    response = client.get(f"/api/reports/{report_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["report"]["report_id"] == report_id
    assert data["report"]["created_at"]

    insights = data["insights"]
    assert insights["report_id"] == report_id
    assert insights["test_date"] == "2024-03-02"
    platelets = insights["flagged_values"][0]
    assert platelets["name"] == "Platelets"
    assert platelets["isOutOfRange"] is True
    assert platelets["severity"] == "warning"
    assert platelets["referenceMin"] == 150


def test_upload_reports_validation_errors(client, patient):
    response = _upload(client, {"patient": patient, "lab_values": [], "tests": []})
    assert response.status_code == 400

    payload = response.json()
    assert payload["error"] == "BadRequest"
    assert payload["details"]["errors"] == [
        "Report must contain either lab_values array or tests array with test categories"
    ]
    assert payload["details"]["warnings"] == ["Test date not found (optional for complex reports)"]


def test_upload_rejects_non_object_body(client):
    response = _upload(client, [1, 2, 3])
    assert response.status_code == 400
    assert response.json()["details"]["errors"] == ["Report must be a valid JSON object"]


def test_upload_rejects_unknown_flag_status(client, simple_payload):
    simple_payload["lab_values"][0]["flag"] = "abnormal"
    response = _upload(client, simple_payload)
    assert response.status_code == 400
    (error,) = response.json()["details"]["errors"]
    assert error.startswith("lab_values.0.flag")


def test_missing_report_returns_not_found(client):
    response = client.get("/api/reports/report_0_missing")
    assert response.status_code == 404
    assert response.json() == {"statusCode": 404, "message": "Report not found", "error": "NotFound"}


def test_report_context_for_agent(client, complex_payload):
    report_id = _upload(client, complex_payload).json()["data"]["report_id"]

    response = client.get(f"/api/reports/{report_id}/context")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["context"].splitlines() == [
        "Patient: Jane Doe",
        "Age: 45, Gender: Female",
        "Test Date: 2024-03-02",
        "Lab Name: Not specified",
        "",
        "Lab Values:",
        "  - Platelets: 450 K/uL (Reference: 150-400)",
        "  - Vitamin D: 18 ng/mL (Reference: 30-100)",
    ]
    assert "Do NOT diagnose" in data["prompt"]


def test_upload_accepts_null_lab_value(client, simple_payload):
    simple_payload["lab_values"].append({"name": "Calcium", "value": None, "unit": "mg/dL"})
    response = _upload(client, simple_payload)
    assert response.status_code == 201

    report_id = response.json()["data"]["report_id"]
    calcium = client.get(f"/api/reports/{report_id}").json()["data"]["insights"]["flagged_values"][-1]
    assert calcium["name"] == "Calcium"
    assert calcium["value"] is None
    assert calcium["isOutOfRange"] is False
    assert calcium["severity"] == "normal"


def test_upload_ignores_non_object_metadata(client, simple_payload):
    simple_payload["metadata"] = "lab xyz"
    simple_payload["summary"] = ["not", "an", "object"]
    response = _upload(client, simple_payload)
    assert response.status_code == 201
    assert response.json()["data"]["test_date"] == "2024-01-15"

    report_id = response.json()["data"]["report_id"]
    report = client.get(f"/api/reports/{report_id}").json()["data"]["report"]
    assert report["metadata"] is None
    assert report["summary"] is None
