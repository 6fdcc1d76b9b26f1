import uuid

from conftest import register, upload


def test_upload_image_end_to_end(client, ocr, storage):
    headers = register(client)
    ocr.text = "Annual Insurance Policy"

    response = upload(client, headers, expiryDate="2030-06-30")

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "Document uploaded successfully"
    doc = body["doc"]
    assert doc["category"] == "Insurance"
    assert doc["extracted_text"] == "Annual Insurance Policy"
    assert doc["ocr_processed"] is True
    assert doc["auto_categorized"] is True
    assert doc["title"] == "scan.png"
    assert doc["expiry_date"].startswith("2030-06-30")
    assert len(storage.uploads) == 1


def test_upload_with_manual_fields(client, ocr):
    headers = register(client)
    ocr.text = "invoice"

    response = upload(client, headers, title="March bill", category="Utilities")

    doc = response.json()["doc"]
    assert doc["title"] == "March bill"
    assert doc["category"] == "Utilities"
    assert doc["auto_categorized"] is False


def test_blank_category_counts_as_missing(client, ocr):
    headers = register(client)
    ocr.text = "Invoice 12"

    response = upload(client, headers, category="")

    assert response.json()["doc"]["category"] == "Invoice"


def test_upload_without_file(client, storage):
    headers = register(client)

    response = client.post(
        "/api/document/upload", headers=headers, data={"title": "Nothing"}
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "MISSING_FILE"
    assert storage.uploads == []


def test_upload_rejects_disallowed_type(client, storage, ocr):
    headers = register(client)

    response = upload(client, headers, filename="notes.txt", content_type="text/plain")

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_FILE_TYPE"
    assert storage.uploads == []
    assert ocr.calls == []


def test_upload_rejects_oversized_file(client, storage):
    headers = register(client)

    response = upload(
        client,
        headers,
        filename="huge.pdf",
        content_type="application/pdf",
        data=b"0" * (10 * 1024 * 1024 + 1),
    )

    assert response.status_code == 413
    assert storage.uploads == []


def test_upload_rejects_bad_expiry_date(client, storage):
    headers = register(client)

    response = upload(client, headers, expiryDate="someday")

    assert response.status_code == 400
    assert storage.uploads == []


def test_upload_storage_failure_is_500_with_cause(client, storage):
    headers = register(client)
    storage.fail_upload = True

    response = upload(client, headers)

    assert response.status_code == 500
    assert response.json()["error"] == "bucket unavailable"


def test_list_documents_with_filters(client, ocr):
    headers = register(client)
    ocr.text = "Invoice for March"
    upload(client, headers, filename="march.png")
    ocr.text = "Car insurance"
    upload(client, headers, filename="car.png")
    upload(client, headers, filename="contract.pdf", content_type="application/pdf")

    everything = client.get("/api/document", params={"category": "all"}, headers=headers)
    assert everything.status_code == 200
    assert len(everything.json()) == 3

    invoices = client.get("/api/document", params={"search": "INVOICE"}, headers=headers)
    assert [d["title"] for d in invoices.json()] == ["march.png"]

    general = client.get("/api/document", params={"category": "General"}, headers=headers)
    assert [d["title"] for d in general.json()] == ["contract.pdf"]


def test_documents_are_private(client):
    owner = register(client)
    other = register(client, email="bruno@example.com")
    doc_id = upload(client, owner).json()["doc"]["id"]

    assert client.get("/api/document", headers=other).json() == []
    assert client.get(f"/api/document/{doc_id}", headers=other).status_code == 403
    assert (
        client.put(
            f"/api/document/{doc_id}", json={"title": "Mine now"}, headers=other
        ).status_code
        == 403
    )
    assert client.delete(f"/api/document/{doc_id}", headers=other).status_code == 403
    assert (
        client.delete(f"/api/document/{doc_id}/reprocess", headers=other).status_code
        == 403
    )
    assert client.get(f"/api/document/{doc_id}", headers=owner).status_code == 200


def test_get_missing_document(client):
    headers = register(client)

    response = client.get(f"/api/document/{uuid.uuid4()}", headers=headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Document not found"


def test_update_document(client):
    headers = register(client)
    doc_id = upload(client, headers).json()["doc"]["id"]

    response = client.put(
        f"/api/document/{doc_id}",
        json={"title": "Passport scan", "category": "Passport"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Passport scan"
    assert response.json()["category"] == "Passport"


def test_delete_document_even_if_storage_fails(client, storage):
    headers = register(client)
    doc_id = upload(client, headers).json()["doc"]["id"]
    storage.fail_destroy = True

    response = client.delete(f"/api/document/{doc_id}", headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Document deleted successfully"
    assert client.get(f"/api/document/{doc_id}", headers=headers).status_code == 404


def test_reprocess_document(client, ocr):
    headers = register(client)
    ocr.text = ""
    doc_id = upload(client, headers, category="Personal").json()["doc"]["id"]
    ocr.text = "Your password reset code"

    response = client.delete(f"/api/document/{doc_id}/reprocess", headers=headers)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["new_category"] == "Passport"
    assert body["extracted_text"] == "Your password reset code"
    assert body["doc"]["category"] == "Passport"


def test_reprocess_non_image(client, ocr):
    headers = register(client)
    doc_id = upload(
        client, headers, filename="contract.pdf", content_type="application/pdf"
    ).json()["doc"]["id"]

    response = client.delete(f"/api/document/{doc_id}/reprocess", headers=headers)

    assert response.status_code == 400
    assert response.json()["error_code"] == "UNSUPPORTED_MEDIA_TYPE"
    assert ocr.calls == []


def test_reprocess_ocr_failure_is_500(client, ocr):
    headers = register(client)
    doc_id = upload(client, headers).json()["doc"]["id"]
    ocr.fail = True

    response = client.delete(f"/api/document/{doc_id}/reprocess", headers=headers)

    assert response.status_code == 500
    assert response.json()["error"] == "tesseract is not installed"


def test_missing_file_wins_over_bad_expiry_date(client, storage):
    headers = register(client)

    response = client.post(
        "/api/document/upload",
        headers=headers,
        data={"title": "Nothing", "expiryDate": "someday"},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "MISSING_FILE"
    assert storage.uploads == []


def test_long_title_is_accepted_on_upload_and_update(client):
    headers = register(client)
    long_title = "x" * 300

    response = upload(client, headers, title=long_title, category="c" * 300)
    assert response.status_code == 201, response.text
    doc_id = response.json()["doc"]["id"]

    response = client.put(
        f"/api/document/{doc_id}", json={"title": long_title + "y"}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["title"] == long_title + "y"
