from __future__ import annotations


def test_docs_swagger_ui(client):
    response = client.get("/docs/")
    assert response.status_code == 200
    assert b"Swagger" in response.data


def test_openapi_document_lists_endpoints(client):
    response = client.get("/docs/openapi.json")
    assert response.status_code == 200
    data = response.get_json()
    assert "/health" in data["paths"]
    assert "/currencies" in data["paths"]
    assert "/rates/{base}" in data["paths"]
    assert "/convert" in data["paths"]
