"""Tests for /predict and /predict/histories."""

import re

from fastapi.testclient import TestClient

from web.app import create_app

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_predict_cancer(upload, fake_engine, jpeg_bytes):
    fake_engine.scores = [0.1, 0.9]
    res = upload(jpeg_bytes)
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "success"
    assert body["message"] == "Model is predicted successfully"
    assert body["data"]["result"] == "Cancer"
    assert body["data"]["suggestion"] == "Segera periksa ke dokter!"
    assert ISO_UTC.match(body["data"]["createdAt"])
    assert set(body["data"]) == {"id", "result", "suggestion", "createdAt"}


def test_predict_non_cancer(upload, fake_engine, jpeg_bytes):
    fake_engine.scores = [0.3]
    res = upload(jpeg_bytes)
    assert res.status_code == 201
    assert res.json()["data"]["result"] == "Non-cancer"
    assert res.json()["data"]["suggestion"] == "Penyakit kanker tidak terdeteksi."


def test_predict_boundary_is_non_cancer(upload, fake_engine, jpeg_bytes):
    fake_engine.scores = [0.5]
    res = upload(jpeg_bytes)
    assert res.status_code == 201
    assert res.json()["data"]["result"] == "Non-cancer"


def test_predict_passes_upload_bytes_to_engine(upload, fake_engine, jpeg_bytes):
    upload(jpeg_bytes)
    assert fake_engine.calls == [jpeg_bytes]


def test_predict_persists_one_record_per_call(upload, memory_store, jpeg_bytes):
    ids = {upload(jpeg_bytes).json()["data"]["id"] for _ in range(5)}
    assert len(ids) == 5
    stored = memory_store.get_all()
    assert len(stored) == 5
    assert {r.id for r in stored} == ids


def test_predict_decode_failure(upload, memory_store):
    res = upload(b"bad image bytes")
    assert res.status_code == 400
    assert res.json() == {
        "status": "fail",
        "message": "Terjadi kesalahan dalam melakukan prediksi",
    }
    assert memory_store.get_all() == []


def test_predict_missing_image_field(client, memory_store):
    res = client.post("/predict", files={"other": ("a.txt", b"hello", "text/plain")})
    assert res.status_code == 400
    assert res.json()["status"] == "fail"
    assert res.json()["message"] == "Terjadi kesalahan dalam melakukan prediksi"
    assert memory_store.get_all() == []


def test_predict_text_image_field(client, fake_engine, memory_store):
    res = client.post(
        "/predict",
        data={"image": "not a file"},
        files={"other": ("a.txt", b"hello", "text/plain")},
    )
    assert res.status_code == 400
    assert res.json() == {
        "status": "fail",
        "message": "Terjadi kesalahan dalam melakukan prediksi",
    }
    assert fake_engine.calls == []
    assert memory_store.get_all() == []


def test_predict_rejects_oversized_payload(upload, fake_engine, memory_store):
    res = upload(b"\xff" * 1_000_001)
    assert res.status_code == 413
    assert res.json() == {
        "status": "fail",
        "message": "Payload content length greater than maximum allowed: 1000000",
    }
    assert fake_engine.calls == []
    assert memory_store.get_all() == []


def test_predict_rejects_non_multipart(client, fake_engine):
    res = client.post("/predict", json={"image": "abc"})
    assert res.status_code == 415
    assert res.json() == {"status": "fail", "message": "Unsupported Media Type"}
    assert fake_engine.calls == []


def test_histories_empty(client):
    res = client.get("/predict/histories")
    assert res.status_code == 200
    assert res.json() == {"status": "success", "data": []}


def test_histories_round_trip(upload, client, fake_engine, jpeg_bytes):
    fake_engine.scores = [0.9]
    first = upload(jpeg_bytes).json()["data"]
    fake_engine.scores = [0.2]
    second = upload(jpeg_bytes).json()["data"]

    res = client.get("/predict/histories")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"

    by_id = {item["id"]: item["history"] for item in body["data"]}
    assert len(by_id) == 2
    for created in (first, second):
        assert by_id[created["id"]] == {
            "result": created["result"],
            "suggestion": created["suggestion"],
            "createdAt": created["createdAt"],
        }


def test_unknown_route_is_normalized(client):
    res = client.get("/nope")
    assert res.status_code == 404
    assert res.json() == {"status": "fail", "message": "Not Found"}


def test_wrong_method_is_normalized(client):
    res = client.get("/predict")
    assert res.status_code == 405
    assert res.json() == {"status": "fail", "message": "Method Not Allowed"}


def test_store_failure_is_internal_error(config, fake_engine, memory_store):
    def broken():
        raise RuntimeError("firestore unavailable")

    memory_store.get_all = broken
    app = create_app(config, engine=fake_engine, store=memory_store)
    with TestClient(app) as c:
        res = c.get("/predict/histories", headers={"Origin": "https://example.com"})
    assert res.status_code == 500
    assert res.json() == {"status": "fail", "message": "Internal Server Error"}
    assert res.headers["access-control-allow-origin"] == "*"


def test_cors_open_to_all_origins(client):
    res = client.get("/predict/histories", headers={"Origin": "https://example.com"})
    assert res.headers["access-control-allow-origin"] == "*"


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "success"


def test_openapi_documents_fail_envelope(app):
    paths = app.openapi()["paths"]
    fail_ref = "#/components/schemas/FailResponse"
    predict_responses = paths["/predict"]["post"]["responses"]
    for code in ("400", "413", "415", "500"):
        assert predict_responses[code]["content"]["application/json"]["schema"]["$ref"] == fail_ref
    history_responses = paths["/predict/histories"]["get"]["responses"]
    assert history_responses["500"]["content"]["application/json"]["schema"]["$ref"] == fail_ref
