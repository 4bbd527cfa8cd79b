import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from samples import EXCEPTION_TWO_RECOVERIES, write

from interfacedesign.api.catalog import check_segment
from interfacedesign.main import app

BASE = "/api/demo/interfacedesign"


@pytest.fixture
def client(catalog_roots):
    return TestClient(app)


def test_health_endpoint_ok(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_instances(client):
    response = client.get("/api/instances")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert {i["id"] for i in body["items"]} == {"demo", "empty"}
    assert "functionCount" in body["items"][0]


def test_overview(client):
    body = client.get(f"{BASE}/overview").json()

    assert body["success"] is True
    assert body["basePath"].endswith("interfacedesign")
    assert body["overview"]["functions"]["count"] == 2


def test_functions_envelope(client):
    body = client.get(f"{BASE}/functions").json()

    assert body["count"] == 2
    assert [f["name"] for f in body["items"]] == ["readFile", "writeFile"]
    assert list(body["grouped"]) == ["Dateizugriff"]
    assert body["items"][0]["category"]["en"] == "File access"


def test_enums_sorted_by_name(client):
    body = client.get(f"{BASE}/enums").json()

    assert [e["name"] for e in body["items"]] == ["Alpha", "Color"]
    assert set(body["grouped"]) == {"Basics", "Uncategorized"}


def test_exceptions_grouped_by_severity(client):
    body = client.get(f"{BASE}/exceptions").json()

    assert body["count"] == 2
    assert set(body["bySeverity"]) == {"High", "Medium"}


def test_function_detail(client):
    body = client.get(f"{BASE}/function/readFile").json()

    assert body["success"] is True
    assert body["function"]["id"] == "F01"
    assert [s["number"] for s in body["function"]["detailedSteps"]] == [1, 2, 3]


@pytest.mark.parametrize(
    "path, key",
    [
        ("enum/Color", "enum"),
        ("type/ReadResult", "type"),
        ("exception/FileNotFoundException", "exception"),
    ],
)
def test_detail_envelopes(client, path, key):
    response = client.get(f"{BASE}/{path}")

    assert response.status_code == 200
    assert response.json()[key]["filePath"].endswith(".xml")


def test_exception_with_repeated_recovery(client, catalog_roots):
    instances, _ = catalog_roots
    exceptions = instances / "demo" / "interfacedesign" / "exceptions"
    write(exceptions / "E.xml", EXCEPTION_TWO_RECOVERIES)

    response = client.get(f"{BASE}/exception/E")

    assert response.status_code == 200
    assert response.json()["exception"]["recovery"]["action"]["en"] == "a"


def test_unknown_detail_is_not_found(client):
    response = client.get(f"{BASE}/function/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "Function not found"


@pytest.mark.parametrize("segment", ["", ".", "..", "a/b", "a\\b"])
def test_check_segment_rejects_directory_escapes(segment):
    with pytest.raises(HTTPException) as excinfo:
        check_segment(segment)

    assert excinfo.value.status_code == 400


def test_check_segment_accepts_plain_names():
    assert check_segment("FileNotFoundException") == "FileNotFoundException"


def test_unknown_instance_is_not_found(client):
    response = client.get("/api/nobody/interfacedesign/functions")

    assert response.status_code == 404


def test_processes(client):
    body = client.get(f"{BASE}/processes").json()

    assert [(p["actor"], p["id"]) for p in body["items"]] == [
        ("Authority", "P03"),
        ("CitizenPortal", "P01"),
        ("CitizenPortal", "P02"),
    ]
    assert {k: len(v) for k, v in body["groupedByActor"].items()} == {
        "Authority": 1,
        "CitizenPortal": 2,
    }
    assert {k: len(v) for k, v in body["groupedByType"].items()} == {"flow": 2, "sequenz": 1}


def test_process_detail(client):
    body = client.get(f"{BASE}/process/CitizenPortal/flow/P01").json()

    assert body["process"]["diagramType"] == "flow"
    assert body["process"]["mermaidContent"]["de"] == body["process"]["mermaidContent"]["en"]


def test_process_chains(client):
    body = client.get(f"{BASE}/processchains").json()

    assert [c["chainId"] for c in body["items"]] == ["PK-01", "Y"]


def test_process_chain_detail(client):
    response = client.get(f"{BASE}/processchain/PK-01")

    assert response.status_code == 200
    chain = response.json()["processChain"]
    assert chain["folder"] == "PK01"
    assert chain["outcome"]["state"]["en"] == "Application stored"
    assert client.get(f"{BASE}/processchain/nope").status_code == 404


def test_process_map(client):
    body = client.get(f"{BASE}/processmap").json()

    assert body["processMap"]["categories"][0]["id"] == "C1"
