import io
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook, load_workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sheetmark.application import get_file_service, reset_file_state

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture(autouse=True)
def reset_state(tmp_path, monkeypatch):
    monkeypatch.setenv("SHEETMARK_DATA_ROOT", str(tmp_path / "data"))
    monkeypatch.setenv("SHEETMARK_REGISTRY", "memory")
    reset_file_state()
    yield
    reset_file_state()


@pytest.fixture()
def client():
    from sheetmark.app import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _workbook(tmp_path: Path, filename: str, rows: list[list[str]]) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    path = tmp_path / filename
    workbook.save(path)
    return path


def _upload(client: TestClient, path: Path) -> str:
    with path.open("rb") as fp:
        response = client.post("/api/upload", files={"file": (path.name, fp, XLSX)})
    assert response.status_code == 201
    return response.json()["id"]


def test_upload_and_header(client, tmp_path):
    path = _workbook(tmp_path, "grid.xlsx", [["Name", "Code"], ["Apple", "A1"]])
    entry_id = _upload(client, path)

    response = client.get(f"/api/getHeader/{entry_id}")
    assert response.status_code == 200
    assert response.json() == {"columns": ["Name", "Code"]}

    stored = Path(get_file_service().get_file_entry(entry_id).file_path)
    assert stored.exists()
    assert stored.name == "grid.xlsx"
    assert stored.parent.parent == (tmp_path / "data" / "uploads").resolve()


def test_header_for_unknown_entry(client):
    response = client.get("/api/getHeader/does-not-exist")
    assert response.status_code == 404


def test_upload_rejects_non_workbook(client, tmp_path):
    response = client.post("/api/upload", files={"file": ("notes.xlsx", b"not a workbook", XLSX)})
    assert response.status_code == 400
    assert list((tmp_path / "data" / "uploads").iterdir()) == []


def test_rejected_upload_keeps_earlier_file_with_same_name(client, tmp_path):
    path = _workbook(tmp_path, "grid.xlsx", [["Name", "Code"], ["Apple", "A1"]])
    entry_id = _upload(client, path)

    response = client.post("/api/upload", files={"file": ("grid.xlsx", b"not a workbook", XLSX)})
    assert response.status_code == 400

    response = client.get(f"/api/getHeader/{entry_id}")
    assert response.status_code == 200
    assert response.json() == {"columns": ["Name", "Code"]}

    second_id = _upload(client, path)
    first = get_file_service().get_file_entry(entry_id).file_path
    second = get_file_service().get_file_entry(second_id).file_path
    assert first != second


def test_run_job_end_to_end(client, tmp_path):
    grid_path = _workbook(
        tmp_path,
        "grid.xlsx",
        [["Name", "Code"], ["Apple", "A1"], ["apple", "A2"], ["Banana", "B1"]],
    )
    contraction_path = _workbook(tmp_path, "contractions.xlsx", [["Contraction"], ["b1"]])
    entry_id = _upload(client, grid_path)

    with contraction_path.open("rb") as fp:
        response = client.post(
            "/api/runJob",
            data={"fileId": entry_id, "searchTerm": ["an"], "sortCol": ["asc,1"]},
            files={"contractionFile": ("contractions.xlsx", fp, XLSX)},
        )
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX
    disposition = response.headers["content-disposition"]
    assert disposition.startswith("attachment;")
    assert "grid" in disposition and "basic" in disposition

    sheet = load_workbook(io.BytesIO(response.content)).active
    assert [sheet.cell(row=row, column=1).value for row in range(1, 5)] == ["Name", "Apple", "Banana", "apple"]
    assert [sheet.cell(row=row, column=2).value for row in range(2, 5)] == ["A1", "B1", "A2"]
    assert sheet["B3"].fill.fgColor.rgb.upper() == "FFFFFF00"
    assert sheet["B2"].fill.fgColor.rgb.upper() == "FFFFFFFF"

    rich_sheet = load_workbook(io.BytesIO(response.content), rich_text=True).active
    banana = rich_sheet["A3"].value
    assert isinstance(banana, CellRichText)
    highlighted = [block for block in banana if isinstance(block, TextBlock)]
    assert [block.text for block in highlighted] == ["an", "an"]
    assert all(block.font.b for block in highlighted)
    assert highlighted[0].font.color.rgb.upper() == "FFAD0000"

    jobs = client.get("/api/jobs").json()["items"]
    assert jobs[-1]["status"] == "completed"
    assert jobs[-1]["file_id"] == entry_id
    assert list((tmp_path / "data" / "results").iterdir()) == []


def test_run_job_validation_failure(client, tmp_path):
    grid_path = _workbook(tmp_path, "dates.xlsx", [["Name", "Date"], ["a", "13ABYY"]])
    entry_id = _upload(client, grid_path)

    response = client.post("/api/runJob", data={"fileId": entry_id, "checkDate": ["2"]})
    assert response.status_code == 400
    assert "month" in response.json()["detail"]

    jobs = client.get("/api/jobs").json()["items"]
    assert jobs[-1]["status"] == "failed"
    assert "month" in jobs[-1]["error"]


def test_run_job_bad_fields(client, tmp_path):
    response = client.post("/api/runJob", data={"searchTerm": ["an"]})
    assert response.status_code == 400

    grid_path = _workbook(tmp_path, "grid.xlsx", [["Name"], ["a"]])
    entry_id = _upload(client, grid_path)
    response = client.post("/api/runJob", data={"fileId": entry_id, "sortCol": ["sideways,1"]})
    assert response.status_code == 400


def test_run_job_unknown_file(client):
    response = client.post("/api/runJob", data={"fileId": "missing"})
    assert response.status_code == 404


def test_root(client):
    assert client.get("/").json()["docs"] == "/docs"


def test_markup_like_source_text_is_written_as_plain_text(client, tmp_path):
    literal = '<font color="#123456"><b>x</b></font>'
    grid_path = _workbook(tmp_path, "grid.xlsx", [["Name"], [literal]])
    entry_id = _upload(client, grid_path)

    response = client.post("/api/runJob", data={"fileId": entry_id, "searchTerm": ["zzz"]})
    assert response.status_code == 200

    sheet = load_workbook(io.BytesIO(response.content), rich_text=True).active
    assert sheet["A2"].value == literal
