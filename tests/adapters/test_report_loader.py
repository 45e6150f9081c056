from pathlib import Path

import pytest

from db_health_gate.adapters import ReportLoader, ReportLoaderError

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def test_load_report_from_json_file():
    data = ReportLoader(FIXTURES / "report-current.json").load()

    assert data["schemaHealth"]["overall"] == 6.5
    assert len(data["securityAnalysis"]["vulnerabilities"]) == 3


def test_missing_report_raises(tmp_path):
    with pytest.raises(ReportLoaderError, match="not found"):
        ReportLoader(tmp_path / "missing.json").load()


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ReportLoaderError, match="Invalid JSON"):
        ReportLoader(path).load()


def test_non_object_json_raises(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ReportLoaderError, match="must be an object"):
        ReportLoader(path).load()


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("  \n", encoding="utf-8")

    with pytest.raises(ReportLoaderError, match="empty"):
        ReportLoader(path).load()


def test_invalid_utf8_raises(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"{\"overallScore\": \xff\xfe}")

    with pytest.raises(ReportLoaderError, match="Failed to read"):
        ReportLoader(path).load()


def test_byte_order_mark_is_tolerated(tmp_path):
    path = tmp_path / "bom.json"
    path.write_text('\ufeff{"overallScore": 8}', encoding="utf-8")

    assert ReportLoader(path).load() == {"overallScore": 8}
