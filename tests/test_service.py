"""Tests for ScanService and the scan request/response schemas."""

import pytest
from pydantic import ValidationError

from pa_app.core.config import Settings
from pa_app.core.errors import BadRequest
from pa_app.modules.archive.schemas import ScanRequest
from pa_app.modules.archive.service import ScanService


@pytest.fixture
def service():
    return ScanService(Settings(DATE_GRAMMAR="numeric"))


class TestScanService:
    def test_counts_and_diagnostics(self, service, make_tree):
        root = make_tree("2020/01/01/a.jpg", "2021/03/15/b.jpg", "2021/03/15/c.jpg")
        events = []

        result = service.run(ScanRequest(root=root, year=2021), sink=events.append)

        assert result.preset == "2021------"
        assert result.processed_count == 2
        assert result.matched_count == 2
        assert sorted(result.matched) == [
            str(root / "2021/03/15/b.jpg"),
            str(root / "2021/03/15/c.jpg"),
        ]
        assert [d.message for d in result.diagnostics] == [e.message for e in events]
        assert result.diagnostics[-1].kind == "day_matched"
        assert result.diagnostics[-1].level == "INFO"

    def test_tag_filter(self, service, make_tree, jpeg_writer):
        root = make_tree("2021/03/15/notes.txt")
        day = root / "2021/03/15"
        jpeg_writer(day / "family.jpg", keywords=["family"])
        jpeg_writer(day / "work.jpg", keywords=["work"])

        result = service.run(ScanRequest(root=root, tag="family"), sink=lambda e: None)

        assert result.processed_count == 3
        assert result.matched == [str(day / "family.jpg")]

    def test_grammar_from_request(self, service, make_tree):
        root = make_tree("2021/2021-03/2021-03-15/a.jpg", "2021/03/15/b.jpg")

        result = service.run(ScanRequest(root=root, grammar="iso"), sink=lambda e: None)

        assert result.matched == [str(root / "2021/2021-03/2021-03-15/a.jpg")]

    def test_grammar_from_settings(self, make_tree):
        root = make_tree("2021/2021-03/2021-03-15/a.jpg")
        svc = ScanService(Settings(DATE_GRAMMAR="iso"))

        assert svc.run(ScanRequest(root=root), sink=lambda e: None).matched_count == 1

    def test_unknown_grammar(self, service, make_tree):
        root = make_tree("2021/03/15/a.jpg")
        with pytest.raises(BadRequest):
            service.run(ScanRequest(root=root, grammar="roman"))

    def test_exact_path(self, service, make_tree):
        root = make_tree("2021/03/15/a.jpg")

        result = service.run(
            ScanRequest(root=root / "2021/03/15", year=2021, month=3, day=15, exact_path=True),
            sink=lambda e: None,
        )

        assert result.exact_path is True
        assert result.preset == "2021-03-15"
        assert result.processed_count == 1


class TestScanRequest:
    def test_exact_path_needs_a_preset(self, tmp_path):
        with pytest.raises(ValidationError):
            ScanRequest(root=tmp_path, exact_path=True)

    @pytest.mark.parametrize("field, value", [("month", 13), ("day", 0), ("year", 99)])
    def test_ranges(self, tmp_path, field, value):
        with pytest.raises(ValidationError):
            ScanRequest(root=tmp_path, **{field: value})

    def test_root_must_exist(self, tmp_path):
        with pytest.raises(ValidationError):
            ScanRequest(root=tmp_path / "missing")


class TestSettings:
    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PA_DATE_GRAMMAR", "ISO")
        monkeypatch.setenv("PA_ARCHIVE_ROOT", str(tmp_path))
        monkeypatch.setenv("PA_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.DATE_GRAMMAR == "iso"
        assert settings.ARCHIVE_ROOT == tmp_path
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.JPEG_EXTS == {"jpg", "jpeg"}

    def test_unknown_grammar_rejected(self):
        with pytest.raises(ValidationError):
            Settings(DATE_GRAMMAR="roman")
