"""Tests for the document analysis pipeline."""

from quotesmith.analysis import DocumentInput, analyze_document, build_summary
from quotesmith.risk import RiskLevel, RiskType


def _document(column_mapping, raw_rows, **overrides):
    fields = {
        "file_name": "quote.xlsx",
        "column_mapping": column_mapping,
        "rows": raw_rows,
        "raw_text": "",
    }
    fields.update(overrides)
    return DocumentInput(**fields)


class TestAnalyzeDocument:
    """Test the happy path."""

    def test_rows_risks_and_summary(self, test_settings, column_mapping, raw_rows):
        analysis = analyze_document(_document(column_mapping, raw_rows), test_settings)

        assert analysis.success is True
        assert analysis.file_name == "quote.xlsx"
        assert [row.row_number for row in analysis.rows] == [2, 3, 4, 5]
        assert [risk.id for risk in analysis.risks] == [
            "duplicate-ABC-100",
            "uom-quantity-5",
            "missing-part-numbers",
            "missing-quantities",
        ]
        summary = analysis.summary
        assert summary.total_rows == 4
        assert summary.valid_rows == 3
        assert summary.total_risks == 4
        assert summary.medium_risks == 4

    def test_text_risks_are_ranked_first(self, test_settings, column_mapping, raw_rows):
        document = _document(
            column_mapping, raw_rows, raw_text="Incoterms: DDP Berlin. Liquidated damages 1% per day."
        )

        analysis = analyze_document(document, test_settings)

        assert [risk.level for risk in analysis.risks[:2]] == [
            RiskLevel.CRITICAL,
            RiskLevel.CRITICAL,
        ]
        assert analysis.summary.critical_risks == 2

    def test_accepts_camel_case_payload(self, test_settings):
        document = DocumentInput.model_validate(
            {
                "fileName": "rfq.csv",
                "columnMapping": {"partNumber": "PN", "quantity": "Q"},
                "rows": [{"PN": "X-1", "Q": "3"}],
                "rawText": "FOB Busan",
            }
        )

        analysis = analyze_document(document, test_settings)

        assert analysis.rows[0].part_number == "X-1"
        assert analysis.rows[0].quantity == 3
        assert analysis.risks[0].id == "incoterm-FOB"


class TestRowLimit:
    """Test row limit enforcement."""

    def test_truncation_adds_warning_first(self, test_settings, column_mapping, raw_rows):
        config = test_settings.model_copy(update={"max_rows": 2})

        analysis = analyze_document(
            _document(column_mapping, raw_rows, raw_text="DDP"), config
        )

        assert len(analysis.rows) == 2
        warning = analysis.risks[0]
        assert warning.id == "warning-row-limit"
        assert warning.level == RiskLevel.MEDIUM
        assert warning.title == "Row Limit Applied (2 rows)"
        assert "contains 4 total rows" in warning.description
        assert analysis.summary.total_rows == 2

    def test_default_ceiling_of_one_hundred(self, test_settings, column_mapping):
        raw = [{"Part #": f"P-{i}", "Qty": "1"} for i in range(150)]

        analysis = analyze_document(_document(column_mapping, raw), test_settings)

        assert len(analysis.rows) == 100
        assert [row.row_number for row in analysis.rows] == list(range(2, 102))
        assert analysis.risks[0].id == "warning-row-limit"
        assert analysis.risks[0].level == RiskLevel.MEDIUM
        assert "contains 150 total rows" in analysis.risks[0].description

    def test_admin_mode_is_unlimited(self, test_settings, column_mapping, raw_rows):
        config = test_settings.model_copy(update={"max_rows": 2, "admin_mode": True})

        analysis = analyze_document(_document(column_mapping, raw_rows), config)

        assert len(analysis.rows) == 4
        assert all(risk.id != "warning-row-limit" for risk in analysis.risks)


class TestFailedAnalysis:
    """Test upstream failures degrading to a failed result."""

    def _assert_single_critical(self, analysis, finding_id):
        assert analysis.success is False
        assert analysis.rows == []
        assert len(analysis.risks) == 1
        risk = analysis.risks[0]
        assert risk.id == finding_id
        assert risk.type == RiskType.GENERAL
        assert risk.level == RiskLevel.CRITICAL
        assert analysis.summary.total_risks == 1
        assert analysis.summary.critical_risks == 1
        assert analysis.summary.total_rows == 0

    def test_no_document(self, test_settings):
        analysis = analyze_document(None, test_settings)

        self._assert_single_critical(analysis, "error-no-file")
        assert analysis.risks[0].title == "No File Provided"

    def test_file_too_large(self, test_settings, column_mapping, raw_rows):
        document = _document(column_mapping, raw_rows, file_size=3 * 1024 * 1024)

        analysis = analyze_document(document, test_settings)

        self._assert_single_critical(analysis, "error-file-size")
        assert analysis.risks[0].description == "File too large. Maximum size is 2MB."

    def test_file_size_ignored_in_admin_mode(self, test_settings, column_mapping, raw_rows):
        config = test_settings.model_copy(update={"admin_mode": True})
        document = _document(column_mapping, raw_rows, file_size=3 * 1024 * 1024)

        assert analyze_document(document, config).success is True

    def test_decode_error(self, test_settings, column_mapping):
        document = _document(column_mapping, [], error="File is not a zip file")

        analysis = analyze_document(document, test_settings)

        self._assert_single_critical(analysis, "error-parse")
        assert analysis.risks[0].description == "File is not a zip file"

    def test_unexpected_error(self, test_settings, column_mapping, raw_rows, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("quotesmith.analysis.pipeline.analyze_all_risks", explode)

        analysis = analyze_document(_document(column_mapping, raw_rows), test_settings)

        self._assert_single_critical(analysis, "error-processing")
        assert analysis.risks[0].title == "Processing Error"
        assert analysis.risks[0].description == "boom"


class TestBuildSummary:
    """Test summary counts."""

    def test_valid_rows_need_part_number(self, parsed_rows):
        summary = build_summary(parsed_rows, [])

        assert summary.total_rows == 4
        assert summary.valid_rows == 4
        assert summary.total_risks == 0
