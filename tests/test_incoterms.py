"""Tests for Incoterms detection."""

from quotesmith.risk import INCOTERMS, RiskLevel, RiskType, detect_incoterms


class TestIncotermTable:
    """Test the reference table."""

    def test_all_eleven_terms(self):
        assert len(INCOTERMS) == 11
        assert INCOTERMS["DDP"].risk_level == RiskLevel.CRITICAL
        assert INCOTERMS["EXW"].risk_level == RiskLevel.LOW
        assert INCOTERMS["FOB"].risk_level == RiskLevel.MEDIUM
        assert INCOTERMS["DAP"].risk_level == RiskLevel.HIGH


class TestDetectIncoterms:
    """Test Incoterm findings in document text."""

    def test_term_with_named_place(self):
        risks = detect_incoterms("Terms: FOB Shanghai")

        assert len(risks) == 1
        risk = risks[0]
        assert risk.id == "incoterm-FOB"
        assert risk.type == RiskType.INCOTERMS
        assert risk.level == RiskLevel.MEDIUM
        assert risk.title == "Incoterm Detected: FOB"
        assert risk.extracted_value == "FOB SHANGHAI"
        assert risk.recommendation.startswith("Standard FOB terms detected.")

    def test_detection_is_case_insensitive(self):
        risks = detect_incoterms("shipping exw factory")

        assert [risk.id for risk in risks] == ["incoterm-EXW"]

    def test_critical_term_recommends_review(self):
        risks = detect_incoterms("Delivery DDP Houston.")

        assert len(risks) == 1
        assert risks[0].level == RiskLevel.CRITICAL
        assert risks[0].extracted_value == "DDP HOUSTON"
        assert risks[0].recommendation.startswith("Review required. DDP")

    def test_term_inside_a_word_is_ignored(self):
        assert detect_incoterms("Stainless FASTENERS and CIFRA parts") == []

    def test_multiple_terms_follow_table_order(self):
        risks = detect_incoterms("Either DAP site; or EXW plant")

        assert [risk.id for risk in risks] == ["incoterm-EXW", "incoterm-DAP"]

    def test_spelled_out_ddp(self):
        risks = detect_incoterms("All goods Delivered Duty Paid to site")

        assert len(risks) == 1
        risk = risks[0]
        assert risk.id == "incoterm-ddp-phrase"
        assert risk.level == RiskLevel.CRITICAL
        assert risk.extracted_value == "Delivered Duty Paid"

    def test_spelled_out_ddp_not_duplicated(self):
        """The phrase finding is skipped when the DDP code was already found."""
        risks = detect_incoterms("DDP Houston; Delivered Duty Paid")

        assert [risk.id for risk in risks] == ["incoterm-DDP"]

    def test_no_terms(self):
        assert detect_incoterms("") == []
        assert detect_incoterms("Payment net 30 days") == []
