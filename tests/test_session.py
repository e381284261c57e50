"""Tests for remediation sessions."""

import pytest

from quotesmith.ops import RemediationSession, SessionStore
from quotesmith.parsing import RowField


def _token(download_url: str) -> str:
    return download_url.rsplit("/", 1)[-1]


class TestRemediationSession:
    """Test sequencing of operations within one session."""

    def test_fix_missing_quantities(self, session, download_store):
        response = session.fix_missing_quantities()

        assert response.success is True
        assert response.fixed_count == 1
        assert response.affected_rows == [3]
        assert response.message == "Fixed 1 rows with missing quantities by setting them to 1."
        assert response.download_url.startswith("/api/download/dl_")
        assert response.file_name == "quote_corrected.csv"
        assert session.rows.get(3).quantity == 1

        artifact = download_store.get(_token(response.download_url))
        assert artifact.rows[1].quantity == 1

    def test_operations_see_previous_results(self, session, download_store):
        session.fix_missing_quantities(default_quantity=2)
        session.delete_rows([4])
        response = session.update_cell(3, RowField.QUANTITY, 7)

        artifact = download_store.get(_token(response.download_url))
        assert [row.row_number for row in artifact.rows] == [2, 3, 5]
        assert artifact.rows[1].quantity == 7
        assert len(session.remediations) == 3

    def test_update_cell_message(self, session):
        response = session.update_cell(2, RowField.QUANTITY, 4)

        assert response.success is True
        assert response.old_value == 3
        assert response.new_value == 4
        assert response.message == "Updated quantity in row 2 from 3 to 4."

    def test_update_unknown_row(self, session, download_store):
        response = session.update_cell(99, RowField.NOTES, "x")

        assert response.success is False
        assert response.message == "Row 99 not found in the data."
        assert response.download_url is None
        assert session.remediations == []
        assert download_store.size() == 0

    def test_delete_rows(self, session):
        response = session.delete_rows([3, 5])

        assert response.deleted_count == 2
        assert response.row_numbers == [3, 5]
        assert response.message == "Deleted 2 rows from the data."
        assert session.rows.row_numbers == [2, 4]

    def test_clear_column(self, session):
        response = session.clear_column(RowField.NOTES)

        assert response.affected_count == 1
        assert response.message == "Cleared data in column 'notes' for 1 rows."

    def test_each_operation_gets_its_own_download(self, session):
        first = session.fix_missing_quantities()
        second = session.clear_column(RowField.NOTES)

        assert first.download_url != second.download_url

    def test_generate_download_includes_all_remediations(self, session, download_store):
        session.fix_missing_quantities()
        session.delete_rows([5])

        response = session.generate_corrected_download()

        assert response.remediations_count == 2
        assert response.message == "Created download link for corrected file with 2 fixes applied."
        artifact = download_store.get(_token(response.download_url))
        assert len(artifact.remediations) == 2
        assert artifact.remediations[0].reason.startswith("Auto-fixed")

    def test_generate_download_without_notes(self, session, download_store):
        session.fix_missing_quantities()

        response = session.generate_corrected_download(include_remediation_notes=False)

        artifact = download_store.get(_token(response.download_url))
        assert artifact.remediations[0].reason == ""
        assert session.remediations[0].reason.startswith("Auto-fixed")

    def test_remediation_log_is_a_copy(self, session):
        session.fix_missing_quantities()
        session.remediations.clear()

        assert len(session.remediations) == 1

    def test_default_file_name(self, parsed_rows, column_mapping, download_store):
        session = RemediationSession(parsed_rows, column_mapping, download_store)

        response = session.generate_corrected_download()

        assert response.file_name == "corrected_data_corrected.csv"


class TestSessionStore:
    """Test the idle-expiring session table."""

    def test_open_and_get(self, session, clock):
        store = SessionStore(ttl_seconds=60, clock=clock)

        session_id = store.open(session)

        assert store.get(session_id) is session
        assert store.size() == 1
        assert store.get("unknown") is None

    def test_idle_session_expires(self, session, clock):
        store = SessionStore(ttl_seconds=60, clock=clock)
        session_id = store.open(session)

        clock.advance(61)

        assert store.get(session_id) is None
        assert store.size() == 0

    def test_use_keeps_session_open(self, session, clock):
        store = SessionStore(ttl_seconds=60, clock=clock)
        session_id = store.open(session)

        for _ in range(3):
            clock.advance(45)
            assert store.get(session_id) is session

    def test_open_sweeps_idle_sessions(self, session, clock):
        store = SessionStore(ttl_seconds=60, clock=clock)
        for _ in range(50):
            store.open(session)
        clock.advance(61)

        store.open(session)

        assert store.size() == 1

    def test_close(self, session, clock):
        store = SessionStore(ttl_seconds=60, clock=clock)
        session_id = store.open(session)

        assert store.close(session_id) is True
        assert store.close(session_id) is False

    @pytest.mark.asyncio
    async def test_cleanup_expired_async(self, session, clock):
        store = SessionStore(ttl_seconds=60, clock=clock)
        store.open(session)
        store.open(session)
        clock.advance(61)

        assert await store.cleanup_expired_async() == 2
        assert store.size() == 0
