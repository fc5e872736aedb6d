"""Tests for ledger and audit models."""

from ledgerlens.core.models import AuditItem, AuditItemStatus


class TestAuditItem:
    """Test cases for audit item status normalization."""

    def test_missing_status_is_pending(self):
        assert AuditItem(id="x").status == AuditItemStatus.PENDING
        assert AuditItem(id="x", status=None).status == AuditItemStatus.PENDING
        assert AuditItem(id="x", status="").status == AuditItemStatus.PENDING

    def test_status_is_case_insensitive(self):
        assert AuditItem(id="x", status=" Flagged ").status == AuditItemStatus.FLAGGED

    def test_unknown_status_is_pending(self, caplog):
        item = AuditItem(id="x", status="In Review")

        assert item.status == AuditItemStatus.PENDING
        assert "Unknown audit item status 'In Review'" in caplog.text
