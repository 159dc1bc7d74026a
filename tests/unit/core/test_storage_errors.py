"""
Unit tests for database error translation.
"""
import pytest
from django.db import OperationalError

from core.domain.exceptions import LicenseNotFoundError, StorageFault
from core.infrastructure.database import translate_storage_errors


class TestTranslateStorageErrors:
    """Tests for translate_storage_errors."""

    def test_database_error_becomes_storage_fault(self):
        @translate_storage_errors
        def broken():
            raise OperationalError("database is locked")

        with pytest.raises(StorageFault) as excinfo:
            broken()

        assert excinfo.value.code == "STORAGE_FAULT"
        assert "broken failed" in excinfo.value.message
        assert isinstance(excinfo.value.__cause__, OperationalError)

    def test_domain_errors_pass_through(self):
        @translate_storage_errors
        def missing():
            raise LicenseNotFoundError()

        with pytest.raises(LicenseNotFoundError):
            missing()

    def test_return_value_is_preserved(self):
        @translate_storage_errors
        def ok(value):
            return value * 2

        assert ok(21) == 42
        assert ok.__name__ == "ok"
