"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import Email, HistoryAction, LicenseStatus, MachineBinding


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        with pytest.raises(ValueError, match="Invalid email"):
            Email("")


class TestMachineBinding:
    """Tests for MachineBinding value object."""

    def test_valid_binding(self):
        binding = MachineBinding("machine-1", "fp-1")
        assert binding.machine_id == "machine-1"
        assert binding.hardware_fingerprint == "fp-1"
        assert str(binding) == "machine-1/fp-1"

    def test_bindings_compare_by_value(self):
        assert MachineBinding("m", "f") == MachineBinding("m", "f")
        assert MachineBinding("m", "f") != MachineBinding("m", "g")
        assert len({MachineBinding("m", "f"), MachineBinding("m", "f")}) == 1

    def test_empty_machine_id(self):
        with pytest.raises(ValueError, match="Machine ID"):
            MachineBinding("", "fp")

    def test_empty_fingerprint(self):
        with pytest.raises(ValueError, match="fingerprint"):
            MachineBinding("machine", "")

    def test_values_are_opaque(self):
        binding = MachineBinding(" m ", "f" * 1000)
        assert binding.machine_id == " m "
        assert binding != MachineBinding("m", "f" * 1000)


class TestEnums:
    """Tests for status and history action enums."""

    def test_license_status_values(self):
        assert [s.value for s in LicenseStatus] == ["inactive", "active", "revoked"]
        assert str(LicenseStatus.ACTIVE) == "active"

    def test_history_action_values_match_names(self):
        for action in HistoryAction:
            assert action.value == action.name
        assert HistoryAction("FRAUD_ATTEMPT") is HistoryAction.FRAUD_ATTEMPT
