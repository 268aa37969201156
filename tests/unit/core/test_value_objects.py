"""
Unit tests for core value objects.
"""
import pytest

from core.domain.exceptions import InvalidInstallPolicy, ValidationFailure
from core.domain.value_objects import InstallPolicy, LicenseType, Passphrase


class TestInstallPolicy:
    """Tests for InstallPolicy value object."""

    def test_limited_policy(self):
        """Test a positive install limit is accepted."""
        policy = InstallPolicy(install_limit=5)
        assert policy.install_limit == 5
        assert policy.unlimited_installs is False

    def test_unlimited_policy(self):
        """Test unlimited installs with a zero limit is accepted."""
        policy = InstallPolicy(install_limit=0, unlimited_installs=True)
        assert policy == InstallPolicy.unlimited()

    def test_no_limit_rejected(self):
        """Test zero limit without unlimited installs is rejected."""
        with pytest.raises(InvalidInstallPolicy) as exc_info:
            InstallPolicy(install_limit=0, unlimited_installs=False)
        assert "No install limit set" in exc_info.value.message
        assert isinstance(exc_info.value, ValidationFailure)

    def test_negative_limit_rejected(self):
        """Test negative install limit is rejected."""
        with pytest.raises(InvalidInstallPolicy):
            InstallPolicy(install_limit=-1, unlimited_installs=True)

    def test_policies_hashable(self):
        """Test equal policies hash equally."""
        assert len({InstallPolicy(3), InstallPolicy(3), InstallPolicy(4)}) == 2


class TestLicenseType:
    """Tests for LicenseType."""

    def test_values(self):
        """Test license type document values."""
        assert LicenseType("Trial") is LicenseType.TRIAL
        assert str(LicenseType.STANDARD) == "Standard"

    def test_invalid_type(self):
        """Test unknown license type."""
        with pytest.raises(ValueError):
            LicenseType("Enterprise")


class TestPassphrase:
    """Tests for Passphrase."""

    def test_masked_repr(self):
        """Test passphrase never shows up in repr or str."""
        passphrase = Passphrase("abc123")
        assert "abc123" not in repr(passphrase)
        assert "abc123" not in str(passphrase)

    def test_reveal(self):
        """Test reveal returns the UTF-8 bytes."""
        assert Passphrase("pässword").reveal() == "pässword".encode("utf-8")

    def test_none_is_empty(self):
        """Test None becomes an empty passphrase."""
        assert len(Passphrase(None)) == 0

    def test_matches(self):
        """Test passphrase comparison."""
        assert Passphrase("abc").matches(Passphrase("abc"))
        assert not Passphrase("abc").matches(Passphrase("abd"))
        assert not Passphrase("abc").matches(None)

    def test_clear(self):
        """Test clear wipes the buffer."""
        passphrase = Passphrase("abc123")
        passphrase.clear()
        assert passphrase.cleared is True
        assert len(passphrase) == 0
        with pytest.raises(ValueError):
            passphrase.reveal()

    def test_coerce_keeps_instance(self):
        """Test coerce does not copy an existing Passphrase."""
        passphrase = Passphrase("abc")
        assert Passphrase.coerce(passphrase) is passphrase
        assert Passphrase.coerce("abc").matches(passphrase)
