"""
Unit tests for License domain entity.
"""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from core.domain.value_objects import LicenseType
from licenses.domain.license import MAX_UTILIZATION, License, LicenseTerms, normalize_expiration


def make_terms(**overrides):
    values = {
        "id": uuid.uuid4(),
        "license_type": LicenseType.STANDARD,
        "expires_at": datetime(2030, 1, 1, tzinfo=timezone.utc),
        "max_utilization": MAX_UTILIZATION,
        "licensee_name": "Jane Doe",
        "licensee_email": "jane@example.com",
    }
    values.update(overrides)
    return LicenseTerms(**values)


class TestNormalizeExpiration:
    """Tests for normalize_expiration."""

    def test_date_is_midnight_utc(self):
        """Test a date becomes midnight UTC."""
        assert normalize_expiration(date(2030, 1, 1)) == datetime(
            2030, 1, 1, tzinfo=timezone.utc
        )

    def test_naive_datetime_is_utc(self):
        """Test a naive datetime is read as UTC."""
        result = normalize_expiration(datetime(2030, 1, 1, 12, 30))
        assert result == datetime(2030, 1, 1, 12, 30, tzinfo=timezone.utc)

    def test_aware_datetime_converted(self):
        """Test other time zones are converted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        result = normalize_expiration(datetime(2030, 1, 1, 2, 0, tzinfo=plus_two))
        assert result == datetime(2030, 1, 1, 0, 0, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc

    def test_microseconds_dropped(self):
        """Test second precision."""
        result = normalize_expiration(datetime(2030, 1, 1, 0, 0, 1, 999999))
        assert result.microsecond == 0


class TestLicenseTerms:
    """Tests for LicenseTerms."""

    def test_valid_terms(self):
        """Test terms with every field set."""
        terms = make_terms()
        assert terms.max_utilization == 1

    def test_naive_expiration_rejected(self):
        """Test expiration must be timezone-aware."""
        with pytest.raises(ValueError):
            make_terms(expires_at=datetime(2030, 1, 1))

    @pytest.mark.parametrize("field_name", ["licensee_name", "licensee_email"])
    def test_blank_licensee_rejected(self, field_name):
        """Test licensee name and email are required."""
        with pytest.raises(ValueError):
            make_terms(**{field_name: "  "})

    @pytest.mark.parametrize("field_name", ["licensee_name", "licensee_email"])
    def test_carriage_return_rejected(self, field_name):
        """Test licensee fields must read back unchanged from a document."""
        with pytest.raises(ValueError):
            make_terms(**{field_name: "Jane\rDoe"})

    def test_zero_utilization_rejected(self):
        """Test at least one utilization."""
        with pytest.raises(ValueError):
            make_terms(max_utilization=0)

    def test_is_expired(self):
        """Test expiry check."""
        terms = make_terms()
        assert terms.is_expired(datetime(2030, 1, 2, tzinfo=timezone.utc)) is True
        assert terms.is_expired(datetime(2029, 12, 31, tzinfo=timezone.utc)) is False

    def test_is_expired_defaults_to_now(self):
        """Test expiry check against the current time."""
        assert make_terms().is_expired() is False
        past = make_terms(expires_at=datetime(2000, 1, 1, tzinfo=timezone.utc))
        assert past.is_expired() is True


class TestLicense:
    """Tests for License entity."""

    def test_signature_required(self):
        """Test unsigned licenses cannot be built."""
        with pytest.raises(ValueError):
            License(terms=make_terms(), signature=b"")

    def test_properties(self):
        """Test id and base64 signature."""
        terms = make_terms()
        license = License(terms=terms, signature=b"\x01\x02\x03")
        assert license.id == terms.id
        assert license.signature_b64 == "AQID"

    def test_immutable(self):
        """Test licenses cannot be modified after signing."""
        license = License(terms=make_terms(), signature=b"sig")
        with pytest.raises(AttributeError):
            license.signature = b"other"
