"""
Integration tests for the operator management commands.
"""

from datetime import datetime, timedelta, timezone
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from licenses.infrastructure.license_files import read_license_file
from licenses.infrastructure.xml_codec import XmlLicenseDocumentCodec
from signing.infrastructure.key_files import read_key


def run(name, *args):
    out = StringIO()
    err = StringIO()
    call_command(name, *[str(arg) for arg in args], stdout=out, stderr=err)
    return out.getvalue(), err.getvalue()


@pytest.fixture
def key_files(tmp_path):
    """Fixture for key files generated with passphrase abc123."""
    run(
        "generate_keypair",
        "--public-key", tmp_path / "acme",
        "--private-key", tmp_path / "acme",
        "--passphrase", "abc123",
        "--confirm-passphrase", "abc123",
    )
    return tmp_path / "acme.public_key", tmp_path / "acme.private_key"


def issue_args(key_files, tmp_path, *extra):
    return [
        "--private-key", key_files[1],
        "--passphrase", "abc123",
        "--name", "Jane Doe",
        "--email", "jane@example.com",
        "--expires", "2030-01-01",
        "--output", tmp_path / "jane",
        *extra,
    ]


@pytest.mark.integration
class TestGenerateKeypairCommand:
    """Tests for generate_keypair."""

    def test_generate(self, key_files):
        """Test both key files are written."""
        public_path, private_path = key_files
        assert read_key(public_path)
        assert read_key(private_path)
        assert read_key(public_path) != read_key(private_path)

    def test_mismatched_confirmation(self, tmp_path):
        """Test a mismatched confirmation is reported and nothing is written."""
        with pytest.raises(CommandError) as exc_info:
            run(
                "generate_keypair",
                "--public-key", tmp_path / "acme",
                "--private-key", tmp_path / "acme",
                "--passphrase", "abc123",
                "--confirm-passphrase", "abc124",
            )
        assert str(exc_info.value).startswith(
            "An exception occurred: Passphrase and confirmation do not match."
        )
        assert list(tmp_path.iterdir()) == []


@pytest.mark.integration
class TestIssueAndVerifyCommands:
    """Tests for issue_license and verify_license."""

    def test_issue_and_verify(self, key_files, tmp_path):
        """Test an issued license verifies with the public key."""
        out, _ = run("issue_license", *issue_args(key_files, tmp_path))
        assert "written to" in out
        license_path = tmp_path / "jane.lic"
        assert read_license_file(license_path).startswith(
            '<?xml version="1.0" encoding="UTF-8"?>'
        )

        out, _ = run("verify_license", license_path, "--public-key", key_files[0])
        assert "Jane Doe <jane@example.com>" in out
        assert "Signature is valid" in out

    def test_verify_tampered(self, key_files, tmp_path):
        """Test a modified license is reported as not valid."""
        run("issue_license", *issue_args(key_files, tmp_path))
        license_path = tmp_path / "jane.lic"
        document = read_license_file(license_path)
        license_path.write_text(
            document.replace("Tue, 01 Jan 2030", "Wed, 01 Jan 2031"), encoding="utf-8"
        )

        with pytest.raises(CommandError, match="License signature is not valid"):
            run("verify_license", license_path, "--public-key", key_files[0])

    def test_verify_respelled_quantity(self, key_files, tmp_path):
        """Test a license with a respelled value is reported as malformed."""
        run("issue_license", *issue_args(key_files, tmp_path))
        license_path = tmp_path / "jane.lic"
        document = read_license_file(license_path)
        license_path.write_text(
            document.replace("<Quantity>1<", "<Quantity> 1<"), encoding="utf-8"
        )

        with pytest.raises(CommandError, match="Quantity is not in canonical form"):
            run("verify_license", license_path, "--public-key", key_files[0])

    def test_verify_non_utf8_file(self, key_files, tmp_path):
        """Test a license file that is not UTF-8."""
        license_path = tmp_path / "jane.lic"
        license_path.write_bytes(b"<License>\xff</License>")

        with pytest.raises(CommandError, match="is not UTF-8 text"):
            run("verify_license", license_path, "--public-key", key_files[0])

    def test_licensee_with_control_character(self, key_files, tmp_path):
        """Test licensee text a document cannot carry stops issuing."""
        args = issue_args(key_files, tmp_path)
        args[args.index("Jane Doe")] = "Jane\x01Doe"

        with pytest.raises(CommandError, match="cannot contain carriage returns"):
            run("issue_license", *args)
        assert not (tmp_path / "jane.lic").exists()

    def test_default_expiration(self, key_files, tmp_path, settings):
        """Test the expiration defaults to today plus the configured days."""
        settings.LICENSE_DEFAULT_EXPIRATION_DAYS = 30
        args = issue_args(key_files, tmp_path)
        index = args.index("--expires")
        del args[index:index + 2]

        run("issue_license", *args)

        license = XmlLicenseDocumentCodec().deserialize(read_license_file(tmp_path / "jane.lic"))
        expected = datetime.now(timezone.utc).date() + timedelta(days=30)
        assert license.terms.expires_at.date() == expected

    def test_wrong_passphrase(self, key_files, tmp_path):
        """Test a wrong passphrase is reported and nothing is written."""
        args = issue_args(key_files, tmp_path)
        args[args.index("abc123")] = "abc124"

        with pytest.raises(CommandError) as exc_info:
            run("issue_license", *args)
        assert "Unable to decrypt private key" in str(exc_info.value)
        assert not (tmp_path / "jane.lic").exists()

    def test_missing_private_key(self, tmp_path):
        """Test issuing without a private key."""
        with pytest.raises(CommandError, match="A private key must be loaded before signing"):
            run("issue_license", "--name", "Jane Doe", "--email", "jane@example.com",
                "--output", tmp_path / "jane")

    def test_missing_licensee(self, key_files, tmp_path):
        """Test issuing without a licensee email."""
        args = issue_args(key_files, tmp_path)
        args[args.index("jane@example.com")] = " "

        with pytest.raises(CommandError, match="Licensee name and email cannot be blank"):
            run("issue_license", *args)

    def test_install_limit_digits_only(self, key_files, tmp_path):
        """Test the install limit rejects anything but digits."""
        with pytest.raises(CommandError):
            run("issue_license", *issue_args(key_files, tmp_path, "--install-limit", "-5"))

    def test_issue_and_register(self, key_files, tmp_path, activation_server):
        """Test the license is registered when a server is given."""
        out, _ = run(
            "issue_license",
            *issue_args(
                key_files, tmp_path,
                "--server-url", "https://activation.example.com",
                "--username", "issuer",
                "--password", "secret",
                "--install-limit", "3",
            ),
        )

        assert "HTTP 201" in out
        assert activation_server.calls[0]["url"] == "https://activation.example.com/insert"
        assert activation_server.calls[0]["json"]["InstallLimit"] == 3

    def test_issue_with_blank_password(self, key_files, tmp_path, activation_server):
        """Test blank credentials stop issuing before anything is written."""
        with pytest.raises(CommandError, match="Url, Username, and Password cannot be blank"):
            run(
                "issue_license",
                *issue_args(
                    key_files, tmp_path,
                    "--server-url", "https://activation.example.com",
                    "--username", "issuer",
                    "--password", "",
                    "--install-limit", "3",
                ),
            )
        assert activation_server.calls == []
        assert not (tmp_path / "jane.lic").exists()

    def test_unreachable_server(self, key_files, tmp_path, activation_server):
        """Test the license is kept when the server cannot be reached."""
        import requests

        activation_server.fail(requests.ConnectionError("connection refused"))
        _, err = run(
            "issue_license",
            *issue_args(
                key_files, tmp_path,
                "--server-url", "https://activation.example.com",
                "--username", "issuer",
                "--password", "secret",
                "--unlimited-installs",
            ),
        )

        assert "License was not registered" in err
        assert (tmp_path / "jane.lic").exists()


@pytest.mark.integration
class TestRegisterLicenseCommand:
    """Tests for register_license."""

    def test_register_existing_file(self, key_files, tmp_path, activation_server):
        """Test registering a previously issued license."""
        run("issue_license", *issue_args(key_files, tmp_path))
        license_path = tmp_path / "jane.lic"
        license = XmlLicenseDocumentCodec().deserialize(read_license_file(license_path))

        out, _ = run(
            "register_license", license_path,
            "--server-url", "https://activation.example.com",
            "--username", "issuer",
            "--password", "secret",
            "--install-limit", "2",
        )

        assert "HTTP 201" in out
        assert activation_server.calls[0]["json"]["Signature"] == license.signature_b64

    def test_rejected(self, key_files, tmp_path, activation_server):
        """Test a rejection is surfaced verbatim."""
        activation_server.respond(401, "Invalid username/password.")
        run("issue_license", *issue_args(key_files, tmp_path))

        _, err = run(
            "register_license", tmp_path / "jane.lic",
            "--server-url", "https://activation.example.com",
            "--username", "issuer",
            "--password", "wrong",
            "--unlimited-installs",
        )

        assert "HTTP 401: Invalid username/password." in err

    def test_limit_and_unlimited_exclusive(self, key_files, tmp_path, activation_server):
        """Test an install limit cannot be combined with unlimited installs."""
        run("issue_license", *issue_args(key_files, tmp_path))

        with pytest.raises(CommandError, match="not allowed with argument"):
            run(
                "register_license", tmp_path / "jane.lic",
                "--server-url", "https://activation.example.com",
                "--username", "issuer",
                "--password", "secret",
                "--install-limit", "5",
                "--unlimited-installs",
            )
        assert activation_server.calls == []

    def test_unlimited_clears_install_limit(self, key_files, tmp_path, activation_server):
        """Test unlimited installs are sent without an install limit."""
        run("issue_license", *issue_args(key_files, tmp_path))

        call_command(
            "register_license",
            str(tmp_path / "jane.lic"),
            server_url="https://activation.example.com",
            username="issuer",
            password="secret",
            install_limit=5,
            unlimited_installs=True,
            stdout=StringIO(),
            stderr=StringIO(),
        )

        payload = activation_server.calls[0]["json"]
        assert payload["InstallLimit"] == 0
        assert payload["UnlimitedInstalls"] is True
