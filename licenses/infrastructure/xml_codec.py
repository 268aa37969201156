"""
XML implementation of the LicenseCodec port.

Document layout:

    <?xml version="1.0" encoding="UTF-8"?>
    <License>
      <Id>...</Id>
      <Type>Standard</Type>
      <Expiration>Tue, 01 Jan 2030 00:00:00 GMT</Expiration>
      <Quantity>1</Quantity>
      <Customer>
        <Name>...</Name>
        <Email>...</Email>
      </Customer>
      <Signature>...</Signature>
    </License>

The signature covers the C14N form of the License element without its
Signature child. Values are read back only in the exact form written here, so
every byte of a field is covered by the signature.
"""
import base64
import binascii
import logging
import re
import uuid
import xml.etree.ElementTree as ET
from email.utils import format_datetime, parsedate_to_datetime

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from core.domain.exceptions import InvalidPublicKey, MalformedDocument
from core.domain.value_objects import LicenseType
from licenses.domain.license import License, LicenseTerms, normalize_expiration
from licenses.ports.license_codec import LicenseCodec

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
BYTE_ORDER_MARK = "\ufeff"
XML_WHITESPACE = " \t\r\n"

LICENSE_ELEMENTS = ("Id", "Type", "Expiration", "Quantity", "Customer", "Signature")
CUSTOMER_ELEMENTS = ("Name", "Email")
QUANTITY_PATTERN = re.compile("[1-9][0-9]*")


def load_public_key(public_key: bytes) -> Ed25519PublicKey:
    """
    Load an exported public key.

    Args:
        public_key: Base64 of the DER SubjectPublicKeyInfo

    Returns:
        Ed25519 public key

    Raises:
        InvalidPublicKey: If the key cannot be decoded or is not Ed25519
    """
    try:
        key = serialization.load_der_public_key(base64.b64decode(public_key.strip(), validate=True))
    except (ValueError, TypeError, binascii.Error, UnsupportedAlgorithm) as e:
        raise InvalidPublicKey() from e
    if not isinstance(key, Ed25519PublicKey):
        raise InvalidPublicKey("Public key is not an Ed25519 key")
    return key


class XmlLicenseDocumentCodec(LicenseCodec):
    """Reads and writes license documents as XML."""

    def _terms_element(self, terms: LicenseTerms) -> ET.Element:
        root = ET.Element("License")
        ET.SubElement(root, "Id").text = str(terms.id)
        ET.SubElement(root, "Type").text = terms.license_type.value
        ET.SubElement(root, "Expiration").text = format_datetime(terms.expires_at, usegmt=True)
        ET.SubElement(root, "Quantity").text = str(terms.max_utilization)
        customer = ET.SubElement(root, "Customer")
        ET.SubElement(customer, "Name").text = terms.licensee_name
        ET.SubElement(customer, "Email").text = terms.licensee_email
        return root

    def canonical_bytes(self, terms: LicenseTerms) -> bytes:
        """Return the C14N 2.0 form of the unsigned License element."""
        element = self._terms_element(terms)
        return ET.canonicalize(ET.tostring(element, encoding="unicode")).encode("utf-8")

    def serialize(self, license: License) -> str:
        """Serialize a signed license with an explicit UTF-8 declaration."""
        root = self._terms_element(license.terms)
        ET.SubElement(root, "Signature").text = license.signature_b64
        ET.indent(root, space="  ")
        return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}"

    def deserialize(self, text: str) -> License:
        """
        Parse a license document.

        Values must be written in the exact form serialize produces: the
        signature covers that form, so any other spelling of the same value
        is rejected rather than read.

        Raises:
            MalformedDocument: If the document is not a license in canonical form
        """
        if text.startswith(BYTE_ORDER_MARK):
            text = text[len(BYTE_ORDER_MARK):]
        try:
            root = ET.fromstring(text.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise MalformedDocument("License document is not valid Unicode text") from e
        except ET.ParseError as e:
            raise MalformedDocument(f"License document is not well-formed XML: {e}") from e

        if root.tag != "License":
            raise MalformedDocument(f"Unexpected root element: {root.tag}")
        self._check_layout(root)

        try:
            id_text = self._text(root, "Id")
            license_id = uuid.UUID(id_text)
            if str(license_id) != id_text:
                raise MalformedDocument(f"Id is not in canonical form: {id_text}")

            expiration_text = self._text(root, "Expiration")
            expires_at = normalize_expiration(parsedate_to_datetime(expiration_text))
            if format_datetime(expires_at, usegmt=True) != expiration_text:
                raise MalformedDocument(f"Expiration is not in canonical form: {expiration_text}")

            quantity_text = self._text(root, "Quantity")
            if QUANTITY_PATTERN.fullmatch(quantity_text) is None:
                raise MalformedDocument(f"Quantity is not in canonical form: {quantity_text!r}")

            signature_text = self._text(root, "Signature")
            signature = base64.b64decode(signature_text, validate=True)
            if base64.b64encode(signature).decode("ascii") != signature_text:
                raise MalformedDocument("Signature is not in canonical form")

            terms = LicenseTerms(
                id=license_id,
                license_type=LicenseType(self._text(root, "Type")),
                expires_at=expires_at,
                max_utilization=int(quantity_text),
                licensee_name=self._text(root, "Customer/Name"),
                licensee_email=self._text(root, "Customer/Email"),
            )
            return License(terms=terms, signature=signature)
        except MalformedDocument:
            raise
        except (ValueError, TypeError, AttributeError, binascii.Error) as e:
            raise MalformedDocument(f"Invalid license document: {e}") from e

    def _check_layout(self, root: ET.Element) -> None:
        """Reject attributes, stray text and any element serialize does not write."""
        self._check_children(root, LICENSE_ELEMENTS)
        self._check_children(root.find("Customer"), CUSTOMER_ELEMENTS)
        for element in root.iter():
            if element.attrib:
                raise MalformedDocument(f"Unexpected attributes on {element.tag}")
            if element.tag not in ("License", "Customer") and len(element):
                raise MalformedDocument(f"Unexpected child elements in {element.tag}")

    @staticmethod
    def _check_children(element: ET.Element, expected: tuple) -> None:
        tags = tuple(child.tag for child in element)
        if tags != expected:
            raise MalformedDocument(
                f"{element.tag} must contain {', '.join(expected)}, found {', '.join(map(str, tags))}"
            )
        if (element.text or "").strip(XML_WHITESPACE) or any(
            (child.tail or "").strip(XML_WHITESPACE) for child in element
        ):
            raise MalformedDocument(f"Unexpected text in {element.tag}")

    @staticmethod
    def _text(root: ET.Element, path: str) -> str:
        element = root.find(path)
        if element is None:
            raise MalformedDocument(f"Missing element: {path}")
        return element.text or ""

    def verify(self, license: License, public_key: bytes) -> bool:
        """Verify the signature; False for forged or altered licenses."""
        key = load_public_key(public_key)
        try:
            key.verify(license.signature, self.canonical_bytes(license.terms))
        except InvalidSignature:
            logger.warning("Signature check failed for license %s", license.id)
            return False
        return True
