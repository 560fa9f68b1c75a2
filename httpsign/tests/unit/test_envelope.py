"""
Unit tests for the signature envelope (headers, timestamp, base64url).
"""
import re

import pytest

from httpsign.core.signing.envelope import (
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    current_timestamp,
    decode_signature,
    encode_signature,
    signature_headers,
)
from httpsign.core.signing.errors import VerificationError, VerificationFailure


def test_header_names():
    assert HEADER_SIGNATURE == "X-Signature"
    assert HEADER_TIMESTAMP == "X-Signature-Timestamp"


def test_current_timestamp_is_rfc3339_utc():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", current_timestamp())


class TestSignatureEncoding:

    def test_encode_has_no_padding_and_is_url_safe(self):
        encoded = encode_signature(b"\xfb\xff\xfe")
        assert encoded == "-__-"
        assert encode_signature(b"\x00") == "AA"

    def test_decode(self):
        assert decode_signature("-__-") == b"\xfb\xff\xfe"
        assert decode_signature("AA") == b"\x00"
        assert decode_signature("") == b""

    @pytest.mark.parametrize("value", ["AA==", "+//+", "a b", "A", "AAAAA", "!!", "AAAA\n", "AAA\n"])
    def test_decode_rejects_invalid(self, value):
        with pytest.raises(VerificationError) as exc_info:
            decode_signature(value)
        assert exc_info.value.reason == VerificationFailure.INVALID_SIGNATURE_FORMAT


def test_signature_headers(stub_signer):
    headers = signature_headers(
        stub_signer, "GET", "example.com", "/r", {"b": ["2", "1"], "a": ["3"]},
        timestamp="2024-01-01T00:00:00Z",
    )
    assert headers[HEADER_TIMESTAMP] == "2024-01-01T00:00:00Z"
    assert decode_signature(headers[HEADER_SIGNATURE]) == b"GETexample.com/ra=3&b=1&b=22024-01-01T00:00:00Z"


def test_signature_headers_defaults_to_now(stub_signer):
    headers = signature_headers(stub_signer, "GET", "h", "/", {})
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", headers[HEADER_TIMESTAMP])
