"""
Payload Unit Tests
Tests for merkletree/schemas/payloads.py and merkletree/schemas/errors.py
"""
import hashlib
import math

import pytest
from pydantic import ValidationError

from fixtures.payments import tx
from merkletree.schemas.errors import (
    EmptyInputError,
    ErrorCodes,
    HashError,
    MerkleError,
    MerkleTreeException,
    PayloadComparisonError,
)
from merkletree.schemas.payloads import (
    BytesPayload,
    CanonicalPayload,
    Payload,
    PaymentTransactionPayload,
)


class TestPaymentTransactionPayload:
    """Tests for the payment transaction payload."""

    def test_serialization_field_order(self):
        """Test the serialization keeps declared field order."""
        payload = tx("alice", "bob", 0.1234)

        assert payload.serialize() == (
            b'{"sender_address":"alice","receiver_address":"bob","amount":0.1234}'
        )

    def test_integral_amount_has_no_fraction(self):
        """Test whole amounts serialize without a fraction."""
        assert tx("a", "b", 5).serialize().endswith(b'"amount":5}')
        assert tx("a", "b", 5.0).serialize().endswith(b'"amount":5}')

    def test_digest_is_sha256_of_serialization(self):
        """Test the digest is SHA-256 of the serialization."""
        payload = tx("alice", "bob", 1.5)

        assert payload.digest() == hashlib.sha256(payload.serialize()).digest()

    def test_digest_deterministic(self):
        """Test equal transactions give equal digests."""
        assert tx("a", "b", 2.5).digest() == tx("a", "b", 2.5).digest()

    def test_non_finite_amount_is_hash_error(self):
        """Test an infinite amount is a HashError."""
        with pytest.raises(HashError):
            tx("a", "b", math.inf).digest()

    def test_equals_same_fields(self):
        """Test equal fields compare equal."""
        assert tx("a", "b", 1.0).equals(tx("a", "b", 1.0))

    @pytest.mark.parametrize(
        "other",
        [("x", "b", 1.0), ("a", "x", 1.0), ("a", "b", 2.0)],
    )
    def test_equals_differs_on_any_field(self, other):
        """Test any differing field compares unequal."""
        assert not tx("a", "b", 1.0).equals(tx(*other))

    def test_equals_other_payload_type_is_false(self):
        """Test another payload type compares unequal."""
        assert not tx("a", "b", 1.0).equals(BytesPayload(b"a"))

    def test_equals_non_payload_raises(self):
        """Test comparing with a non-payload raises."""
        with pytest.raises(PayloadComparisonError) as exc_info:
            tx("a", "b", 1.0).equals({"sender_address": "a"})

        assert exc_info.value.details["other_type"] == "dict"

    def test_extra_fields_rejected(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            PaymentTransactionPayload(
                sender_address="a", receiver_address="b", amount=1.0, memo="hi"
            )

    def test_frozen(self):
        """Test transactions are immutable."""
        payload = tx("a", "b", 1.0)

        with pytest.raises(ValidationError):
            payload.amount = 2.0

    def test_is_payload(self):
        """Test transactions satisfy the Payload contract."""
        assert isinstance(tx("a", "b", 1.0), Payload)


def _escaped(char: str) -> str:
    return "\\u%04x" % ord(char)


class TestAmountFormatting:
    """Tests for the amount encoding inside the payment serialization."""

    @pytest.mark.parametrize(
        "amount, encoded",
        [
            (0.1234, "0.1234"),
            (5.0, "5"),
            (100.0, "100"),
            (-2.5, "-2.5"),
            (0.0, "0"),
            (0.0001, "0.0001"),
            (0.00001, "0.00001"),
            (0.000001, "0.000001"),
            (1.5e-7, "1.5e-7"),
            (1e-10, "1e-10"),
            (1e16, "10000000000000000"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1.5e300, "1.5e+300"),
        ],
    )
    def test_amount_encoding(self, amount, encoded):
        """Test fixed notation inside [1e-6, 1e21) and exponent notation outside."""
        assert tx("a", "b", amount).serialize() == (
            '{"sender_address":"a","receiver_address":"b","amount":' + encoded + "}"
        ).encode()

    def test_html_characters_escaped(self):
        """Test <, > and & are written as unicode escapes."""
        payload = tx("a&b<c>", "b", 1.5)

        expected = "a" + _escaped("&") + "b" + _escaped("<") + "c" + _escaped(">")
        assert payload.serialize() == (
            '{"sender_address":"' + expected + '","receiver_address":"b","amount":1.5}'
        ).encode()

    def test_line_separators_escaped(self):
        """Test U+2028 and U+2029 are written as unicode escapes."""
        payload = tx("a\N{LINE SEPARATOR}b", "c\N{PARAGRAPH SEPARATOR}d", 2.0)

        serialized = payload.serialize().decode()

        assert _escaped("\N{LINE SEPARATOR}") in serialized
        assert _escaped("\N{PARAGRAPH SEPARATOR}") in serialized
        assert "\N{LINE SEPARATOR}" not in serialized

    def test_other_non_ascii_kept_raw(self):
        """Test other non-ASCII text is written as UTF-8."""
        assert "é".encode() in tx("é", "b", 1.0).serialize()


class TestPinnedDigests:
    """Digests pinned from the reference encoder for edge-case transactions."""

    @pytest.mark.parametrize(
        "sender, amount, expected",
        [
            ("a", 0.00001, "08622973f399b4f4704c9e8b0658425b01317121c35f67fb9b160d88416bebcc"),
            ("a&b<c>", 1.5, "a300669e31de7ed4aa27d05b9ffedb0c96c66779d22680573876e1a3120041ce"),
            ("a", 1e21, "caabea2849606bcc24ee17051caf1bdd93c28bdd1a9e010347c91949b6cc59fa"),
            ("a", 1.5e-7, "ac9fd6c1921cb6961d549d8cc662cf8c1843071d748ad8f6c754100bfd56bded"),
            ("a\N{LINE SEPARATOR}b", 2.0, "a9b98649fd65682e64e24f1150253b5887d507b923dd56a2a28c42fac5c24d38"),
        ],
    )
    def test_digest_matches_reference(self, sender, amount, expected):
        """Test edge-case amounts and escaped characters hash to the reference digests."""
        assert tx(sender, "b", amount).digest().hex() == expected


class TestCanonicalPayload:
    """Tests for canonical JSON payloads."""

    def test_key_order_does_not_change_digest(self):
        """Test key order doesn't change the digest."""
        first = CanonicalPayload({"a": 1, "b": [1, 2]})
        second = CanonicalPayload({"b": [1, 2], "a": 1})

        assert first.digest() == second.digest()
        assert first.equals(second)

    def test_digest_over_canonical_json(self):
        """Test the digest is over canonical JSON."""
        payload = CanonicalPayload({"b": 2, "a": 1})

        assert payload.digest() == hashlib.sha256(b'{"a":1,"b":2}').digest()

    def test_different_content_not_equal(self):
        """Test different content compares unequal."""
        assert not CanonicalPayload({"a": 1}).equals(CanonicalPayload({"a": 2}))

    def test_other_type_not_equal(self):
        """Test another payload type compares unequal."""
        assert not CanonicalPayload("x").equals(BytesPayload(b"x"))

    def test_malformed_content_digest_is_hash_error(self):
        """Test malformed content fails to hash."""
        with pytest.raises(HashError):
            CanonicalPayload({"v": math.nan}).digest()

    def test_malformed_content_comparison_raises(self):
        """Test malformed content fails to compare."""
        with pytest.raises(PayloadComparisonError):
            CanonicalPayload({"v": math.nan}).equals(CanonicalPayload({"v": 1}))


class TestBytesPayload:
    """Tests for raw byte payloads."""

    def test_digest(self):
        """Test the digest is SHA-256 of the bytes."""
        assert BytesPayload(b"abc").digest() == hashlib.sha256(b"abc").digest()

    def test_equals(self):
        """Test equality compares the raw bytes."""
        assert BytesPayload(b"abc").equals(BytesPayload(b"abc"))
        assert not BytesPayload(b"abc").equals(BytesPayload(b"abd"))
        assert not BytesPayload(b"abc").equals(CanonicalPayload("abc"))


class TestErrorTaxonomy:
    """Tests for exception codes and the structured error model."""

    def test_empty_input_defaults(self):
        """Test EmptyInputError code and default message."""
        error = EmptyInputError()

        assert error.code == ErrorCodes.EMPTY_INPUT
        assert str(error) == "cannot construct tree with no payload"

    def test_all_errors_share_base(self):
        """Test taxonomy errors share MerkleTreeException."""
        for error in (
            EmptyInputError(),
            HashError("boom"),
            PayloadComparisonError("boom"),
        ):
            assert isinstance(error, MerkleTreeException)

    def test_hash_error_algorithm_in_details(self):
        """Test the algorithm lands in HashError details."""
        error = HashError("boom", algorithm="sha256")

        assert error.details == {"algorithm": "sha256"}

    def test_error_model_round_trip(self):
        """Test exception to error model and back."""
        error = PayloadComparisonError("boom", payload_type="A", other_type="B")

        model = error.to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == ErrorCodes.PAYLOAD_COMPARISON_ERROR
        assert model.details == {"payload_type": "A", "other_type": "B"}

        raised = model.to_exception()
        assert raised.code == error.code
        assert raised.message == "boom"

    def test_repr(self):
        """Test exception repr shows code and message."""
        assert repr(HashError("boom")) == "HashError(code='HASH_ERROR', message='boom')"
