"""Unit tests for redaction utilities."""

from config_warden.utils.redaction import mask_secret, redact_in_text


class TestMaskSecret:
    """Tests for mask_secret function."""

    def test_empty_string(self) -> None:
        """Empty string returns empty."""
        assert mask_secret("") == ""

    def test_eight_chars_fully_masked(self) -> None:
        """Values of eight characters or fewer are fully masked."""
        assert mask_secret("abcd1234") == "********"
        assert mask_secret("abc") == "***"

    def test_nine_chars(self) -> None:
        """One hidden character between the visible ends."""
        assert mask_secret("abcd51234") == "abcd*1234"

    def test_twenty_one_chars(self) -> None:
        """Interior length is the hidden character count."""
        assert mask_secret("1234567890ABCDEFG7890") == "1234" + "*" * 13 + "7890"

    def test_mask_run_capped(self) -> None:
        """Very long values never show more than sixteen mask characters."""
        value = "a" * 4 + "x" * 100 + "b" * 4
        assert mask_secret(value) == "aaaa" + "*" * 16 + "bbbb"

    def test_custom_mask_char(self) -> None:
        """Custom mask character is used."""
        assert mask_secret("longersecretvalue", mask_char="#") == "long#########alue"

    def test_never_contains_interior(self) -> None:
        """The hidden part of the value does not leak."""
        assert "SECRETPART" not in mask_secret("abcdSECRETPARTwxyz")


class TestRedactInText:
    """Tests for redact_in_text function."""

    def test_empty_inputs(self) -> None:
        """Empty inputs return original."""
        assert redact_in_text("", "secret") == ""
        assert redact_in_text("text", "") == "text"

    def test_single_occurrence(self) -> None:
        """Single occurrence is replaced by its masked form."""
        text = 'API_KEY = "sk-secret123456789"'
        result = redact_in_text(text, "sk-secret123456789")
        assert "sk-secret123456789" not in result
        assert result == 'API_KEY = "sk-s**********6789"'

    def test_multiple_occurrences(self) -> None:
        """All occurrences are redacted."""
        text = "token1 token1"
        assert redact_in_text(text, "token1", "[X]") == "[X] [X]"

    def test_no_occurrence(self) -> None:
        """Text without the secret is unchanged."""
        assert redact_in_text("nothing here", "token123") == "nothing here"
