"""Unit tests for the YAML/TOML normalizers and the format dispatcher."""

from config_warden.formatters.dispatcher import format_content, supported_extensions
from config_warden.formatters.lines import (
    collapse_blank_lines,
    format_toml,
    format_yaml,
    normalize_toml_assignment,
)


class TestCollapseBlankLines:
    """Tests for collapse_blank_lines function."""

    def test_runs_collapsed(self) -> None:
        """Consecutive blank lines become one."""
        assert collapse_blank_lines(["a", "", "", "b", " ", ""]) == ["a", "", "b", " "]

    def test_no_blanks(self) -> None:
        """Lines without blanks are unchanged."""
        assert collapse_blank_lines(["a", "b"]) == ["a", "b"]


class TestFormatYaml:
    """Tests for format_yaml function."""

    def test_trailing_whitespace_and_blanks(self) -> None:
        """Trailing spaces go, blank runs collapse."""
        assert format_yaml("a: 1   \n\n\n\nb: 2\t\n") == "a: 1\n\nb: 2\n"

    def test_final_newline_added(self) -> None:
        """Output ends with a newline."""
        assert format_yaml("a: 1") == "a: 1\n"

    def test_crlf(self) -> None:
        """CRLF line endings become LF."""
        assert format_yaml("a: 1\r\nb: 2\r\n") == "a: 1\nb: 2\n"

    def test_indentation_kept(self) -> None:
        """Leading indentation is never touched."""
        content = "root:\n  child:\n    - item\n"
        assert format_yaml(content) == content

    def test_idempotent(self) -> None:
        """Formatting twice equals formatting once."""
        once = format_yaml("a:  1  \n\n\n  b: 2")
        assert format_yaml(once) == once


class TestNormalizeTomlAssignment:
    """Tests for normalize_toml_assignment function."""

    def test_spacing(self) -> None:
        """Exactly one space on each side of =."""
        assert normalize_toml_assignment('name="demo"') == 'name = "demo"'
        assert normalize_toml_assignment('version   =    "1.0"') == 'version = "1.0"'

    def test_only_first_equals(self) -> None:
        """Later = signs are part of the value."""
        assert normalize_toml_assignment('url="x?a=b"') == 'url = "x?a=b"'

    def test_comment_untouched(self) -> None:
        """Comment lines are not rewritten."""
        assert normalize_toml_assignment("  # a=b") == "  # a=b"

    def test_indent_kept(self) -> None:
        """Leading indentation of the key stays."""
        assert normalize_toml_assignment("  key=1") == "  key = 1"

    def test_empty_value(self) -> None:
        """A missing value leaves no trailing space."""
        assert normalize_toml_assignment("a=") == "a ="

    def test_no_key(self) -> None:
        """A line starting with = is kept."""
        assert normalize_toml_assignment("=x") == "=x"


class TestFormatToml:
    """Tests for format_toml function."""

    def test_document(self) -> None:
        """Assignments, tables and comments are normalized."""
        content = '[tool]\nname="demo"   \n\n\n# a=b\nurl = "x?a=b"'
        assert format_toml(content) == '[tool]\nname = "demo"\n\n# a=b\nurl = "x?a=b"\n'

    def test_idempotent(self) -> None:
        """Formatting twice equals formatting once."""
        once = format_toml("a=\nb  =  2\n")
        assert format_toml(once) == once


class TestFormatContent:
    """Tests for the format dispatcher."""

    def test_supported_extensions(self) -> None:
        """Every formatted extension is listed."""
        assert supported_extensions() == [".json", ".jsonc", ".yaml", ".yml", ".toml"]

    def test_json(self) -> None:
        """JSON goes through the JSON formatter."""
        assert format_content('{"a":1}', ".json") == '{\n  "a": 1\n}\n'

    def test_extension_case_insensitive(self) -> None:
        """Uppercase extensions are dispatched too."""
        assert format_content('{"a":1}', ".JSON") == '{\n  "a": 1\n}\n'

    def test_jsonc_never_parsed(self) -> None:
        """JSONC files are reindented, not re-serialized."""
        assert format_content('{"a":1}', ".jsonc") == '{"a":1}\n'

    def test_yaml_and_toml(self) -> None:
        """YAML and TOML are normalized."""
        assert format_content("a: 1  ", ".yml") == "a: 1\n"
        assert format_content("a=1", ".toml") == "a = 1\n"

    def test_unknown_extension_identity(self) -> None:
        """Unsupported content is returned unchanged."""
        assert format_content("  keep  \n\n\n", ".txt") == "  keep  \n\n\n"

    def test_strict_jsonc_flag(self) -> None:
        """The strict flag reaches the JSONC reindenter."""
        content = '{\n"a": {"b": {\n"c": 1\n}\n}\n}\n'
        heuristic = format_content(content, ".jsonc")
        strict = format_content(content, ".jsonc", strict_jsonc=True)
        assert heuristic != strict
        assert '      "c": 1' in strict
