"""
Tests for Translators
=====================
Tests for Translator and the translator file format in garbler/translator.py.
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from garbler.translator import Translator, TranslatorFormatError, load_translator, parse_translator


class TestTranslator:
    """Tests for building and applying translators."""

    def test_identity(self):
        translator = Translator.identity()
        assert translator.is_identity
        assert translator.translate("HeLLo, World") == "HeLLo, World"
        assert translator.name == "none"

    def test_case_insensitive(self):
        translator = Translator.case_insensitive()
        assert translator("HeLLo") == "hello"
        assert translator.name == "case"

    def test_case_keeps_length(self):
        """Letters that would expand when lowered are left alone."""
        assert Translator.case_insensitive().translate("İx") == "İx"

    def test_from_map(self):
        translator = Translator.from_map({"a": "*", "e": "*"})
        assert translator.translate("banane") == "b*n*n*"
        assert translator.translate_char("z") == "z"

    @pytest.mark.parametrize("mapping", [{"ab": "c"}, {"a": ""}, {"": "x"}, {"a": "xy"}])
    def test_from_map_rejects_multi_char(self, mapping):
        with pytest.raises(ValueError):
            Translator.from_map(mapping)

    def test_compose_applies_left_first(self):
        lower = Translator.case_insensitive()
        vowels = Translator.from_map({"a": "*"})
        upper_a = Translator.from_map({"A": "#"})

        assert lower.compose(vowels).translate("BANANA") == "b*n*n*"
        assert upper_a.compose(lower).translate("BANANA") == "b#n#n#"
        assert lower.compose(vowels).name == "case+map"

    def test_never_changes_length(self):
        translator = Translator.case_insensitive().compose(Translator.from_map({"x": "y"}))
        text = "Straße İstanbul XYZ"
        assert len(translator.translate(text)) == len(text)


class TestTranslatorFile:
    """Tests for the q,p,b=d file format."""

    def test_parse(self):
        translator = parse_translator(["a,e,i=*", "", "x=k"])
        assert translator.translate("alexis") == "*l*k*s"

    def test_keys_are_every_other_char(self):
        """Only even positions before '=' are keys; separators are skipped."""
        translator = parse_translator(["ab=c"])
        assert translator.translate("ab") == "cb"

    def test_crlf_lines(self):
        translator = parse_translator(["o=0\r\n", "l=1\r\n"])
        assert translator.translate("hello") == "he110"

    def test_later_lines_win(self):
        translator = parse_translator(["a=1", "a=2"])
        assert translator.translate("a") == "2"

    @pytest.mark.parametrize("lines, line_number", [
        (["a=b", "abc"], 2),
        (["a="], 1),
        (["a=b", "", "c=de"], 3),
    ])
    def test_format_errors(self, lines, line_number):
        with pytest.raises(TranslatorFormatError) as info:
            parse_translator(lines)
        assert info.value.line_number == line_number
        assert str(info.value).startswith(f"line {line_number}: ")

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_translator(["nothing here"])

    def test_load(self, tmp_path):
        path = tmp_path / "vowels.gtf"
        path.write_text("a,e,i,o,u=*\n", encoding="utf-8")
        translator = load_translator(path)
        assert translator.name == "vowels.gtf"
        assert translator.translate("garbler") == "g*rbl*r"

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_translator(tmp_path / "missing.gtf")
