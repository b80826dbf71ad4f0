"""Unit tests for configuration helpers."""

import os
from pathlib import Path

from vnscript_converter import config
from vnscript_converter.config import ascii_lower, load_reference_dirs, parse_formats


class TestParseFormats:

    def test_splits_and_strips(self):
        assert parse_formats(" json , md ") == ["json", "md"]

    def test_drops_empty_entries(self):
        assert parse_formats("json,,txt,") == ["json", "txt"]

    def test_empty(self):
        assert parse_formats("") == []


class TestAsciiLower:

    def test_lowercases_ascii(self):
        assert ascii_lower("AC2_Intro") == "ac2_intro"

    def test_keeps_non_ascii_case(self):
        assert ascii_lower("AC_ÄRGER") == "ac_Ärger"


class TestLoadReferenceDirs:

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("VNSCRIPT_REFERENCE_DIRS", raising=False)
        assert load_reference_dirs() == []

    def test_order_preserved(self, monkeypatch):
        monkeypatch.setenv("VNSCRIPT_REFERENCE_DIRS", os.pathsep.join(["b", "a"]))
        assert load_reference_dirs() == [Path("b"), Path("a")]


class TestReservedNames:

    def test_reserved_block_names(self):
        assert config.SELECTION_BLOCK_NAME == "[selection]"
        assert config.MAPPING_BLOCK_NAME == "[name2]"

    def test_accepted_magic_numbers(self):
        assert config.ACCEPTED_MAGIC_NUMBERS == {0x0A, 0x0E}
