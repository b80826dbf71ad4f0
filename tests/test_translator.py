"""Unit tests for speaker name translation.

WHY: The mapping block turns raw data names into the names players
see. Translation must leave anonymous and unknown speakers alone and
report each missing name once, not once per line.
"""

import pytest

from conftest import dialogue_block, mapping_block
from vnscript_converter.core.errors import ArchiveFormatError
from vnscript_converter.core.ir import (
    AnonymousSpeaker,
    Block,
    NamedSpeaker,
    TextList,
)
from vnscript_converter.core.translator import load_name_mapping, translate_speakers


def _with_speakers(name, speakers):
    block = dialogue_block(name, ["line"] * len(speakers))
    for line, speaker in zip(block.payload.lines, speakers):
        line.speaker = speaker
    return block


def _speakers(block):
    return [line.speaker for line in block.payload.lines]


class TestTranslateSpeakers:
    def test_named_speakers_translated(self):
        block = _with_speakers("ac_01", [NamedSpeaker("hero_raw"), NamedSpeaker("mage_raw")])
        mapping = mapping_block({"hero_raw": "Hero", "mage_raw": "Mage"})

        diagnostics = translate_speakers([mapping, block])
        assert _speakers(block) == [NamedSpeaker("Hero"), NamedSpeaker("Mage")]
        assert diagnostics == []

    def test_anonymous_and_unset_untouched(self):
        block = _with_speakers("ac_01", [AnonymousSpeaker(), None])
        translate_speakers([mapping_block({"": "Nobody"}), block])
        assert _speakers(block) == [AnonymousSpeaker(), None]

    def test_untranslated_reported_once_in_first_seen_order(self):
        first = _with_speakers("ac_01", [NamedSpeaker("ghost"), NamedSpeaker("hero_raw")])
        second = _with_speakers("ac_02", [NamedSpeaker("zombie"), NamedSpeaker("ghost")])

        diagnostics = translate_speakers([mapping_block({"hero_raw": "Hero"}), first, second])

        assert _speakers(first) == [NamedSpeaker("ghost"), NamedSpeaker("Hero")]
        assert [d.code for d in diagnostics] == ["untranslated-speaker"] * 2
        assert [d.message for d in diagnostics] == [
            "unable to translate character 'ghost'",
            "unable to translate character 'zombie'",
        ]

    def test_translates_non_story_dialogue_blocks_too(self):
        block = _with_speakers("_sys", [NamedSpeaker("hero_raw")])
        translate_speakers([mapping_block({"hero_raw": "Hero"}), block])
        assert _speakers(block) == [NamedSpeaker("Hero")]

    def test_second_pass_is_a_no_op(self):
        block = _with_speakers("ac_01", [NamedSpeaker("hero_raw"), AnonymousSpeaker()])
        mapping = mapping_block({"hero_raw": "Hero"})

        translate_speakers([mapping, block])
        after_first = list(_speakers(block))
        translate_speakers([mapping, block])
        assert _speakers(block) == after_first

    def test_missing_mapping_block(self):
        block = _with_speakers("ac_01", [NamedSpeaker("hero_raw")])
        listing = Block(name="_list", id=1, payload=TextList(["a"]))

        diagnostics = translate_speakers([listing, block])
        assert _speakers(block) == [NamedSpeaker("hero_raw")]
        assert listing.payload == TextList(["a"])
        assert [d.code for d in diagnostics] == ["mapping-missing"]
        assert diagnostics[0].level == "warning"


class TestLoadNameMapping:
    def test_returns_copy_of_entries(self):
        mapping = mapping_block({"a": "b"})
        loaded = load_name_mapping([mapping])
        loaded["x"] = "y"
        assert mapping.payload.entries == {"a": "b"}

    def test_wrong_shape_is_fatal(self):
        with pytest.raises(ArchiveFormatError):
            load_name_mapping([Block(name="[name2]", id=1, payload=TextList(["a"]))])
