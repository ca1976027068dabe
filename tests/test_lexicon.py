"""
Word Table Tests
================

INVARIANTS TESTED:
1. Lookup is case-insensitive
2. Unknown words raise WordNotFoundError, never a partial entry
3. Analysis projection follows the documented fallback order
4. Malformed data fails at load time
"""

import json

import pytest
from hypothesis import assume, given, strategies as st

from storyteller.contracts import EtymologyAnalysis
from wordmap.contracts.errors import WordDataError, WordNotFoundError
from wordmap.lexicon import WordTable, parse_entry, project_analysis


TABLE = WordTable.load()


def random_case(word, flips):
    return "".join(c.upper() if f else c for c, f in zip(word, flips))


class TestLoad:

    def test_packaged_table_has_all_words(self):
        assert TABLE.words() == (
            "aquarium", "aquatic", "benefit", "benevolent", "chronic",
            "chronology", "contradict", "dictionary", "geography", "geology",
            "inspect", "predict", "respect", "spectacle", "synchronize",
        )

    def test_inspect_structure(self):
        entry = TABLE.lookup("inspect")

        assert entry.structure.prefix.text == "in-"
        assert entry.structure.root.text == "spect"
        assert entry.structure.suffix is None
        assert entry.components.root.related == ("spectare (to watch)", "speculum (거울)")
        assert entry.derivatives[0].startswith("inspect:")

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordDataError):
            WordTable.load(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(WordDataError):
            WordTable.load(path)

    def test_missing_root_rejected(self):
        with pytest.raises(WordDataError, match="structure.root"):
            parse_entry("broken", {
                "structure": {"prefix": None, "root": None, "suffix": None},
                "components": {},
                "derivatives": [],
                "cultural": "",
            })

    def test_keys_are_lowercased(self, tmp_path):
        path = tmp_path / "words.json"
        raw = {"Mixed": {
            "structure": {"root": {"text": "mix", "meaning": "blend"}},
            "components": {},
            "derivatives": [],
            "cultural": "c",
        }}
        path.write_text(json.dumps(raw), encoding="utf-8")

        table = WordTable.load(path)

        assert table.words() == ("mixed",)
        assert "MIXED" in table


class TestLookup:

    @given(word=st.sampled_from(TABLE.words()), data=st.data())
    def test_case_insensitive(self, word, data):
        flips = data.draw(st.lists(st.booleans(), min_size=len(word), max_size=len(word)))
        assert TABLE.lookup(random_case(word, flips)) == TABLE.lookup(word)

    @given(word=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=12))
    def test_unknown_words_not_found(self, word):
        assume(word not in TABLE.words())
        with pytest.raises(WordNotFoundError):
            TABLE.lookup(word)

    def test_not_found_carries_word(self):
        with pytest.raises(WordNotFoundError) as excinfo:
            TABLE.lookup("unknownword")
        assert excinfo.value.word == "unknownword"


class TestProjection:

    def test_spectacle_has_no_prefix(self):
        analysis = project_analysis(TABLE.lookup("spectacle"))

        assert analysis.prefix == ""
        assert analysis.prefix_meaning == ""
        assert analysis.root == "spect"
        assert analysis.suffix == "-acle"
        # root meaning prefers components over structure
        assert analysis.root_meaning == "to look, to see (보다)"
        # suffix meaning prefers structure over components
        assert analysis.suffix_meaning == "명사를 만드는 접미사 : ~하는 도구, ~하는 것"
        assert analysis.root_background.startswith("고대 로마 사회에서 spectare는")

    def test_inspect_prefix_meaning_from_structure(self):
        analysis = project_analysis(TABLE.lookup("inspect"))

        assert analysis.prefix == "in-"
        assert analysis.prefix_meaning == "안으로"
        assert analysis.suffix == ""
        assert analysis.suffix_meaning == ""

    def test_background_falls_back_to_entry_cultural(self):
        entry = parse_entry("plain", {
            "structure": {"root": {"text": "plan", "meaning": "flat"}},
            "components": {"root": {"origin": "Latin planus", "meaning": "flat, level"}},
            "derivatives": [],
            "cultural": "Entry-level background",
        })

        analysis = project_analysis(entry)

        assert analysis.root_background == "Entry-level background"
        assert analysis.root_meaning == "flat, level"

    def test_root_meaning_falls_back_to_structure(self):
        entry = parse_entry("plain", {
            "structure": {
                "root": {"text": "plan", "meaning": "flat"},
                "prefix": None,
            },
            "components": {"prefix": {"origin": "o", "meaning": "component prefix"}},
            "derivatives": [],
            "cultural": "",
        })

        analysis = project_analysis(entry)

        assert analysis.root_meaning == "flat"
        assert analysis.prefix_meaning == "component prefix"
        assert analysis.root_background == ""

    def test_every_word_projects(self):
        for word in TABLE.words():
            analysis = project_analysis(TABLE.lookup(word))
            assert isinstance(analysis, EtymologyAnalysis)
            assert analysis.root
            assert analysis.root_meaning
