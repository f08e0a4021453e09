"""
Tests for Generating Scripts
============================
Tests for GarblerScript and DefaultScript in garbler/script.py.
"""

import logging
import random
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from garbler.analyzers import (
    AlphabetAnalyzer,
    DistributionKind,
    LetterInfluenceAnalyzer,
    RepeatLetterAnalyzer,
)
from garbler.config import GenerationConfig
from garbler.library import Library
from garbler.script import DefaultScript, GarblerScript, ScriptState
from garbler.translator import Translator

CORPUS = (
    "marmalade lemonade orange banana pineapple apricot avocado papaya "
    "mango melon cherry strawberry raspberry blueberry cranberry grape"
)


class ScriptedRandom(random.Random):
    """Random source whose random() returns queued values in order."""

    def __init__(self, *values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


class Stamper(GarblerScript):
    """Appends 'x' per iteration and '!' afterwards."""

    def __init__(self, iterations=3, stop_at=None, **kwargs):
        super().__init__(**kwargs)
        self.planned = iterations
        self.stop_at = stop_at
        self.states = []

    def pre_iterate(self, context):
        self.states.append(self.state)
        if self.planned is not None:
            self.iterations = self.planned

    def on_iterate(self, context):
        self.states.append(self.state)
        self.buffer += "x"
        self.iterations = 100
        if self.stop_at is not None and len(self.buffer) >= self.stop_at:
            self.terminate()

    def post_iterate(self, context):
        self.states.append(self.state)
        self.buffer += "!"


def library_from(text: str) -> Library:
    library = Library.from_config()
    library.analyze(text)
    return library


class TestScriptStateMachine:
    """Tests for create_word's pre/iterate/post sequence."""

    def test_budget_is_read_once(self):
        script = Stamper(iterations=3)
        assert script.create_word("") == "xxx!"
        assert script.state is ScriptState.DONE

    def test_states_in_order(self):
        script = Stamper(iterations=2)
        script.create_word("")
        assert script.states == [
            ScriptState.PRE_ITERATE,
            ScriptState.ITERATE,
            ScriptState.ITERATE,
            ScriptState.POST_ITERATE,
        ]

    def test_default_budget_is_one(self):
        assert Stamper(iterations=None).create_word("") == "x!"

    def test_negative_budget_runs_no_iterations(self):
        assert Stamper(iterations=-5).create_word("") == "!"

    def test_terminate_skips_post_iterate(self):
        script = Stamper(iterations=5, stop_at=2)
        assert script.create_word("") == "xx"
        assert script.terminated

    def test_terminated_flag_resets(self):
        script = Stamper(iterations=5, stop_at=2)
        script.create_word("")
        script.stop_at = None
        assert script.create_word("") == "xxxxx!"
        assert not script.terminated

    def test_output_filter(self):
        script = Stamper(iterations=2, output_filter=Translator.from_map({"x": "y"}))
        assert script.create_word("") == "yy!"


class TestScriptQueries:
    """Tests for next() and analyzer lookup."""

    def test_no_library(self):
        assert GarblerScript().next("Alphabet", "") is None

    def test_missing_analyzer(self):
        script = GarblerScript()
        script.library = Library()
        assert script.next("Nope", "") is None

    def test_wrong_kind(self, caplog):
        library = Library()
        library.add_analyzer("Alphabet", AlphabetAnalyzer())
        library.analyze("abc")
        script = GarblerScript()
        script.library = library

        with caplog.at_level(logging.WARNING, logger="garbler.script"):
            assert script.next("Alphabet", "", kind=DistributionKind.LENGTH) is None
        assert "expected length" in caplog.text

        hist = script.next("alphabet", "", kind=DistributionKind.CHARACTER)
        assert hist.keys() == ('a', 'b', 'c')

    def test_prefix_defaults_to_buffer(self):
        library = library_from("abc abd")
        script = GarblerScript()
        script.library = library
        script.buffer = "ab"
        assert script.next("Repetitions", "") is None
        assert script.next("CharEnd", "").get_value(1) == pytest.approx(1.0)
        assert script.next("CharEnd", "", prefix="c").get_value(0) == pytest.approx(1.0)


class TestDefaultScript:
    """Tests for the standard generator."""

    def test_seeded_runs_repeat(self):
        library = library_from(CORPUS)
        first = library.run(DefaultScript(rng=random.Random(42)), 6)
        second = library.run(DefaultScript(rng=random.Random(42)), 6)
        assert first == second

    def test_uses_corpus_letters_only(self):
        library = library_from(CORPUS)
        letters = set(CORPUS.replace(" ", ""))
        script = DefaultScript(rng=random.Random(5))
        for _ in range(20):
            line = library.run(script, 4)
            assert set(line.replace(" ", "")) <= letters

    def test_words_follow_single_word_corpus(self):
        """One length, one start letter, and one ending after 'n'."""
        library = library_from("banana")
        script = DefaultScript(rng=random.Random(11))
        for _ in range(30):
            word = library.run(script, 1)
            assert word.startswith("b")
            assert len(word) in (5, 8)
            if len(word) == 8:
                assert word[4] == "n"
                assert word.endswith("ana")

    def test_end_of_word_terminates(self):
        """'a' always ends words in the corpus, so generation stops there."""
        library = library_from("xya")
        script = DefaultScript(config=GenerationConfig(ending_padding=0), rng=random.Random(2))
        assert library.run(script, 5) == "xya xya xya xya xya"

    def test_without_first_letters_words_are_empty(self):
        library = Library()
        library.add_analyzer("Alphabet", AlphabetAnalyzer())
        library.analyze("abc")
        assert library.run(DefaultScript(rng=random.Random(1)), 2, separator="|") == "|"

    def test_output_filter_applied(self):
        library = library_from(CORPUS)
        upper = Translator(steps=(str.upper,), name="upper")
        line = library.run(DefaultScript(output_filter=upper, rng=random.Random(3)), 3)
        assert line == line.upper()
        assert line.strip()

    def test_records_elapsed_time(self):
        library = library_from(CORPUS)
        script = DefaultScript(rng=random.Random(4))
        library.run(script, 2)
        assert script.elapsed_ms >= 0


class TestRepeatResample:
    """Tests for resampling letters that would extend a run."""

    @staticmethod
    def script(*draws, threshold=0.25):
        # After 'a' comes 'a' or 'z' (0.5 each); 'a' is one of five
        # letters seen doubled, so its run odds are 0.2
        library = Library()
        library.add_analyzer("Influence", LetterInfluenceAnalyzer(radius=1))
        library.add_analyzer("Repetitions", RepeatLetterAnalyzer())
        library.analyze("aaz bbq ccq ddq eeq")

        script = DefaultScript(
            config=GenerationConfig(repeat_threshold=threshold),
            rng=ScriptedRandom(*draws),
        )
        script.library = library
        script.buffer = "a"
        return script

    def test_unlikely_repeat_is_redrawn(self):
        script = self.script(0.1, 0.15, 0.9)
        script.on_iterate("")
        assert script.buffer == "az"
        assert script.rng.values == []

    def test_redraw_happens_once(self):
        script = self.script(0.1, 0.1, 0.1)
        script.on_iterate("")
        assert script.buffer == "aa"
        assert script.rng.values == []

    def test_repeat_kept_when_draw_above_odds(self):
        script = self.script(0.1, 0.5, 0.9)
        script.on_iterate("")
        assert script.buffer == "aa"
        assert script.rng.values == [0.9]

    def test_repeat_kept_when_odds_reach_threshold(self):
        script = self.script(0.1, 0.0, threshold=0.15)
        script.on_iterate("")
        assert script.buffer == "aa"
        assert script.rng.values == [0.0]

    def test_non_repeating_letter_skips_check(self):
        script = self.script(0.9, 0.0)
        script.on_iterate("")
        assert script.buffer == "az"
        assert script.rng.values == [0.0]
