"""
Tests for the input sources.
"""

from ui.cli_interface import PromptInputSource
from ui.input_source import ScriptedInputSource


def test_scripted_source_replays_tokens():
    source = ScriptedInputSource([" M ", "w"])
    assert source.read_token("Action?") == "m"
    assert source.read_token("Direction?") == "w"
    assert source.prompts == ["Action?", "Direction?"]


def test_scripted_source_skips_when_exhausted():
    source = ScriptedInputSource()
    assert source.read_token("Action?") == "s"
    source.push("a")
    assert source.remaining == 1


def test_prompt_lists_options_as_table():
    source = PromptInputSource()
    text = source.build_prompt("Choose an action: (m) Move, (s) Skip")
    assert "Choose an action" in text
    assert "Move" in text and "Skip" in text
    assert text.endswith("> ")


def test_prompt_without_options_is_kept():
    source = PromptInputSource()
    assert source.build_prompt("Name?") == "\nName?\n> "
