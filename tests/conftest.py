"""
Pytest configuration and shared fixtures.
"""

import os

import pytest

from loopnotes import LexerOptions


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any LOOPNOTES_* variables from the environment."""
    for name in list(os.environ):
        if name.startswith("LOOPNOTES_"):
            monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def song_source() -> str:
    """A short piece using every lexical class."""
    return (
        "Title :groove\n"
        "@bpm = 120 // tempo\n"
        "$verse Loop 4 Times [ ^Am7, ^D9 ] %dorian &ff8800\n"
        "|x.x. ( :kick + :snare ) 7/8 Forever\n"
    )


@pytest.fixture
def alt_options() -> LexerOptions:
    """Options with every marker moved to a different sigil."""
    return LexerOptions(
        identifier_sigils=":",
        meta_sigils="!",
        section_sigils="*",
        beat_sigils="|",
        chord_sigils="<",
        scale_sigils="~",
        color_sigils="#",
    )
