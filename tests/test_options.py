# =============================================================================
# test_options.py - Lexer Configuration Tests
# =============================================================================

import logging

import pytest

from loopnotes import TokenStream, tokenize
from loopnotes.errors import LexerConfigError, LoopNotesError
from loopnotes.options import LexerOptions
from loopnotes.tokens import KEYWORDS, TokenKind


class TestDefaults:
    """Default configuration."""

    def test_default_keywords(self):
        assert LexerOptions().keywords == KEYWORDS
        assert KEYWORDS == {"Loop", "Times", "Forever", "Title"}

    def test_default_marker_sigils(self):
        assert LexerOptions().marker_sigils() == {
            TokenKind.META: "@",
            TokenKind.SECTION: "$",
            TokenKind.BEAT: "|",
            TokenKind.CHORD: "^",
            TokenKind.SCALE: "%",
            TokenKind.COLOR: "&",
        }

    def test_sigils_for(self):
        assert LexerOptions().sigils_for(TokenKind.CHORD) == "^"

    def test_options_are_frozen(self):
        options = LexerOptions()
        with pytest.raises(AttributeError):
            options.meta_sigils = "!"


class TestValidation:
    """Sigils must be unambiguous."""

    @pytest.mark.parametrize("sigil", ["a", "7", "[", ",", "=", "+", "/", " ", "\n"])
    def test_reserved_sigil_rejected(self, sigil):
        with pytest.raises(LexerConfigError):
            LexerOptions(meta_sigils=sigil)

    def test_shared_sigil_rejected(self):
        with pytest.raises(LexerConfigError) as exc_info:
            LexerOptions(chord_sigils="@")
        assert "meta" in str(exc_info.value)
        assert "chord" in str(exc_info.value)

    def test_identifier_sigil_clash_rejected(self):
        with pytest.raises(LexerConfigError):
            LexerOptions(scale_sigils="~")

    def test_empty_sigils_rejected(self):
        with pytest.raises(LexerConfigError):
            LexerOptions(color_sigils="")

    def test_multiple_sigils_per_class(self):
        options = LexerOptions(chord_sigils="^<")
        assert kinds(tokenize("^Am <Dm", options=options)) == [TokenKind.CHORD, TokenKind.CHORD]

    @pytest.mark.parametrize("word", ["", "4ever", "two words", "Loop!"])
    def test_unreadable_keyword_rejected(self, word):
        with pytest.raises(LexerConfigError):
            LexerOptions(keywords={word})

    def test_string_keywords_rejected(self):
        """A lone word must be wrapped in a collection."""
        with pytest.raises(LexerConfigError):
            LexerOptions(keywords="Repeat")
        with pytest.raises(LexerConfigError):
            LexerOptions().with_keywords("Repeat")

    def test_config_error_is_library_error(self):
        assert issubclass(LexerConfigError, LoopNotesError)


class TestKeywords:
    """Custom keyword sets."""

    def test_keywords_from_list(self):
        options = LexerOptions(keywords=["Repeat"])
        assert options.keywords == frozenset({"Repeat"})

    def test_with_keywords(self):
        options = LexerOptions(meta_sigils="!").with_keywords(["Repeat", "Loop"])
        assert options.keywords == {"Repeat", "Loop"}
        assert options.meta_sigils == "!"

    def test_custom_keywords_used_by_lexer(self):
        options = LexerOptions().with_keywords(["Repeat"])
        assert kinds(tokenize("Repeat Loop", options=options)) == [
            TokenKind.KEYWORD,
            TokenKind.IDENTIFIER,
        ]

    def test_filename_from_options(self):
        stream = TokenStream("Loop", options=LexerOptions(filename="a.loop"))
        assert stream.filename == "a.loop"
        assert stream.next_token().filename == "a.loop"

    def test_filename_argument_wins(self):
        stream = TokenStream("Loop", "b.loop", LexerOptions(filename="a.loop"))
        assert stream.filename == "b.loop"


class TestFromEnv:
    """LexerOptions.from_env()."""

    def test_no_variables(self, clean_env):
        assert LexerOptions.from_env() == LexerOptions()

    def test_keywords_variable(self, clean_env):
        clean_env.setenv("LOOPNOTES_KEYWORDS", "Repeat, Until ,")
        assert LexerOptions.from_env().keywords == {"Repeat", "Until"}

    def test_sigil_variables(self, clean_env):
        clean_env.setenv("LOOPNOTES_META_SIGILS", "!")
        clean_env.setenv("LOOPNOTES_IDENTIFIER_SIGILS", ":")
        clean_env.setenv("LOOPNOTES_SCALE_SIGILS", "~")
        options = LexerOptions.from_env()
        assert options.meta_sigils == "!"
        assert options.scale_sigils == "~"
        assert options.identifier_sigils == ":"

    def test_explicit_mapping(self):
        options = LexerOptions.from_env({"LOOPNOTES_COLOR_SIGILS": "*"})
        assert options.color_sigils == "*"

    def test_invalid_variable_raises(self):
        with pytest.raises(LexerConfigError):
            LexerOptions.from_env({"LOOPNOTES_BEAT_SIGILS": "@"})

    def test_loading_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="loopnotes.options")
        LexerOptions.from_env({"LOOPNOTES_META_SIGILS": "!"})
        assert "meta_sigils" in caplog.text


def kinds(tokens) -> list:
    return [t.kind for t in tokens]
