"""Test tokenization: runs, offsets, coalescing, reconstruction, errors."""

import pytest

from linewrap.lexer import Lexer, decode_utf8, tokenize
from linewrap.tokens import Category, Token

from .conftest import assert_categories, assert_texts, find_tokens

T = Category.TEXT
S = Category.SPACE
H = Category.HYPHEN


class TestEmpty:
    def test_empty_is_eof_only(self):
        assert tokenize("") == [Token(Category.EOF, 0, 0, "")]

    def test_empty_bytes(self):
        assert tokenize(b"") == [Token(Category.EOF, 0, 0, "")]


class TestWords:
    def test_hello_world(self):
        tokens = tokenize("hello world")
        assert tokens == [
            Token(T, 0, 5, "hello"),
            Token(S, 5, 1, " "),
            Token(T, 6, 5, "world"),
            Token(Category.EOF, 11, 0, ""),
        ]

    def test_sentence(self, lex):
        tokens = lex("Time is an illusion. Lunchtime doubly so.")
        assert_categories(tokens, [T, S, T, S, T, S, T, S, T, S, T, S, T])
        assert [t.offset for t in tokens] == [0, 4, 5, 7, 8, 10, 11, 20, 21, 30, 31, 37, 38]

    def test_em_quad_is_space(self, lex):
        tokens = lex("Time is an illusion.\u2001Lunchtime doubly so.")
        quad = tokens[7]
        assert quad.category is S
        assert quad.text == "\u2001"
        assert quad.offset == 20
        # offsets count code points, not bytes
        assert tokens[8].offset == 21

    def test_em_dash_is_hyphen(self, lex):
        tokens = lex("Time is an illusion.\u2014Lunchtime doubly so.")
        assert_categories(tokens, [T, S, T, S, T, S, T, H, T, S, T, S, T])
        assert tokens[7].text == "\u2014"
        assert tokens[7].offset == 20
        assert tokens[8].text == "Lunchtime"

    def test_hyphen_minus(self, lex):
        tokens = lex("Time is an illusion.-Lunchtime doubly so.")
        assert tokens[7] == Token(H, 20, 1, "-")

    def test_numeric_hyphen_still_breaks(self, lex):
        tokens = lex("1-2")
        assert_categories(tokens, [T, H, T])


class TestCoalescing:
    def test_space_run(self, lex):
        tokens = lex("a  \u2003 b")
        assert_categories(tokens, [T, S, T])
        assert tokens[1].text == "  \u2003 "
        assert tokens[1].length == 4

    def test_hyphen_run(self, lex):
        tokens = lex("a--\u2014b")
        assert_categories(tokens, [T, H, T])
        assert tokens[1].text == "--\u2014"

    def test_space_then_hyphen_are_separate(self, lex):
        tokens = lex("a -b")
        assert_categories(tokens, [T, S, H, T])

    def test_tabs_never_coalesce(self, lex):
        tokens = lex("\t\t")
        assert_categories(tokens, [Category.TAB, Category.TAB])
        assert_texts(tokens, ["\t", "\t"])

    def test_tab_breaks_space_run(self, lex):
        tokens = lex(" \t ")
        assert_categories(tokens, [S, Category.TAB, S])

    def test_newlines_never_coalesce(self, lex):
        tokens = lex("\n\n")
        assert_categories(tokens, [Category.NEWLINE, Category.NEWLINE])

    def test_crlf_is_two_tokens(self, lex):
        tokens = lex("a\r\nb")
        assert_categories(tokens, [T, Category.CARRIAGE_RETURN, Category.NEWLINE, T])
        assert tokens[2].offset == 2

    def test_non_breaking_spaces_glue_text(self, lex):
        for ch in ("\u00a0", "\u202f", "\ufeff", "\u2011"):
            tokens = lex(f"is{ch}frequently")
            assert_categories(tokens, [T])
            assert tokens[0].length == 13


class TestLength:
    def test_length_counts_code_points(self, lex):
        tokens = lex("못알아 Зд")
        assert [t.length for t in tokens] == [3, 1, 2]

    def test_bytes_input_is_decoded(self, lex):
        tokens = lex("héllo wörld".encode("utf-8"))
        assert_texts(tokens, ["héllo", " ", "wörld"])
        assert tokens[2].offset == 6


class TestReconstruction:
    @pytest.mark.parametrize(
        "source",
        [
            "hello world",
            "  leading and trailing  ",
            "line one\r\nline two\n\n\tindented",
            "mind-bogglingly\u00adbig \u2014 vastly\u3000hugely",
            "\t\t\r\r\n\n",
            "Αα\u00a0\u2011\u2212 ~/dir x--y",
            "\ufeff\u200b\u200b-",
        ],
    )
    def test_concatenation_restores_input(self, source):
        tokens = tokenize(source)
        assert tokens[-1].category is Category.EOF
        assert tokens[-1].offset == len(source)
        assert "".join(t.text for t in tokens) == source

    def test_tokens_are_contiguous(self):
        tokens = tokenize("one two\tthree-four\r\nfive")
        for prev, tok in zip(tokens, tokens[1:]):
            assert prev.end == tok.offset


class TestPullInterface:
    def test_next_token_one_at_a_time(self):
        lexer = Lexer("a b")
        assert lexer.next_token().text == "a"
        assert lexer.next_token().category is S
        assert lexer.next_token().text == "b"
        assert lexer.next_token().category is Category.EOF

    def test_eof_repeats(self):
        lexer = Lexer("a")
        lexer.next_token()
        first = lexer.next_token()
        assert lexer.next_token() == first
        assert first.category is Category.EOF

    def test_iteration_stops_after_eof(self):
        assert len(list(Lexer("a b"))) == 4


class TestErrors:
    def test_invalid_utf8(self, lex):
        tokens = lex(b"abc\xffdef")
        assert_categories(tokens, [T, Category.ERROR])
        err = tokens[1]
        assert err.offset == 3
        assert err.length == 0
        assert "invalid UTF-8 at byte 3" in err.text

    def test_error_offset_counts_code_points(self, lex):
        tokens = lex("éé ".encode("utf-8") + b"\x80")
        err = find_tokens(tokens, Category.ERROR)[0]
        assert err.offset == 3
        assert "byte 5" in err.text

    def test_truncated_sequence(self, lex):
        tokens = lex(b"\xe2\x80")
        assert_categories(tokens, [Category.ERROR])
        assert tokens[0].offset == 0

    def test_lone_surrogate(self, lex):
        tokens = lex("ab\udc80cd")
        assert_categories(tokens, [T, Category.ERROR])
        assert tokens[1].offset == 2
        assert "U+DC80" in tokens[1].text

    def test_no_tokens_after_error(self):
        lexer = Lexer(b"a\xff b c")
        tokens = list(lexer)
        assert tokens[-1].category is Category.ERROR
        assert lexer.next_token() == tokens[-1]
        assert not find_tokens(tokens, Category.EOF)


class TestDecode:
    def test_valid(self):
        assert decode_utf8("héllo".encode("utf-8")) == ("héllo", None)

    def test_invalid_returns_prefix(self):
        text, message = decode_utf8("éé ".encode("utf-8") + b"\x80 tail")
        assert text == "éé "
        assert message is not None
        assert message.startswith("invalid UTF-8 at byte 5")

    def test_error_token_carries_decode_message(self, lex):
        data = b"abc\xffdef"
        _, message = decode_utf8(data)
        assert find_tokens(lex(data), Category.ERROR)[0].text == message
