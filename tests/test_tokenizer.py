"""
Tokenizer tests

Tests whitespace splitting, line tracking, and the TokenStream cursor.
"""

from lolmark.lib.tokenizer import Tokenizer, TokenStream
from lolmark.models.tokens import Token


def lexemes(source):
    return [token.lexeme for token in Tokenizer(source).tokenize()]


class TestSplitting:
    """Test lexeme boundaries"""

    def test_empty_source(self):
        """Empty string yields no tokens"""
        assert Tokenizer("").tokenize() == []

    def test_whitespace_only(self):
        """Only whitespace yields no tokens"""
        assert Tokenizer("   \n\n  \t  ").tokenize() == []

    def test_single_spaces(self):
        assert lexemes("#hai hello #kthxbye") == ["#hai", "hello", "#kthxbye"]

    def test_mixed_whitespace(self):
        """Tabs, repeated spaces and newlines all separate tokens"""
        assert lexemes("#hai\t\thello   world\n\n#kthxbye") == [
            "#hai", "hello", "world", "#kthxbye"
        ]

    def test_no_content_based_splitting(self):
        """Punctuation and illegal characters stay inside their lexeme"""
        assert lexemes("#hai#maek a-b <p>") == ["#hai#maek", "a-b", "<p>"]

    def test_final_token_flushed(self):
        """Token at end of input without trailing whitespace"""
        assert lexemes("#hai #kthxbye") == ["#hai", "#kthxbye"]


class TestLineNumbers:
    """Test source line tracking"""

    def test_lines_increment_on_newline(self):
        tokens = Tokenizer("#hai\n  hello world\n#kthxbye").tokenize()
        assert tokens == [
            Token("#hai", 1),
            Token("hello", 2),
            Token("world", 2),
            Token("#kthxbye", 3),
        ]

    def test_blank_lines_counted(self):
        tokens = Tokenizer("\n\n\n#hai").tokenize()
        assert tokens == [Token("#hai", 4)]

    def test_windows_line_endings(self):
        """\\r is whitespace; only \\n advances the line"""
        tokens = Tokenizer("#hai\r\nhello\r\n").tokenize()
        assert [(t.lexeme, t.line) for t in tokens] == [("#hai", 1), ("hello", 2)]


class TestTokenStream:
    """Test the forward cursor"""

    def test_forward_order(self):
        stream = TokenStream([Token("a", 1), Token("b", 1)])
        assert stream.peek() == Token("a", 1)
        assert stream.advance() == Token("a", 1)
        assert stream.advance() == Token("b", 1)
        assert stream.at_end()
        assert stream.advance() is None
        assert stream.peek() is None

    def test_consumed_and_remaining(self):
        stream = TokenStream([Token("a", 1), Token("b", 2), Token("c", 3)])
        stream.advance()
        assert stream.consumed == 1
        assert stream.remaining() == 2
        assert stream.last_line == 1

    def test_streams_are_independent(self):
        """Consuming one stream leaves the source list and other streams intact"""
        tokens = Tokenizer("#hai hello #kthxbye").tokenize()
        first = TokenStream(tokens)
        second = TokenStream(tokens)

        while not first.at_end():
            first.advance()

        assert second.remaining() == 3
        assert len(tokens) == 3
