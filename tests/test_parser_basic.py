"""
Basic parser tests - well-formed documents

Tests that valid documents of every construct are accepted and that the
ParseReport reflects what was seen.
"""

import pytest

from lolmark.lib.tokenizer import Tokenizer
from lolmark.lib.parser import Parser


def parse(source):
    return Parser(Tokenizer(source).tokenize()).parse()


class TestMinimalDocuments:
    """Test the smallest valid documents"""

    def test_empty_document(self):
        """#hai immediately followed by #kthxbye"""
        report = parse("#hai #kthxbye")
        assert report.token_count == 2
        assert report.has_head is False
        assert report.paragraph_count == 0

    def test_case_insensitive_markers(self):
        report = parse("#HAI #Maek PARAGRAF hi #OIC #KTHXBYE")
        assert report.paragraph_count == 1

    def test_text_only_body(self):
        report = parse("#hai hello world, it's me! #kthxbye")
        assert report.token_count == 6

    def test_multiline_source(self):
        source = """
#hai
  #maek paragraf
    hello
  #oic
#kthxbye
"""
        assert parse(source).paragraph_count == 1


class TestHead:
    """Test the optional head/title block"""

    def test_head_with_title(self):
        report = parse("#hai #maek head #gimmeh title hi #mkay #oic #kthxbye")
        assert report.has_head is True

    def test_empty_title(self):
        assert parse("#hai #maek head #gimmeh title #mkay #oic #kthxbye").has_head

    def test_head_after_leading_comment_and_declaration(self):
        source = (
            "#hai #obtw about this page #tldr #i haz x #it iz hi #mkay "
            "#maek head #gimmeh title hi #mkay #oic #kthxbye"
        )
        assert parse(source).has_head

    def test_keyword_words_allowed_in_title(self):
        """Element keywords are plain text inside a title"""
        assert parse("#hai #maek head #gimmeh title my list head #mkay #oic #kthxbye").has_head


class TestBodyElements:
    """Test every body construct"""

    def test_paragraph(self):
        assert parse("#hai #maek paragraf some text #oic #kthxbye").paragraph_count == 1

    def test_list(self):
        source = "#hai #maek list #gimmeh item one #mkay #gimmeh item two #mkay #oic #kthxbye"
        assert parse(source).paragraph_count == 0

    def test_empty_list(self):
        parse("#hai #maek list #oic #kthxbye")

    def test_bold_and_italics(self):
        parse("#hai #gimmeh bold loud #mkay #gimmeh italics leaning #mkay #kthxbye")

    def test_newline(self):
        parse("#hai one #gimmeh newline two #kthxbye")

    def test_media(self):
        parse(
            "#hai #gimmeh soundz https://example.com/song.mp3 #mkay "
            "#gimmeh vidz https://example.com/my%20clip #mkay #kthxbye"
        )

    def test_comment_in_body(self):
        parse("#hai #maek paragraf a #oic #obtw note to self #tldr #kthxbye")

    def test_paragraph_with_nested_constructs(self):
        source = """
#hai
#maek paragraf
  intro #gimmeh bold strong #mkay and #gimmeh italics slanted #mkay
  #gimmeh newline
  #maek list #gimmeh item first #mkay #oic
  #gimmeh soundz beep.mp3 #mkay
#oic
#kthxbye
"""
        assert parse(source).paragraph_count == 1

    def test_list_item_with_styling_and_variable(self):
        source = (
            "#hai #i haz x #it iz hi #mkay "
            "#maek list #gimmeh item #gimmeh bold big #mkay #lemme see x #mkay #mkay #oic #kthxbye"
        )
        parse(source)

    def test_multiple_paragraphs(self):
        source = "#hai #maek paragraf a #oic #maek paragraf b #oic #maek paragraf c #oic #kthxbye"
        assert parse(source).paragraph_count == 3


class TestDeclarations:
    """Test variable declaration forms"""

    def test_declaration_without_value(self):
        report = parse("#hai #i haz x #kthxbye")
        assert report.declarations[0].name == "x"
        assert report.declarations[0].value is None

    def test_declaration_with_multiword_value(self):
        report = parse("#hai #i haz greeting #it iz hello there world #mkay #kthxbye")
        assert report.declarations[0].value == "hello there world"

    def test_declaration_line_recorded(self):
        report = parse("#hai\n\n#i haz x #it iz hi #mkay\n#kthxbye")
        assert report.declarations[0].line == 3

    def test_marker_words_case_insensitive(self):
        report = parse("#hai #I HAZ x #IT IZ hi #MKAY #LEMME SEE x #MKAY #kthxbye")
        assert report.declarations[0].value == "hi"

    def test_scope_depth_reported(self):
        report = parse("#hai #maek paragraf #i haz y #oic #kthxbye")
        assert report.max_scope_depth == 2


class TestStrictMode:
    """Test the strict_mode setting"""

    def test_empty_body_rejected_in_strict_mode(self):
        from lolmark.config import AppSettings
        from lolmark.lib.errors import GrammarError

        settings = AppSettings(strict_mode=True)
        tokens = Tokenizer("#hai #kthxbye").tokenize()
        with pytest.raises(GrammarError, match="body is empty"):
            Parser(tokens, settings=settings).parse()

    def test_non_empty_body_accepted_in_strict_mode(self):
        from lolmark.config import AppSettings

        settings = AppSettings(strict_mode=True)
        tokens = Tokenizer("#hai hello #kthxbye").tokenize()
        assert Parser(tokens, settings=settings).parse().token_count == 3
