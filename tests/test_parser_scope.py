"""
Scope analysis tests

Tests declaration collisions, lookup through enclosing frames, shadowing,
and frame retirement when a paragraph closes.
"""

import pytest

from lolmark.lib.tokenizer import Tokenizer
from lolmark.lib.parser import Parser
from lolmark.lib.errors import SemanticError
from lolmark.models.scope import ScopeStack, VariableBinding


def parse(source):
    return Parser(Tokenizer(source).tokenize()).parse()


class TestScopeStack:
    """Test the ScopeStack model directly"""

    def test_starts_with_global_frame(self):
        assert ScopeStack().depth == 1

    def test_global_frame_never_popped(self):
        scopes = ScopeStack()
        scopes.binding_add(VariableBinding("x", "1", 1))
        assert scopes.frame_pop() == {}
        assert scopes.depth == 1
        assert scopes.lookup("x") is not None

    def test_lookup_innermost_first(self):
        scopes = ScopeStack()
        scopes.binding_add(VariableBinding("x", "outer", 1))
        scopes.frame_push()
        scopes.binding_add(VariableBinding("x", "inner", 2))
        assert scopes.lookup("x").value == "inner"
        scopes.frame_pop()
        assert scopes.lookup("x").value == "outer"

    def test_local_get_ignores_outer_frames(self):
        scopes = ScopeStack()
        scopes.binding_add(VariableBinding("x", "outer", 1))
        scopes.frame_push()
        assert scopes.local_get("x") is None
        assert scopes.lookup("x") is not None


class TestDuplicateDeclarations:
    """Declaring a name twice in one frame is a semantic error"""

    def test_duplicate_in_global_frame(self):
        with pytest.raises(SemanticError, match="first declared on line 1"):
            parse("#hai #i haz x #i haz x #kthxbye")

    def test_duplicate_in_paragraph_cites_first_line(self):
        source = (
            "#hai\n"
            "#maek paragraf\n"
            "#i haz x #it iz one #mkay\n"
            "text\n"
            "#i haz x #it iz two #mkay\n"
            "#oic\n"
            "#kthxbye"
        )
        with pytest.raises(SemanticError) as excinfo:
            parse(source)
        assert excinfo.value.line == 5
        assert "first declared on line 3" in str(excinfo.value)

    def test_redeclare_in_outer_scope_after_paragraph_closes(self):
        source = (
            "#hai #maek paragraf #i haz x #it iz inner #mkay #oic "
            "#i haz x #it iz outer #mkay #kthxbye"
        )
        report = parse(source)
        assert [b.value for b in report.declarations] == ["inner", "outer"]

    def test_same_name_in_sibling_paragraphs(self):
        source = (
            "#hai #maek paragraf #i haz x #oic "
            "#maek paragraf #i haz x #oic #kthxbye"
        )
        assert len(parse(source).declarations) == 2

    def test_identifiers_are_case_sensitive(self):
        assert len(parse("#hai #i haz x #i haz X #kthxbye").declarations) == 2


class TestVisibility:
    """Uses resolve through every enclosing frame"""

    def test_use_of_global_inside_paragraph(self):
        parse("#hai #i haz x #it iz hello #mkay #maek paragraf #lemme see x #mkay #oic #kthxbye")

    def test_shadowing_in_paragraph(self):
        source = (
            "#hai #i haz x #it iz outer #mkay "
            "#maek paragraf #i haz x #it iz inner #mkay #lemme see x #mkay #oic "
            "#lemme see x #mkay #kthxbye"
        )
        parse(source)

    def test_undeclared_use_fails(self):
        with pytest.raises(SemanticError, match="declare it first with '#i haz x"):
            parse("#hai #maek paragraf #lemme see x #mkay #oic #kthxbye")

    def test_paragraph_binding_not_visible_after_close(self):
        source = "#hai #maek paragraf #i haz x #oic #lemme see x #mkay #kthxbye"
        with pytest.raises(SemanticError, match="'x' is used but not declared"):
            parse(source)

    def test_use_before_declaration_fails(self):
        with pytest.raises(SemanticError):
            parse("#hai #lemme see x #mkay #i haz x #kthxbye")

    def test_use_inside_styled_text(self):
        parse("#hai #i haz x #it iz hi #mkay #gimmeh bold #lemme see x #mkay #mkay #kthxbye")

    def test_undeclared_use_inside_list_item(self):
        with pytest.raises(SemanticError):
            parse("#hai #maek list #gimmeh item #lemme see y #mkay #mkay #oic #kthxbye")
