"""
Parser and scope analyzer for lolmark documents

Certifies a token sequence as lexically, syntactically and statically
well-formed. There is no tree: on success parse() returns a ParseReport and
the compiler re-walks the tokens itself.

Grammar (one method per nonterminal, one token of lookahead):

    document      := '#hai' comment* var-decl* head? body '#kthxbye'
    head          := '#maek' HEAD title '#oic'
    title         := '#gimmeh' TITLE text* '#mkay'
    body          := ( paragraph | list | styled | media | newline
                     | comment | var-decl | var-use | text )*
    paragraph     := '#maek' PARAGRAF ( styled | list | media | newline
                     | var-decl | var-use | text )* '#oic'
    list          := '#maek' LIST ( '#gimmeh' ITEM item-body '#mkay' )* '#oic'
    item-body     := ( styled | var-use | text )*
    styled        := '#gimmeh' (BOLD | ITALICS) ( var-use | text )* '#mkay'
    media         := '#gimmeh' (SOUNDZ | VIDZ) address '#mkay'
    newline       := '#gimmeh' NEWLINE
    var-decl      := '#i' HAZ identifier ( '#it' IZ text+ '#mkay' )?
    var-use       := '#lemme' SEE identifier '#mkay'

Scope checking is interleaved: each paragraph pushes a frame on entry and
pops it on exit, declarations collide only within the innermost frame, and
uses resolve from the innermost frame outwards.

Example:
    >>> tokens = Tokenizer("#hai #i haz x #it iz hi #mkay #kthxbye").tokenize()
    >>> report = Parser(tokens).parse()
    >>> report.declarations[0].value
    'hi'
"""

from typing import List, Optional

from ..config import appsettings, AppSettings
from ..models.tokens import Token, TokenCategory
from ..models.scope import ScopeStack, VariableBinding
from ..models.parser import ParseReport
from .tokenizer import TokenStream
from .vocabulary import matches, recognized
from .errors import GrammarError, LexicalError, SemanticError
from .log import LOG


class Parser:
    """
    Recursive-descent parser with an owned scope stack

    Attributes:
        stream: Private cursor over the tokens
        current: Lookahead token (already lexically checked), None at end
        scopes: ScopeStack, the analysis context for declarations and uses
        report: ParseReport filled in while parsing
        settings: AppSettings (strict_mode)
    """

    def __init__(self, tokens: List[Token], settings: Optional[AppSettings] = None) -> None:
        self.stream = TokenStream(tokens)
        self.current: Optional[Token] = None
        self.scopes = ScopeStack()
        self.report = ParseReport()
        self.settings = settings or appsettings

    def parse(self) -> ParseReport:
        """
        Check the whole token sequence

        Returns:
            ParseReport for a valid document

        Raises:
            LexicalError: A consumed lexeme belongs to no category
            GrammarError: Wrong category, premature end, or trailing tokens
            SemanticError: Duplicate declaration or undeclared use
        """
        LOG(f"Parsing {self.stream.remaining()} tokens", level=2)
        self.token_advance()
        if self.current is None:
            raise GrammarError(
                f"empty source: expected {TokenCategory.DOCUMENT_START.describe()}"
            )

        self.document_parse()

        self.report.token_count = self.stream.consumed
        LOG(
            f"Document valid: {self.report.token_count} tokens, "
            f"{len(self.report.declarations)} declarations",
            level=2,
        )
        return self.report

    # ------------------------------------------------------------------
    # Token cursor helpers
    # ------------------------------------------------------------------

    def token_advance(self) -> None:
        """Load the next token as lookahead, rejecting unrecognized lexemes"""
        token = self.stream.advance()
        if token is not None and not recognized(token.lexeme):
            raise LexicalError(f"'{token.lexeme}' is not a recognized token", token.line)
        self.current = token
        if token is not None:
            LOG(f"Token line {token.line}: {token.lexeme}", level=3)

    def token_is(self, category: TokenCategory) -> bool:
        return self.current is not None and matches(self.current.lexeme, category)

    def token_expect(self, category: TokenCategory, construct: str) -> Token:
        """
        Assert the lookahead category, consume it and return it

        Args:
            category: Category the grammar requires here
            construct: Name of the construct being parsed (for messages)
        """
        token = self.input_require(construct, category)
        if not matches(token.lexeme, category):
            raise GrammarError(
                f"expected {category.describe()} in {construct}, found '{token.lexeme}'",
                token.line,
            )
        self.token_advance()
        return token

    def input_require(self, construct: str, expected: TokenCategory) -> Token:
        """Return the lookahead, raising if the input ended inside a construct"""
        if self.current is None:
            raise GrammarError(
                f"unexpected end of input in {construct}: expected {expected.describe()}",
                self.stream.last_line,
            )
        return self.current

    def unexpected(self, construct: str, expected: str) -> GrammarError:
        token = self.current
        if token is None:
            return GrammarError(
                f"unexpected end of input in {construct}: expected {expected}",
                self.stream.last_line,
            )
        return GrammarError(
            f"expected {expected} in {construct}, found '{token.lexeme}'", token.line
        )

    # ------------------------------------------------------------------
    # Scope analysis
    # ------------------------------------------------------------------

    def variable_declare(self, binding: VariableBinding) -> None:
        """
        Bind a name in the innermost frame

        Raises:
            SemanticError: The name is already declared in this same frame
        """
        earlier = self.scopes.local_get(binding.name)
        if earlier is not None:
            raise SemanticError(
                f"variable '{binding.name}' is already declared in this scope "
                f"(first declared on line {earlier.line})",
                binding.line,
            )
        self.scopes.binding_add(binding)
        self.report.declarations.append(binding)
        LOG(f"Declared '{binding.name}' at scope depth {self.scopes.depth}", level=3)

    def variable_lookup(self, token: Token) -> VariableBinding:
        """
        Resolve a use from the innermost frame outwards

        Raises:
            SemanticError: No enclosing frame declares the name
        """
        name = token.lexeme
        binding = self.scopes.lookup(name)
        if binding is None:
            raise SemanticError(
                f"variable '{name}' is used but not declared in any enclosing scope; "
                f"declare it first with '#i haz {name} #it iz <value> #mkay'",
                token.line,
            )
        return binding

    def scope_enter(self) -> None:
        self.scopes.frame_push()
        self.report.max_scope_depth = max(self.report.max_scope_depth, self.scopes.depth)

    def scope_leave(self) -> None:
        self.scopes.frame_pop()

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def document_parse(self) -> None:
        self.token_expect(TokenCategory.DOCUMENT_START, "document")

        while self.token_is(TokenCategory.COMMENT_START):
            self.comment_parse()
        while self.token_is(TokenCategory.VARIABLE_DECLARE_START):
            self.declaration_parse()

        self.body_parse()

        # body_parse only returns on '#kthxbye'; it is consumed without loading
        # a new lookahead so leftovers are reported as such, not as lexemes
        extra = self.stream.peek()
        if extra is not None:
            raise GrammarError(
                f"additional tokens after document, starting with '{extra.lexeme}'",
                extra.line,
            )

    def body_parse(self) -> None:
        """Parse body elements until '#kthxbye' (head allowed only first)"""
        element_count = 0
        while not self.token_is(TokenCategory.DOCUMENT_END):
            if self.current is None:
                raise GrammarError(
                    "unexpected end of input in body: expected document end "
                    f"{TokenCategory.DOCUMENT_END.describe()}",
                    self.stream.last_line,
                )

            if self.token_is(TokenCategory.BLOCK_START):
                self.token_advance()
                self.input_require("block", TokenCategory.PARAGRAPH)
                head_allowed = element_count == 0 and not self.report.has_head
                if self.token_is(TokenCategory.HEAD) and head_allowed:
                    self.head_parse()
                    continue
                elif self.token_is(TokenCategory.PARAGRAPH):
                    self.paragraph_parse()
                elif self.token_is(TokenCategory.LIST):
                    self.list_parse()
                elif head_allowed:
                    raise self.unexpected("block", "'head', 'paragraf' or 'list' after '#maek'")
                else:
                    raise self.unexpected("block", "'paragraf' or 'list' after '#maek'")
            elif self.token_is(TokenCategory.ELEMENT_START):
                self.token_advance()
                self.inline_parse("body")
            elif self.token_is(TokenCategory.COMMENT_START):
                self.comment_parse()
            elif self.token_is(TokenCategory.VARIABLE_DECLARE_START):
                self.declaration_parse()
            elif self.token_is(TokenCategory.VARIABLE_USE_START):
                self.use_parse()
            elif self.token_is(TokenCategory.TEXT):
                self.text_parse("body")
            else:
                raise self.unexpected("body", "a body element")
            element_count += 1

        if self.settings.strict_mode and element_count == 0:
            raise GrammarError("document body is empty (strict mode)", self.current.line)

    def head_parse(self) -> None:
        """Parse 'head' title '#oic' ('#maek' already consumed)"""
        self.token_expect(TokenCategory.HEAD, "head")
        self.title_parse()
        self.token_expect(TokenCategory.BLOCK_END, "head")
        self.report.has_head = True

    def title_parse(self) -> None:
        self.token_expect(TokenCategory.ELEMENT_START, "head")
        self.token_expect(TokenCategory.TITLE, "head")
        while not self.token_is(TokenCategory.ELEMENT_END):
            self.input_require("title", TokenCategory.ELEMENT_END)
            self.text_parse("title")
        self.token_advance()

    def paragraph_parse(self) -> None:
        """Parse 'paragraf' ... '#oic' inside its own scope frame"""
        self.token_expect(TokenCategory.PARAGRAPH, "paragraph")
        self.scope_enter()
        self.report.paragraph_count += 1

        while not self.token_is(TokenCategory.BLOCK_END):
            self.input_require("paragraph", TokenCategory.BLOCK_END)

            if self.token_is(TokenCategory.BLOCK_START):
                self.token_advance()
                self.input_require("paragraph", TokenCategory.LIST)
                if not self.token_is(TokenCategory.LIST):
                    raise self.unexpected("paragraph", "'list' after '#maek'")
                self.list_parse()
            elif self.token_is(TokenCategory.ELEMENT_START):
                self.token_advance()
                self.inline_parse("paragraph")
            elif self.token_is(TokenCategory.VARIABLE_DECLARE_START):
                self.declaration_parse()
            elif self.token_is(TokenCategory.VARIABLE_USE_START):
                self.use_parse()
            elif self.token_is(TokenCategory.TEXT):
                self.text_parse("paragraph")
            else:
                raise self.unexpected("paragraph", "a paragraph element")

        self.token_advance()
        self.scope_leave()

    def list_parse(self) -> None:
        """Parse 'list' ( '#gimmeh' 'item' ... '#mkay' )* '#oic'"""
        self.token_expect(TokenCategory.LIST, "list")

        while not self.token_is(TokenCategory.BLOCK_END):
            self.input_require("list", TokenCategory.BLOCK_END)
            self.token_expect(TokenCategory.ELEMENT_START, "list")
            self.token_expect(TokenCategory.ITEM, "list")
            self.item_parse()

        self.token_advance()

    def item_parse(self) -> None:
        while not self.token_is(TokenCategory.ELEMENT_END):
            self.input_require("list item", TokenCategory.ELEMENT_END)

            if self.token_is(TokenCategory.ELEMENT_START):
                self.token_advance()
                self.input_require("list item", TokenCategory.BOLD)
                if not (self.token_is(TokenCategory.BOLD) or self.token_is(TokenCategory.ITALICS)):
                    raise self.unexpected("list item", "'bold' or 'italics' after '#gimmeh'")
                self.styled_parse()
            elif self.token_is(TokenCategory.VARIABLE_USE_START):
                self.use_parse()
            elif self.token_is(TokenCategory.TEXT):
                self.text_parse("list item")
            else:
                raise self.unexpected("list item", "text")

        self.token_advance()

    def inline_parse(self, construct: str) -> None:
        """Dispatch on the keyword following '#gimmeh'"""
        self.input_require(construct, TokenCategory.BOLD)
        if self.token_is(TokenCategory.BOLD) or self.token_is(TokenCategory.ITALICS):
            self.styled_parse()
        elif self.token_is(TokenCategory.NEWLINE):
            self.token_advance()
        elif self.token_is(TokenCategory.SOUNDZ) or self.token_is(TokenCategory.VIDZ):
            self.media_parse()
        else:
            raise self.unexpected(
                construct, "'bold', 'italics', 'newline', 'soundz' or 'vidz' after '#gimmeh'"
            )

    def styled_parse(self) -> None:
        """Parse BOLD|ITALICS ( var-use | text )* '#mkay'"""
        construct = self.input_require("styled text", TokenCategory.BOLD).lexeme.lower()
        self.token_advance()

        while not self.token_is(TokenCategory.ELEMENT_END):
            self.input_require(construct, TokenCategory.ELEMENT_END)
            if self.token_is(TokenCategory.VARIABLE_USE_START):
                self.use_parse()
            elif self.token_is(TokenCategory.TEXT):
                self.text_parse(construct)
            else:
                raise self.unexpected(construct, "text")

        self.token_advance()

    def media_parse(self) -> None:
        """Parse SOUNDZ|VIDZ address '#mkay'"""
        construct = self.input_require("media", TokenCategory.SOUNDZ).lexeme.lower()
        self.token_advance()
        self.token_expect(TokenCategory.ADDRESS, construct)
        self.token_expect(TokenCategory.ELEMENT_END, construct)

    def comment_parse(self) -> None:
        self.token_expect(TokenCategory.COMMENT_START, "comment")
        while not self.token_is(TokenCategory.COMMENT_END):
            self.input_require("comment", TokenCategory.COMMENT_END)
            self.token_advance()
        self.token_advance()

    def declaration_parse(self) -> None:
        """Parse '#i' 'haz' name [ '#it' 'iz' text+ '#mkay' ] and declare it"""
        start = self.token_expect(TokenCategory.VARIABLE_DECLARE_START, "variable declaration")
        self.token_expect(TokenCategory.HAZ, "variable declaration")
        name = self.token_expect(TokenCategory.IDENTIFIER, "variable declaration")

        value: Optional[str] = None
        if self.token_is(TokenCategory.VARIABLE_DECLARE_MID):
            self.token_advance()
            self.token_expect(TokenCategory.IZ, "variable declaration")
            words = [self.token_expect(TokenCategory.TEXT, "variable declaration").lexeme]
            while not self.token_is(TokenCategory.ELEMENT_END):
                self.input_require("variable declaration", TokenCategory.ELEMENT_END)
                words.append(self.token_expect(TokenCategory.TEXT, "variable declaration").lexeme)
            self.token_advance()
            value = ' '.join(words)

        self.variable_declare(VariableBinding(name=name.lexeme, value=value, line=start.line))

    def use_parse(self) -> None:
        """Parse '#lemme' 'see' name '#mkay' and resolve the name"""
        self.token_expect(TokenCategory.VARIABLE_USE_START, "variable use")
        self.token_expect(TokenCategory.SEE, "variable use")
        name = self.token_expect(TokenCategory.IDENTIFIER, "variable use")
        self.variable_lookup(name)
        self.token_expect(TokenCategory.ELEMENT_END, "variable use")

    def text_parse(self, construct: str) -> None:
        self.token_expect(TokenCategory.TEXT, construct)
