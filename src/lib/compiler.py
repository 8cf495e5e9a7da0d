"""
Compiler for lolmark tokens to HTML

Re-walks a token sequence the parser has already certified and emits the
equivalent HTML document. This is an independent traversal: it works on its
own copy of the tokens and keeps its own bindings, and it recognises
constructs by matching consecutive lexemes rather than by calling the parser.

Construct mapping:
    #hai / #kthxbye                 <!DOCTYPE html><html> / </html>
    #obtw ... #tldr                 <!-- ... -->
    #maek head / title              <head><title>...</title></head>
    #maek paragraf ... #oic         <p>...</p>
    #maek list / #gimmeh item       <ul><li>...</li></ul>
    #gimmeh bold / italics          <b>...</b> / <i>...</i>
    #gimmeh newline                 <br/>
    #gimmeh soundz ADDR #mkay       <audio controls><source src="ADDR" type="audio/mpeg"></audio>
    #gimmeh vidz ADDR #mkay         <iframe src="ADDR"></iframe>
    #lemme see x #mkay              value bound to x
    anything else                   emitted verbatim, space-prefixed
"""

import html
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.tokens import Token
from ..models.scope import VariableBinding
from .tokenizer import Tokenizer, TokenStream
from .parser import Parser
from .log import LOG


@dataclass
class OpenBlock:
    """A '#maek' or '#gimmeh' construct waiting for its closing marker"""
    keyword: str
    closer: str
    binding_mark: int = 0


BLOCK_TAGS: Dict[str, tuple] = {
    'head': ('<head>', '</head>'),
    'paragraf': ('<p>', '</p>'),
    'list': ('<ul>', '</ul>'),
}

ELEMENT_TAGS: Dict[str, tuple] = {
    'title': ('<title>', '</title>'),
    'bold': ('<b>', '</b>'),
    'italics': ('<i>', '</i>'),
    'item': ('<li>', '</li>'),
}

# Closing output after which a line break is emitted unless minifying
LINE_BREAK_AFTER = {'<!DOCTYPE html><html>', '</head>', '</p>', '</ul>', ' -->', '</audio>', '</iframe>'}


class Compiler:
    """
    Generates HTML from a validated token sequence

    Responsibilities:
    - Walk tokens and map constructs to HTML
    - Track variable bindings for '#lemme see' substitution
    - Write the generated document to the output directory
    """

    def __init__(
        self,
        tokens: List[Token],
        output_dir: Optional[str] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            tokens: Token sequence already accepted by Parser.parse()
            output_dir: Directory for compiled output (only needed by compile())
            settings: AppSettings (output_filename, minify_output,
                      legacy_variable_resolution); defaults to appsettings
        """
        self.tokens = list(tokens)
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.settings = settings or appsettings

        self.stream = TokenStream(self.tokens)
        self.bindings: List[VariableBinding] = []
        self.open_blocks: List[OpenBlock] = []
        self.parts: List[str] = []
        self.paragraph_count = 0
        self.variable_count = 0

    def compile(self) -> Dict[str, Any]:
        """
        Generate HTML and write it to output_dir

        Returns:
            dict with compilation results and statistics
        """
        if self.output_dir is None:
            raise ValueError("Compiler.compile() needs an output_dir")

        full_html = self.html_generate()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_file = self.output_dir / self.settings.output_filename
        output_file.write_text(full_html, encoding='utf-8')
        LOG(f"Wrote {output_file}", level=2)

        return {
            'status': True,
            'output_file': str(output_file),
            'paragraph_count': self.paragraph_count,
            'variable_count': self.variable_count,
        }

    def html_generate(self) -> str:
        """
        Walk a fresh copy of the tokens and build the HTML text

        Each call starts from scratch, so generating twice yields identical
        output.

        Returns:
            Complete HTML document
        """
        self.stream = TokenStream(self.tokens)
        self.bindings = []
        self.open_blocks = []
        self.parts = []
        self.paragraph_count = 0
        self.variable_count = 0

        LOG(f"Generating HTML from {len(self.tokens)} tokens", level=2)
        while not self.stream.at_end():
            self.token_compile(self.stream.advance())

        return ''.join(self.parts)

    def emit(self, text: str) -> None:
        self.parts.append(text)
        if text in LINE_BREAK_AFTER and not self.settings.minify_output:
            self.parts.append('\n')

    def lexeme_next(self) -> str:
        """Consume the next token and return its lowercased lexeme"""
        token = self.stream.advance()
        return token.lexeme.lower() if token is not None else ''

    def lexeme_peek(self) -> str:
        token = self.stream.peek()
        return token.lexeme.lower() if token is not None else ''

    def token_compile(self, token: Token) -> None:
        """Emit HTML for the construct starting at token"""
        keyword = token.lexeme.lower()

        if keyword == '#hai':
            self.emit('<!DOCTYPE html><html>')
        elif keyword == '#kthxbye':
            self.emit('</html>')
        elif keyword == '#obtw':
            self.comment_compile()
        elif keyword == '#maek':
            self.block_open(self.lexeme_next())
        elif keyword == '#oic':
            self.block_close()
        elif keyword == '#gimmeh':
            self.element_open(self.lexeme_next())
        elif keyword == '#mkay':
            self.element_close()
        elif keyword == '#i' and self.lexeme_peek() == 'haz':
            self.declaration_compile(token)
        elif keyword == '#lemme' and self.lexeme_peek() == 'see':
            self.use_compile()
        else:
            self.emit(f' {token.lexeme}')

    def comment_compile(self) -> None:
        words = []
        while not self.stream.at_end() and self.lexeme_peek() != '#tldr':
            words.append(self.stream.advance().lexeme)
        self.stream.advance()
        self.emit('<!--' + ''.join(f' {word}' for word in words))
        self.emit(' -->')

    def block_open(self, keyword: str) -> None:
        opener, closer = BLOCK_TAGS[keyword]
        self.emit(opener)
        self.open_blocks.append(OpenBlock(keyword, closer, len(self.bindings)))
        if keyword == 'paragraf':
            self.paragraph_count += 1

    def block_close(self) -> None:
        block = self.open_blocks.pop()
        self.emit(block.closer)
        if block.keyword == 'paragraf':
            self.scope_leave(block)

    def element_open(self, keyword: str) -> None:
        if keyword == 'newline':
            self.emit('<br/>')
        elif keyword in ('soundz', 'vidz'):
            self.media_compile(keyword)
        else:
            opener, closer = ELEMENT_TAGS[keyword]
            self.emit(opener)
            self.open_blocks.append(OpenBlock(keyword, closer))

    def element_close(self) -> None:
        self.emit(self.open_blocks.pop().closer)

    def media_compile(self, keyword: str) -> None:
        address = html.escape(self.stream.advance().lexeme, quote=True)
        self.stream.advance()  # '#mkay'
        if keyword == 'soundz':
            self.emit(f'<audio controls><source src="{address}" type="audio/mpeg">')
            self.emit('</audio>')
        else:
            self.emit(f'<iframe src="{address}">')
            self.emit('</iframe>')

    def declaration_compile(self, start: Token) -> None:
        """Record '#i haz name [#it iz words #mkay]' as a binding (no output)"""
        self.stream.advance()  # 'haz'
        name = self.stream.advance().lexeme

        value: Optional[str] = None
        if self.lexeme_peek() == '#it':
            self.stream.advance()  # '#it'
            self.stream.advance()  # 'iz'
            words = []
            while not self.stream.at_end() and self.lexeme_peek() != '#mkay':
                words.append(self.stream.advance().lexeme)
            self.stream.advance()  # '#mkay'
            value = ' '.join(words)

        self.bindings.append(VariableBinding(name=name, value=value, line=start.line))
        self.variable_count += 1

    def use_compile(self) -> None:
        """Substitute '#lemme see name #mkay' with the bound value"""
        self.stream.advance()  # 'see'
        name = self.stream.advance().lexeme
        self.stream.advance()  # '#mkay'

        binding = self.binding_resolve(name)
        if binding is not None and binding.value is not None:
            self.emit(f' {binding.value}')

    def binding_resolve(self, name: str) -> Optional[VariableBinding]:
        """
        Find the binding a use refers to

        Default: the newest binding with this name still in scope.
        Legacy mode: the most recently appended binding, whatever its name.
        """
        if not self.bindings:
            return None
        if self.settings.legacy_variable_resolution:
            return self.bindings[-1]
        for binding in reversed(self.bindings):
            if binding.name == name:
                return binding
        return None

    def scope_leave(self, block: OpenBlock) -> None:
        """Drop the bindings a paragraph introduced"""
        if self.settings.legacy_variable_resolution:
            if len(self.bindings) > 1:
                self.bindings.pop()
        else:
            del self.bindings[block.binding_mark:]


def source_compile(source: str, settings: Optional[AppSettings] = None) -> str:
    """
    Check and translate lolmark source text in one call

    Args:
        source: Raw source text
        settings: Optional AppSettings override

    Returns:
        Generated HTML

    Raises:
        CompileError: On the first lexical, syntax or semantic violation
    """
    tokens = Tokenizer(source).tokenize()
    Parser(tokens, settings=settings).parse()
    return Compiler(tokens, settings=settings).html_generate()
