#!/usr/bin/env python3
"""
lolmark - LOLCODE-flavoured markup to HTML compiler

Reads a #hai ... #kthxbye source file, verifies that it is lexically,
syntactically and scope-wise well-formed, and writes the equivalent HTML
page.

As in other ChRIS-style tools, the app is wired as a "plugin": an inputdir,
an outputdir and a handful of options, run through a pipeline of
state-transform stages.

Usage:
    lolmark inputdir/ outputdir/ --inputFile page.lol

Examples:
    # Basic compilation
    lolmark . output/ --inputFile page.lol

    # Only validate the source, write nothing
    lolmark . output/ --inputFile page.lol --checkOnly

    # Compile and open the result in the default browser
    lolmark . output/ --inputFile page.lol --showInBrowser -vv
"""

import sys
import webbrowser
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from pathlib import Path

from chris_plugin import chris_plugin

from .config import appsettings
from .lib import (
    Tokenizer,
    Parser,
    Compiler,
    CompileError,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _       _                      _
 | | ___ | |_ __ ___   __ _ _ __| | __
 | |/ _ \| | '_ ` _ \ / _` | '__| |/ /
 | | (_) | | | | | | | (_| | |  |   <
 |_|\___/|_|_| |_| |_|\__,_|_|  |_|\_\

  #hai ... #kthxbye to HTML
"""

# Define CLI arguments
parser = ArgumentParser(
    description="lolmark - LOLCODE-flavoured markup to HTML compiler",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input lolmark source file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="Name of the generated HTML file (defaults to LOLMARK_OUTPUT_FILENAME)",
)

parser.add_argument(
    "--checkOnly",
    default=False,
    action="store_true",
    help="Only check the source; do not generate HTML",
)

parser.add_argument(
    "--showInBrowser",
    default=False,
    action="store_true",
    help="Open the generated HTML file in the default browser",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source file
            - htmlOutputdir: Output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.htmlOutputdir = state.outputdir
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source file into memory.

    Returns:
        ProgramState with added field:
            - sourceText: Raw source text

    Exits:
        1 if the file cannot be read or decoded
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding=appsettings.source_encoding)
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def source_check(inputstate: ProgramState) -> ProgramState:
    """
    Tokenize the source and run the parser/scope analyzer over it.

    Returns:
        ProgramState with added fields:
            - tokens: Token list
            - parseReport: ParseReport from a valid document

    Exits:
        1 on the first lexical, syntax or semantic error
    """
    state = inputstate.copy()

    LOG("Checking source...", level=1)
    state.tokens = Tokenizer(state.sourceText).tokenize()
    try:
        state.parseReport = Parser(state.tokens).parse()
    except CompileError as e:
        print(f"{e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Source is valid ({state.parseReport.token_count} tokens)", level=2)
    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Generate HTML from the checked tokens and write it out.

    Skipped in --checkOnly mode.

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool (compilation success)
                - output_file: str (path to generated HTML)
                - paragraph_count: int
                - variable_count: int

    Exits:
        1 if there are no checked tokens or the output cannot be written
    """
    state = inputstate.copy()

    if state.checkOnly:
        LOG("Check only: skipping HTML generation", level=2)
        return state

    LOG("Compiling tokens to HTML...", level=1)

    if state.tokens is None or state.parseReport is None:
        print("Error: No checked source available", file=sys.stderr)
        sys.exit(1)

    settings = appsettings
    if state.outputFile:
        settings = appsettings.model_copy(update={"output_filename": state.outputFile})

    try:
        compiler = Compiler(
            tokens=state.tokens,
            output_dir=str(state.htmlOutputdir),
            settings=settings,
        )
        state.compileResult = compiler.compile()
        LOG(f"Compilation complete: {state.compileResult['paragraph_count']} paragraphs", level=2)
    except OSError as e:
        print(f"Compilation error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def browser_show(inputstate: ProgramState) -> ProgramState:
    """
    Open the generated page in the default browser when asked to.

    Returns:
        ProgramState unchanged
    """
    state = inputstate.copy()

    if not state.showInBrowser or not state.compileResult:
        return state

    output_file = Path(state.compileResult['output_file']).resolve()
    LOG(f"Opening {output_file} in browser", level=2)
    if not webbrowser.open(output_file.as_uri()):
        LOG("Warning: no browser could be launched", level=1)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if nothing was checked, or generation was expected but produced nothing
    """
    state: ProgramState = inputstate.copy()
    if not state.parseReport:
        print("Error: Check failed", file=sys.stderr)
        sys.exit(1)

    if state.checkOnly:
        print("This lolmark document is syntactically valid.")
        return state

    if not state.compileResult:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Compilation successful!", level=1)
    LOG(f"  Output: {state.compileResult['output_file']}", level=1)
    LOG(f"  Paragraphs: {state.compileResult['paragraph_count']}", level=1)
    LOG(f"  Variables: {state.compileResult['variable_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="lolmark - LOLCODE-flavoured markup to HTML compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile a lolmark document to HTML.

    Orchestrates the full pipeline:
        1. env_check: Validate paths
        2. source_read: Read the source file
        3. source_check: Tokenize, parse and scope-check
        4. html_compile: Generate and write HTML
        5. browser_show: Optionally open the result
        6. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(
        state, env_check, source_read, source_check, html_compile, browser_show, results_report
    )


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
