"""
Matcher Parser - Lark-based parser for the matcher path language.

This module turns matcher source text (``agent.(1)product.(1)name``) into a
Lark parse tree that the walk list compiler visits, and renders such a tree
back into its one-line source form.
"""

from pathlib import Path
from typing import Iterable, Optional, List
from dataclasses import dataclass, field

from lark import Lark, Tree, Token
from lark.exceptions import (
    UnexpectedInput,
    UnexpectedToken,
    UnexpectedCharacters,
    UnexpectedEOF,
)


# ============================================================
# ERROR TYPES
# ============================================================

@dataclass
class ParseError:
    """A matcher syntax error; ``column`` is one-based within ``context``."""
    message: str
    line: int
    column: int
    context: Optional[str] = None
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.message} (line {self.line}, column {self.column})"
        if self.context:
            text += f"\n    {self.context}\n    {' ' * (self.column - 1)}^"
        if self.suggestion:
            text += f"\n  {self.suggestion}"
        return text


@dataclass
class ParseResult:
    """Outcome of parsing one matcher: the tree, or the errors."""
    success: bool
    tree: Optional[Tree] = None
    errors: List[ParseError] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return self.success


# Readable names for the terminals lark reports as expected
_TERMINAL_NAMES = {
    "PATHNAME": "a lowercase step name",
    "WILDCARD": "'*'",
    "VALUE": "a quoted value",
    "VALUENAME": "a lookup name",
    "NUMBER": "a number",
    "LSQB": "'['",
    "RSQB": "']'",
    "LPAR": "'('",
    "RPAR": "')'",
    "SEMICOLON": "';'",
    "MINUS": "'-'",
    "DOT": "'.'",
}


def _describe_expected(expected: Iterable[str]) -> Optional[str]:
    names = sorted({_TERMINAL_NAMES.get(name, name) for name in expected})
    if not names:
        return None
    if len(names) > 5:
        names = names[:5] + [f"{len(names) - 5} more"]
    return "Expected " + ", ".join(names)


# ============================================================
# PARSER
# ============================================================

class MatcherParser:
    """
    Parser for matcher expressions.

    Usage:
        parser = MatcherParser()
        result = parser.parse('agent.(1)product.(1)name="Chrome"')
        if result.success:
            tree = result.tree
        else:
            for error in result.errors:
                print(error)

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a parser.
    ::: This is-in-process Main-Process.
    """

    _instance: Optional["MatcherParser"] = None
    _parser: Optional[Lark] = None

    def __new__(cls) -> "MatcherParser":
        """One parser per process; building the LALR tables is the slow part."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if MatcherParser._parser is not None:
            return

        grammar_path = Path(__file__).parent / "grammar.lark"
        if not grammar_path.exists():
            raise FileNotFoundError(f"Matcher grammar missing: {grammar_path}")

        MatcherParser._parser = Lark(
            grammar_path.read_text(encoding="utf-8"),
            start="start",
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=True,
        )

    @property
    def parser(self) -> Lark:
        """Get the Lark parser instance."""
        if MatcherParser._parser is None:
            raise RuntimeError("Parser not initialized")
        return MatcherParser._parser

    @classmethod
    def reset(cls) -> None:
        """Drop the cached parser; the next use reloads the grammar."""
        cls._parser = None
        cls._instance = None

    def parse(self, source: str) -> ParseResult:
        """
        Parse a matcher expression.

        Malformed input never raises; the result carries a single
        ParseError pointing at the first offending position.

        Args:
            source: Matcher source text

        Returns:
            ParseResult containing the tree or errors
        """
        if not source or not source.strip():
            error = ParseError(
                message="Empty matcher",
                line=1,
                column=1,
                suggestion="A matcher starts with 'agent', a variable '@Name' or a \"value\"",
            )
            return ParseResult(success=False, errors=[error], source=source)

        try:
            tree = self.parser.parse(source)
        except UnexpectedEOF as e:
            error = self._error_at_end(source, e.expected)
        except UnexpectedToken as e:
            if e.token is None or e.token.type == "$END":
                error = self._error_at_end(source, e.expected)
            else:
                error = self._error_at(
                    source, e.line, e.column,
                    f"Unexpected '{e.token}'",
                    _describe_expected(e.expected or ()),
                )
        except UnexpectedCharacters as e:
            error = self._error_at(
                source, e.line, e.column,
                f"Unexpected character '{e.char}'",
                self._suggest_for_char(e.char),
            )
        except UnexpectedInput as e:
            error = self._error_at(
                source, getattr(e, "line", None), getattr(e, "column", None), str(e), None
            )
        else:
            return ParseResult(success=True, tree=tree, source=source)

        return ParseResult(success=False, errors=[error], source=source)

    # ============================================================
    # ERROR BUILDERS
    # ============================================================

    def _error_at(
        self, source: str, line, column, message: str, suggestion: Optional[str]
    ) -> ParseError:
        """Error at a known position; lark reports -1 or None when it has none."""
        line = line if isinstance(line, int) and line > 0 else 1
        column = column if isinstance(column, int) and column > 0 else 1
        lines = source.split('\n')
        context = lines[line - 1].rstrip() if line <= len(lines) else None
        return ParseError(message, line, column, context, suggestion)

    def _error_at_end(self, source: str, expected: Optional[Iterable[str]]) -> ParseError:
        """Error for a matcher that stops before it is complete."""
        expected = set(expected or ())
        if "RSQB" in expected:
            suggestion = "Missing closing bracket ']'"
        elif "RPAR" in expected:
            suggestion = "Missing closing parenthesis ')'"
        else:
            suggestion = _describe_expected(expected)

        lines = source.split('\n')
        return ParseError(
            message="Unexpected end of matcher",
            line=len(lines),
            column=len(lines[-1]) + 1,
            context=lines[-1].rstrip(),
            suggestion=suggestion,
        )

    def _suggest_for_char(self, char: str) -> Optional[str]:
        if char == '"':
            return "Check for unclosed string"
        if char == "'":
            return "Values are written in double quotes"
        if char.isupper():
            return "Path step names are lowercase (product, name, version, ...)"
        if char == '(':
            return "A number range belongs after '.', e.g. .(1-2)product"
        return None


# ============================================================
# UTILITY FUNCTIONS
# ============================================================

def parse_matcher(source: str) -> ParseResult:
    """Parse a matcher expression with the shared parser."""
    return MatcherParser().parse(source)


def unquote_value(token: Token) -> str:
    """Strip the quotes of a VALUE token and resolve its escapes."""
    text = str(token)
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    if "\\" not in text:
        return text
    chars = []
    escaped = False
    for ch in text:
        if escaped:
            chars.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            chars.append(ch)
    return "".join(chars)


# ============================================================
# AST UTILITIES
# ============================================================

# Source layout per rule; children fill the slots in order, absent ones as ""
_SOURCE_FORMATS = {
    "start": "{0}",
    "matcher_path": "{0}",
    "matcher_concat": "Concat[{0};{1};{2}]",
    "matcher_concat_prefix": "Concat[{0};{1}]",
    "matcher_concat_postfix": "Concat[{0};{1}]",
    "matcher_normalize_brand": "NormalizeBrand[{0}]",
    "matcher_clean_version": "CleanVersion[{0}]",
    "matcher_path_lookup": "LookUp[{0};{1}{2}]",
    "matcher_path_is_null": "IsNull[{0}]",
    "matcher_word_range": "{0}{1}",
    "path_fixed_value": "{0}",
    "path_variable": "@{0}{1}",
    "path_walk": "agent{0}",
    "step_down": ".{0}{1}{2}",
    "step_up": "^{0}",
    "step_next": ">{0}",
    "step_prev": "<{0}",
    "step_equals_value": "={0}{1}",
    "step_not_equals_value": "!={0}{1}",
    "step_starts_with_value": "{{{0}{1}",
    "step_ends_with_value": "}}{0}{1}",
    "step_contains_value": "~{0}{1}",
    "step_is_in_set": "?{0}{1}",
    "step_word_range": "{0}{1}",
    "step_back_to_full": "@{0}",
    "number_range_start_to_end": "({0}-{1})",
    "number_range_single_value": "({0})",
    "number_range_all": "({0})",
    "word_range_start_to_end": "[{0}-{1}]",
    "word_range_first_words": "[-{0}]",
    "word_range_last_words": "[{0}-]",
    "word_range_single_word": "[{0}]",
}


def matcher_to_source(tree) -> str:
    """
    Render a parsed matcher back to one line of matcher text.

    Whitespace the source may have had is not kept.

    Args:
        tree: Tree from parse_matcher, or any subtree of it

    Returns:
        Matcher text that parses to the same tree
    """
    if tree is None:
        return ""
    if isinstance(tree, Token):
        return str(tree)

    fmt = _SOURCE_FORMATS.get(tree.data)
    if fmt is None:
        raise ValueError(f"Unknown matcher rule '{tree.data}'")

    parts = [matcher_to_source(child) for child in tree.children]
    if tree.data == "matcher_path_lookup" and tree.children[2] is not None:
        parts[2] = ";" + parts[2]
    return fmt.format(*parts)


def pretty_print_tree(tree: Tree, indent: int = 0) -> str:
    """
    Pretty print a parse tree for debugging.

    Args:
        tree: Lark parse tree
        indent: Current indentation level

    Returns:
        Formatted string representation of the tree
    """
    lines = []
    prefix = "  " * indent

    if isinstance(tree, Tree):
        lines.append(f"{prefix}{tree.data}")
        for child in tree.children:
            lines.append(pretty_print_tree(child, indent + 1))
    elif isinstance(tree, Token):
        lines.append(f"{prefix}{tree.type}: {tree.value!r}")
    else:
        lines.append(f"{prefix}{tree!r}")

    return "\n".join(lines)


def get_lookup_names(tree: Tree) -> List[str]:
    """
    Extract the lookup and lookup set names a matcher refers to.

    Args:
        tree: Parsed matcher tree

    Returns:
        Names in order of appearance, without duplicates
    """
    names: List[str] = []
    for node in tree.iter_subtrees_topdown():
        if node.data in ("matcher_path_lookup", "step_is_in_set"):
            name = str(node.children[0])
            if name not in names:
                names.append(name)
    return names
