"""JavaScript and TypeScript comment stripper.

Removes ``//`` line comments and ``/* */`` block comments while leaving
string literals, template literals (including ``${}`` interpolations)
and regular expression literals untouched.

Removed comments collapse: a line that only held a comment disappears
together with its line break, and whitespace left in front of a removed
trailing comment is trimmed. Lines that were already blank are kept.
With ``preserve_blank_lines=True`` comment-only lines stay as empty lines
instead, and the line breaks inside block comments are kept.
"""

# Characters after which a slash opens a regular expression literal
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")

# Keywords after which a slash opens a regular expression literal
_REGEX_KEYWORDS = frozenset(
    {
        "await",
        "case",
        "delete",
        "do",
        "else",
        "in",
        "instanceof",
        "new",
        "of",
        "return",
        "throw",
        "typeof",
        "void",
        "yield",
    }
)

# Keywords whose parenthesized condition is followed by a statement
_CONTROL_KEYWORDS = frozenset({"if", "for", "while", "with"})

# Stand-in for "the previous token was a value" (literal, closing paren)
_VALUE = ")"

# Stand-in for "a statement starts here"
_STATEMENT = ";"


class CommentStripError(ValueError):
    """Raised when the text cannot be stripped safely.

    Attributes:
        line: 1-based input line where the problem starts.
    """

    def __init__(self, message: str, line: int) -> None:
        self.line = line
        super().__init__(f"{message} (line {line})")


def _is_identifier_char(char: str) -> bool:
    return len(char) == 1 and (char.isalnum() or char in "_$")


class _Stripper:
    """Single-pass scanner over one file's text."""

    def __init__(self, text: str, preserve_blank_lines: bool) -> None:
        self._text = text
        self._n = len(text)
        self._i = 0
        self._preserve = preserve_blank_lines
        self._out: list[str] = []
        self._line = 0
        # Output lines that lost a comment
        self._touched: set[int] = set()
        # Output lines that end inside a string or template literal
        self._protected: set[int] = set()
        self._prev: str | None = None
        self._word = ""
        self._gap = False
        # One entry per open paren: True if it holds a control condition
        self._parens: list[bool] = []

    def run(self) -> str:
        if self._text.startswith("#!"):
            end = self._text.find("\n")
            end = self._n if end == -1 else end
            self._emit(self._text[:end])
            self._i = end

        self._scan_code(nested=False)
        return self._collapse("".join(self._out))

    # -- emission -----------------------------------------------------------

    def _emit(self, chunk: str, *, literal: bool = False) -> None:
        self._out.append(chunk)
        for _ in range(chunk.count("\n")):
            if literal:
                self._protected.add(self._line)
            self._line += 1

    def _note(self, char: str) -> None:
        """Track the previous significant token for regex detection."""
        if char.isspace():
            self._gap = True
            return
        if _is_identifier_char(char):
            if self._gap or self._prev is None or not _is_identifier_char(self._prev):
                self._word = ""
            self._word += char
        else:
            self._word = ""
        self._prev = char
        self._gap = False

    def _note_code(self, char: str) -> None:
        """Track a plain code character, including paren nesting."""
        if char == "(":
            control = self._word in _CONTROL_KEYWORDS
            self._note(char)
            self._parens.append(control)
            return
        self._note(char)
        if char == ")" and self._parens and self._parens.pop():
            self._prev = _STATEMENT

    def _ends_value(self) -> bool:
        if self._prev in (_VALUE, "]"):
            return True
        return (
            self._prev is not None
            and _is_identifier_char(self._prev)
            and self._word not in _REGEX_KEYWORDS
        )

    def _peek(self, offset: int = 1) -> str:
        index = self._i + offset
        return self._text[index] if index < self._n else ""

    def _input_line(self) -> int:
        return self._text.count("\n", 0, self._i) + 1

    # -- scanners -----------------------------------------------------------

    def _scan_code(self, *, nested: bool) -> None:
        """Scan code until end of text, or the closing brace of an interpolation."""
        depth = 0
        if nested:
            self._prev = "{"
            self._word = ""

        while self._i < self._n:
            char = self._text[self._i]
            nxt = self._peek()

            if char == "/" and nxt == "/":
                self._skip_line_comment()
            elif char == "/" and nxt == "*":
                self._skip_block_comment()
            elif char in "'\"":
                self._scan_string(char)
                self._prev, self._word = _VALUE, ""
            elif char == "`":
                self._emit("`")
                self._i += 1
                self._scan_template()
                self._prev, self._word = _VALUE, ""
            elif char == "/" and self._regex_allowed() and self._scan_regex():
                self._prev, self._word = _VALUE, ""
            elif char in "+-" and nxt == char:
                self._scan_increment(char)
            elif nested and char == "}" and depth == 0:
                self._emit("}")
                self._i += 1
                return
            else:
                if nested and char == "{":
                    depth += 1
                elif nested and char == "}":
                    depth -= 1
                self._emit(char)
                self._note_code(char)
                self._i += 1

    def _scan_increment(self, char: str) -> None:
        """Emit ++ or --; the postfix form leaves a value behind."""
        postfix = self._ends_value()
        self._emit(char * 2)
        self._i += 2
        self._prev = _VALUE if postfix else char
        self._word = ""
        self._gap = False

    def _skip_line_comment(self) -> None:
        end = self._text.find("\n", self._i)
        if end == -1:
            end = self._n
        elif self._text[end - 1] == "\r":
            end -= 1
        self._i = end
        self._touched.add(self._line)

    def _skip_block_comment(self) -> None:
        end = self._text.find("*/", self._i + 2)
        if end == -1:
            raise CommentStripError("Unterminated block comment", self._input_line())

        body = self._text[self._i : end]
        self._touched.add(self._line)
        if self._preserve:
            for pos, char in enumerate(body):
                if char == "\n":
                    self._emit("\r\n" if pos and body[pos - 1] == "\r" else "\n")
                    self._touched.add(self._line)
        elif "\n" in body and self._code_follows(end + 2):
            # Keep statements on separate lines for automatic semicolon insertion
            newline = body.index("\n")
            self._emit("\r\n" if newline and body[newline - 1] == "\r" else "\n")
            self._touched.add(self._line)
        self._i = end + 2

        # Keep adjacent words apart: return/* c */x
        before = self._out[-1][-1:] if self._out else ""
        if _is_identifier_char(before) and _is_identifier_char(self._peek(0)):
            self._emit(" ")

    def _code_follows(self, index: int) -> bool:
        """Check whether anything but whitespace follows on the same input line."""
        end = self._text.find("\n", index)
        return bool(self._text[index : self._n if end == -1 else end].strip())

    def _scan_string(self, quote: str) -> None:
        self._emit(quote)
        self._i += 1
        while self._i < self._n:
            char = self._text[self._i]
            if char == "\\":
                self._emit(self._text[self._i : self._i + 2], literal=True)
                self._i += 2
                continue
            if char == "\n":
                # Unterminated string; the newline belongs to the code
                return
            self._emit(char)
            self._i += 1
            if char == quote:
                return

    def _scan_template(self) -> None:
        while self._i < self._n:
            char = self._text[self._i]
            if char == "\\":
                self._emit(self._text[self._i : self._i + 2], literal=True)
                self._i += 2
            elif char == "`":
                self._emit("`")
                self._i += 1
                return
            elif char == "$" and self._peek() == "{":
                self._emit("${")
                self._i += 2
                self._scan_code(nested=True)
            else:
                self._emit(char, literal=True)
                self._i += 1

    def _regex_allowed(self) -> bool:
        if self._prev is None or self._prev in _REGEX_PRECEDERS:
            return True
        if _is_identifier_char(self._prev):
            return self._word in _REGEX_KEYWORDS
        return False

    def _scan_regex(self) -> bool:
        """Emit a regex literal starting at the current slash, if there is one."""
        j = self._i + 1
        in_class = False
        while j < self._n:
            char = self._text[j]
            if char == "\n":
                return False
            if char == "\\":
                j += 2
                continue
            if in_class:
                if char == "]":
                    in_class = False
            elif char == "[":
                in_class = True
            elif char == "/":
                self._emit(self._text[self._i : j + 1])
                self._i = j + 1
                return True
            j += 1
        return False

    # -- collapsing ---------------------------------------------------------

    def _collapse(self, text: str) -> str:
        if not self._touched:
            return text

        lines = text.split("\n")
        kept: list[str] = []
        for index, line in enumerate(lines):
            if index not in self._touched or index in self._protected:
                kept.append(line)
                continue

            carriage = "\r" if line.endswith("\r") else ""
            body = line[:-1] if carriage else line
            body = body.rstrip()
            if body or self._preserve:
                kept.append(body + carriage)
        return "\n".join(kept)


def strip_comments(text: str, *, preserve_blank_lines: bool = False) -> str:
    """Remove comments from JavaScript or TypeScript source text.

    Args:
        text: Full text of one source file.
        preserve_blank_lines: Keep an empty line where a comment-only line
            was, instead of removing the line.

    Returns:
        The text without comments.

    Raises:
        CommentStripError: If a block comment is never closed.
    """
    return _Stripper(text, preserve_blank_lines).run()
