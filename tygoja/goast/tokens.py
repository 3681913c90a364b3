"""Go tokenizer — lexes declaration source into tokens plus a side list of comments."""

from __future__ import annotations


# Token type constants
TK_INT = "INT"
TK_FLOAT = "FLOAT"
TK_IMAG = "IMAG"
TK_CHAR = "CHAR"
TK_STRING = "STRING"
TK_IDENT = "IDENT"
TK_OP = "OP"
TK_EOF = "EOF"

KEYWORDS: set[str] = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

# Multi-character operators, sorted by length descending for greedy matching
MULTI_OPS: list[str] = [
    "<<=",
    ">>=",
    "&^=",
    "...",
    "&&",
    "||",
    "<-",
    "++",
    "--",
    "==",
    "!=",
    "<=",
    ">=",
    ":=",
    "<<",
    ">>",
    "&^",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
]

SINGLE_OPS: set[str] = {
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "~",
    "!",
    "<",
    ">",
    "=",
    "(",
    ")",
    "[",
    "]",
    "{",
    "}",
    ",",
    ";",
    ".",
    ":",
}

# A newline after one of these ends the statement (Go automatic semicolons).
_SEMI_KEYWORDS: set[str] = {"break", "continue", "fallthrough", "return"}
_SEMI_OPS: set[str] = {")", "]", "}", "++", "--"}


class TokenizeError(Exception):
    """Error during tokenization."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Token:
    """A token with type, value, and position."""

    def __init__(self, type_: str, value: str, line: int, col: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line
        self.col: int = col
        self.auto: bool = False

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.value)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


class Comment:
    """A `//` or `/* */` comment with its markers kept.

    own_line is True when no token precedes the comment on its first line.
    """

    def __init__(
        self, text: str, line: int, col: int, end_line: int, own_line: bool
    ):
        self.text: str = text
        self.line: int = line
        self.col: int = col
        self.end_line: int = end_line
        self.own_line: bool = own_line

    def __repr__(self) -> str:
        return "Comment(" + repr(self.text) + ", " + str(self.line) + ")"


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_letter(c: str) -> bool:
    return c == "_" or c.isalpha()


def _is_ident_char(c: str) -> bool:
    return c == "_" or c.isalnum()


def _ends_statement(tok: Token) -> bool:
    if tok.type in (TK_IDENT, TK_INT, TK_FLOAT, TK_IMAG, TK_CHAR, TK_STRING):
        return True
    if tok.type in _SEMI_KEYWORDS:
        return True
    return tok.type == TK_OP and tok.value in _SEMI_OPS


def _number_kind(raw: str) -> str:
    if raw.endswith("i"):
        return TK_IMAG
    lower = raw.lower()
    if lower.startswith("0x"):
        return TK_FLOAT if ("." in lower or "p" in lower) else TK_INT
    if "." in lower or "e" in lower:
        return TK_FLOAT
    return TK_INT


def tokenize(source: str) -> tuple[list[Token], list[Comment]]:
    """Tokenize Go source into a token list ending with TK_EOF, and its comments.

    Statement-ending `;` tokens are inserted at newlines (and at EOF) following
    the Go rule; inserted tokens have auto set.
    """
    tokens: list[Token] = []
    comments: list[Comment] = []
    pos = 0
    line = 1
    col = 1
    length = len(source)
    line_has_token = False

    def insert_semi(at_line: int, at_col: int) -> None:
        if tokens and _ends_statement(tokens[-1]):
            tok = Token(TK_OP, ";", at_line, at_col)
            tok.auto = True
            tokens.append(tok)

    while pos < length:
        c = source[pos]

        # Newlines
        if c == "\n":
            if line_has_token:
                insert_semi(line, col)
            pos += 1
            line += 1
            col = 1
            line_has_token = False
            continue

        # Whitespace
        if c == " " or c == "\t" or c == "\r":
            pos += 1
            col += 1
            continue

        # Line comment
        if c == "/" and pos + 1 < length and source[pos + 1] == "/":
            end = source.find("\n", pos)
            if end == -1:
                end = length
            comments.append(
                Comment(source[pos:end], line, col, line, not line_has_token)
            )
            col += end - pos
            pos = end
            continue

        # Block comment
        if c == "/" and pos + 1 < length and source[pos + 1] == "*":
            end = source.find("*/", pos + 2)
            if end == -1:
                raise TokenizeError("comment not terminated", line, col)
            text = source[pos : end + 2]
            newlines = text.count("\n")
            comments.append(
                Comment(text, line, col, line + newlines, not line_has_token)
            )
            if newlines > 0:
                if line_has_token:
                    insert_semi(line, col)
                line += newlines
                col = len(text) - text.rfind("\n")
                line_has_token = False
            else:
                col += len(text)
            pos = end + 2
            continue

        start_pos = pos
        start_col = col

        # Number
        if _is_digit(c) or (
            c == "." and pos + 1 < length and _is_digit(source[pos + 1])
        ):
            pos += 1
            while pos < length:
                ch = source[pos]
                if _is_ident_char(ch) or ch == ".":
                    pos += 1
                    continue
                prev = source[pos - 1].lower()
                if (ch == "+" or ch == "-") and (
                    prev == "p"
                    or (prev == "e" and not source[start_pos:pos].lower().startswith("0x"))
                ):
                    pos += 1
                    continue
                break
            raw = source[start_pos:pos]
            col += pos - start_pos
            tokens.append(Token(_number_kind(raw), raw, line, start_col))
            line_has_token = True
            continue

        # Interpreted string literal
        if c == '"':
            pos += 1
            while pos < length and source[pos] != '"':
                if source[pos] == "\n":
                    raise TokenizeError("string literal not terminated", line, start_col)
                if source[pos] == "\\":
                    pos += 1
                pos += 1
            if pos >= length:
                raise TokenizeError("string literal not terminated", line, start_col)
            pos += 1  # skip closing "
            raw = source[start_pos:pos]
            col += pos - start_pos
            tokens.append(Token(TK_STRING, raw, line, start_col))
            line_has_token = True
            continue

        # Raw string literal, may span lines
        if c == "`":
            end = source.find("`", pos + 1)
            if end == -1:
                raise TokenizeError("raw string literal not terminated", line, col)
            raw = source[pos : end + 1]
            tokens.append(Token(TK_STRING, raw, line, start_col))
            newlines = raw.count("\n")
            if newlines > 0:
                line += newlines
                col = len(raw) - raw.rfind("\n")
            else:
                col += len(raw)
            pos = end + 1
            line_has_token = True
            continue

        # Rune literal
        if c == "'":
            pos += 1
            while pos < length and source[pos] != "'":
                if source[pos] == "\n":
                    raise TokenizeError("rune literal not terminated", line, start_col)
                if source[pos] == "\\":
                    pos += 1
                pos += 1
            if pos >= length:
                raise TokenizeError("rune literal not terminated", line, start_col)
            pos += 1  # skip closing '
            raw = source[start_pos:pos]
            col += pos - start_pos
            tokens.append(Token(TK_CHAR, raw, line, start_col))
            line_has_token = True
            continue

        # Identifier or keyword
        if _is_letter(c):
            while pos < length and _is_ident_char(source[pos]):
                pos += 1
            word = source[start_pos:pos]
            col += pos - start_pos
            if word in KEYWORDS:
                tokens.append(Token(word, word, line, start_col))
            else:
                tokens.append(Token(TK_IDENT, word, line, start_col))
            line_has_token = True
            continue

        # Multi-character operators
        matched = False
        for op in MULTI_OPS:
            op_len = len(op)
            if pos + op_len <= length and source[pos : pos + op_len] == op:
                tokens.append(Token(TK_OP, op, line, start_col))
                pos += op_len
                col += op_len
                matched = True
                break
        if matched:
            line_has_token = True
            continue

        # Single-character operators
        if c in SINGLE_OPS:
            tokens.append(Token(TK_OP, c, line, start_col))
            pos += 1
            col += 1
            line_has_token = True
            continue

        raise TokenizeError("unexpected character: " + repr(c), line, col)

    if line_has_token:
        insert_semi(line, col)
    tokens.append(Token(TK_EOF, "", line, col))
    return tokens, comments
