# Arithmetic evaluator for the calculator
#
# Pipeline:
#   normalize()   percent rewrite, trailing operator trim
#   tokenize()    string -> list of Token
#   Parser        recursive descent -> AST nodes
#   eval_node()   AST -> float
#
# Grammar (left-associative):
#   expr    := term (('+'|'-') term)*
#   term    := factor (('*'|'/') factor)*
#   factor  := '-'? primary
#   primary := NUMBER | '(' expr ')'

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from calc_buffer import MAX_LEN

log = logging.getLogger(__name__)

SNAP_TOLERANCE = 1e-12
FRACTION_DIGITS = 10
ERROR_TEXT = "Error"

ALLOWED_RE = re.compile(r"^[0-9+\-*/().%\s]*$")
PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)%")
TRAILING_RE = re.compile(r"[+\-*/.]+$")

# ============================================================
# ERRORS
# ============================================================

class CalcError(Exception):
    kind = "error"
    preview_message = "Error"
    commit_message = "Evaluation error"

class InvalidCharacters(CalcError):
    kind = "InvalidCharacters"
    preview_message = "Invalid input"
    commit_message = "Invalid input"

class InvalidExpression(CalcError):
    kind = "InvalidExpression"
    preview_message = ""
    commit_message = "Evaluation error"

class DivideByZero(CalcError):
    kind = "DivideByZero"
    preview_message = "Divide by zero"
    commit_message = "Cannot divide by zero"

# ============================================================
# NORMALIZATION
# ============================================================

def normalize(text):
    """Rewrite percents and drop an unfinished tail.

    Returns the string handed to the parser, or "" when nothing
    evaluable remains (the caller treats that as 0).
    """
    if not text:
        return ""
    if len(text) > MAX_LEN or not ALLOWED_RE.match(text):
        raise InvalidCharacters("invalid input")
    safe = PERCENT_RE.sub(r"(\1/100)", text)
    return TRAILING_RE.sub("", safe)

# ============================================================
# TOKENIZER
# ============================================================

TK_NUM = 'NUM'
TK_OP = 'OP'
TK_LPAREN = '('; TK_RPAREN = ')'
TK_EOF = 'EOF'

@dataclass
class Token:
    type: str
    value: Any
    pos: int

def tokenize(src):
    tokens = []
    i = 0
    n = len(src)
    while i < n:
        c = src[i]
        if c.isspace():
            i += 1; continue
        if c == '(':
            tokens.append(Token(TK_LPAREN, c, i)); i += 1; continue
        if c == ')':
            tokens.append(Token(TK_RPAREN, c, i)); i += 1; continue
        if c in '+-*/':
            tokens.append(Token(TK_OP, c, i)); i += 1; continue
        if c.isdigit() or c == '.':
            j = i
            while i < n and (src[i].isdigit() or src[i] == '.'): i += 1
            lexeme = src[j:i]
            if lexeme.count('.') > 1 or lexeme == '.':
                raise InvalidExpression("malformed number '{}' at pos {}".format(lexeme, j))
            tokens.append(Token(TK_NUM, float(lexeme), j))
            continue
        raise InvalidExpression("unexpected '{}' at pos {}".format(c, i))
    tokens.append(Token(TK_EOF, None, i))
    return tokens

# ============================================================
# AST NODES
# ============================================================

@dataclass
class ASTNum:
    value: float
@dataclass
class ASTNeg:
    operand: Any
@dataclass
class ASTBinOp:
    op: str; left: Any; right: Any

# ============================================================
# PARSER
# ============================================================

class Parser:
    def __init__(self, tokens):
        self.tokens = tokens; self.pos = 0
    def peek(self):
        return self.tokens[self.pos]
    def advance(self):
        t = self.tokens[self.pos]; self.pos += 1; return t
    def expect(self, tt):
        t = self.peek()
        if t.type != tt:
            raise InvalidExpression("expected '{}', got '{}' at pos {}".format(tt, t.value, t.pos))
        return self.advance()
    def at_op(self, *ops):
        t = self.peek()
        return t.type == TK_OP and t.value in ops

    def parse_top(self):
        result = self.parse_expr()
        if self.peek().type != TK_EOF:
            t = self.peek()
            raise InvalidExpression("unexpected '{}' at pos {}".format(t.value, t.pos))
        return result

    def parse_expr(self):
        left = self.parse_term()
        while self.at_op('+', '-'):
            op = self.advance().value
            left = ASTBinOp(op, left, self.parse_term())
        return left

    def parse_term(self):
        left = self.parse_factor()
        while self.at_op('*', '/'):
            op = self.advance().value
            left = ASTBinOp(op, left, self.parse_factor())
        return left

    def parse_factor(self):
        if self.at_op('-'):
            self.advance()
            return ASTNeg(self.parse_primary())
        return self.parse_primary()

    def parse_primary(self):
        t = self.peek()
        if t.type == TK_NUM:
            self.advance(); return ASTNum(t.value)
        if t.type == TK_LPAREN:
            self.advance(); inner = self.parse_expr(); self.expect(TK_RPAREN); return inner
        if t.type == TK_EOF:
            raise InvalidExpression("unexpected end of expression")
        raise InvalidExpression("unexpected '{}' at pos {}".format(t.value, t.pos))

def parse(src):
    return Parser(tokenize(src)).parse_top()

# ============================================================
# EVALUATION
# ============================================================

def _checked(v):
    if not math.isfinite(v):
        raise DivideByZero("non-finite result")
    return v

def eval_node(node):
    cn = type(node).__name__
    if cn == 'ASTNum':
        return _checked(node.value)
    if cn == 'ASTNeg':
        return -eval_node(node.operand)
    if cn == 'ASTBinOp':
        a = eval_node(node.left)
        b = eval_node(node.right)
        if node.op == '+': return _checked(a + b)
        if node.op == '-': return _checked(a - b)
        if node.op == '*': return _checked(a * b)
        if node.op == '/':
            if b == 0:
                raise DivideByZero("division by zero")
            return _checked(a / b)
    raise InvalidExpression("cannot evaluate {}".format(cn))

def evaluate(text: str) -> float:
    """Normalize, parse and evaluate ``text``; raises a CalcError subclass."""
    safe = normalize(text)
    if not safe:
        return 0.0
    return eval_node(parse(safe))

# ============================================================
# FORMATTING
# ============================================================

def format_number(n: float) -> str:
    r = round(n)
    if abs(n - r) < SNAP_TOLERANCE:
        return str(int(r))
    s = "{:.{}f}".format(n, FRACTION_DIGITS).rstrip('0').rstrip('.')
    return "0" if s == "-0" else s

# ============================================================
# PUBLIC RESULTS
# ============================================================

VALUE = "value"
EMPTY = "empty"
INVALID = "invalid"

@dataclass
class Preview:
    kind: str
    value: Optional[float] = None
    reason: str = ""

@dataclass
class Commit:
    kind: str
    text: str
    value: Optional[float] = None
    formatted: str = ""
    reason: str = ""
    error: Optional[str] = None

def preview(text: str) -> Preview:
    """Live preview of a possibly unfinished expression.

    A syntax error here usually means the user is mid-expression (an
    open paren, a dangling unary minus), so it yields an empty preview
    instead of an error label.
    """
    try:
        v = evaluate(text)
    except InvalidExpression:
        return Preview(EMPTY)
    except CalcError as e:
        return Preview(INVALID, reason=e.preview_message)
    return Preview(VALUE, value=v)

def commit(text: str) -> Commit:
    try:
        v = evaluate(text)
    except CalcError as e:
        log.debug("commit of %r failed: %s (%s)", text, e.kind, e)
        return Commit(INVALID, ERROR_TEXT, reason=e.commit_message, error=e.kind)
    out = format_number(v)
    return Commit(VALUE, out, value=v, formatted=out)
