# Expression buffer: the text being typed and the rules for extending it

import logging

log = logging.getLogger(__name__)

MAX_LEN = 200
DIGITS = '0123456789'
OPERATORS = '+-*/%'
BOUNDARIES = '+-*/()'
SENTINELS = ('Error', 'Infinity', 'NaN')

def last_number(text):
    """Return the numeric token at the end of ``text``.

    Scans backwards to the nearest operator or parenthesis, so "12+3.4"
    gives "3.4" and "12+" gives "".
    """
    i = len(text)
    while i > 0 and text[i - 1] not in BOUNDARIES:
        i -= 1
    return text[i:]

def _trailing_operators(text):
    i = len(text)
    while i > 0 and text[i - 1] in OPERATORS:
        i -= 1
    return len(text) - i

class ExpressionBuffer:
    """Holds the expression text and accepts one token at a time.

    Tokens that would make the text malformed are dropped without
    raising; the text is only ever checked for meaning by the evaluator.
    """

    def __init__(self, text=""):
        self.text = text

    def current_text(self):
        return self.text

    def load(self, text):
        self.text = text

    def clear(self):
        self.text = ""

    def delete(self):
        if self.text:
            self.text = self.text[:-1]

    def push(self, token):
        if self.text in SENTINELS:
            self.text = ""
        if len(self.text) >= MAX_LEN:
            return self._reject(token, "length limit")

        if token == '.':
            num = last_number(self.text)
            if '.' in num:
                return self._reject(token, "number already has a decimal point")
            return self._append('0.' if num == '' else '.', token)
        elif token == '(':
            if self.text == '' or self.text[-1] in '+-*/(':
                return self._append('(', token)
            return self._append('*(', token)
        elif token == ')':
            opened = self.text.count('(')
            closed = self.text.count(')')
            if opened > closed and self.text[-1] in DIGITS + ')':
                return self._append(')', token)
            return self._reject(token, "unbalanced close paren")
        elif len(token) == 1 and token in OPERATORS:
            return self._push_operator(token)
        elif len(token) == 1 and token in DIGITS:
            return self._append(token, token)
        return self._reject(token, "unknown token")

    def _push_operator(self, op):
        if self.text == '':
            if op == '-':
                self.text = '-'
                return True
            return self._reject(op, "operator on empty expression")
        run = _trailing_operators(self.text)
        if run and not (op == '-' and self.text[-1] != '-'):
            self.text = self.text[:-run] + op
            return True
        return self._append(op, op)

    def _append(self, s, token):
        if len(self.text) + len(s) > MAX_LEN:
            return self._reject(token, "length limit")
        self.text += s
        return True

    def _reject(self, token, why):
        log.debug("rejected %r after %r: %s", token, self.text, why)
        return False

    def __len__(self):
        return len(self.text)

    def __str__(self):
        return self.text
