# Calculator session: buffer + preview/error labels + key handling

import logging

import calc_eval
from calc_buffer import ExpressionBuffer

log = logging.getLogger(__name__)

EVALUATE_KEYS = ('Enter', '=')
DELETE_KEYS = ('Backspace', 'DEL')
CLEAR_KEYS = ('Escape', 'C')

# keypad glyphs -> expression characters
GLYPHS = {'×': '*', '÷': '/', '−': '-'}

INPUT_KEYS = set('0123456789.+-*/%()')

class CalculatorSession:
    """What the display shows: the expression line and the preview line.

    Every mutation goes through the buffer and is followed by refresh(),
    so preview/error always describe the current text.
    """

    def __init__(self):
        self.buffer = ExpressionBuffer()
        self.preview = "0"
        self.error = ""

    @property
    def expr(self):
        return self.buffer.current_text()

    def refresh(self):
        text = self.buffer.current_text()
        if not text:
            self.preview, self.error = "0", ""
            return
        p = calc_eval.preview(text)
        if p.kind == calc_eval.VALUE:
            self.preview, self.error = calc_eval.format_number(p.value), ""
        elif p.kind == calc_eval.INVALID:
            self.preview, self.error = "Error", p.reason
        else:
            self.preview, self.error = "", ""

    def push(self, token):
        accepted = self.buffer.push(token)
        self.refresh()
        return accepted

    def delete(self):
        self.buffer.delete()
        self.refresh()

    def clear_all(self):
        self.buffer.clear()
        self.preview, self.error = "0", ""

    def evaluate(self):
        text = self.buffer.current_text()
        if not text:
            return None
        result = calc_eval.commit(text)
        self.buffer.load(result.text)
        if result.kind == calc_eval.VALUE:
            self.preview, self.error = result.formatted, ""
        else:
            self.preview, self.error = "Error", result.reason
        return result

    def press(self, key):
        """Dispatch one key name; returns False for keys with no binding."""
        key = GLYPHS.get(key, key)
        if key in EVALUATE_KEYS:
            self.evaluate()
        elif key in DELETE_KEYS:
            self.delete()
        elif key in CLEAR_KEYS:
            self.clear_all()
        elif key in INPUT_KEYS:
            self.push(key)
        else:
            log.debug("unbound key %r", key)
            return False
        return True

    def type_keys(self, keys):
        """Feed typed text one character at a time; returns the count handled."""
        handled = 0
        for ch in keys:
            if ch.isspace():
                continue
            if self.press(ch):
                handled += 1
        return handled

    def display(self):
        return (self.expr or "0", self.error if self.error else self.preview)
