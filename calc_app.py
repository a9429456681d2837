# Streamlit Calculator
# Keypad + typed keys, live preview, dark/light theme.
#
# Run:
#   streamlit run calc_app.py

import streamlit as st

from calc_session import CalculatorSession

APP_VERSION = 3
DEFAULT_THEME = "dark"
THEMES = ("dark", "light")

# ============================================================
# KEYPAD
# ============================================================

KEYPAD = [
    ["C", "DEL", "%", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "−"],
    ["1", "2", "3", "+"],
    ["(", ")", "0", "."],
]
EQUALS = "="

HINT = "Tip: type keys below (numbers, + - * / % ( ), = to evaluate, C to clear)"

# ============================================================
# THEME
# ============================================================

PALETTES = {
    "dark":  {"bg": "#0e0e0e", "bg2": "#1a1a1a", "fg": "#c8c8c8", "fg-bright": "#ffffff",
              "accent": "#f0a030", "error": "#ff6060", "border": "#333333"},
    "light": {"bg": "#f7f7f7", "bg2": "#e8e8e8", "fg": "#333333", "fg-bright": "#000000",
              "accent": "#c06000", "error": "#c00000", "border": "#cccccc"},
}

CALC_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=IBM+Plex+Mono:wght@400;500;600&display=swap');
:root {{ {vars} }}
.stApp {{ background-color: var(--bg) !important; color: var(--fg) !important; }}
.calc-display {{
    font-family: 'IBM Plex Mono', monospace;
    background-color: var(--bg2);
    border: 1px solid var(--border);
    padding: 12px 16px;
    text-align: right;
    word-break: break-all;
}}
.calc-expr {{ color: var(--fg-bright); font-size: 28px; min-height: 36px; }}
.calc-preview {{ color: var(--fg); font-size: 16px; min-height: 22px; }}
.calc-error {{ color: var(--error); font-size: 16px; min-height: 22px; }}
.stButton button {{
    font-family: 'IBM Plex Mono', monospace;
    background-color: var(--bg2) !important;
    color: var(--fg-bright) !important;
    border: 1px solid var(--border) !important;
    border-radius: 0 !important;
}}
.stButton button:hover {{ border-color: var(--accent) !important; color: var(--accent) !important; }}
</style>
"""

def theme_css(theme):
    palette = PALETTES.get(theme, PALETTES[DEFAULT_THEME])
    vars_ = " ".join("--{}: {};".format(k, v) for k, v in palette.items())
    return CALC_CSS.format(vars=vars_)

def load_theme():
    """Theme preference lives in the URL so a reload keeps it."""
    theme = st.query_params.get("theme", DEFAULT_THEME)
    return theme if theme in THEMES else DEFAULT_THEME

def toggle_theme(theme):
    new = "light" if theme == "dark" else "dark"
    st.query_params["theme"] = new
    return new

def _html_escape(text):
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

# ============================================================
# STREAMLIT UI
# ============================================================

def main():
    st.set_page_config(page_title="Calculator", page_icon="🧮", layout="centered")

    # Version check: force reset on code change
    if st.session_state.get("app_version") != APP_VERSION:
        st.session_state.calc = CalculatorSession()
        st.session_state.app_version = APP_VERSION
    if "calc" not in st.session_state:
        st.session_state.calc = CalculatorSession()

    calc = st.session_state.calc
    theme = load_theme()
    st.markdown(theme_css(theme), unsafe_allow_html=True)

    # ---- Header ----
    head, ctl = st.columns([3, 1])
    head.markdown("### Calculator")
    if ctl.button("🌙 Dark" if theme == "dark" else "☀️ Light", key="theme_btn"):
        toggle_theme(theme)
        st.rerun()

    # ---- Display ----
    expr_line, preview_line = calc.display()
    preview_class = "calc-error" if calc.error else "calc-preview"
    st.markdown(
        '<div class="calc-display"><div class="calc-expr">{}</div>'
        '<div class="{}">{}</div></div>'.format(
            _html_escape(expr_line), preview_class, _html_escape(preview_line)),
        unsafe_allow_html=True,
    )

    # ---- Keypad ----
    pressed = None
    for r, row in enumerate(KEYPAD):
        cols = st.columns(len(row))
        for c, label in enumerate(row):
            if cols[c].button(label, key="key_{}_{}".format(r, c), use_container_width=True):
                pressed = label
    if st.button(EQUALS, key="key_eq", type="primary", use_container_width=True):
        pressed = EQUALS

    st.caption(HINT)

    if pressed is not None:
        calc.press(pressed)
        st.rerun()

    # Typed keys (pinned to bottom)
    typed = st.chat_input("Type keys, e.g. 12*(3+4)=")
    if typed:
        calc.type_keys(typed)
        st.rerun()

if __name__ == "__main__":
    main()
