import re

GLYPHS = {
    "×": "*",
    "÷": "/",
    "−": "-",
    "π": "pi",
}

_UNARY_MINUS = re.compile(r"(^|\()-", re.ASCII)
_DIGIT_BRACKET = re.compile(r"(\d)\s*\(", re.ASCII)
_DIGIT_LETTER = re.compile(r"(\d)\s*(?=[a-zA-Z])", re.ASCII)
_BRACKET_OPERAND = re.compile(r"\)(?=\d|[a-zA-Z])", re.ASCII)


def normalize(text: str) -> str:
    """Rewrite calculator shorthand into plain infix the tokenizer understands.

    Glyphs go first since they introduce the `pi` identifier the implicit
    multiplication rules look for.
    """
    for glyph, replacement in GLYPHS.items():
        text = text.replace(glyph, replacement)

    # -5 => 0-5, (-5) => (0-5)
    text = _UNARY_MINUS.sub(r"\g<1>0-", text)

    # 2(3) => 2*(3), 3pi => 3*pi, (1)(2) stays, (1)2 => (1)*2
    text = _DIGIT_BRACKET.sub(r"\1*(", text)
    text = _DIGIT_LETTER.sub(r"\1*", text)
    text = _BRACKET_OPERAND.sub(")*", text)
    return text
