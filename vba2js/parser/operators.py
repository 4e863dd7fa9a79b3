"""
Static lookup tables for VBA → JavaScript translation.

The operator table is ordered: the first entry whose pattern fully matches a
token wins. Keyword operators are word-bounded so they never match inside an
identifier.
"""

import re

# Marker line appended after the last source line
END_OF_INPUT = "(EOF)"

# Source → target operator substitutions (order matters)
OPERATOR_FIXES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<>"), " !== "),
    (re.compile(r"<="), " <= "),
    (re.compile(r">="), " >= "),
    (re.compile(r"="), " === "),
    (re.compile(r"<<"), " << "),
    (re.compile(r">>"), " >> "),
    (re.compile(r"<"), " < "),
    (re.compile(r">"), " > "),
    (re.compile(r"&"), " + "),
    (re.compile(r"\+"), " + "),
    (re.compile(r"-"), " - "),
    (re.compile(r"\*"), " * "),
    (re.compile(r"/"), " / "),
    (re.compile(r"\\"), " / "),
    (re.compile(r"\^"), " /* BUG: ^ */ "),
    (re.compile(r"\bXor\b"), " ^ "),
    (re.compile(r"\bAndAlso\b"), " && "),
    (re.compile(r"\bAnd\b"), " && "),
    (re.compile(r"\bOrElse\b"), " || "),
    (re.compile(r"\bOr\b"), " || "),
    (re.compile(r"\bIsNot\b"), " !== "),
    (re.compile(r"\bIs\b"), " === "),
    (re.compile(r"\bMod\b"), " % "),
    (re.compile(r"\bNew\b"), "new "),
    (re.compile(r"\bNot\b"), "!"),
]

# Bare keyword values with a direct target spelling
LITERALS: dict[str, str] = {
    "True": "true",
    "False": "false",
    "Nothing": "null",
    "Null": "null",
    "Empty": '""',
}

LOGICAL_OPS = frozenset({"And", "AndAlso", "Or", "OrElse", "Xor"})

RELATIONAL_OPS = frozenset({"<", ">", "=", "<=", ">=", "<>", "Is", "IsNot", "Like"})

ARITHMETIC_OPS = frozenset({"+", "-", "*", "/", "\\", "Mod", "&", ">>", "<<"})

# Canonical casing for keywords (source language is case-insensitive)
KEYWORDS: dict[str, str] = {
    "and": "And",
    "andalso": "AndAlso",
    "array": "Array",
    "as": "As",
    "byref": "ByRef",
    "byval": "ByVal",
    "call": "Call",
    "case": "Case",
    "const": "Const",
    "dim": "Dim",
    "do": "Do",
    "double": "Double",
    "downto": "Downto",
    "each": "Each",
    "else": "Else",
    "elseif": "ElseIf",
    "empty": "Empty",
    "end": "End",
    "end function": "End Function",
    "end if": "End If",
    "end select": "End Select",
    "end sub": "End Sub",
    "end type": "End Type",
    "end while": "End While",
    "end with": "End With",
    "error": "Error",
    "exit": "Exit",
    "false": "False",
    "for": "For",
    "function": "Function",
    "global": "Global",
    "goto": "GoTo",
    "if": "If",
    "in": "In",
    "integer": "Integer",
    "is": "Is",
    "isnot": "IsNot",
    "like": "Like",
    "loop": "Loop",
    "mod": "Mod",
    "new": "New",
    "next": "Next",
    "not": "Not",
    "nothing": "Nothing",
    "null": "Null",
    "on": "On",
    "on error": "On Error",
    "optional": "Optional",
    "or": "Or",
    "orelse": "OrElse",
    "paramarray": "ParamArray",
    "preserve": "Preserve",
    "private": "Private",
    "public": "Public",
    "redim": "ReDim",
    "resume": "Resume",
    "select": "Select",
    "single": "Single",
    "static": "Static",
    "step": "Step",
    "sub": "Sub",
    "then": "Then",
    "to": "To",
    "true": "True",
    "type": "Type",
    "until": "Until",
    "wend": "Wend",
    "while": "While",
    "with": "With",
    "xor": "Xor",
}


def fix_operator(token: str) -> str:
    """Translate a single operator token; other tokens pass through unchanged."""
    for pattern, replacement in OPERATOR_FIXES:
        if pattern.fullmatch(token):
            return replacement
    return token


def canonical_keyword(word: str) -> str:
    """Return the canonical casing of ``word`` if it is a known keyword."""
    return KEYWORDS.get(word.lower(), word)
