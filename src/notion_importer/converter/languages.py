"""Code fence language normalization.

Notion code blocks accept a fixed set of language identifiers.  A fence's
info string is lower-cased, passed through a small alias table, and then
checked against that set; anything unrecognised becomes ``"plain text"``.
"""

from __future__ import annotations

from types import MappingProxyType

PLAIN_TEXT = "plain text"

NOTION_LANGUAGES: frozenset[str] = frozenset({
    "abap", "arduino", "bash", "basic", "c", "clojure", "coffeescript",
    "c++", "c#", "css", "dart", "diff", "docker", "elixir", "elm",
    "erlang", "flow", "fortran", "f#", "gherkin", "glsl", "go", "graphql",
    "groovy", "haskell", "html", "java", "javascript", "json", "julia",
    "kotlin", "latex", "less", "lisp", "livescript", "lua", "makefile",
    "markdown", "markup", "matlab", "mermaid", "nix", "objective-c",
    "ocaml", "pascal", "perl", "php", "plain text", "powershell",
    "prolog", "protobuf", "python", "r", "reason", "ruby", "rust",
    "sass", "scala", "scheme", "scss", "shell", "sql", "swift",
    "typescript", "vb.net", "verilog", "vhdl", "visual basic",
    "webassembly", "xml", "yaml",
})

# Applied before the NOTION_LANGUAGES check.  "bash" is a valid Notion
# identifier but is deliberately folded into "shell".
LANGUAGE_ALIASES: MappingProxyType[str, str] = MappingProxyType({
    "text": PLAIN_TEXT,
    "txt": PLAIN_TEXT,
    "plaintext": PLAIN_TEXT,
    "sh": "shell",
    "bash": "shell",
    "zsh": "shell",
    "console": "shell",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "yml": "yaml",
    "py": "python",
    "rb": "ruby",
    "rs": "rust",
    "md": "markdown",
    "dockerfile": "docker",
    "htm": "html",
    "cpp": "c++",
    "cs": "c#",
    "csharp": "c#",
    "golang": "go",
    "kt": "kotlin",
    "make": "makefile",
    "tex": "latex",
    "jsonc": "json",
    "ps1": "powershell",
})


def normalize_language(tag: str | None) -> str:
    """Map a code fence info string to a Notion-accepted language name.

    Only the first whitespace-delimited token of *tag* is considered, so
    ``"python title=demo.py"`` maps to ``"python"``.

    >>> normalize_language("JS")
    'javascript'
    >>> normalize_language("brainfuck")
    'plain text'
    """
    if not tag or not tag.strip():
        return PLAIN_TEXT
    lang = tag.strip().split()[0].lower()
    lang = LANGUAGE_ALIASES.get(lang, lang)
    return lang if lang in NOTION_LANGUAGES else PLAIN_TEXT
