"""Parse inline Markdown into Notion rich_text runs.

A single left-to-right scan tries, at each position, in priority order:

1. bare URL (``https://``, ``http://`` or ``www.``)
2. link ``[text](url)`` with balanced parentheses in the URL
3. bold ``**text**``
4. italic ``*text*`` / ``_text_``
5. strikethrough ``~~text~~``
6. inline code ```text```

The first pattern that matches consumes its full length.  Otherwise the
character joins a plain-text buffer that is flushed as an unformatted run
whenever a formatted span starts or the input ends.

Bold, italic and strikethrough contents are parsed one level deep by
:func:`parse_nested` (links and inline code only), then every resulting run
has the wrapper's annotation OR-merged in.  Emphasis inside emphasis is not
recognised: the outer match wins and inner delimiters stay literal.
"""

from __future__ import annotations

import re

from notion_importer.models import RichText

_URL_RE = re.compile(r"https?://[^\s<>)\]]+|www\.[^\s<>)\]]+")
_LINK_TEXT_RE = re.compile(r"\[([^\]]+)\]\(")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_STAR_RE = re.compile(r"\*([^*]+)\*")
_ITALIC_UNDERSCORE_RE = re.compile(r"_([^_]+)_")
_STRIKE_RE = re.compile(r"~~([^~]+)~~")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_TAIL_RE = re.compile(r"\S*?\)")


def _empty() -> list[RichText]:
    # Notion rejects empty rich_text arrays.
    return [RichText("")]


# ---------------------------------------------------------------------------
# Link helpers
# ---------------------------------------------------------------------------

def is_inside_markdown_link(text: str, pos: int) -> bool:
    """Return whether *pos* sits inside an unfinished ``[...](...)`` link.

    Scans backward for a ``[`` not closed by a ``]``, then forward for a
    whitespace-free run ending in ``)``.
    """
    for i in range(pos - 1, -1, -1):
        if text[i] == "]":
            return False
        if text[i] == "[":
            return _LINK_TAIL_RE.match(text, pos) is not None
    return False


def extract_balanced_url(rest: str) -> str | None:
    """Return the URL at the start of *rest*, the text after ``](``.

    Parentheses are counted so that ``a.com/(y)z)`` yields ``a.com/(y)z``.
    Returns ``None`` for an empty URL or when the closing parenthesis is
    missing.
    """
    depth = 1
    for i, ch in enumerate(rest):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return rest[:i] or None
    return None


def _match_link(text: str, i: int) -> tuple[RichText, int] | None:
    """Match ``[text](url)`` at *i*; return the run and the end offset."""
    m = _LINK_TEXT_RE.match(text, i)
    if m is None:
        return None
    url = extract_balanced_url(text[m.end():])
    if url is None:
        return None
    return RichText(m.group(1), link=url), m.end() + len(url) + 1


def _match_code(text: str, i: int) -> tuple[RichText, int] | None:
    if text[i] != "`" or text.startswith("``", i):
        return None
    m = _CODE_RE.match(text, i)
    if m is None:
        return None
    run = RichText(m.group(1)).with_annotations(code=True)
    return run, m.end()


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_nested(text: str) -> list[RichText]:
    """Parse the inside of an emphasis span: links and inline code only."""
    if not text:
        return _empty()

    runs: list[RichText] = []
    buf: list[str] = []
    i = 0

    def flush() -> None:
        if buf:
            runs.append(RichText("".join(buf)))
            buf.clear()

    while i < len(text):
        matched = None
        if text[i] == "[":
            matched = _match_link(text, i)
        if matched is None:
            matched = _match_code(text, i)
        if matched is not None:
            flush()
            run, i = matched
            runs.append(run)
            continue

        buf.append(text[i])
        i += 1

    flush()
    return runs or _empty()


def _match_emphasis(text: str, i: int) -> tuple[list[RichText], int] | None:
    """Match bold, italic or strikethrough at *i*."""
    ch = text[i]
    nxt = text[i + 1] if i + 1 < len(text) else ""

    if ch == "*" and nxt == "*":
        m, flag = _BOLD_RE.match(text, i), "bold"
    elif ch == "*":
        m, flag = _ITALIC_STAR_RE.match(text, i), "italic"
    elif ch == "_" and nxt != "_":
        m, flag = _ITALIC_UNDERSCORE_RE.match(text, i), "italic"
    elif ch == "~" and nxt == "~":
        m, flag = _STRIKE_RE.match(text, i), "strikethrough"
    else:
        return None

    if m is None:
        return None
    inner = [run.with_annotations(**{flag: True}) for run in parse_nested(m.group(1))]
    return inner, m.end()


def parse_inline(text: str | None) -> list[RichText]:
    """Convert one line (or merged multi-line fragment) into rich text runs.

    Never fails and never returns an empty list: empty input yields a
    single run with empty content.

    >>> [r.content for r in parse_inline("a **b** c")]
    ['a ', 'b', ' c']
    """
    if not text:
        return _empty()

    runs: list[RichText] = []
    buf: list[str] = []
    i = 0

    def flush() -> None:
        if buf:
            runs.append(RichText("".join(buf)))
            buf.clear()

    while i < len(text):
        url = _URL_RE.match(text, i)
        if url is not None and not is_inside_markdown_link(text, i):
            flush()
            visible = url.group(0)
            target = f"https://{visible}" if visible.startswith("www.") else visible
            runs.append(RichText(visible, link=target))
            i = url.end()
            continue

        if text[i] == "[":
            link = _match_link(text, i)
            if link is not None:
                flush()
                run, i = link
                runs.append(run)
                continue

        emphasis = _match_emphasis(text, i)
        if emphasis is not None:
            flush()
            inner, i = emphasis
            runs.extend(inner)
            continue

        code = _match_code(text, i)
        if code is not None:
            flush()
            run, i = code
            runs.append(run)
            continue

        buf.append(text[i])
        i += 1

    flush()
    return runs or _empty()


def plain_text(runs: list[RichText] | tuple[RichText, ...]) -> str:
    """Concatenate the visible content of *runs*."""
    return "".join(run.content for run in runs)
