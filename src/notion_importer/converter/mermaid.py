"""High-contrast theming for Mermaid diagrams.

Notion renders Mermaid code blocks with the default theme, which is hard to
read in dark mode.  :func:`inject_mermaid_theme` prepends an ``init``
directive with medium-saturation fills and dark text that stay legible on
both light and dark backgrounds, unless the diagram already sets its own.
"""

from __future__ import annotations

import json
import re
from types import MappingProxyType
from typing import Any

MERMAID_THEME: MappingProxyType[str, Any] = MappingProxyType({
    "theme": "base",
    "themeVariables": MappingProxyType({
        "darkMode": False,
        "background": "#ffffff",
        "primaryColor": "#60a5fa",
        "primaryTextColor": "#1e293b",
        "primaryBorderColor": "#2563eb",
        "secondaryColor": "#34d399",
        "secondaryTextColor": "#064e3b",
        "secondaryBorderColor": "#10b981",
        "tertiaryColor": "#fbbf24",
        "tertiaryTextColor": "#78350f",
        "tertiaryBorderColor": "#f59e0b",
        "lineColor": "#6b7280",
        "noteBkgColor": "#fde047",
        "noteTextColor": "#713f12",
        "noteBorderColor": "#eab308",
        "textColor": "#1e293b",
        "nodeBorder": "#2563eb",
        "clusterBkg": "#a5b4fc",
        "clusterBorder": "#6366f1",
        "edgeLabelBackground": "#f1f5f9",
        "actorBkg": "#60a5fa",
        "actorBorder": "#2563eb",
        "actorTextColor": "#1e293b",
        "signalColor": "#6b7280",
        "signalTextColor": "#1e293b",
        "labelColor": "#1e293b",
        "fontFamily": "ui-sans-serif, system-ui, sans-serif",
    }),
})

_INIT_DIRECTIVE_RE = re.compile(r"%%\s*\{.*init.*\}.*%%", re.IGNORECASE | re.DOTALL)


def _theme_json() -> str:
    theme = {
        "theme": MERMAID_THEME["theme"],
        "themeVariables": dict(MERMAID_THEME["themeVariables"]),
    }
    return json.dumps(theme, separators=(",", ":"))


THEME_DIRECTIVE = f"%%{{init: {_theme_json()}}}%%"
"""The directive line inserted into un-themed diagrams."""


def has_init_directive(code: str) -> bool:
    return _INIT_DIRECTIVE_RE.search(code) is not None


def inject_mermaid_theme(code: str) -> str:
    """Insert :data:`THEME_DIRECTIVE` into a Mermaid diagram.

    The directive goes immediately before the first line that is neither
    blank nor a ``%%`` comment (at the top when there is no such line).
    Code that already carries a ``%%{init ...}%%`` directive is returned
    unchanged.
    """
    if has_init_directive(code):
        return code

    lines = code.split("\n")
    insert_at = 0
    for idx, line in enumerate(lines):
        stripped = line.strip()
        if stripped and not stripped.startswith("%%"):
            insert_at = idx
            break

    lines.insert(insert_at, THEME_DIRECTIVE)
    return "\n".join(lines)
