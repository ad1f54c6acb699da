"""Line-based formatter for the lightly structured report text.

Not a markdown parser: each line is classified on its own prefix.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass

_HEADING_RE = re.compile(r"^(#{1,6}) ")
_ORDERED_RE = re.compile(r"^\d+\. ")


@dataclass(frozen=True)
class ReportBlock:
    kind: str  # heading | bold | bullet | ordered | break | paragraph
    text: str = ""
    level: int = 0


def format_report(content: str) -> list[ReportBlock]:
    blocks: list[ReportBlock] = []
    for line in content.split("\n"):
        heading = _HEADING_RE.match(line)
        if heading:
            blocks.append(ReportBlock("heading", line[heading.end():], len(heading.group(1))))
        elif line.startswith("**"):
            blocks.append(ReportBlock("bold", line.replace("**", "")))
        elif line.startswith("- "):
            blocks.append(ReportBlock("bullet", line[2:]))
        elif _ORDERED_RE.match(line):
            blocks.append(ReportBlock("ordered", _ORDERED_RE.sub("", line, count=1)))
        elif line.strip() == "":
            blocks.append(ReportBlock("break"))
        else:
            blocks.append(ReportBlock("paragraph", line))
    return blocks


def render_html(blocks: list[ReportBlock]) -> str:
    parts: list[str] = []
    for block in blocks:
        text = html.escape(block.text)
        if block.kind == "heading":
            parts.append(f"<h{block.level}>{text}</h{block.level}>")
        elif block.kind == "bold":
            parts.append(f"<p><strong>{text}</strong></p>")
        elif block.kind == "bullet":
            parts.append(f'<li class="list-disc">{text}</li>')
        elif block.kind == "ordered":
            parts.append(f'<li class="list-decimal">{text}</li>')
        elif block.kind == "break":
            parts.append("<br>")
        else:
            parts.append(f"<p>{text}</p>")
    return "\n".join(parts)
