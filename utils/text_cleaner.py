import re
from typing import List, Optional, Tuple

FENCE_RE = re.compile(r"^ {0,3}(`{3,})\s*([^`\s]*)[^`]*$")
IMAGE_RE = re.compile(r'!\[(?P<alt>[^\]]*)\]\((?P<url>[^)\s]+)(?:\s+"[^"]*")?\s*\)')
WORD_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9'_-]*")


def _scan_fences(text: str):
    """
    Walk the body once and yield (kind, payload) tuples.

    kind is "block" for a closed fence with payload (language, code, line),
    "line" for a prose line with payload (line_no, line), and "unclosed" with
    the line number of a fence that never closes.
    """
    lines = text.splitlines()
    i = 0
    while i < len(lines):
        match = FENCE_RE.match(lines[i])
        if not match:
            yield "line", (i + 1, lines[i])
            i += 1
            continue

        ticks, language = match.group(1), match.group(2)
        start = i
        i += 1
        code_lines = []
        closed = False
        while i < len(lines):
            if lines[i].strip().startswith(ticks) and not lines[i].strip().strip("`"):
                closed = True
                break
            code_lines.append(lines[i])
            i += 1
        if not closed:
            yield "unclosed", start + 1
            return
        yield "block", (language, "\n".join(code_lines), start + 1)
        i += 1


def extract_code_blocks(text: str) -> List[Tuple[str, str, int]]:
    return [payload for kind, payload in _scan_fences(text) if kind == "block"]


def find_unclosed_fence(text: str) -> Optional[int]:
    for kind, payload in _scan_fences(text):
        if kind == "unclosed":
            return payload
    return None


def _prose_lines(text: str):
    for kind, payload in _scan_fences(text):
        if kind == "line":
            yield payload


def extract_images(text: str) -> List[Tuple[str, str, int]]:
    images = []
    for line_no, line in _prose_lines(text):
        for match in IMAGE_RE.finditer(line):
            images.append((match.group("alt").strip(), match.group("url"), line_no))
    return images


def strip_code_blocks(text: str) -> str:
    return "\n".join(line for _, line in _prose_lines(text))


def word_count(text: str) -> int:
    """Count prose words; fenced code and image embeds are not counted."""
    prose = IMAGE_RE.sub(" ", strip_code_blocks(text))
    prose = re.sub(r"`[^`]*`", " ", prose)
    prose = re.sub(r"\]\([^)]*\)", "] ", prose)
    return len(WORD_RE.findall(prose))
