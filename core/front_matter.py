"""
Front-matter handling for Markdown article drafts.

A draft starts with a block of ``key: value`` lines fenced by ``---`` lines,
followed by the Markdown body::

    ---
    title: Modeling ranges without nulls
    slug: modeling-ranges-without-nulls
    datePublished: Mon Jan 15 2024 10:00:00 GMT+0000 (Coordinated Universal Time)
    tags: oop, design-patterns
    ---

Values are plain text; the block is not YAML and nothing is nested.
"""
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import jsonschema

from models.article import Article

DELIMITER = "---"
SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "front_matter.json"

# front-matter key -> Article attribute, in the order they are rendered
FIELD_MAP = {
    "title": "title",
    "seoTitle": "seo_title",
    "seoDescription": "seo_description",
    "datePublished": "date_published",
    "cuid": "cuid",
    "slug": "slug",
    "ogImage": "og_image",
    "tags": "tags",
}
KNOWN_KEYS = tuple(FIELD_MAP)

KEY_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_-]*)\s*:(.*)$")
JS_DATE_RE = re.compile(
    r"^\w{3} (\w{3} \d{1,2} \d{4} \d{2}:\d{2}:\d{2}) GMT([+-]\d{4})(?: \(.*\))?$"
)


class FrontMatterError(ValueError):
    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def split_document(text: str) -> Tuple[Dict[str, str], str, int]:
    """
    Split a draft into its raw front-matter fields, its body, and the number
    of source lines preceding the body.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines()
    if not lines or lines[0].strip() != DELIMITER:
        raise FrontMatterError("document does not start with a '---' front-matter block", line=1)

    fields: Dict[str, str] = {}
    for index in range(1, len(lines)):
        line = lines[index]
        line_no = index + 1
        stripped = line.strip()
        if stripped == DELIMITER:
            start = index + 1
            while start < len(lines) and not lines[start]:
                start += 1
            body = "\n".join(lines[start:])
            if text.endswith(("\n", "\r")) and body:
                body += "\n"
            return fields, body, start
        if not stripped or stripped.startswith("#"):
            continue
        match = KEY_RE.match(stripped)
        if not match:
            raise FrontMatterError(f"expected 'key: value', got {stripped!r}", line=line_no)
        key, value = match.group(1), _unquote(match.group(2).strip())
        if key in fields:
            raise FrontMatterError(f"duplicate front-matter key {key!r}", line=line_no)
        fields[key] = value

    raise FrontMatterError("front-matter block is never closed with '---'", line=len(lines))


def split_front_matter(text: str) -> Tuple[Dict[str, str], str]:
    """
    Split a draft into its raw front-matter fields and its body.
    """
    fields, body, _ = split_document(text)
    return fields, body


def parse_tags(value: str) -> List[str]:
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def parse_date(value: str) -> datetime:
    """
    Parse ISO 8601 dates and the ``Date.toString()`` form blog exports use.
    """
    value = value.strip()
    match = JS_DATE_RE.match(value)
    if match:
        parsed = datetime.strptime(f"{match.group(1)} {match.group(2)}", "%b %d %Y %H:%M:%S %z")
        return parsed.astimezone(timezone.utc)

    iso = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        raise FrontMatterError(f"unrecognised date {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def article_from_fields(fields: Dict[str, str], body: str, source_path: Optional[Path] = None) -> Article:
    date_published = parse_date(fields["datePublished"]) if fields.get("datePublished") else None
    return Article(
        title=fields.get("title", ""),
        slug=fields.get("slug", ""),
        body=body,
        seo_title=fields.get("seoTitle") or None,
        seo_description=fields.get("seoDescription") or None,
        date_published=date_published,
        cuid=fields.get("cuid") or None,
        og_image=fields.get("ogImage") or None,
        tags=parse_tags(fields.get("tags", "")),
        extra={k: v for k, v in fields.items() if k not in FIELD_MAP},
        source_path=source_path,
    )


def article_from_text(text: str, source_path: Optional[Path] = None) -> Article:
    fields, body = split_front_matter(text)
    return article_from_fields(fields, body, source_path)


def _format_value(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


def render_front_matter(article: Article) -> str:
    lines = [DELIMITER]
    for key, attr in FIELD_MAP.items():
        value = getattr(article, attr)
        if value in (None, "", []):
            continue
        lines.append(f"{key}: {_format_value(value)}")
    for key, value in article.extra.items():
        lines.append(f"{key}: {value}")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"


def article_to_text(article: Article) -> str:
    return render_front_matter(article) + "\n" + article.body


def load_schema(schema_path: Path = SCHEMA_PATH) -> dict:
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")
    return json.loads(schema_path.read_text(encoding="utf-8"))


def validate_front_matter(fields: Dict[str, str], schema: Optional[dict] = None) -> List[str]:
    """Return the JSON Schema violations for a raw front-matter mapping."""
    schema = schema or load_schema()
    validator = jsonschema.Draft7Validator(schema, format_checker=jsonschema.FormatChecker())
    messages = []
    for error in sorted(validator.iter_errors(fields), key=lambda e: list(e.path)):
        where = ".".join(str(p) for p in error.path)
        messages.append(f"{where}: {error.message}" if where else error.message)
    return messages
