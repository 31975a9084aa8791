"""
Well-formedness checks for article drafts.

Each rule is a plain function taking ``(article, fields, config)`` and yielding
``(rule, severity, message, line)`` tuples. ``fields`` is the raw front-matter
mapping the article was parsed from. Rules that need the whole collection
(duplicate slugs) run in :func:`lint_collection`.
"""
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from core.front_matter import (
    KNOWN_KEYS,
    FrontMatterError,
    article_from_fields,
    render_front_matter,
    split_document,
    split_front_matter,
    validate_front_matter,
)
from models.article import Article
from models.lint import LintIssue, LintReport, Severity
from utils.text_cleaner import find_unclosed_fence

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
CUID_RE = re.compile(r"^[a-z0-9]+$")
URL_RE = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)

ERROR = Severity.ERROR
WARNING = Severity.WARNING


@dataclass
class LintConfig:
    max_seo_title_length: int = 60
    max_seo_description_length: int = 160
    disabled_rules: List[str] = field(default_factory=list)
    required_fields: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "LintConfig":
        data = data or {}
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown lint config keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def check_title(article, fields, config):
    if not article.title.strip():
        yield "title-required", ERROR, "front-matter has no title", None


def check_slug(article, fields, config):
    if not article.slug:
        yield "slug-format", ERROR, "front-matter has no slug", None
    elif not SLUG_RE.match(article.slug):
        yield "slug-format", ERROR, f"slug {article.slug!r} is not lowercase words joined by hyphens", None


def check_required_fields(article, fields, config):
    for key in config.required_fields:
        if not fields.get(key):
            yield "missing-field", ERROR, f"required front-matter key {key!r} is missing", None


def check_seo_lengths(article, fields, config):
    if article.seo_title and len(article.seo_title) > config.max_seo_title_length:
        yield ("seo-title-length", WARNING,
               f"seoTitle is {len(article.seo_title)} characters (max {config.max_seo_title_length})", None)
    if article.seo_description and len(article.seo_description) > config.max_seo_description_length:
        yield ("seo-description-length", WARNING,
               f"seoDescription is {len(article.seo_description)} characters "
               f"(max {config.max_seo_description_length})", None)


def check_og_image(article, fields, config):
    if article.og_image and not URL_RE.match(article.og_image):
        yield "og-image-url", ERROR, f"ogImage {article.og_image!r} is not an http(s) URL", None


def check_tags(article, fields, config):
    for tag in article.tags:
        if not SLUG_RE.match(tag):
            yield "tag-format", WARNING, f"tag {tag!r} is not lowercase words joined by hyphens", None
    for tag, count in Counter(article.tags).items():
        if count > 1:
            yield "tag-duplicate", WARNING, f"tag {tag!r} is listed {count} times", None


def check_cuid(article, fields, config):
    if article.cuid and not CUID_RE.match(article.cuid):
        yield "cuid-format", WARNING, f"cuid {article.cuid!r} is not lowercase alphanumeric", None


def check_unknown_keys(article, fields, config):
    for key in fields:
        if key not in KNOWN_KEYS and key not in config.required_fields:
            yield "unknown-key", WARNING, f"unknown front-matter key {key!r}", None


def check_schema(article, fields, config):
    for message in validate_front_matter(fields):
        yield "schema", ERROR, message, None


def check_body(article, fields, config):
    if not article.body.strip():
        yield "body-empty", WARNING, "article body is empty", None
        return

    unclosed = find_unclosed_fence(article.body)
    if unclosed is not None:
        yield "code-fence-unclosed", ERROR, "code fence is never closed", unclosed

    for block in article.code_blocks:
        if not block.language:
            yield "code-fence-language", WARNING, "code block has no language tag", block.line

    for image in article.images:
        if not image.alt:
            yield "image-alt", WARNING, f"image {image.url} has no alt text", image.line


RULES = [
    check_title,
    check_slug,
    check_required_fields,
    check_seo_lengths,
    check_og_image,
    check_tags,
    check_cuid,
    check_unknown_keys,
    check_schema,
    check_body,
]


def _run_rules(article: Article, fields: Dict[str, str], path: str, config: LintConfig,
               body_offset: int = 0) -> List[LintIssue]:
    issues = []
    for rule in RULES:
        for rule_id, severity, message, line in rule(article, fields, config):
            if rule_id in config.disabled_rules:
                continue
            if line is not None:
                line += body_offset
            issues.append(LintIssue(path, rule_id, severity, message, line))
    return issues


def lint_article(article: Article, config: Optional[LintConfig] = None) -> LintReport:
    """Lint an already-parsed article; body line numbers are relative to the body."""
    config = config or LintConfig()
    fields, _ = split_front_matter(render_front_matter(article))
    path = str(article.source_path) if article.source_path else article.slug or "<article>"
    return LintReport(_run_rules(article, fields, path, config))


def lint_text(text: str, path: str = "<text>", config: Optional[LintConfig] = None) -> LintReport:
    config = config or LintConfig()
    report = LintReport()
    try:
        fields, body, body_offset = split_document(text)
        article = article_from_fields(fields, body, Path(path))
    except FrontMatterError as err:
        if "front-matter" not in config.disabled_rules:
            report.extend([LintIssue(path, "front-matter", ERROR, str(err), err.line)])
        return report

    report.extend(_run_rules(article, fields, path, config, body_offset))
    return report


def _read_text(path: Path, config: LintConfig, report: LintReport) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        if "front-matter" not in config.disabled_rules:
            report.extend([LintIssue(str(path), "front-matter", ERROR, f"file is not valid UTF-8: {err}")])
        return None


def lint_file(path, config: Optional[LintConfig] = None) -> LintReport:
    path = Path(path)
    config = config or LintConfig()
    report = LintReport()
    text = _read_text(path, config, report)
    if text is not None:
        report.extend(lint_text(text, str(path), config).issues)
    return report


def lint_collection(paths: Iterable, config: Optional[LintConfig] = None) -> LintReport:
    config = config or LintConfig()
    report = LintReport()
    slugs = defaultdict(list)

    for path in paths:
        path = Path(path)
        text = _read_text(path, config, report)
        if text is None:
            continue
        report.extend(lint_text(text, str(path), config).issues)
        try:
            fields, _ = split_front_matter(text)
        except FrontMatterError:
            continue
        if fields.get("slug"):
            slugs[fields["slug"]].append(str(path))

    if "slug-duplicate" not in config.disabled_rules:
        for slug, owners in slugs.items():
            for owner in owners[1:]:
                report.extend([LintIssue(
                    owner, "slug-duplicate", ERROR,
                    f"slug {slug!r} is already used by {owners[0]}",
                )])
    return report
