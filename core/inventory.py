from pathlib import Path
from typing import Iterable

import pandas as pd

from models.article import Article

COLUMNS = [
    "slug",
    "title",
    "date_published",
    "tags",
    "word_count",
    "code_blocks",
    "images",
    "code_languages",
    "path",
]


def build_inventory(articles: Iterable[Article]) -> pd.DataFrame:
    """
    One row per article, ordered by publish date with undated drafts last.
    """
    rows = []
    for article in articles:
        blocks = article.code_blocks
        rows.append({
            "slug": article.slug,
            "title": article.title,
            "date_published": article.date_published,
            "tags": ", ".join(article.tags),
            "word_count": article.word_count,
            "code_blocks": len(blocks),
            "images": len(article.images),
            "code_languages": ", ".join(sorted({b.language for b in blocks if b.language})),
            "path": str(article.source_path) if article.source_path else "",
        })

    df = pd.DataFrame(rows, columns=COLUMNS)
    df["date_published"] = pd.to_datetime(df["date_published"], utc=True)
    df = df.sort_values(["date_published", "slug"], na_position="last", kind="mergesort")
    return df.reset_index(drop=True)


def tag_counts(df: pd.DataFrame) -> pd.Series:
    tags = df["tags"].fillna("").str.split(",").explode().str.strip()
    tags = tags[tags != ""]
    counts = tags.value_counts()
    counts.index.name = "tag"
    counts.name = "articles"
    return counts


def export_inventory(df: pd.DataFrame, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
