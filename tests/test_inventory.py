import pandas as pd

from core.front_matter import article_from_text
from core.inventory import COLUMNS, build_inventory, export_inventory, tag_counts
from tests.conftest import make_article_text


def _articles(sample_text):
    return [
        article_from_text(make_article_text("undated-draft", date=None, tags="oop")),
        article_from_text(make_article_text("decorators-as-middleware", date="2024-03-10", tags="oop, middleware")),
        article_from_text(sample_text),
    ]


def test_build_inventory_orders_by_date_with_undated_last(sample_text):
    df = build_inventory(_articles(sample_text))
    assert list(df.columns) == COLUMNS
    assert list(df["slug"]) == ["stop-modeling-ranges-with-nulls", "decorators-as-middleware", "undated-draft"]
    assert pd.isna(df.loc[2, "date_published"])


def test_inventory_counts_body_content(sample_text):
    row = build_inventory([article_from_text(sample_text)]).iloc[0]
    assert row["word_count"] == 3
    assert row["code_blocks"] == 1
    assert row["images"] == 1
    assert row["code_languages"] == "java"


def test_empty_inventory():
    df = build_inventory([])
    assert df.empty
    assert list(df.columns) == COLUMNS


def test_tag_counts(sample_text):
    counts = tag_counts(build_inventory(_articles(sample_text)))
    assert counts.to_dict() == {"oop": 3, "middleware": 1, "design-patterns": 1, "java": 1}
    assert counts.index.name == "tag"


def test_export_inventory(tmp_path, sample_text):
    path = export_inventory(build_inventory(_articles(sample_text)), tmp_path / "out" / "inventory.csv")
    loaded = pd.read_csv(path)
    assert len(loaded) == 3
    assert loaded.loc[0, "slug"] == "stop-modeling-ranges-with-nulls"
