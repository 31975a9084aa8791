import pytest

import config

SAMPLE_ARTICLE = """---
title: Stop Modeling Ranges With Nulls
seoTitle: Modeling ranges with RangeBound
seoDescription: Why a polymorphic boundary beats nullable start and end values.
datePublished: Mon Jan 15 2024 10:00:00 GMT+0000 (Coordinated Universal Time)
cuid: clrf2k9x1000008l5a1b2c3d4
slug: stop-modeling-ranges-with-nulls
ogImage: https://cdn.example.com/range.png
tags: oop, design-patterns, java
---

Ranges are everywhere.

```java
abstract class RangeBound {}
```

![Number line](https://cdn.example.com/line.png)
"""


@pytest.fixture(autouse=True)
def log_file(tmp_path, monkeypatch):
    path = tmp_path / "log.json"
    monkeypatch.setattr(config, "LOG_FILE", str(path))
    return path


@pytest.fixture
def sample_text():
    return SAMPLE_ARTICLE


def make_article_text(slug, title="A title", date="2024-02-01", tags="oop", body="Some prose here.\n"):
    lines = ["---", f"title: {title}", f"slug: {slug}"]
    if date:
        lines.append(f"datePublished: {date}")
    if tags:
        lines.append(f"tags: {tags}")
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture
def article_dir(tmp_path):
    directory = tmp_path / "articles"
    directory.mkdir()
    (directory / "ranges.md").write_text(SAMPLE_ARTICLE, encoding="utf-8")
    (directory / "middleware.md").write_text(
        make_article_text("decorators-as-middleware", title="Decorators as Middleware",
                          date="2024-03-10", tags="oop, middleware"),
        encoding="utf-8",
    )
    return directory
