from pathlib import Path
from typing import List

from core.front_matter import article_from_text, article_to_text
from models.article import Article


def find_article_files(directory) -> List[Path]:
    path = Path(directory)
    if not path.is_dir():
        raise FileNotFoundError(f"Articles directory not found: {directory}")
    return sorted(p for p in path.rglob("*.md") if p.is_file())


def read_article(path) -> Article:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return article_from_text(f.read(), source_path=path)


def save_draft(article: Article, directory="data/drafts") -> Path:
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    name = "".join(c for c in article.slug if c.isalnum() or c in ('-', '_'))
    if not name:
        name = "".join(c for c in article.title if c.isalnum() or c in (' ', '_')).strip()
    file_path = path / f"{name or 'untitled'}.md"
    with file_path.open("w", encoding="utf-8") as f:
        f.write(article_to_text(article))
    return file_path
