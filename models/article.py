# models/article.py
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from utils.text_cleaner import extract_code_blocks, extract_images, word_count


@dataclass
class CodeBlock:
    language: str
    code: str
    line: int


@dataclass
class ImageEmbed:
    alt: str
    url: str
    line: int


@dataclass
class Article:
    title: str
    slug: str
    body: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    date_published: Optional[datetime] = None
    cuid: Optional[str] = None
    og_image: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, str] = field(default_factory=dict)
    source_path: Optional[Path] = field(default=None, compare=False)

    @property
    def code_blocks(self) -> List[CodeBlock]:
        return [CodeBlock(*block) for block in extract_code_blocks(self.body)]

    @property
    def images(self) -> List[ImageEmbed]:
        return [ImageEmbed(*image) for image in extract_images(self.body)]

    @property
    def word_count(self) -> int:
        return word_count(self.body)
