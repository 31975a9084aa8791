from utils.text_cleaner import (
    extract_code_blocks,
    extract_images,
    find_unclosed_fence,
    strip_code_blocks,
    word_count,
)

BODY = """Intro paragraph with `inline` code.

```python
def handler(request):
    return request
```

![Chain diagram](https://example.com/chain.png "chain")

```
plain block
```
"""


def test_extract_code_blocks():
    blocks = extract_code_blocks(BODY)
    assert blocks == [
        ("python", "def handler(request):\n    return request", 3),
        ("", "plain block", 10),
    ]


def test_images_inside_code_are_ignored():
    body = "```md\n![not real](x.png)\n```\n![](https://example.com/a.png)\n"
    assert extract_images(body) == [("", "https://example.com/a.png", 4)]


def test_extract_images_with_title():
    assert extract_images(BODY) == [("Chain diagram", "https://example.com/chain.png", 8)]


def test_find_unclosed_fence():
    assert find_unclosed_fence(BODY) is None
    assert find_unclosed_fence("text\n\n```js\nconst a = 1;\n") == 3


def test_longer_fence_can_hold_shorter_one():
    body = "````md\n```js\nx\n```\n````\n"
    assert find_unclosed_fence(body) is None
    assert extract_code_blocks(body) == [("md", "```js\nx\n```", 1)]


def test_strip_code_blocks():
    stripped = strip_code_blocks(BODY)
    assert "def handler" not in stripped
    assert "Intro paragraph" in stripped


def test_word_count_skips_code_and_images():
    assert word_count(BODY) == 4
    assert word_count("See [the docs](https://example.com/docs) now.") == 4
