import sys

import config
from core.front_matter import FrontMatterError
from core.inventory import build_inventory, export_inventory, tag_counts
from core.linter import LintConfig, lint_collection
from core.logger import log_event
from core.wordpress_api import WordPressClient, WordPressError
from utils.file_handler import find_article_files, read_article


def publish_drafts(articles, client: WordPressClient) -> int:
    published = 0
    for article in articles:
        try:
            post = client.create_post(article)
        except WordPressError as err:
            log_event("ERROR", f"Publishing failed for {article.slug}: {err}")
            continue
        published += 1
        log_event("SUCCESS", "Draft pushed", {"slug": article.slug, "post_id": post.get("id")})
        print(f"Post Drafted! ID: {post.get('id')} ({article.slug})")
    return published


def run(settings: dict) -> int:
    lint_config = LintConfig.from_dict(settings.get("lint"))
    paths = find_article_files(settings["articles_dir"])
    log_event("INFO", f"Linting {len(paths)} article(s)", {"articles_dir": settings["articles_dir"]})

    report = lint_collection(paths, lint_config)
    for issue in report.issues:
        print(issue)
        log_event(issue.severity.value.upper(), issue.message, {"path": issue.path, "rule": issue.rule})

    failing = {issue.path for issue in report.errors}
    articles = []
    for path in paths:
        if str(path) in failing:
            continue
        try:
            articles.append(read_article(path))
        except (FrontMatterError, UnicodeDecodeError) as err:
            log_event("ERROR", f"{path}: {err}")

    df = build_inventory(articles)
    inventory_path = export_inventory(df, settings["inventory_path"])
    log_event("INFO", "Inventory written", {"path": str(inventory_path), "articles": len(df)})
    if not df.empty:
        print(tag_counts(df).to_string())

    if settings.get("publish"):
        client = WordPressClient(
            config.WORDPRESS_URL,
            config.WORDPRESS_USERNAME,
            config.WORDPRESS_APP_PASSWORD,
        )
        publish_drafts(articles, client)

    print(f"{len(paths)} file(s), {len(report.errors)} error(s), {len(report.warnings)} warning(s)")
    return 0 if report.ok else 1


def main():
    settings = config.load_config(config.DEFAULT_CONFIG_PATH)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
