import base64
from datetime import timezone

import requests
from retrying import retry

from core.logger import log_event
from models.article import Article


class WordPressError(Exception):
    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


def _is_transient(exc: Exception) -> bool:
    # Only failures where the request never reached the server; a POST is not idempotent
    return isinstance(exc, requests.ConnectionError)


def build_post_payload(article: Article, status: str = "draft") -> dict:
    payload = {
        "title": article.title,
        "slug": article.slug,
        "content": article.body,
        "excerpt": article.seo_description or "",
        "status": status,
    }
    if article.date_published is not None:
        payload["date_gmt"] = article.date_published.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    return payload


class WordPressClient:
    def __init__(self, base_url: str, username: str, app_password: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        # Application passwords are shown with spaces
        app_password = app_password.replace(" ", "")
        token = base64.b64encode(f"{username}:{app_password}".encode()).decode()
        self.headers = {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/json",
        }
        self.timeout = timeout

    @retry(retry_on_exception=_is_transient, stop_max_attempt_number=3,
           wait_exponential_multiplier=500, wait_exponential_max=4000)
    def _post(self, url: str, payload: dict) -> requests.Response:
        return requests.post(url, headers=self.headers, json=payload, timeout=self.timeout)

    def create_post(self, article: Article, status: str = "draft") -> dict:
        url = f"{self.base_url}/wp-json/wp/v2/posts"
        payload = build_post_payload(article, status)
        try:
            response = self._post(url, payload)
        except requests.RequestException as err:
            log_event("ERROR", "WordPress request failed", {"slug": article.slug, "error": str(err)})
            raise WordPressError(f"Failed to create post: {err}") from err

        if response.status_code != 201:
            log_event("ERROR", "WordPress rejected post", {"slug": article.slug, "status": response.status_code})
            raise WordPressError(
                f"Failed to create post: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        return response.json()
