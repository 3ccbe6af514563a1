"""Turn a search hit's originating page into plain-text sentences."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from urllib.parse import urlparse

import httpx
import nltk
from bs4 import BeautifulSoup

from translation_verifier.errors import PageFetchError, UnsafeURLError
from translation_verifier.models.search import SearchHit, Segmentation
from translation_verifier.utils.text import normalize_space, snippet_fragments
from translation_verifier.utils.url_validator import ensure_public_url

logger = logging.getLogger(__name__)

UNSUPPORTED_EXTENSIONS = (
    ".pdf", ".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx", ".rtf", ".ps", ".zip",
)
HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")
MAX_REDIRECTS = 5
IGNORED_TAGS = ("script", "style", "noscript", "template", "head", "svg")


def html_to_lines(html: str) -> list[str]:
    """Visible text of an HTML document, one normalized block per line."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(IGNORED_TAGS):
        tag.decompose()
    lines = (normalize_space(line) for line in soup.get_text("\n").splitlines())
    return [line for line in lines if line]


class PageSegmenter:
    """Fetch result pages over HTTP and segment them into sentences."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout: float = 15.0,
        max_sentences: int = 200,
        user_agent: str = "Mozilla/5.0 (compatible; translation-verifier/0.1)",
        sentence_splitter: Callable[[str], list[str]] | None = None,
    ):
        self.client = client
        self.timeout = timeout
        self.max_sentences = max_sentences
        self.user_agent = user_agent
        self.sentence_splitter = sentence_splitter or nltk.sent_tokenize

    async def expand(self, hit: SearchHit) -> Segmentation:
        """Segment the page behind ``hit``.

        Non-HTML documents come back as an unsupported Segmentation; network
        and SSRF failures raise PageFetchError.
        """
        path = urlparse(hit.url).path.lower()
        if path.endswith(UNSUPPORTED_EXTENSIONS):
            return Segmentation.unsupported_format(f"{path.rsplit('.', 1)[-1]} documents are not segmented")

        html = await self._fetch_html(hit.url)
        if html is None:
            return Segmentation.unsupported_format("response is not an HTML document")

        sentences = await asyncio.to_thread(self.segment, html)
        return Segmentation.of(self.select(sentences, hit.abstract_text))

    async def _get_public(self, url: str) -> httpx.Response:
        """GET ``url``, checking every redirect target before following it."""
        for _ in range(MAX_REDIRECTS + 1):
            await asyncio.to_thread(ensure_public_url, url)
            response = await self.client.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                follow_redirects=False,
            )
            if not response.is_redirect:
                return response
            url = str(response.url.join(response.headers["location"]))
            logger.debug("Following redirect to %s", url)
        raise PageFetchError(f"More than {MAX_REDIRECTS} redirects")

    async def _fetch_html(self, url: str) -> str | None:
        try:
            response = await self._get_public(url)
            response.raise_for_status()
        except (UnsafeURLError, ValueError, httpx.HTTPError) as exc:
            raise PageFetchError(f"Cannot fetch {url}: {exc}") from exc

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type and content_type not in HTML_CONTENT_TYPES:
            logger.debug("Skipping %s with content type %s", url, content_type)
            return None
        return response.text

    def segment(self, html: str) -> list[str]:
        return self.split(html_to_lines(html))

    def split(self, lines: list[str]) -> list[str]:
        try:
            return [s.strip() for line in lines for s in self.sentence_splitter(line) if s.strip()]
        except LookupError as exc:
            raise PageFetchError(f"nltk sentence model unavailable: {exc}") from exc

    def select(self, sentences: list[str], snippet: str) -> list[str]:
        """Prefer the page sentences the search snippet was cut from."""
        fragments = snippet_fragments(snippet)
        if fragments:
            matched = []
            for sentence in sentences:
                lowered = sentence.lower()
                if any(f in lowered or lowered in f for f in fragments):
                    matched.append(sentence)
            if matched:
                return matched[: self.max_sentences]
        return sentences[: self.max_sentences]
