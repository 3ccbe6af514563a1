"""Evidence gathering: candidate corroborating sentences for one search hit."""

from __future__ import annotations

import logging
from typing import Protocol

from translation_verifier.errors import PageFetchError
from translation_verifier.models.search import SearchHit, Segmentation
from translation_verifier.utils.text import clean_markup

logger = logging.getLogger(__name__)


class Segmenter(Protocol):
    async def expand(self, hit: SearchHit) -> Segmentation: ...


class EvidenceGatherer:
    """Collect the sentences a search hit contributes as evidence."""

    def __init__(self, segmenter: Segmenter):
        self.segmenter = segmenter

    async def sentences_for(self, hit: SearchHit) -> list[str]:
        """Page sentences followed by the cleaned title and abstract.

        A hit whose page cannot be segmented contributes nothing, not even
        its title and abstract.
        """
        try:
            segmentation = await self.segmenter.expand(hit)
        except PageFetchError as exc:
            logger.warning("Skipping search result %s: %s", hit.url, exc)
            return []
        except Exception:
            logger.exception("Segmenting %s failed", hit.url)
            return []

        if not segmentation.supported:
            logger.info("Skipping search result %s: %s", hit.url, segmentation.unsupported)
            return []

        sentences = list(segmentation.sentences)
        sentences.append(clean_markup(hit.title))
        sentences.append(clean_markup(hit.abstract_text))
        return sentences
