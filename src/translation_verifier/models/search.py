"""Search hits and page segmentation results."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel


class SearchHit(BaseModel):
    url: str
    title: str
    abstract_text: str = ""


@dataclass(frozen=True)
class Segmentation:
    """Outcome of turning a search hit's page into plain-text sentences.

    Either ``sentences`` (possibly empty) or an ``unsupported`` reason for
    documents the segmenter cannot handle, such as PDFs.
    """

    sentences: tuple[str, ...] = field(default_factory=tuple)
    unsupported: str | None = None

    @classmethod
    def of(cls, sentences) -> Segmentation:
        return cls(sentences=tuple(sentences))

    @classmethod
    def unsupported_format(cls, reason: str) -> Segmentation:
        return cls(unsupported=reason)

    @property
    def supported(self) -> bool:
        return self.unsupported is None
