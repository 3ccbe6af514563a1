"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


@dataclass(frozen=True)
class PhraseConfig:
    """Word-count policy for phrase candidates."""

    min_words: int = 5
    max_words: int | None = None  # None = unbounded
    min_relative_words: float = 0.0
    max_relative_words: float = 1.0

    def __post_init__(self) -> None:
        _require(self.min_words >= 0, f"min_words must be >= 0, got {self.min_words}")
        if self.max_words is not None:
            _require(
                self.max_words >= self.min_words,
                f"max_words ({self.max_words}) must be >= min_words ({self.min_words})",
            )
        for name in ("min_relative_words", "max_relative_words"):
            value = getattr(self, name)
            _require(0.0 <= value <= 1.0, f"{name} must be within [0, 1], got {value}")
        _require(
            self.min_relative_words <= self.max_relative_words,
            "min_relative_words must not exceed max_relative_words",
        )


@dataclass(frozen=True)
class JudgeConfig:
    meaningfulness_threshold: float = 0.75
    suggestion_threshold: float = 0.1
    considerable_search_results_count: int = 5
    timeout: float = 120.0
    concurrency: int = 1

    def __post_init__(self) -> None:
        _require(
            self.meaningfulness_threshold >= 0,
            f"meaningfulness_threshold must be >= 0, got {self.meaningfulness_threshold}",
        )
        _require(
            0 <= self.suggestion_threshold <= self.meaningfulness_threshold,
            "suggestion_threshold must be within [0, meaningfulness_threshold]",
        )
        _require(
            1 <= self.considerable_search_results_count <= 20,
            "considerable_search_results_count must be within [1, 20]",
        )
        _require(self.timeout > 0, f"timeout must be > 0, got {self.timeout}")
        _require(
            1 <= self.concurrency <= 16,
            f"concurrency must be within [1, 16], got {self.concurrency}",
        )


@dataclass(frozen=True)
class SearchConfig:
    search_depth: str = "basic"
    timeout: float = 30.0

    def __post_init__(self) -> None:
        _require(
            self.search_depth in ("basic", "advanced"),
            f"search_depth must be 'basic' or 'advanced', got {self.search_depth!r}",
        )
        _require(self.timeout > 0, f"timeout must be > 0, got {self.timeout}")


@dataclass(frozen=True)
class FetchConfig:
    timeout: float = 15.0
    max_sentences: int = 200
    user_agent: str = "Mozilla/5.0 (compatible; translation-verifier/0.1)"

    def __post_init__(self) -> None:
        _require(self.timeout > 0, f"timeout must be > 0, got {self.timeout}")
        _require(self.max_sentences >= 1, f"max_sentences must be >= 1, got {self.max_sentences}")


@dataclass(frozen=True)
class TranslationConfig:
    providers: tuple[str, ...] = ("yandex", "microsoft")
    source_language: str | None = None  # None = auto-detect
    target_language: str = "en"
    timeout: float = 30.0
    claude_model: str = "claude-haiku-4-5-20251001"

    def __post_init__(self) -> None:
        # YAML gives lists; keep the frozen config hashable
        object.__setattr__(self, "providers", tuple(self.providers))
        _require(len(self.providers) > 0, "providers must name at least one provider")
        _require(self.timeout > 0, f"timeout must be > 0, got {self.timeout}")


@dataclass(frozen=True)
class ReportConfig:
    stylesheet: str = "translation.xsl"
    output_dir: str = "./output"


@dataclass(frozen=True)
class CacheConfig:
    enabled: bool = True
    ttl_days: int = 7
    db_path: str = "~/.translation-verifier/search-cache.db"

    def __post_init__(self) -> None:
        _require(1 <= self.ttl_days <= 365, f"ttl_days must be within [1, 365], got {self.ttl_days}")

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    phrases: PhraseConfig = field(default_factory=PhraseConfig)
    judge: JudgeConfig = field(default_factory=JudgeConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        phrases=PhraseConfig(**raw.get("phrases", {})),
        judge=JudgeConfig(**raw.get("judge", {})),
        search=SearchConfig(**raw.get("search", {})),
        fetch=FetchConfig(**raw.get("fetch", {})),
        translation=TranslationConfig(**raw.get("translation", {})),
        report=ReportConfig(**raw.get("report", {})),
        cache=CacheConfig(**raw.get("cache", {})),
    )
