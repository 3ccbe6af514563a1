"""Serialize a TranslationReport into the XML document consumed by translation.xsl."""

from __future__ import annotations

import re
from pathlib import Path

from lxml import etree

from translation_verifier.models.report import PhraseJudgment, SentenceReport, TranslationReport

DEFAULT_STYLESHEET = "translation.xsl"

# Characters lxml refuses in text nodes and attributes
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _clean(value: str) -> str:
    return _XML_INVALID.sub("", value)


def _set(element: etree._Element, name: str, value: str) -> None:
    element.set(name, _clean(value))


def _text_element(parent: etree._Element, tag: str, text: str) -> etree._Element:
    element = etree.SubElement(parent, tag)
    element.text = _clean(text)
    return element


def _phrase_element(parent: etree._Element, judgment: PhraseJudgment) -> None:
    phrase = etree.SubElement(parent, "phrase")
    _set(phrase, "meaningful", "1" if judgment.meaningful else "0")
    if judgment.error:
        _set(phrase, "error", judgment.error)
    _text_element(phrase, "translated-phrase", judgment.phrase)
    _text_element(phrase, "phrase-penn-string", judgment.penn)
    for suggestion in judgment.suggestions:
        element = _text_element(phrase, "suggestion", suggestion.text)
        _set(element, "relative-score", repr(suggestion.relative_score))


def _sentence_element(parent: etree._Element, sentence: SentenceReport) -> None:
    element = etree.SubElement(parent, "sentence")
    if sentence.error:
        _set(element, "error", sentence.error)
    _text_element(element, "translated-sentence", sentence.text)
    _text_element(element, "sentence-penn-string", sentence.penn)
    for judgment in sentence.phrases:
        _phrase_element(element, judgment)


def build_document(
    report: TranslationReport, stylesheet: str | None = DEFAULT_STYLESHEET
) -> etree._ElementTree:
    root = etree.Element("text-translation")
    if stylesheet:
        root.addprevious(
            etree.ProcessingInstruction("xml-stylesheet", f'type="text/xsl" href="{stylesheet}"')
        )
    _text_element(root, "original-text", report.original_text)

    for translation in report.translations:
        element = etree.SubElement(root, "translation")
        _set(element, "engine", translation.engine)
        if translation.error:
            _set(element, "error", translation.error)
        _text_element(element, "translated-text", translation.translated_text)
        for sentence in translation.sentences:
            _sentence_element(element, sentence)
    return etree.ElementTree(root)


def report_to_xml(report: TranslationReport, stylesheet: str | None = DEFAULT_STYLESHEET) -> bytes:
    return etree.tostring(
        build_document(report, stylesheet),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )


def write_report(
    report: TranslationReport,
    path: str | Path,
    stylesheet: str | None = DEFAULT_STYLESHEET,
) -> Path:
    """Write the report XML to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(report_to_xml(report, stylesheet))
    return path
