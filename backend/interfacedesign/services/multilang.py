"""Multilingual text resolution for catalog XML nodes.

Catalog documents tag text with ``xml:lang``::

    <description>
        <text xml:lang="de">Liest eine Datei</text>
        <text xml:lang="en">Reads a file</text>
    </description>

Older documents carry plain untagged text instead. Both shapes resolve to a
``MultilingualText`` dict keyed by language code plus ``_default``.
"""
from typing import Any, Dict, Iterable, Optional, Sequence

from interfacedesign.core.config import settings
from interfacedesign.services.xml_loader import TEXT_KEY

MultilingualText = Dict[str, str]

DEFAULT_KEY = "_default"
LANG_ATTRIBUTES = ("xml:lang", "lang")
UNCATEGORIZED = "Uncategorized"


def _languages(languages: Optional[Sequence[str]]) -> Sequence[str]:
    return tuple(languages) if languages else tuple(settings.SUPPORTED_LANGUAGES)


def _direct_text(node: Any) -> str:
    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        value = node.get(TEXT_KEY, "")
        return value if isinstance(value, str) else ""
    return ""


def _child_language(child: Dict[str, Any]) -> str:
    for attribute in LANG_ATTRIBUTES:
        value = child.get(attribute)
        if isinstance(value, str) and value:
            return value
    return ""


def _cross_fill(result: MultilingualText, languages: Iterable[str]) -> MultilingualText:
    languages = tuple(languages)
    present = [result[lang] for lang in languages if result.get(lang)]
    if present:
        for lang in languages:
            if not result.get(lang):
                result[lang] = present[0]
    if not result.get(DEFAULT_KEY):
        result[DEFAULT_KEY] = present[0] if present else ""
    return result


def resolve(
    node: Any,
    child_tag: str = "text",
    languages: Optional[Sequence[str]] = None,
) -> MultilingualText:
    """Resolve a parsed XML node into a MultilingualText dict.

    Args:
        node: Parsed node (``None``, plain string, or dict).
        child_tag: Name of the language-tagged child element.
        languages: Fallback order; defaults to ``settings.SUPPORTED_LANGUAGES``.

    Returns:
        Dict with ``_default`` always set. When any supported language is
        present, the missing supported languages are filled with the first
        present one.
    """
    languages = _languages(languages)

    if node is None or node == "":
        return {DEFAULT_KEY: ""}

    if isinstance(node, list):
        return resolve(node[0] if node else None, child_tag, languages)

    if isinstance(node, str):
        result = {DEFAULT_KEY: node}
        for lang in languages:
            result[lang] = node
        return result

    if not isinstance(node, dict):
        return resolve(str(node), child_tag, languages)

    children = node.get(child_tag)
    if children is not None and children != "":
        result: MultilingualText = {DEFAULT_KEY: ""}
        untagged = ""
        for child in children if isinstance(children, list) else [children]:
            if isinstance(child, str):
                untagged = untagged or child
                continue
            if not isinstance(child, dict):
                continue
            lang = _child_language(child)
            content = _direct_text(child)
            if lang:
                result[lang] = content
            elif content:
                untagged = untagged or content
        result[DEFAULT_KEY] = untagged
        return _cross_fill(result, languages)

    text = _direct_text(node)
    if not text:
        return {DEFAULT_KEY: ""}
    return resolve(text, child_tag, languages)


def resolve_optional(node: Any, child_tag: str = "text") -> Optional[MultilingualText]:
    """Like :func:`resolve`, but ``None`` when the node is absent."""
    if node is None:
        return None
    return resolve(node, child_tag)


def resolve_category(node: Any) -> MultilingualText:
    """Resolve a category node, defaulting to ``Uncategorized``."""
    category = resolve(node)
    if not category.get(DEFAULT_KEY):
        return resolve(UNCATEGORIZED)
    return category


def text_for_lang(value: Any, lang: Optional[str] = None) -> str:
    """Pick the text for ``lang`` from a MultilingualText or plain string."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    lang = lang or settings.DEFAULT_LANGUAGE
    if value.get(lang):
        return value[lang]
    if value.get(DEFAULT_KEY):
        return value[DEFAULT_KEY]
    for text in value.values():
        if text:
            return text
    return ""


def plain_text(node: Any, child_tag: str = "text") -> str:
    """Single-language value of a node that may still be tagged.

    Used for code examples and identifiers, which are the same in every
    language; the first tagged child wins.
    """
    if not node:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, dict) and child_tag in node:
        children = node[child_tag]
        for child in children if isinstance(children, list) else [children]:
            text = _direct_text(child)
            if text:
                return text
        return ""
    return _direct_text(node)
