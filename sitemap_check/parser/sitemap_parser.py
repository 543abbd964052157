# File: sitemap_check/parser/sitemap_parser.py
"""sitemap_check.parser.sitemap_parser: Модуль для парсинга sitemap.xml и sitemap-индексов."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

from sitemap_check.crawler.models import SitemapDocument, SitemapKind
from sitemap_check.exceptions import ParseError
from sitemap_check.logger import get_logger

log = get_logger("parser")

# root tag -> tag of one entry
_ENTRY_TAGS = {
    SitemapKind.INDEX: "sitemap",
    SitemapKind.LEAF: "url",
}


def _extract_locations(root: etree._Element, entry_tag: str) -> List[str]:
    locations: List[str] = []
    for position, entry in enumerate(root.iterfind(f"{{*}}{entry_tag}"), start=1):
        loc = entry.find("{*}loc")
        text = (loc.text or "").strip() if loc is not None else ""
        if not text:
            log.debug("Skipping <%s> #%d without <loc>", entry_tag, position)
            continue
        locations.append(text)
    return locations


def parse_sitemap(xml_content: Union[str, bytes], url: str = "") -> SitemapDocument:
    """Разбирает XML sitemap и классифицирует его как индекс или urlset.

    Args:
        xml_content: содержимое sitemap.xml. Байты разбираются в кодировке
            из XML-декларации (по умолчанию UTF-8), строка считается уже
            декодированной, и её декларация кодировки игнорируется.
        url: адрес документа (для сообщений об ошибках).

    Returns:
        SitemapDocument с адресами из <loc> в порядке документа.

    Raises:
        ParseError: документ пуст, не является корректным XML или
            его корневой элемент не ``sitemapindex`` / ``urlset``.

    Пример:
    ```python
    from sitemap_check.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        document = parse_sitemap(f.read())
    print(document.kind, document.locations)
    ```
    """
    if not xml_content or not xml_content.strip():
        raise ParseError(url, "empty document")

    if isinstance(xml_content, str):
        data, encoding = xml_content.strip().encode("utf-8"), "utf-8"
    else:
        data, encoding = xml_content.strip(), None

    parser = etree.XMLParser(encoding=encoding, recover=False, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, LookupError) as exc:
        raise ParseError(url, str(exc)) from exc

    if root is None:
        raise ParseError(url, "no root element")

    root_name = etree.QName(root).localname
    try:
        kind = SitemapKind(root_name)
    except ValueError:
        raise ParseError(url, f"unexpected root element <{root_name}>") from None

    locations = _extract_locations(root, _ENTRY_TAGS[kind])
    log.info("Parsed %s %s: %d entries", kind.value, url or "<inline>", len(locations))
    return SitemapDocument(kind=kind, locations=tuple(locations))
