"""Match extraction from the iqdb search results page."""

from bs4 import BeautifulSoup
from loguru import logger

from iqdb.dom import attribute_of, filter_children, first_child, join_path, text_of
from iqdb.errors import FormatError, StructureError
from iqdb.models import Match, MatchType
from iqdb.utils.numbers import parse_int
from iqdb.utils.urls import normalize_url


def classify_label(label: str) -> MatchType | None:
    """Map a panel heading to a match type, or ``None`` for non-match panels."""
    text = label.lower()
    if "best" in text:
        return MatchType.BEST
    if "possible" in text:
        return MatchType.POSSIBLE
    return None


def parse_similarity(text: str) -> int:
    """Parse the leading percentage of ``"87% similarity"``."""
    percent, sep, _ = text.partition("%")
    if not sep:
        raise FormatError(text, "similarity percentage")
    similarity = parse_int(percent, "similarity percentage")
    if not 0 <= similarity <= 100:
        raise FormatError(text, "similarity percentage")
    return similarity


def parse_matches(document: BeautifulSoup) -> list[Match]:
    """Extract best and possible matches from a results page.

    Every ``div`` directly under ``div#pages`` is a panel. Panels whose
    heading is neither a best nor a possible match (the uploaded image,
    "No relevant matches") are skipped.

    Raises:
        StructureError: a node on the path or inside a match panel is missing.
        FormatError: a similarity cell cannot be parsed.
    """
    html = first_child(document, "html")
    body = first_child(html, "body", path="html")
    pages = first_child(body, "div", [("id", "pages")], path="html > body")
    pages_path = "html > body > div[id=pages]"

    matches: list[Match] = []
    for index, panel in enumerate(filter_children(pages, "div")):
        panel_path = join_path(pages_path, f"div[{index}]")
        table = first_child(panel, "table", path=panel_path)
        tbody_path = join_path(panel_path, "table")
        tbody = first_child(table, "tbody", path=tbody_path)
        rows_path = join_path(tbody_path, "tbody")
        rows = filter_children(tbody, "tr")
        if not rows:
            raise StructureError("tr", rows_path)

        th = first_child(rows[0], "th", path=join_path(rows_path, "tr[0]"))
        kind = classify_label(text_of(th, path=join_path(rows_path, "tr[0] > th")))
        if kind is None:
            continue
        if len(rows) < 2:
            raise StructureError("tr", rows_path, f"match panel has {len(rows)} row")

        link_path = join_path(rows_path, "tr[1]")
        td = first_child(rows[1], "td", path=link_path)
        anchor = first_child(td, "a", path=join_path(link_path, "td"))
        url = normalize_url(attribute_of(anchor, "href"))

        last_path = join_path(rows_path, f"tr[{len(rows) - 1}]")
        cell = first_child(rows[-1], "td", path=last_path)
        similarity = parse_similarity(text_of(cell, path=join_path(last_path, "td")))

        matches.append(Match(kind=kind, url=url, similarity=similarity))

    logger.debug("Parsed {} matches", len(matches))
    return matches
