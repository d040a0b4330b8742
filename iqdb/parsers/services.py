"""Service list extraction from the iqdb front page."""

from bs4 import BeautifulSoup
from loguru import logger

from iqdb.dom import attribute_of, filter_children, first_child, join_path, text_of
from iqdb.models import Service
from iqdb.utils.numbers import parse_int
from iqdb.utils.urls import normalize_url

# html > body > form > table > tbody, one <tr> per service.
_FORM_PATH = ("html", "body", "form", "table", "tbody")


def parse_services(document: BeautifulSoup) -> list[Service]:
    """Extract every service row of the service-selection form.

    Each row looks like::

        <tr><th><label>
          <input type="checkbox" name="service[]" value="1">
          <a href="//danbooru.donmai.us">Danbooru</a>
        </label></th></tr>

    Raises:
        StructureError: a node on the path or inside a row is missing.
        FormatError: a row's ``value`` attribute is not an integer.
    """
    node = document
    path = ""
    for tag in _FORM_PATH:
        node = first_child(node, tag, path=path)
        path = join_path(path, tag)

    services: list[Service] = []
    for index, row in enumerate(filter_children(node, "tr")):
        row_path = join_path(path, f"tr[{index}]")
        th = first_child(row, "th", path=row_path)
        label_path = join_path(row_path, "th")
        label = first_child(th, "label", path=label_path)
        label_path = join_path(label_path, "label")
        checkbox = first_child(label, "input", path=label_path)
        anchor = first_child(label, "a", path=label_path)

        services.append(
            Service(
                value=parse_int(attribute_of(checkbox, "value"), "service identifier"),
                name=text_of(anchor, path=join_path(label_path, "a")),
                url=normalize_url(attribute_of(anchor, "href")),
            )
        )

    logger.debug("Parsed {} services", len(services))
    return services
