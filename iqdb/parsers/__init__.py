"""Extractors for the iqdb front page and search results page."""

from iqdb.parsers.matches import classify_label, parse_matches, parse_similarity
from iqdb.parsers.services import parse_services

__all__ = ["classify_label", "parse_matches", "parse_services", "parse_similarity"]
