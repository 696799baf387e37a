"""Render audit results as console output or an HTML document."""

from __future__ import annotations

import os

from bs4 import BeautifulSoup

from gphotoaudit.membership import MembershipSet
from gphotoaudit.models import NoResults
from gphotoaudit.utils import OUTPUT_NAME, dedupe_path

DEFAULT_TABLE_ID = "tableFindOutOfAlbumPhotos"


def _build_table(doc: BeautifulSoup, result: MembershipSet, table_id: str):
    table = doc.new_tag("table", id=table_id)
    for _, url in result.entries():
        row = doc.new_tag("tr")
        cell = doc.new_tag("td")
        link = doc.new_tag("a", href=url, target="_blank")
        link.string = url
        cell.append(link)
        row.append(cell)
        table.append(row)
    return table


def render_table(
    result: MembershipSet | NoResults, table_id: str = DEFAULT_TABLE_ID
) -> str:
    """
    Return an HTML table with one link per item, or the no-results message.

    Args:
        result (MembershipSet | NoResults): Outcome of an audit run.
        table_id (str): `id` attribute of the generated table.

    Returns:
        str: Table markup, or the sentinel's message as plain text.
    """
    if isinstance(result, NoResults):
        return result.message
    doc = BeautifulSoup("", "html.parser")
    return str(_build_table(doc, result, table_id))


def build_document(result: MembershipSet, table_id: str = DEFAULT_TABLE_ID) -> str:
    """Wrap the result table in a standalone `<html><body>` document."""
    doc = BeautifulSoup("<html><body></body></html>", "html.parser")
    doc.body.append(_build_table(doc, result, table_id))
    return str(doc)


def save_report(
    result: MembershipSet | NoResults,
    path: str = OUTPUT_NAME,
    table_id: str = DEFAULT_TABLE_ID,
) -> str:
    """
    Write the result document to disk without overwriting an existing file.

    Args:
        result (MembershipSet | NoResults): Outcome of an audit run.
        path (str): Desired output file path.
        table_id (str): `id` attribute of the generated table.

    Returns:
        str: The path actually written.

    Raises:
        ValueError: If `result` is a no-results sentinel.
    """
    if isinstance(result, NoResults):
        raise ValueError(f"Nothing to save: {result.message}")

    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder)
    target = dedupe_path(path)
    with open(target, "w", encoding="utf-8") as f:
        f.write(build_document(result, table_id))
    return target


def print_summary(result: MembershipSet | NoResults) -> None:
    """Print the found URLs, or the no-results message."""
    if isinstance(result, NoResults):
        print(f"\n[^] {result.message}")
        return
    print(f"\n[^] Found {len(result)} item{'s' if len(result) != 1 else ''}:")
    for url in sorted(result.urls()):
        print(f"    {url}")
