"""Shared test fixtures."""

from pathlib import Path

import pytest

from orgtree import Document, parse_document

SAMPLE_ORG = """\
#+TITLE: Project notes
#+FILETAGS: :project:
#+TODO: TODO NEXT | DONE CANCELLED

Some preamble text.

* TODO [#A] Finish report :work:urgent:
SCHEDULED: <2025-08-26 Tue> DEADLINE: <2025-08-29 Fri 17:00>
Draft is in the shared folder.
** NEXT Collect figures
*** Ask finance :money:
** DONE Outline
CLOSED: [2025-08-20 Wed 10:15]
* Plan the trip :travel:

Book the flights.
** CANCELLED Rent a car
* Weekly review
SCHEDULED: <2025-08-31 Sun +1w>
"""


@pytest.fixture
def sample_document() -> Document:
    """Return the sample document, parsed with default options."""
    return parse_document(SAMPLE_ORG)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Write the sample document to disk and return its path."""
    path = tmp_path / "notes.org"
    path.write_text(SAMPLE_ORG, encoding="utf-8")
    return path
