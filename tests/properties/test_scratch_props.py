"""Property-based tests for scratch note naming and heading rewrite.

These tests verify core invariants:
- Note names sort in the same order as their dates
- Cloning keeps the body verbatim after the replaced heading block
"""

from __future__ import annotations

import datetime

from hypothesis import given, settings
from hypothesis import strategies as st

from rubberduck.core.scratch import render_heading, rewrite_heading, scratch_filename

# === Strategies ===

dates = st.dates(min_value=datetime.date(1, 1, 1), max_value=datetime.date(9999, 12, 31))

line_text = st.text(
    alphabet=st.characters(exclude_characters="\r\n", exclude_categories=("Cs",)),
    max_size=40,
)

heading_line = line_text.map(lambda s: "#" + s)
body_first_line = line_text.filter(lambda s: not s.startswith("#"))


# === Property Tests ===


@given(d1=dates, d2=dates)
@settings(max_examples=300)
def test_filename_order_matches_date_order(d1: datetime.date, d2: datetime.date) -> None:
    if d1 < d2:
        assert scratch_filename(d1) < scratch_filename(d2)
    elif d1 == d2:
        assert scratch_filename(d1) == scratch_filename(d2)
    else:
        assert scratch_filename(d1) > scratch_filename(d2)


@given(
    heading=st.lists(heading_line, max_size=5),
    first=body_first_line,
    rest=st.lists(line_text, max_size=10),
    day=dates,
)
def test_rewrite_keeps_body_verbatim(
    heading: list[str], first: str, rest: list[str], day: datetime.date
) -> None:
    body = [first, *rest]

    out = "".join(rewrite_heading([*heading, *body], day))

    expected_head = render_heading(day) + "\n"
    assert out.startswith(expected_head)
    assert out[len(expected_head) :] == "".join(line + "\n" for line in body)


@given(heading=st.lists(heading_line, max_size=8), day=dates)
def test_heading_only_source_yields_only_heading(heading: list[str], day: datetime.date) -> None:
    assert "".join(rewrite_heading(heading, day)) == render_heading(day) + "\n"
