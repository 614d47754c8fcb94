from __future__ import annotations

from reportsort.config.options import SortOptions
from reportsort.domain.models import TEXT, ValueType
from reportsort.host.soup_tree import SoupTree
from reportsort.parsing.tree_scanner import group_span, scan

from factories import GROUPED_REPORT


def _scan(html: str, **options):
    tree = SoupTree.from_html(html)
    return tree, scan(tree.soup, tree, SortOptions.from_mapping(options))


def _wrap(rows: str) -> str:
    return f'<table><tr><th class="sort-head-a">A</th></tr>{rows}</table>'


def test_headers_in_reverse_encounter_order():
    _, model = _scan(GROUPED_REPORT)
    assert [h.id for h in model.headers] == ["amount", "name"]


def test_header_affordance_and_positioning():
    tree, model = _scan(GROUPED_REPORT, cssArrowClass="arrow")
    header = model.header("amount")
    arrow = header.affordance
    assert arrow.parent is header.element
    assert arrow["id"] == "imgColArrow_amount"
    assert arrow["class"] == ["arrow"]
    assert arrow["data-order"] == "asc"
    assert arrow["data-order-id"] == "amount"
    assert "position: relative" in header.element["style"]


def test_grouping_with_pre_separators():
    _, model = _scan(GROUPED_REPORT)
    assert model.group_span == 2
    assert len(model.groups) == 3
    first = model.groups[0]
    assert first.group_id == 0
    assert first.data_row.element["id"] == "d1"
    assert [(s.element["id"], s.position) for s in first.separators] == [("s1", "pre")]


def test_column_values_and_types():
    _, model = _scan(GROUPED_REPORT)
    name = model.groups[0].column("name")
    amount = model.groups[1].column("amount")
    assert (name.value, name.type) == ("bravo", TEXT)
    assert (amount.value, amount.type) == ("1000", ValueType("number"))


def test_separator_after_data_row_is_post():
    html = _wrap(
        '<tr class="sort-row-1" id="d"><td class="sort-column-a"><b class="sort-data">x</b></td></tr>'
        '<tr class="sort-row-2" id="s"><td>--</td></tr>'
    )
    _, model = _scan(html)
    assert [(s.element["id"], s.position) for s in model.groups[0].separators] == [("s", "post")]


def test_group_span_sizing():
    assert group_span([1, 2, 3, 1, 2, 3]) == 3
    assert group_span([1, 1, 1]) == 1
    assert group_span([2, 1, 2]) == 2
    assert group_span([]) == 1
    assert group_span([0, 0]) == 1


def test_final_short_chunk_is_kept():
    rows = "".join(
        f'<tr class="sort-row-{1 + i % 2}" id="r{i}"><td class="sort-column-a">'
        f'<i class="sort-data">{i}</i></td></tr>'
        for i in range(5)
    )
    _, model = _scan(_wrap(rows))
    assert len(model.groups) == 3
    assert model.groups[-1].data_row.element["id"] == "r4"
    assert model.groups[-1].separators == []


def test_last_data_row_wins_and_earlier_one_is_kept_as_separator():
    html = _wrap(
        '<tr class="sort-row-1" id="x"><td class="sort-column-a"><i class="sort-data">1</i></td></tr>'
        '<tr class="sort-row-2" id="y"><td class="sort-column-a"><i class="sort-data">2</i></td></tr>'
    )
    _, model = _scan(html)
    group = model.groups[0]
    assert group.data_row.element["id"] == "y"
    assert [(s.element["id"], s.position) for s in group.separators] == [("x", "pre")]


def test_group_without_data_row():
    html = _wrap('<tr class="sort-row" id="only"><td>nothing</td></tr>')
    _, model = _scan(html)
    assert model.groups[0].data_row is None
    assert model.groups[0].separators[0].position == "pre"


def test_nested_columns_are_not_top_level():
    html = _wrap(
        '<tr class="sort-row"><td class="sort-column-a"><div class="sort-column-b">'
        '<span class="sort-data">Inner</span></div></td></tr>'
    )
    _, model = _scan(html)
    columns = model.groups[0].data_row.columns
    assert [c.id for c in columns] == ["a"]
    assert columns[0].value == "inner"


def test_column_carrying_data_marker_itself():
    html = _wrap('<tr class="sort-row"><td class="sort-column-a sort-data-number">1,500</td></tr>')
    _, model = _scan(html)
    col = model.groups[0].column("a")
    assert (col.value, col.type) == ("1500", ValueType("number"))


def test_multi_value_column_becomes_text():
    html = _wrap(
        '<tr class="sort-row"><td class="sort-column-a"><span class="sort-data">Red Apple</span>'
        '<span class="sort-data-number">12</span></td></tr>'
    )
    _, model = _scan(html)
    col = model.groups[0].column("a")
    assert (col.value, col.type) == ("redapple, 12", TEXT)


def test_column_without_data_markers_is_blank_text():
    html = _wrap('<tr class="sort-row"><td class="sort-column-a">plain</td></tr>')
    _, model = _scan(html)
    col = model.groups[0].column("a")
    assert (col.value, col.type) == ("", TEXT)


def test_input_value_and_line_breaks():
    html = _wrap(
        '<tr class="sort-row"><td class="sort-column-a"><input class="sort-data-number" value="42"></td>'
        '<td class="sort-column-b"><span class="sort-data">Line<br>Two</span></td></tr>'
    )
    _, model = _scan(html)
    assert model.groups[0].column("a").value == "42"
    assert model.groups[0].column("b").value == "linetwo"


def test_no_markers_gives_empty_model():
    _, model = _scan("<table><tr><td>plain</td></tr></table>")
    assert model.is_empty
    assert model.groups == []


def test_rescan_replaces_affordances():
    tree = SoupTree.from_html(GROUPED_REPORT)
    scan(tree.soup, tree)
    scan(tree.soup, tree)
    assert len(tree.soup.find_all("div", class_="imgArrow")) == 2
