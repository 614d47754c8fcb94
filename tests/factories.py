from __future__ import annotations

from typing import List, Sequence, Tuple

from reportsort.config.options import SortOptions
from reportsort.domain.models import DataRow, RowColumn, RowGroup, ValueType
from reportsort.host.soup_tree import SoupTree
from reportsort.parsing.value_normalizer import normalize
from reportsort.sorting.interaction_controller import SortController
from reportsort.utils.debounce import ManualScheduler


def single_column_report(column: str, values: Sequence[str], data_type: str = "text") -> str:
    """One header, one data row per value; rows get ids r0, r1, ..."""
    marker = "sort-data" if data_type == "text" else f"sort-data-{data_type}"
    rows = "".join(
        f'<tr class="sort-row" id="r{i}"><td class="sort-column-{column}">'
        f'<span class="{marker}">{v}</span></td></tr>'
        for i, v in enumerate(values)
    )
    return (
        '<table id="report"><tr class="header">'
        f'<th class="sort-head-{column}">{column}</th></tr>{rows}</table>'
    )


GROUPED_REPORT = """
<table id="report">
  <tr class="header"><th class="sort-head-name">Name</th><th class="sort-head-amount extra">Amount</th></tr>
  <tr class="sort-row-1" id="s1"><td colspan="2">---</td></tr>
  <tr class="sort-row-2" id="d1"><td class="sort-column-name"><span class="sort-data">Bravo</span></td><td class="sort-column-amount"><span class="sort-data-number">$200</span></td></tr>
  <tr class="sort-row-1" id="s2"><td colspan="2">---</td></tr>
  <tr class="sort-row-2" id="d2"><td class="sort-column-name"><span class="sort-data">Alpha</span></td><td class="sort-column-amount"><span class="sort-data-number">1,000</span></td></tr>
  <tr class="sort-row-1" id="s3"><td colspan="2">---</td></tr>
  <tr class="sort-row-2" id="d3"><td class="sort-column-name"><span class="sort-data">Charlie</span></td><td class="sort-column-amount"><span class="sort-data-number">50</span></td></tr>
</table>
"""


def row_ids(tree: SoupTree) -> List[str]:
    return [tr["id"] for tr in tree.soup.find_all("tr") if tr.get("id")]


def make_controller(html: str, **options) -> Tuple[SoupTree, SortController, ManualScheduler]:
    tree = SoupTree.from_html(html)
    scheduler = ManualScheduler()
    controller = SortController(
        tree.select_root("#report"),
        tree,
        SortOptions.from_mapping(options),
        scheduler=scheduler,
    ).init()
    return tree, controller, scheduler


def make_groups(values: Sequence[str], value_type: str = "text", column: str = "c") -> List[RowGroup]:
    """Model-only groups named g0, g1, ... with normalized values."""
    vtype = ValueType.parse(value_type)
    return [
        RowGroup(
            group_id=i,
            data_row=DataRow(
                element=f"g{i}",
                columns=[RowColumn(element=None, id=column, value=normalize(v, vtype), type=vtype)],
            ),
        )
        for i, v in enumerate(values)
    ]


def group_names(groups: Sequence[RowGroup]) -> List[str]:
    return [g.data_row.element if g.data_row else f"empty{g.group_id}" for g in groups]
