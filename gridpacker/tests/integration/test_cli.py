"""
GridPacker Integration Tests

Runs the place and plot subcommands end to end on a small item table and
checks the written layout, snapshot and figure.

Run: pytest gridpacker/tests/integration/ -v
"""
import json
from argparse import Namespace

import pandas as pd
import pytest

from gridpacker.cli import place, plot

ITEMS_TSV = (
    "name\trow\tcol\tsize_x\tsize_y\n"
    "header\t0\t0\t6\t1\n"
    "chart\t4\t0\t4\t2\n"
    "clock\t\t\t2\t1\n"
    "news\t\t\t\t\n"
    "weather\t0\t3\t2\t2\n"
)


def place_args(tmp_path, **overrides):
    args = dict(
        prefix='demo',
        items=str(tmp_path / 'items.tsv'),
        output_dir=str(tmp_path / 'out'),
        preset='default',
        columns=None,
        min_rows=None,
        max_rows=None,
        default_size_x=None,
        default_size_y=None,
        debug=False,
    )
    args.update(overrides)
    return Namespace(**args)


@pytest.fixture
def placed_dir(tmp_path):
    """Output directory of a place run over ITEMS_TSV"""
    (tmp_path / 'items.tsv').write_text(ITEMS_TSV)
    place.run(place_args(tmp_path))
    return tmp_path / 'out'


@pytest.fixture
def layout(placed_dir):
    return pd.read_csv(placed_dir / 'demo.gridpacker_layout.tsv', sep='\t')


# ============================================================================
# PLACE
# ============================================================================

@pytest.mark.integration
def test_place_writes_outputs(placed_dir):
    assert (placed_dir / 'demo.gridpacker_layout.tsv').exists()
    assert (placed_dir / 'demo.gridpacker_layout.json').exists()


@pytest.mark.integration
def test_all_items_placed(layout):
    assert sorted(layout['name']) == ['chart', 'clock', 'header', 'news', 'weather']
    assert layout['row'].notna().all()
    assert layout['col'].notna().all()


@pytest.mark.integration
def test_layout_has_no_overlaps(layout):
    """No two placed footprints intersect and all fit in 6 columns"""
    boxes = list(layout[['row', 'col', 'size_x', 'size_y']].itertuples(index=False))
    for row, col, size_x, size_y in boxes:
        assert row >= 0 and col >= 0
        assert col + size_x <= 6
    for i, a in enumerate(boxes):
        for b in boxes[i + 1:]:
            disjoint = (a.row + a.size_y <= b.row or b.row + b.size_y <= a.row
                        or a.col + a.size_x <= b.col or b.col + b.size_x <= a.col)
            assert disjoint, f"{a} overlaps {b}"


@pytest.mark.integration
def test_forced_item_keeps_its_cell(layout):
    """weather was forced onto header's row; header ends up below it"""
    by_name = layout.set_index('name')
    assert (by_name.loc['weather', 'row'], by_name.loc['weather', 'col']) == (0, 3)
    assert (by_name.loc['clock', 'row'], by_name.loc['clock', 'col']) == (0, 0)
    assert by_name.loc['header', 'row'] == 3
    assert by_name.loc['chart', 'row'] == 4


@pytest.mark.integration
def test_default_size_applied(layout):
    news = layout.set_index('name').loc['news']
    assert (news['size_x'], news['size_y']) == (2, 1)


@pytest.mark.integration
def test_snapshot_matches_table(placed_dir, layout):
    with open(placed_dir / 'demo.gridpacker_layout.json') as f:
        snapshot = json.load(f)
    assert snapshot['columns'] == 6
    assert snapshot['gridHeight'] == int((layout['row'] + layout['size_y']).max())
    assert len(snapshot['items']) == len(layout)
    assert set(snapshot['items'][0]) == {'row', 'col', 'sizeX', 'sizeY'}


@pytest.mark.integration
def test_place_with_preset(tmp_path):
    (tmp_path / 'items.tsv').write_text(ITEMS_TSV)
    place.run(place_args(tmp_path, preset='dashboard', prefix='dash'))
    snapshot = json.loads((tmp_path / 'out' / 'dash.gridpacker_layout.json').read_text())
    assert snapshot['columns'] == 12


# ============================================================================
# PLOT
# ============================================================================

def plot_args(input_dir, **overrides):
    args = dict(
        prefix='demo',
        input_dir=str(input_dir),
        output_dir=None,
        width=610.0,
        row_height=None,
        style='default',
        title=None,
        debug=False,
    )
    args.update(overrides)
    return Namespace(**args)


@pytest.fixture
def plot_calls(monkeypatch):
    """Record the arguments GridPlotter.plot is called with"""
    calls = []
    original = plot.GridPlotter.plot

    def recording(self, items, layout, grid_height, columns, **kwargs):
        calls.append({'items': list(items), 'layout': layout,
                      'grid_height': grid_height, 'columns': columns})
        return original(self, items, layout, grid_height, columns, **kwargs)

    monkeypatch.setattr(plot.GridPlotter, 'plot', recording)
    return calls


@pytest.mark.integration
def test_plot_renders_png(placed_dir):
    plot.run(plot_args(placed_dir, style='publication', title='demo'))
    png = placed_dir / 'demo.gridpacker.png'
    assert png.exists()
    assert png.stat().st_size > 0


@pytest.mark.integration
def test_plot_draws_committed_layout(tmp_path, plot_calls):
    """Preset and row limits used by place carry through to the drawing"""
    (tmp_path / 'items.tsv').write_text(ITEMS_TSV)
    place.run(place_args(tmp_path, preset='dashboard', min_rows=6))
    out = tmp_path / 'out'
    snapshot = json.loads((out / 'demo.gridpacker_layout.json').read_text())
    assert snapshot['gridHeight'] == 6

    plot.run(plot_args(out, width=1210.0))

    assert len(plot_calls) == 1
    call = plot_calls[0]
    assert call['grid_height'] == snapshot['gridHeight']
    assert call['columns'] == snapshot['columns'] == 12
    drawn = [item.to_json() for item in call['items']]
    assert drawn == snapshot['items']


@pytest.mark.integration
def test_plot_labels_from_report(placed_dir, layout, plot_calls):
    plot.run(plot_args(placed_dir))
    assert [item.name for item in plot_calls[0]['items']] == layout['name'].tolist()


@pytest.mark.integration
def test_plot_mobile_width(placed_dir, tmp_path):
    plot.run(plot_args(placed_dir, output_dir=str(tmp_path / 'mobile'), width=480.0, row_height=60.0))
    assert (tmp_path / 'mobile' / 'demo.gridpacker.png').exists()


@pytest.mark.integration
def test_plot_requires_place_output(tmp_path):
    with pytest.raises(FileNotFoundError, match="Did you run 'gridpacker place"):
        plot.run(plot_args(tmp_path, prefix='missing'))
