"""Tests for grid drawing composition at each annotation level."""

import pytest
import ezdxf
from io import StringIO

from refline.core.composer.composer import (
    AnnotationLevel,
    compose,
    default_axis_labels,
    grid_line_segments,
    layout_grid,
)
from refline.core.errors import DimensionMismatch
from refline.core.exporter.dxf_layers import DRAFTING
from refline.core.exporter.dxf_writer import GridDXFExporter
from refline.core.grid.spec import GridSpecification


def make_spec(**overrides) -> GridSpecification:
    fields = dict(axis_count_x=3, axis_count_y=2, span_x=[6000, 6000], span_y=[4000])
    fields.update(overrides)
    return GridSpecification(**fields)


class RecordingExporter(GridDXFExporter):
    """Keeps the arguments of every dimension it is asked to draw."""

    def __init__(self):
        super().__init__()
        self.dimension_calls = []

    def add_dimension(self, p1, p2, base, layer, dimstyle, vertical=False, text_rotation=None):
        self.dimension_calls.append({
            "p1": p1, "p2": p2, "base": base,
            "vertical": vertical, "text_rotation": text_rotation,
        })
        super().add_dimension(p1, p2, base, layer, dimstyle, vertical, text_rotation)


def entities(exporter, dxftype):
    return list(exporter.msp.query(dxftype))


def vertical_lines(exporter):
    return [e for e in entities(exporter, "LINE") if e.dxf.start.x == e.dxf.end.x]


def horizontal_lines(exporter):
    return [e for e in entities(exporter, "LINE") if e.dxf.start.y == e.dxf.end.y]


class TestLayout:
    def test_layout_values(self):
        layout = layout_grid(make_spec())
        assert layout.xs == [0.0, 6000.0, 12000.0]
        assert layout.ys == [0.0, 4000.0]
        assert layout.width == 12000.0
        assert layout.height == 4000.0

    def test_default_labels(self):
        layout = layout_grid(make_spec())
        assert layout.labels_x == ("X1", "X2", "X3")
        assert layout.labels_y == ("Y1", "Y2")

    def test_explicit_labels(self):
        layout = layout_grid(make_spec(axis_labels_x=["A", "B", "C"]))
        assert layout.labels_x == ("A", "B", "C")
        assert layout.labels_y == default_axis_labels("Y", 2)

    def test_perpendicular_extent_is_opposite_total(self):
        spec = make_spec(span_x=[5000, 7000], span_y=[3000])
        segments = grid_line_segments(layout_grid(spec))
        vertical = segments[:3]
        assert vertical == [
            ((0.0, 0.0), (0.0, 3000.0)),
            ((5000.0, 0.0), (5000.0, 3000.0)),
            ((12000.0, 0.0), (12000.0, 3000.0)),
        ]
        horizontal = segments[3:]
        assert horizontal == [
            ((0.0, 0.0), (12000.0, 0.0)),
            ((0.0, 3000.0), (12000.0, 3000.0)),
        ]


class TestMinimal:
    def test_end_to_end(self):
        exporter = compose(make_spec(), AnnotationLevel.MINIMAL)

        xs = sorted(e.dxf.start.x for e in vertical_lines(exporter))
        assert xs == [0.0, 6000.0, 12000.0]
        for line in vertical_lines(exporter):
            assert {line.dxf.start.y, line.dxf.end.y} == {0.0, 4000.0}

        ys = sorted(e.dxf.start.y for e in horizontal_lines(exporter))
        assert ys == [0.0, 4000.0]
        for line in horizontal_lines(exporter):
            assert {line.dxf.start.x, line.dxf.end.x} == {0.0, 12000.0}

        assert exporter.count("LINE") == 5
        assert exporter.count("DIMENSION") == 0
        assert exporter.count("TEXT") == 0
        assert exporter.count("CIRCLE") == 0

    def test_both_layers_created(self):
        exporter = compose(make_spec(), AnnotationLevel.MINIMAL)
        assert "通り芯" in exporter.doc.layers
        assert "寸法" in exporter.doc.layers

    def test_ignores_labels(self):
        spec = make_spec(axis_labels_x=["A", "B", "C"], axis_labels_y=["1", "2"])
        exporter = compose(spec, AnnotationLevel.MINIMAL)
        assert exporter.count("TEXT") == 0
        assert exporter.count("CIRCLE") == 0

    def test_lines_on_reference_layer(self):
        exporter = compose(make_spec(layer_name=("GRID", None)), "minimal")
        assert {e.dxf.layer for e in entities(exporter, "LINE")} == {"GRID"}


class TestDimensioned:
    def test_x_dimensions_only(self):
        spec = make_spec(axis_count_x=4, span_x=[3000, 4000, 5000],
                         axis_count_y=3, span_y=[2000, 2000])
        exporter = compose(spec, AnnotationLevel.DIMENSIONED)
        assert exporter.count("LINE") == 7
        assert exporter.count("DIMENSION") == 3
        assert exporter.count("TEXT") == 0
        assert exporter.count("CIRCLE") == 0

    def test_dimension_points(self):
        exporter = compose(make_spec(), AnnotationLevel.DIMENSIONED)
        dims = entities(exporter, "DIMENSION")
        pairs = sorted((d.dxf.defpoint2.x, d.dxf.defpoint3.x) for d in dims)
        assert pairs == [(0.0, 6000.0), (6000.0, 12000.0)]
        for d in dims:
            assert d.dxf.defpoint2.y == 0.0
            assert d.dxf.defpoint3.y == 0.0
            # dimension line runs below the grid
            assert d.dxf.defpoint.y == pytest.approx(-DRAFTING.dimension_gap)

    def test_dimension_anchor_at_pair_midpoint(self):
        exporter = RecordingExporter()
        spec = make_spec(axis_count_x=3, span_x=[5000, 7000], axis_count_y=3, span_y=[3000, 2000])
        compose(spec, AnnotationLevel.FULL, exporter=exporter)

        x_dims = [c for c in exporter.dimension_calls if not c["vertical"]]
        assert [c["base"] for c in x_dims] == [
            (2500.0, -DRAFTING.dimension_gap),
            (8500.0, -DRAFTING.dimension_gap),
        ]
        assert all(c["text_rotation"] is None for c in x_dims)

        y_dims = [c for c in exporter.dimension_calls if c["vertical"]]
        assert [c["base"] for c in y_dims] == [
            (-DRAFTING.dimension_gap, 1500.0),
            (-DRAFTING.dimension_gap, 4000.0),
        ]
        assert all(c["text_rotation"] == DRAFTING.vertical_text_rotation for c in y_dims)

    def test_dimensions_on_dimension_layer(self):
        exporter = compose(make_spec(layer_name=(None, "DIM")), AnnotationLevel.DIMENSIONED)
        assert {d.dxf.layer for d in entities(exporter, "DIMENSION")} == {"DIM"}

    def test_dimstyle_registered_once(self):
        exporter = compose(make_spec(), AnnotationLevel.DIMENSIONED)
        style = exporter.doc.dimstyles.get(DRAFTING.dimstyle_name)
        assert style.dxf.dimtxt == DRAFTING.dim_text_height
        assert style.dxf.dimasz == DRAFTING.dim_arrow_size
        assert style.dxf.dimexo == DRAFTING.dim_extension_offset
        for d in entities(exporter, "DIMENSION"):
            assert d.dxf.dimstyle == DRAFTING.dimstyle_name


class TestFull:
    def test_counts(self):
        spec = make_spec(axis_count_x=4, span_x=[3000, 4000, 5000],
                         axis_count_y=3, span_y=[2000, 2000])
        exporter = compose(spec, AnnotationLevel.FULL)
        assert exporter.count("LINE") == 7
        assert exporter.count("DIMENSION") == 3 + 2
        assert exporter.count("TEXT") == 4 + 3
        assert exporter.count("CIRCLE") == 4 + 3

    def test_y_dimensions_left_and_rotated(self):
        exporter = compose(make_spec(), AnnotationLevel.FULL)
        y_dims = [d for d in entities(exporter, "DIMENSION") if d.dxf.defpoint2.x == 0.0
                  and d.dxf.defpoint3.x == 0.0 and d.dxf.defpoint3.y != 0.0]
        assert len(y_dims) == 1
        dim = y_dims[0]
        assert (dim.dxf.defpoint2.y, dim.dxf.defpoint3.y) == (0.0, 4000.0)
        assert dim.dxf.defpoint.x == pytest.approx(-DRAFTING.dimension_gap)
        assert dim.dxf.text_rotation == pytest.approx(270)

    def test_x_labels_below_grid(self):
        spec = make_spec(axis_labels_x=["A", "B", "C"], axis_labels_y=["1", "2"])
        exporter = compose(spec, AnnotationLevel.FULL)
        texts = {t.dxf.text: t for t in entities(exporter, "TEXT")}
        assert set(texts) == {"A", "B", "C", "1", "2"}

        b = texts["B"]
        assert b.dxf.insert.x == pytest.approx(6000)
        assert b.dxf.insert.y == pytest.approx(DRAFTING.label_offset)
        assert b.dxf.rotation == pytest.approx(0)
        assert b.dxf.height == pytest.approx(DRAFTING.label_text_height)
        assert b.dxf.width == pytest.approx(DRAFTING.label_width_factor)
        assert b.dxf.halign == 1   # center
        assert b.dxf.valign == 2   # middle

    def test_y_labels_left_of_grid(self):
        spec = make_spec(axis_labels_x=["A", "B", "C"], axis_labels_y=["1", "2"])
        exporter = compose(spec, AnnotationLevel.FULL)
        texts = {t.dxf.text: t for t in entities(exporter, "TEXT")}

        two = texts["2"]
        assert two.dxf.insert.x == pytest.approx(DRAFTING.label_offset)
        assert two.dxf.insert.y == pytest.approx(4000)
        assert two.dxf.rotation == pytest.approx(270)

    def test_marker_circles_share_label_anchor(self):
        exporter = compose(make_spec(), AnnotationLevel.FULL)
        centers = sorted((c.dxf.center.x, c.dxf.center.y) for c in entities(exporter, "CIRCLE"))
        off = DRAFTING.label_offset
        assert centers == sorted([
            (0.0, off), (6000.0, off), (12000.0, off),
            (off, 0.0), (off, 4000.0),
        ])
        for c in entities(exporter, "CIRCLE"):
            assert c.dxf.radius == pytest.approx(DRAFTING.marker_radius)

    def test_annotations_on_dimension_layer(self):
        exporter = compose(make_spec(), AnnotationLevel.FULL)
        for kind in ("DIMENSION", "TEXT", "CIRCLE"):
            assert {e.dxf.layer for e in entities(exporter, kind)} == {"寸法"}

    def test_single_axis_has_no_dimensions(self):
        spec = make_spec(axis_count_x=1, span_x=[], axis_count_y=1, span_y=[])
        exporter = compose(spec, AnnotationLevel.FULL)
        assert exporter.count("DIMENSION") == 0
        assert exporter.count("TEXT") == 2
        assert exporter.count("LINE") == 2

    def test_round_trip_through_dxf(self):
        exporter = compose(make_spec(), AnnotationLevel.FULL)
        doc = ezdxf.read(StringIO(exporter.to_bytes().decode("utf-8")))
        msp = doc.modelspace()
        assert len(msp.query("LINE")) == 5
        assert len(msp.query("DIMENSION")) == 3
        assert len(msp.query("CIRCLE")) == 5


class TestFailures:
    def test_span_mismatch_raises_at_construction(self):
        with pytest.raises(DimensionMismatch):
            make_spec(axis_count_x=4)

    def test_mismatch_emits_nothing(self):
        spec = make_spec()
        # Corrupt the frozen spec past its own validation
        object.__setattr__(spec, "axis_count_x", 4)
        exporter = GridDXFExporter()
        layers_before = len(exporter.doc.layers)

        with pytest.raises(DimensionMismatch):
            compose(spec, AnnotationLevel.FULL, exporter=exporter)

        assert exporter.count("LINE") == 0
        assert len(exporter.doc.layers) == layers_before

    def test_each_run_gets_its_own_document(self):
        a = compose(make_spec(), AnnotationLevel.MINIMAL)
        b = compose(make_spec(), AnnotationLevel.MINIMAL)
        assert a.doc is not b.doc
        assert b.count("LINE") == 5
