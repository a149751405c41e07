"""
Tests for gridiron_recap/pipeline/normalize.py.

What we test
------------
promote_header():  header labels snake-cased, title + header rows sliced off,
                   blank padding columns and blank rows dropped, bad shapes.
apply_aliases():   column renames.
coerce_types():    abbreviated-month dates, numeric columns, failures.
NormalizeStage:    end to end on the sample page.
"""

from __future__ import annotations

import pandas as pd
import pytest

from gridiron_recap.pipeline.normalize import (
    NormalizeStage,
    TableShapeError,
    apply_aliases,
    coerce_types,
    promote_header,
    require_columns,
    snake_label,
)


@pytest.mark.parametrize(
    "label, expected",
    [("NO.", "no"), ("DATE", "date"), (" Winning Team ", "winning_team"), ("", "")],
)
def test_snake_label(label, expected):
    assert snake_label(label) == expected


class TestPromoteHeader:
    def test_labels_and_rows(self, raw_frame, sample_games):
        out = promote_header(raw_frame, header_row=1)
        assert list(out.columns) == ["no", "date", "site", "result"]
        assert len(out) == len(sample_games)
        assert out.loc[0, "no"] == "I"
        assert list(out.index) == list(range(len(sample_games)))

    def test_does_not_mutate_input(self, raw_frame):
        before = raw_frame.copy()
        promote_header(raw_frame, header_row=1)
        pd.testing.assert_frame_equal(raw_frame, before)

    def test_blank_header_columns_dropped(self):
        raw = pd.DataFrame([["Title", ""], ["A", ""], ["1", "x"]])
        out = promote_header(raw, header_row=1)
        assert list(out.columns) == ["a"]

    def test_blank_rows_dropped(self):
        raw = pd.DataFrame([["A", "B"], ["1", "2"], ["", " "], ["3", "4"]])
        out = promote_header(raw, header_row=0)
        assert out["a"].tolist() == ["1", "3"]

    def test_header_row_out_of_range(self, raw_frame):
        with pytest.raises(TableShapeError, match="Header row"):
            promote_header(raw_frame, header_row=len(raw_frame))

    def test_duplicate_labels(self):
        raw = pd.DataFrame([["Date", "date"], ["x", "y"]])
        with pytest.raises(TableShapeError, match="duplicate"):
            promote_header(raw, header_row=0)


def test_apply_aliases_ignores_unknown_keys():
    frame = pd.DataFrame({"no": ["I"], "date": ["x"]})
    out = apply_aliases(frame, {"no": "game", "missing": "other"})
    assert list(out.columns) == ["game", "date"]


def test_require_columns_names_missing():
    with pytest.raises(TableShapeError, match="result"):
        require_columns(pd.DataFrame({"date": []}), ["date", "result"])


class TestCoerceTypes:
    def test_abbreviated_month_dates(self):
        frame = pd.DataFrame({"date": ["Jan. 15, 1967", "Feb. 3, 2002"]})
        out = coerce_types(frame, "date", "%b %d, %Y")
        assert pd.api.types.is_datetime64_any_dtype(out["date"])
        assert out.loc[0, "date"] == pd.Timestamp(1967, 1, 15)
        assert out.loc[1, "date"] == pd.Timestamp(2002, 2, 3)
        assert frame.loc[0, "date"] == "Jan. 15, 1967"

    def test_unparseable_date(self):
        frame = pd.DataFrame({"date": ["Jan. 15, 1967", "sometime"]})
        with pytest.raises(TableShapeError, match="date"):
            coerce_types(frame, "date", "%b %d, %Y")

    def test_numeric_columns(self):
        frame = pd.DataFrame({"date": ["Jan 1, 2000"], "attendance": ["61946"]})
        out = coerce_types(frame, "date", "%b %d, %Y", numeric_columns=["attendance"])
        assert out.loc[0, "attendance"] == 61946

    def test_non_numeric_value(self):
        frame = pd.DataFrame({"date": ["Jan 1, 2000"], "attendance": ["lots"]})
        with pytest.raises(TableShapeError, match="attendance"):
            coerce_types(frame, "date", "%b %d, %Y", numeric_columns=["attendance"])


class TestNormalizeStage:
    def test_run(self, app_config, raw_frame, sample_games):
        result = NormalizeStage(app_config).run(frame=raw_frame)
        out = result.frame
        assert list(out.columns) == ["game", "date", "site", "result"]
        assert len(out) == len(sample_games)
        assert out.loc[7, "date"] == pd.Timestamp(2017, 2, 5)
        assert result.run.status == "success"
        assert result.run.rows_processed == len(sample_games)

    def test_missing_result_column_fails(self, app_config):
        raw = pd.DataFrame([["Title", ""], ["NO.", "DATE"], ["I", "Jan. 15, 1967"]])
        with pytest.raises(TableShapeError, match="result"):
            NormalizeStage(app_config).run(frame=raw)
