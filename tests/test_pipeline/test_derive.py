"""
Tests for gridiron_recap/pipeline/derive.py.

What we test
------------
split_result() / split_results(): last-space splitting, multi-word names,
    overtime markers, loud failure on malformed rows.
compute_spread(): |score1 - score2|, never negative.
label_spread_categories(): inclusive Q1/Q3 boundaries, blowout wins ties,
    whole-column dependency.
"""

from __future__ import annotations

import pandas as pd
import pytest

from gridiron_recap.pipeline.derive import (
    LAST_SPACE,
    DeriveStage,
    ParsedResult,
    ResultParseError,
    compute_spread,
    label_spread_categories,
    split_result,
    split_results,
    spread_quartiles,
)


def _labels(spreads: list[int]) -> list[str]:
    frame = pd.DataFrame({"spread": spreads})
    return label_spread_categories(frame)["category"].tolist()


# ── split_result ──────────────────────────────────────────────────────────────


class TestSplitResult:
    def test_green_bay_denver(self):
        assert split_result("Green Bay 35, Denver 10") == ParsedResult(
            team1="Green Bay", score1=35, team2="Denver", score2=10
        )

    def test_multi_word_names_both_sides(self):
        parsed = split_result("New York Giants 20, Buffalo Bills 19")
        assert parsed.team1 == "New York Giants"
        assert parsed.team2 == "Buffalo Bills"
        assert parsed.spread == 1

    def test_overtime_marker(self):
        parsed = split_result("New England 34, Atlanta 28 (OT)")
        assert parsed.team2 == "Atlanta"
        assert parsed.score2 == 28
        assert parsed.overtime is True

    def test_surrounding_whitespace(self):
        parsed = split_result("  Baltimore 16 ,  Dallas 13 ")
        assert (parsed.team1, parsed.score1, parsed.team2, parsed.score2) == (
            "Baltimore", 16, "Dallas", 13,
        )

    def test_no_comma(self):
        with pytest.raises(ResultParseError, match="comma"):
            split_result("Green Bay 35 Denver 10")

    def test_missing_score(self):
        with pytest.raises(ResultParseError, match="Denver"):
            split_result("Green Bay 35, Denver")

    def test_single_word_without_score(self):
        with pytest.raises(ResultParseError):
            split_result("Packers, Broncos 10")


def test_last_space_pattern_matches_only_final_space():
    assert LAST_SPACE.split("Kansas City 10") == ["Kansas City", "10"]


# ── split_results ─────────────────────────────────────────────────────────────


class TestSplitResults:
    def test_columns_added(self, normalized_frame):
        out = split_results(normalized_frame, "result")
        first = out.iloc[0]
        assert (first.team1, first.score1, first.team2, first.score2) == (
            "Green Bay", 35, "Kansas City", 10,
        )
        assert out["score1"].dtype.kind == "i"
        assert out["score2"].dtype.kind == "i"
        assert "result" in out.columns

    def test_overtime_column(self, normalized_frame):
        out = split_results(normalized_frame, "result")
        assert out["overtime"].tolist() == [False] * 7 + [True]
        assert out.loc[7, "team2"] == "Atlanta"

    def test_matches_scalar_form(self, normalized_frame):
        out = split_results(normalized_frame, "result")
        for idx, text in normalized_frame["result"].items():
            parsed = split_result(text)
            assert out.loc[idx, "team1"] == parsed.team1
            assert out.loc[idx, "score2"] == parsed.score2

    def test_input_not_mutated(self, normalized_frame):
        before = normalized_frame.copy()
        split_results(normalized_frame, "result")
        pd.testing.assert_frame_equal(normalized_frame, before)

    def test_missing_score_names_row(self):
        frame = pd.DataFrame({"result": ["Green Bay 35, Denver 10", "Dallas 27, Buffalo"]})
        with pytest.raises(ResultParseError, match="Row 1"):
            split_results(frame, "result")

    def test_missing_comma_names_row(self):
        frame = pd.DataFrame({"result": ["Green Bay 35, Denver 10", "Dallas 27 Buffalo 17"]})
        with pytest.raises(ResultParseError, match="Row 1"):
            split_results(frame, "result")

    def test_empty_frame(self):
        with pytest.raises(ResultParseError, match="empty"):
            split_results(pd.DataFrame({"result": []}), "result")


# ── spread / categories ───────────────────────────────────────────────────────


def test_spread_is_absolute_difference(normalized_frame):
    out = compute_spread(split_results(normalized_frame, "result"))
    assert (out["spread"] == (out["score1"] - out["score2"]).abs()).all()
    assert (out["spread"] >= 0).all()
    assert out["spread"].tolist() == [25, 19, 9, 3, 4, 1, 3, 6]


def test_spread_when_second_team_won():
    frame = pd.DataFrame({"score1": [10], "score2": [24]})
    assert compute_spread(frame)["spread"].tolist() == [14]


def test_quartiles(derived_frame):
    assert spread_quartiles(derived_frame) == (3.0, 11.5)


class TestLabelSpreadCategories:
    def test_sample_labels(self, derived_frame):
        by_game = dict(zip(derived_frame["game"], derived_frame["category"]))
        assert {g for g, c in by_game.items() if c == "close"} == {"XXV", "V", "XXXVI"}
        assert {g for g, c in by_game.items() if c == "blowout"} == {"I", "II"}
        assert {g for g, c in by_game.items() if c == "Standard"} == {"III", "XIII", "LI"}

    def test_boundaries_inclusive(self):
        # Q1 = 2.0, Q3 = 4.0 for 1..5
        assert _labels([1, 2, 3, 4, 5]) == ["close", "close", "Standard", "blowout", "blowout"]

    def test_blowout_wins_when_quartiles_equal(self):
        assert _labels([7, 7, 7, 7]) == ["blowout"] * 4

    def test_changing_one_score_can_relabel_others(self):
        assert _labels([1, 2, 3, 4, 5])[2] == "Standard"
        # Raising the top spread leaves Q1 and Q3 where they were...
        assert _labels([1, 2, 3, 4, 50])[2] == "Standard"
        # ...but lowering the bottom ones moves Q1 up to 3.0, making row 2 close.
        assert _labels([3, 3, 3, 4, 5])[2] == "close"

    def test_input_not_mutated(self):
        frame = pd.DataFrame({"spread": [1, 2, 3]})
        label_spread_categories(frame)
        assert "category" not in frame.columns


class TestDeriveStage:
    def test_run(self, app_config, normalized_frame):
        result = DeriveStage(app_config).run(frame=normalized_frame)
        assert {"team1", "score1", "team2", "score2", "spread", "category", "overtime"} <= set(
            result.frame.columns
        )
        assert result.run.status == "success"
        assert result.run.pipeline_stage == "derive"

    def test_failure_propagates(self, app_config):
        bad = pd.DataFrame({"result": ["not a result"]})
        with pytest.raises(ResultParseError):
            DeriveStage(app_config).run(frame=bad)
