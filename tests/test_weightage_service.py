"""Tests for chapter weightage allocation."""

import random

import pytest

from cfa_admin.models.chapter import Chapter
from cfa_admin.services.weightage_service import (
    estimated_questions,
    initialize_plan,
    plan_from_dict,
    plan_summary,
    plan_to_dict,
    set_total_questions,
    set_weight,
    toggle_enabled,
    total_weight,
    validate_plan,
    weightage_payload,
)


def _chapters(n):
    return [(f"Chapter {i + 1}", f"1-1-{i + 1}") for i in range(n)]


def _weights(plan):
    return [c.weight for c in plan.chapters]


# ─── INITIALIZE ───────────────────────────────────────────────────────────────

class TestInitialize:
    def test_sums_to_100_for_any_chapter_count(self):
        for n in range(1, 101):
            plan = initialize_plan(_chapters(n), 50)
            assert total_weight(plan) == 100, f"n={n}"
            assert validate_plan(plan)

    def test_base_share_with_remainder_on_last(self):
        for n in range(1, 101):
            weights = _weights(initialize_plan(_chapters(n), 50))
            base = 100 // n
            assert weights[:-1] == [base] * (n - 1)
            assert weights[-1] == 100 - base * (n - 1)

    def test_four_chapters_even_split(self):
        plan = initialize_plan(_chapters(4), 100)
        assert _weights(plan) == [25, 25, 25, 25]
        assert [estimated_questions(c, 100) for c in plan.chapters] == [25, 25, 25, 25]

    def test_three_chapters_remainder_to_last(self):
        plan = initialize_plan(_chapters(3), 50)
        assert _weights(plan) == [33, 33, 34]

    def test_all_chapters_start_enabled(self):
        plan = initialize_plan(_chapters(6), 50)
        assert all(c.enabled for c in plan.chapters)

    def test_keeps_order_names_and_codes(self):
        plan = initialize_plan([("Rates and Returns", "1-5-1"), ("Probability Trees", "1-5-4")], 20,
                               level="Level I", subject="Quantitative Methods")
        assert [(c.name, c.code) for c in plan.chapters] == [
            ("Rates and Returns", "1-5-1"),
            ("Probability Trees", "1-5-4"),
        ]
        assert plan.level == "Level I"
        assert plan.subject == "Quantitative Methods"
        assert plan.total_questions == 20

    def test_no_chapters_gives_empty_plan(self):
        plan = initialize_plan([], 50)
        assert plan.is_empty
        assert total_weight(plan) == 0
        assert not validate_plan(plan)

    def test_negative_total_questions_rejected(self):
        with pytest.raises(ValueError):
            initialize_plan(_chapters(3), -1)


# ─── SET WEIGHT ───────────────────────────────────────────────────────────────

class TestSetWeight:
    def test_overwrites_without_normalizing_others(self):
        plan = initialize_plan(_chapters(4), 100)
        set_weight(plan, 1, 40)
        assert _weights(plan) == [25, 40, 25, 25]
        assert total_weight(plan) == 115
        assert not validate_plan(plan)

    def test_back_to_100_is_valid(self):
        plan = initialize_plan(_chapters(4), 100)
        set_weight(plan, 0, 40)
        set_weight(plan, 1, 10)
        assert total_weight(plan) == 100
        assert validate_plan(plan)

    def test_bounds_accepted(self):
        plan = initialize_plan(_chapters(2), 10)
        set_weight(plan, 0, 0)
        set_weight(plan, 1, 100)
        assert _weights(plan) == [0, 100]

    @pytest.mark.parametrize("weight", [-1, 101, 250])
    def test_out_of_range_weight_rejected(self, weight):
        plan = initialize_plan(_chapters(2), 10)
        with pytest.raises(ValueError):
            set_weight(plan, 0, weight)
        assert _weights(plan) == [50, 50]

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_out_of_range_index_rejected(self, index):
        plan = initialize_plan(_chapters(3), 10)
        with pytest.raises(ValueError):
            set_weight(plan, index, 10)

    def test_disabled_chapter_weight_not_counted(self):
        plan = initialize_plan(_chapters(2), 10)
        toggle_enabled(plan, 0)
        set_weight(plan, 0, 30)
        assert total_weight(plan) == 100


# ─── TOGGLE ───────────────────────────────────────────────────────────────────

class TestToggleEnabled:
    def test_disable_follows_floor_redistribution_rule(self):
        """Every chapter of every plan size: remaining chapters gain floor(w/k)."""
        for n in range(2, 13):
            for index in range(n):
                plan = initialize_plan(_chapters(n), 50)
                before = _weights(plan)
                w = before[index]
                k = n - 1

                toggle_enabled(plan, index)

                after = _weights(plan)
                assert after[index] == 0
                assert not plan.chapters[index].enabled
                for j in range(n):
                    if j != index:
                        assert after[j] == before[j] + w // k
                assert total_weight(plan) == 100 - (w % k)

    def test_rule_holds_after_prior_edits(self):
        plan = initialize_plan(_chapters(5), 50)
        set_weight(plan, 0, 35)
        toggle_enabled(plan, 4)     # 20 over 4 chapters
        assert _weights(plan) == [40, 25, 25, 25, 0]

        before_total = total_weight(plan)
        toggle_enabled(plan, 0)     # 40 over 3 chapters, 1 lost
        assert _weights(plan) == [0, 38, 38, 38, 0]
        assert total_weight(plan) == before_total - 40 % 3

    def test_three_chapter_scenario(self):
        plan = initialize_plan(_chapters(3), 50)
        toggle_enabled(plan, 2)
        assert _weights(plan) == [50, 50, 0]
        assert validate_plan(plan)

    def test_remainder_is_lost(self):
        plan = initialize_plan(_chapters(4), 40)
        toggle_enabled(plan, 0)
        # 25 over 3 chapters: +8 each, 1 lost
        assert _weights(plan) == [0, 33, 33, 33]
        assert total_weight(plan) == 99
        assert not validate_plan(plan)

    def test_disabling_last_enabled_chapter(self):
        plan = initialize_plan(_chapters(2), 10)
        toggle_enabled(plan, 0)
        assert _weights(plan) == [0, 100]

        toggle_enabled(plan, 1)
        # nothing to hand the weight to: it stays put but no longer counts
        assert _weights(plan) == [0, 100]
        assert total_weight(plan) == 0
        assert not validate_plan(plan)

    def test_single_chapter_disable(self):
        plan = initialize_plan(_chapters(1), 10)
        toggle_enabled(plan, 0)
        assert total_weight(plan) == 0

    def test_enable_reclaims_nothing(self):
        """Disabling sheds weight, enabling never takes it back."""
        plan = initialize_plan(_chapters(4), 100)
        toggle_enabled(plan, 3)
        weights_before = _weights(plan)

        toggle_enabled(plan, 3)

        assert plan.chapters[3].enabled
        assert _weights(plan) == weights_before
        assert plan.chapters[3].weight == 0

    def test_re_enabled_chapter_keeps_stale_weight_when_nothing_was_shed(self):
        plan = initialize_plan(_chapters(1), 10)
        toggle_enabled(plan, 0)
        toggle_enabled(plan, 0)
        assert _weights(plan) == [100]
        assert validate_plan(plan)

    def test_out_of_range_index_rejected(self):
        plan = initialize_plan(_chapters(3), 10)
        with pytest.raises(ValueError):
            toggle_enabled(plan, 3)


# ─── ESTIMATED QUESTIONS ──────────────────────────────────────────────────────

class TestEstimatedQuestions:
    def test_disabled_chapter_gets_none(self):
        assert estimated_questions(Chapter("1-1-1", "x", enabled=False, weight=50), 100) == 0

    def test_rounds_half_up(self):
        assert estimated_questions(Chapter("1-1-1", "x", weight=50), 1) == 1
        assert estimated_questions(Chapter("1-1-1", "x", weight=25), 2) == 1
        assert estimated_questions(Chapter("1-1-1", "x", weight=25), 6) == 2   # 1.5
        assert estimated_questions(Chapter("1-1-1", "x", weight=33), 50) == 17  # 16.5
        assert estimated_questions(Chapter("1-1-1", "x", weight=34), 50) == 17

    def test_monotonic_in_weight(self):
        for total in (0, 1, 7, 50, 99, 200):
            previous = -1
            for weight in range(0, 101):
                estimate = estimated_questions(Chapter("1-1-1", "x", weight=weight), total)
                assert estimate >= previous, f"total={total} weight={weight}"
                previous = estimate

    def test_sum_need_not_match_total(self):
        plan = initialize_plan(_chapters(3), 50)
        estimates = [estimated_questions(c, 50) for c in plan.chapters]
        assert estimates == [17, 17, 17]
        assert sum(estimates) == 51


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

class TestValidate:
    def test_valid_iff_total_is_100_under_random_edits(self):
        rng = random.Random(20240601)
        for _ in range(50):
            plan = initialize_plan(_chapters(rng.randint(1, 12)), 50)
            for _ in range(30):
                index = rng.randrange(len(plan.chapters))
                if rng.random() < 0.5:
                    toggle_enabled(plan, index)
                else:
                    set_weight(plan, index, rng.randint(0, 100))
                assert validate_plan(plan) == (total_weight(plan) == 100)


# ─── PAYLOAD / SUMMARY ────────────────────────────────────────────────────────

class TestPayloadAndSummary:
    def test_payload_only_enabled_chapters_keyed_by_code(self):
        plan = initialize_plan(_chapters(3), 50)
        toggle_enabled(plan, 1)
        assert weightage_payload(plan) == {"1-1-1": 49, "1-1-3": 50}

    def test_summary_valid_plan(self):
        plan = initialize_plan(_chapters(4), 100, level="Level I", subject="Derivatives")
        summary = plan_summary(plan)
        assert summary["totalWeightage"] == 100
        assert summary["isValid"] is True
        assert summary["warning"] is None
        assert summary["chapters"][0] == {
            "index": 0,
            "code": "1-1-1",
            "chapter": "Chapter 1",
            "enabled": True,
            "weightage": 25,
            "estimatedQuestions": 25,
        }

    def test_summary_warns_when_not_100(self):
        plan = initialize_plan(_chapters(4), 100)
        set_weight(plan, 0, 10)
        summary = plan_summary(plan)
        assert summary["isValid"] is False
        assert "Total weightage is 85%" in summary["warning"]

    def test_summary_empty_plan_has_no_warning(self):
        summary = plan_summary(initialize_plan([], 50))
        assert summary["chapters"] == []
        assert summary["warning"] is None

    def test_set_total_questions_changes_estimates(self):
        plan = initialize_plan(_chapters(4), 100)
        set_total_questions(plan, 20)
        assert [row["estimatedQuestions"] for row in plan_summary(plan)["chapters"]] == [5, 5, 5, 5]
        with pytest.raises(ValueError):
            set_total_questions(plan, -5)

    def test_session_dict_restores_edited_plan(self):
        plan = initialize_plan(_chapters(3), 30, level="Level I", subject="Economics")
        toggle_enabled(plan, 0)
        restored = plan_from_dict(plan_to_dict(plan))
        assert restored == plan
