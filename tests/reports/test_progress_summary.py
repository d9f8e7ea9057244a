from __future__ import annotations

from mutabaah_portal.catalog.model import ActivityDefinition
from mutabaah_portal.catalog.registry import get_activity
from mutabaah_portal.core.enums import ActivityCategory
from mutabaah_portal.reports.summary import ProgressSummaryService, StandardSummaryCalculator
from tests.fakes import build_test_container


def test_standard_calculator_counts_any_prayer_for_prayer_activity():
    calc = StandardSummaryCalculator()
    day_map = {"01": {"subuh": True, "isya": True}, "02": {"shalat_berjamaah": True}, "03": {"jujur": True}}

    assert calc.credited_days(day_map, get_activity("shalat_berjamaah")) == 2
    assert calc.credited_days(day_map, get_activity("jujur")) == 1


def test_summarize_caps_percent_and_flags_met():
    catalog = [
        ActivityDefinition("kajian_selasa", ActivityCategory.FATONAH, "Kajian Selasa", 2),
        ActivityDefinition("infaq", ActivityCategory.SIDIQ, "Infaq", 1),
        ActivityDefinition("bonus", ActivityCategory.SIDIQ, "Tanpa target", 0),
    ]
    day_map = {"05": {"kajian_selasa": True}, "12": {"kajian_selasa": True}, "19": {"kajian_selasa": True}}

    summary = ProgressSummaryService().summarize(day_map, catalog)
    rows = {r["activity_id"]: r for r in summary["activities"]}

    assert rows["kajian_selasa"]["percent"] == 100
    assert rows["kajian_selasa"]["met"] is True
    assert rows["infaq"]["percent"] == 0
    assert rows["infaq"]["met"] is False
    assert rows["bonus"]["met"] is True
    assert summary["overall_percent"] == 67
    assert summary["met_count"] == 2


def test_summarize_month_reads_the_ledger():
    container = build_test_container()
    container.ledger_repo.save_month("E1", "2024-03", {"01": {"infaq": True}})

    summary = container.summary_service.summarize_month(employee_id="E1", month_key="2024-03")

    assert summary["month_key"] == "2024-03"
    infaq = next(r for r in summary["activities"] if r["activity_id"] == "infaq")
    assert infaq["credited_days"] == 1
    assert infaq["met"] is True
