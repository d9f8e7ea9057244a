"""Activity catalog.

Catalog evolution is additive-only: past submissions reference target values by
activity id, so an existing entry is never overwritten or dropped unless its id
is explicitly deprecated.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import ActivityCategory, AutomationTrigger
from .model import ActivityDefinition

DEPRECATED_ACTIVITY_IDS = frozenset({"5s", "penampilan"})

DEFAULT_ACTIVITIES: tuple[ActivityDefinition, ...] = (
    # SIDIQ (Integritas)
    ActivityDefinition("infaq", ActivityCategory.SIDIQ, "Gemar berinfaq", 1, AutomationTrigger.MANUAL_USER_REPORT),
    ActivityDefinition(
        "jujur", ActivityCategory.SIDIQ, "Jujur menyampaikan informasi", 4, AutomationTrigger.MANUAL_USER_REPORT
    ),
    ActivityDefinition(
        "tanggung_jawab",
        ActivityCategory.SIDIQ,
        "Tanggung jawab terhadap pekerjaan",
        1,
        AutomationTrigger.MANUAL_USER_REPORT,
    ),
    # TABLIGH (Teamwork)
    ActivityDefinition(
        "persyarikatan",
        ActivityCategory.TABLIGH,
        "Aktif dalam kegiatan persyarikatan",
        1,
        AutomationTrigger.TEAM_ATTENDANCE,
        "Pengajian Persyarikatan",
    ),
    ActivityDefinition(
        "doa_bersama",
        ActivityCategory.TABLIGH,
        "Doa bersama mengawali pekerjaan",
        20,
        AutomationTrigger.TEAM_ATTENDANCE,
        "Doa Bersama",
    ),
    ActivityDefinition(
        "lima_s",
        ActivityCategory.TABLIGH,
        "5S (Salam, Senyum, Sapa, Sopan, Santun)",
        20,
        AutomationTrigger.MANUAL_USER_REPORT,
    ),
    # AMANAH (Disiplin)
    ActivityDefinition(
        "shalat_berjamaah",
        ActivityCategory.AMANAH,
        "Sholat lima waktu berjamaah",
        20,
        AutomationTrigger.PRAYER_WAJIB,
    ),
    ActivityDefinition(
        "penampilan_diri", ActivityCategory.AMANAH, "Menjaga penampilan diri", 20, AutomationTrigger.MANUAL_USER_REPORT
    ),
    ActivityDefinition(
        "tepat_waktu_kie",
        ActivityCategory.AMANAH,
        "Tepat waktu menghadiri KIE",
        1,
        AutomationTrigger.TEAM_ATTENDANCE,
        "KIE",
    ),
    # FATONAH (Belajar)
    ActivityDefinition(
        "tadarus", ActivityCategory.FATONAH, "RSIJ bertadarus (berkelompok)", 3, AutomationTrigger.TADARUS_SESSION
    ),
    ActivityDefinition(
        "kajian_selasa",
        ActivityCategory.FATONAH,
        "Kajian Selasa",
        2,
        AutomationTrigger.TEAM_ATTENDANCE,
        "Kajian Selasa",
    ),
    ActivityDefinition(
        "baca_alquran_buku",
        ActivityCategory.FATONAH,
        "Membaca Al-Quran dan buku",
        20,
        AutomationTrigger.BOOK_READING_REPORT,
    ),
)


def list_activities() -> tuple[ActivityDefinition, ...]:
    return DEFAULT_ACTIVITIES


def get_activity(activity_id: str, catalog: Optional[Sequence[ActivityDefinition]] = None) -> Optional[ActivityDefinition]:
    for activity in catalog if catalog is not None else DEFAULT_ACTIVITIES:
        if activity.id == activity_id:
            return activity
    return None


def activities_for_trigger(
    trigger: AutomationTrigger, catalog: Optional[Sequence[ActivityDefinition]] = None
) -> list[ActivityDefinition]:
    return [a for a in (catalog if catalog is not None else DEFAULT_ACTIVITIES) if a.automation_trigger == trigger]


def merge_catalog(
    existing: Iterable[ActivityDefinition],
    incoming: Iterable[ActivityDefinition],
    *,
    deprecated_ids: Iterable[str] = DEPRECATED_ACTIVITY_IDS,
) -> list[ActivityDefinition]:
    """Add incoming entries whose id is new; existing entries always win."""

    deprecated = set(deprecated_ids)
    merged: list[ActivityDefinition] = []
    seen: set[str] = set()

    for activity in list(existing) + list(incoming):
        if activity.id in deprecated or activity.id in seen:
            continue
        seen.add(activity.id)
        merged.append(activity)

    return merged
