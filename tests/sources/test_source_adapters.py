from __future__ import annotations

from dataclasses import replace
from datetime import date

from mutabaah_portal.core.enums import AttendanceStatus, RequestKind, RequestStatus
from mutabaah_portal.requests.model import MissedPrayerRequest, TadarusRequest
from mutabaah_portal.sources.factory import SourceAdapterFactory
from mutabaah_portal.sources.manual_request_adapter import TadarusRequestAdapter
from mutabaah_portal.sources.model import PrayerCheckIn, ReadingReport, ScheduledActivityAttendance, TeamSessionAttendance
from mutabaah_portal.sources.prayer_adapter import PrayerAttendanceAdapter
from mutabaah_portal.sources.reading_history_adapter import ReadingHistoryAdapter
from mutabaah_portal.sources.scheduled_activity_adapter import ScheduledActivityAdapter
from mutabaah_portal.sources.team_session_adapter import TeamSessionAdapter


def _tadarus(category, status=RequestStatus.APPROVED):
    return TadarusRequest(
        request_id="t1",
        mentee_id="E1",
        mentee_name="Ahmad",
        mentor_id="M1",
        date=date(2024, 3, 7),
        category=category,
        notes=None,
        status=status,
        requested_at=0,
    )


def test_prayer_adapter_uses_record_date_and_prayer_id():
    adapter = PrayerAttendanceAdapter()
    checkin = PrayerCheckIn(employee_id="E1", prayer_id="subuh", date=date(2024, 3, 5))

    assert adapter.to_fragment([checkin]) == {"2024-03": {"05": {"subuh": True}}}


def test_prayer_adapter_skips_absent_and_unapproved():
    adapter = PrayerAttendanceAdapter()
    absent = PrayerCheckIn(employee_id="E1", prayer_id="isya", date=date(2024, 3, 5), status=AttendanceStatus.IZIN)
    pending = MissedPrayerRequest(
        request_id="p1",
        mentee_id="E1",
        mentee_name="Ahmad",
        mentor_id="M1",
        date=date(2024, 3, 2),
        prayer_id="ashar",
        prayer_name="Ashar",
        reason="rapat",
        status=RequestStatus.PENDING,
        requested_at=0,
    )
    approved = replace(pending, request_id="p2", status=RequestStatus.APPROVED)

    assert adapter.to_fragment([absent, pending, approved]) == {"2024-03": {"02": {"ashar": True}}}


def test_team_session_adapter_is_case_insensitive_and_trims():
    adapter = TeamSessionAdapter()
    records = [
        TeamSessionAttendance("E1", "  doa BERSAMA ", date(2024, 3, 5)),
        TeamSessionAttendance("E1", "Pengajian Persyarikatan", date(2024, 3, 6)),
        TeamSessionAttendance("E1", "BBQ", date(2024, 3, 7)),
        TeamSessionAttendance("E1", "Membaca Al-Quran dan Buku", date(2024, 3, 8)),
        TeamSessionAttendance("E1", "Senam Pagi", date(2024, 3, 9)),
    ]

    assert adapter.to_fragment(records) == {
        "2024-03": {
            "05": {"doa_bersama": True},
            "06": {"persyarikatan": True},
            "07": {"tadarus": True},
            "08": {"baca_alquran_buku": True},
        }
    }


def test_tadarus_adapter_maps_category_and_defaults_to_tadarus():
    adapter = TadarusRequestAdapter()

    assert adapter.credit_for(_tadarus("KIE")) == (date(2024, 3, 7), "tepat_waktu_kie")
    assert adapter.credit_for(_tadarus("umum")) == (date(2024, 3, 7), "tadarus")
    assert adapter.credit_for(_tadarus("LAINNYA")) == (date(2024, 3, 7), "tadarus")
    assert adapter.credit_for(_tadarus("KIE", RequestStatus.REJECTED)) is None


def test_scheduled_adapter_matches_substrings_in_order():
    adapter = ScheduledActivityAdapter()
    hadir = AttendanceStatus.HADIR

    def credit(name, status=hadir):
        return adapter.credit_for(ScheduledActivityAttendance("E1", name, date(2024, 3, 12), status))

    assert credit("Kajian Selasa Pekan 2") == (date(2024, 3, 12), "kajian_selasa")
    assert credit("Pengajian Persyarikatan Cabang") == (date(2024, 3, 12), "persyarikatan")
    assert credit("KIE Bulanan") == (date(2024, 3, 12), "tepat_waktu_kie")
    assert credit("Doa Bersama Pagi") == (date(2024, 3, 12), "doa_bersama")
    assert credit("Rapat Direksi") is None
    assert credit("Kajian Selasa", AttendanceStatus.TIDAK_HADIR) is None


def test_reading_history_adapter_credits_book_reading_activity():
    adapter = ReadingHistoryAdapter()
    reports = [
        ReadingReport("E1", date(2024, 3, 3), "Al-Baqarah 1-20"),
        ReadingReport("E1", date(2024, 3, 3)),
        ReadingReport("E1", date(2024, 4, 1), "Sirah Nabawiyah"),
    ]

    assert adapter.to_fragment(reports) == {
        "2024-03": {"03": {"baca_alquran_buku": True}},
        "2024-04": {"01": {"baca_alquran_buku": True}},
    }


def test_reading_history_adapter_credits_nothing_without_catalog_match():
    adapter = ReadingHistoryAdapter(catalog=())

    assert adapter.to_fragment([ReadingReport("E1", date(2024, 3, 3))]) == {}


def test_rerunning_adapters_is_idempotent():
    adapter = TeamSessionAdapter()
    records = [TeamSessionAttendance("E1", "KIE", date(2024, 3, 5))]

    assert adapter.to_fragment(records + records) == adapter.to_fragment(records)


def test_factory_picks_adapter_by_request_kind():
    factory = SourceAdapterFactory()

    assert isinstance(factory.for_request(RequestKind.TADARUS), TadarusRequestAdapter)
    assert isinstance(factory.for_request(RequestKind.MISSED_PRAYER), PrayerAttendanceAdapter)
