"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAY_KEY_PATTERN = r"[0-9]{2}"
MONTH_KEY_FORMAT = "%Y-%m"

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_LIST_LIMIT = 200
DEFAULT_PENDING_LIMIT = 500
DEFAULT_NOTIFICATION_LIMIT = 50

FIRST_REVISION = 1

PRAYER_IDS = ("subuh", "dzuhur", "ashar", "maghrib", "isya")
PRAYER_NAMES = {
    "subuh": "Subuh",
    "dzuhur": "Dzuhur",
    "ashar": "Ashar",
    "maghrib": "Maghrib",
    "isya": "Isya",
}

TADARUS_CATEGORIES = ("BBQ", "UMUM", "TADARUS", "KIE", "DOA BERSAMA", "KAJIAN SELASA", "PERSYARIKATAN")

PERIOD_CLOSED_MESSAGE = "Periode pelaporan telah ditutup untuk tanggal ini."
