import pytest

from src.extraction import FormatDetector, FormatType


@pytest.fixture
def detector():
    return FormatDetector()


@pytest.mark.parametrize("text, expected", [
    ("Time In: 8:00\nTime Out: 17:00", FormatType.STANDARD),
    ("TIMEIN 8:00 TIMEOUT 17:00", FormatType.STANDARD),
    ("Clock In 9:00\nClock Out 18:00", FormatType.TIMESHEET),
    ("Arrival 7:55\nDeparture 16:10", FormatType.ATTENDANCE_LOG),
    ("BIOMETRIC LOG\n8:01 17:03", FormatType.BIOMETRIC),
    ("asdf qwer 12345", FormatType.UNKNOWN),
    ("", FormatType.UNKNOWN),
])
def test_detect_known_layouts(detector, text, expected):
    assert detector.detect(text) == expected


def test_standard_wins_over_later_keywords(detector):
    text = "Biometric export\nClock In 9:00\nClock Out 18:00\nTime In 9:00\nTime Out 18:00"
    assert detector.detect(text) == FormatType.STANDARD


def test_keyword_order_matters(detector):
    # "time out" before "time in" does not satisfy the standard rule
    assert detector.detect("Time Out 17:00\nTime In 8:00") == FormatType.UNKNOWN


def test_company_id_does_not_change_result(detector):
    text = "Clock In 9:00\nClock Out 18:00"
    assert detector.detect(text, company_id=4) == detector.detect(text)


def test_format_type_values():
    assert [f.value for f in FormatType] == [
        "standard", "timesheet", "attendance-log", "biometric", "unknown"
    ]


@pytest.mark.parametrize("text, expected", [
    ("Biometric\nArrival 8\nDeparture 5", FormatType.ATTENDANCE_LOG),
    ("Arrival\nClock In 1 Clock Out 2\nDeparture", FormatType.TIMESHEET),
    ("Biometric scan\nClock In 9:00\nClock Out 18:00", FormatType.TIMESHEET),
])
def test_lower_rule_precedence(detector, text, expected):
    assert detector.detect(text) == expected


def test_keywords_are_ascii_only(detector):
    # KELVIN SIGN folds to "k" under unicode case-insensitive matching
    assert detector.detect("ClocK In 9:00\nClocK Out 18:00") == FormatType.UNKNOWN
