import pytest

from src.extraction import DTRExtractor
from src.postprocessor import PostProcessor


STANDARD_TEXT = (
    "Employee ID: EMP-042\n"
    "Name: Juan Dela Cruz\n"
    "Time In: 8:00am\n"
    "Time Out: 5:00pm\n"
    "01/15/2024"
)

BIOMETRIC_TEXT = "Biometric Log\n8:01am 5:03pm"

NOISE_TEXT = "asdf qwer 12345"


@pytest.fixture
def standard_text() -> str:
    return STANDARD_TEXT


@pytest.fixture
def biometric_text() -> str:
    return BIOMETRIC_TEXT


@pytest.fixture
def noise_text() -> str:
    return NOISE_TEXT


@pytest.fixture
def extractor() -> DTRExtractor:
    return DTRExtractor()


@pytest.fixture
def post_processor() -> PostProcessor:
    return PostProcessor()


@pytest.fixture
def standard_result(extractor):
    return extractor.extract(STANDARD_TEXT, source_file="standard.txt")


@pytest.fixture
def biometric_result(extractor):
    return extractor.extract(BIOMETRIC_TEXT, source_file="biometric.txt")
