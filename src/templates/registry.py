"""
Company Template Registry Module.

Holds the known company DTR layouts and reads single-day records from
text that matches one of them. Text that matches no layout yields a
low-confidence record flagged for manual review.

Author: HR Systems Team
"""

from typing import Any, Dict, List, Optional, Tuple

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import TemplateError
from src.postprocessor.normalizers import DateNormalizer, TimeNormalizer
from .template import DTRTemplate, ParsedDTR

logger = get_logger(__name__)


UNRECOGNIZED_REMARK = "Unrecognized DTR format. Please review manually."

_TIME = r'(\d{1,2}:\d{2}(?:\s*[AP]M)?)'
_DATE = r'(\d{2}[/\-]\d{2}[/\-]\d{4})'

DEFAULT_TEMPLATES: List[Dict[str, Any]] = [
    {
        'name': "Standard Format",
        'company_id': 1,
        'pattern': (
            r'Employee[:\s]+([^#\n]+)#?(\d+)?.*Date[:\s]+' + _DATE +
            r'.*Time In[:\s]+' + _TIME + r'.*Time Out[:\s]+' + _TIME
        ),
        'rules': {'employee_name': 1, 'employee_id': 2, 'date': 3, 'time_in': 4, 'time_out': 5},
        'example': "Employee: John Smith #12345\nDate: 05/15/2023\nTime In: 8:30 AM\nTime Out: 5:30 PM",
    },
    {
        'name': "Acme Corporation Format",
        'company_id': 2,
        'pattern': (
            r'Name:\s*([^\n]+).*ID:\s*(\d+).*Work Date:\s*' + _DATE +
            r'.*Clock In:\s*' + _TIME + r'.*Clock Out:\s*' + _TIME
        ),
        'rules': {'employee_name': 1, 'employee_id': 2, 'date': 3, 'time_in': 4, 'time_out': 5},
        'example': (
            "ACME CORPORATION\nDTR RECORD\nName: Jane Doe\nID: 54321\n"
            "Work Date: 06/01/2023\nClock In: 09:00 AM\nClock Out: 06:00 PM"
        ),
    },
    {
        'name': "Stark Industries Format",
        'company_id': 3,
        'pattern': (
            r'EMPLOYEE INFO.*?Name:\s*([^\n]+).*?ID:\s*(\d+).*?DATE:\s*' + _DATE +
            r'.*?IN:\s*' + _TIME + r'.*?OUT:\s*' + _TIME + r'.*?OT HRS:\s*(\d+(?:\.\d+)?)'
        ),
        'rules': {
            'employee_name': 1, 'employee_id': 2, 'date': 3,
            'time_in': 4, 'time_out': 5, 'overtime_hours': 6,
        },
        'example': (
            "STARK INDUSTRIES\nEMPLOYEE INFO\nName: Tony Stark\nID: 10001\nDEPT: R&D\n"
            "DATE: 06/15/2023\nIN: 08:00 AM\nOUT: 08:00 PM\nBREAK: 1 HR\nOT HRS: 3.0"
        ),
    },
    {
        'name': "Umbrella Corp Format",
        'company_id': 4,
        'pattern': (
            r'ATTENDANCE.*?Employee:\s*([^\n]+).*?ID Number:\s*(\d+).*?Work Date:\s*' + _DATE +
            r'.*?Start:\s*' + _TIME + r'.*?End:\s*' + _TIME + r'.*?Break:\s*(\d+(?:\.\d+)?)'
        ),
        'rules': {
            'employee_name': 1, 'employee_id': 2, 'date': 3,
            'time_in': 4, 'time_out': 5, 'break_hours': 6,
        },
        'example': (
            "UMBRELLA CORPORATION\nATTENDANCE REPORT\nEmployee: Chris Redfield\n"
            "ID Number: 98765\nDepartment: Security\nWork Date: 07/01/2023\n"
            "Start: 07:00 AM\nEnd: 04:00 PM\nBreak: 1.0\nTotal Hours: 8.0"
        ),
    },
]


class TemplateRegistry:
    """
    Registry of company DTR layouts.

    Templates are tried in registration order. When a company id is
    given, that company's templates are tried first.

    Attributes:
        templates: Registered templates, in order
        matched_confidence: Confidence given to a template read
        unmatched_confidence: Confidence given to unrecognized text
        default_break_hours: Break used when a layout prints none

    Example:
        >>> registry = TemplateRegistry()
        >>> parsed = registry.parse(ocr_text, company_id=2)
        >>> parsed.template_name
        'Acme Corporation Format'
    """

    def __init__(self, include_defaults: Optional[bool] = None) -> None:
        if include_defaults is None:
            include_defaults = get_config("templates.include_defaults", True)

        self.matched_confidence = float(get_config("templates.matched_confidence", 0.8))
        self.unmatched_confidence = float(get_config("templates.unmatched_confidence", 0.2))
        self.default_break_hours = float(get_config("postprocessing.default_break_hours", 1.0))

        self.date_normalizer = DateNormalizer()
        self.time_normalizer = TimeNormalizer()

        self.templates: List[DTRTemplate] = []

        if include_defaults:
            for definition in DEFAULT_TEMPLATES:
                self.register_template(**definition)

        for definition in get_config("templates.custom", []) or []:
            self.register_template(**definition)

        logger.info(f"TemplateRegistry initialized with {len(self.templates)} templates")

    def register_template(
        self,
        name: str,
        company_id: int,
        pattern: str,
        rules: Dict[str, int],
        example: str = ""
    ) -> DTRTemplate:
        """
        Add a new company layout.

        Args:
            name: Layout name.
            company_id: Owning company.
            pattern: Regex source, matched case-insensitively with "."
                     spanning lines.
            rules: Field name -> capture group number.
            example: Sample text for the layout.

        Returns:
            The registered DTRTemplate with its assigned id.

        Raises:
            TemplateError: If the definition is invalid.
        """
        template_id = max((t.template_id for t in self.templates), default=0) + 1
        template = DTRTemplate.build(
            template_id=template_id,
            name=name,
            company_id=company_id,
            pattern=pattern,
            rules=rules,
            example=example
        )
        self.templates.append(template)

        logger.debug(f"Registered template {template_id}: {name} (company {template.company_id})")
        return template

    def list_templates(self) -> List[DTRTemplate]:
        return list(self.templates)

    def get_templates_for_company(self, company_id: int) -> List[DTRTemplate]:
        return [t for t in self.templates if t.company_id == company_id]

    def get_template(self, name: str) -> DTRTemplate:
        for template in self.templates:
            if template.name == name:
                return template
        raise TemplateError(name, "not registered")

    def match(self, text: str, company_id: Optional[int] = None) -> Tuple[Optional[DTRTemplate], Any]:
        """
        Find the first layout matching the text.

        Args:
            text: OCR text.
            company_id: Optional company whose layouts are tried first.

        Returns:
            Tuple of (template, match object), or (None, None).
        """
        for template in self._ordered(company_id):
            found = template.match(text)
            if found:
                logger.debug(f"Text matched template: {template.name}")
                return template, found

        return None, None

    def parse(self, text: str, company_id: Optional[int] = None) -> ParsedDTR:
        """
        Read a single-day record from text using the known layouts.

        Args:
            text: OCR text.
            company_id: Optional company whose layouts are tried first.

        Returns:
            ParsedDTR. Unrecognized text gives a needs-review record with
            only the raw text filled in.
        """
        template, found = self.match(text, company_id)

        if template is None:
            logger.warning("No company template matched the DTR text")
            return ParsedDTR(
                confidence=self.unmatched_confidence,
                needs_review=True,
                remarks=UNRECOGNIZED_REMARK,
                raw_text=text
            )

        values = {
            field_name: found.group(group)
            for field_name, group in template.rules.items()
        }

        parsed = ParsedDTR(
            employee_id=self._clean(values.get('employee_id')),
            employee_name=self._clean(values.get('employee_name')),
            date=self._normalize_date(values.get('date')),
            time_in=self._normalize_time(values.get('time_in')),
            time_out=self._normalize_time(values.get('time_out')),
            break_hours=self._to_hours(values.get('break_hours'), self.default_break_hours),
            overtime_hours=self._to_hours(values.get('overtime_hours'), 0.0),
            company_id=template.company_id,
            dtr_type="Daily",
            template_name=template.name,
            confidence=self.matched_confidence,
            needs_review=False,
            raw_text=text
        )

        logger.info(f"Parsed DTR with template '{template.name}'")
        return parsed

    def _ordered(self, company_id: Optional[int]) -> List[DTRTemplate]:
        if company_id is None:
            return self.templates

        own = self.get_templates_for_company(company_id)
        return own + [t for t in self.templates if t.company_id != company_id]

    @staticmethod
    def _clean(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def _normalize_date(self, value: Optional[str]) -> Optional[str]:
        value = self._clean(value)
        if value is None:
            return None
        return self.date_normalizer.normalize(value) or value

    def _normalize_time(self, value: Optional[str]) -> Optional[str]:
        value = self._clean(value)
        if value is None:
            return None
        return self.time_normalizer.normalize(value) or value

    @staticmethod
    def _to_hours(value: Optional[str], default: float) -> float:
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default
