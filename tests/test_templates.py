import pytest

from src.templates import DEFAULT_TEMPLATES, UNRECOGNIZED_REMARK, TemplateRegistry
from src.utils.exceptions import TemplateError


@pytest.fixture
def registry():
    return TemplateRegistry()


def example_for(name):
    return next(t['example'] for t in DEFAULT_TEMPLATES if t['name'] == name)


def test_default_templates_are_registered(registry):
    templates = registry.list_templates()

    assert [t.template_id for t in templates] == [1, 2, 3, 4]
    assert [t.company_id for t in templates] == [1, 2, 3, 4]


def test_each_example_matches_its_own_template(registry):
    for template in registry.list_templates():
        matched, _ = registry.match(template.example)
        assert matched is template


def test_parse_standard_example(registry):
    parsed = registry.parse(example_for("Standard Format"))

    assert parsed.template_name == "Standard Format"
    assert parsed.employee_name == "John Smith"
    assert parsed.employee_id == "12345"
    assert parsed.date == "2023-05-15"
    assert parsed.time_in == "08:30"
    assert parsed.time_out == "17:30"
    assert parsed.break_hours == 1.0
    assert parsed.overtime_hours == 0.0
    assert parsed.company_id == 1
    assert parsed.dtr_type == "Daily"
    assert parsed.confidence == 0.8
    assert parsed.needs_review is False


def test_parse_acme_example(registry):
    parsed = registry.parse(example_for("Acme Corporation Format"))

    assert parsed.employee_name == "Jane Doe"
    assert parsed.employee_id == "54321"
    assert parsed.date == "2023-06-01"
    assert parsed.time_in == "09:00"
    assert parsed.time_out == "18:00"


def test_parse_stark_example_reads_overtime(registry):
    parsed = registry.parse(example_for("Stark Industries Format"))

    assert parsed.employee_name == "Tony Stark"
    assert parsed.time_out == "20:00"
    assert parsed.overtime_hours == 3.0
    assert parsed.break_hours == 1.0


def test_parse_umbrella_example_reads_break(registry):
    parsed = registry.parse(example_for("Umbrella Corp Format"))

    assert parsed.employee_name == "Chris Redfield"
    assert parsed.employee_id == "98765"
    assert parsed.time_in == "07:00"
    assert parsed.time_out == "16:00"
    assert parsed.break_hours == 1.0
    assert parsed.company_id == 4


def test_unrecognized_text(registry):
    parsed = registry.parse("asdf qwer 12345")

    assert not parsed.is_matched
    assert parsed.confidence == 0.2
    assert parsed.needs_review is True
    assert parsed.remarks == UNRECOGNIZED_REMARK
    assert parsed.raw_text == "asdf qwer 12345"


def test_register_template_assigns_next_id(registry):
    template = registry.register_template(
        name="Wayne Enterprises Format",
        company_id=5,
        pattern=r'Staff:\s*([^\n]+).*Shift Start:\s*(\d{1,2}:\d{2})',
        rules={'employee_name': 1, 'time_in': 2},
        example="Staff: Bruce Wayne\nShift Start: 22:00"
    )

    assert template.template_id == 5
    assert registry.get_templates_for_company(5) == [template]

    parsed = registry.parse(template.example)
    assert parsed.template_name == "Wayne Enterprises Format"
    assert parsed.employee_name == "Bruce Wayne"
    assert parsed.time_in == "22:00"


def test_company_templates_are_tried_first(registry):
    registry.register_template(
        name="Generic Employee Line",
        company_id=9,
        pattern=r'Employee:\s*([^#\n]+)',
        rules={'employee_name': 1}
    )
    text = example_for("Standard Format")

    assert registry.parse(text).template_name == "Standard Format"
    assert registry.parse(text, company_id=9).template_name == "Generic Employee Line"


@pytest.mark.parametrize("pattern, rules", [
    (r'Name:\s*(', {'employee_name': 1}),
    (r'Name:\s*(\w+)', {'employee_name': 2}),
    (r'Name:\s*(\w+)', {'salary': 1}),
])
def test_invalid_templates_are_rejected(registry, pattern, rules):
    with pytest.raises(TemplateError):
        registry.register_template(name="Broken", company_id=7, pattern=pattern, rules=rules)

    assert len(registry.list_templates()) == 4


def test_registry_without_defaults():
    registry = TemplateRegistry(include_defaults=False)
    assert registry.list_templates() == []
    assert registry.parse("Employee: John Smith").needs_review is True


def test_get_template_by_name(registry):
    template = registry.get_template("Acme Corporation Format")
    assert template.company_id == 2

    with pytest.raises(TemplateError):
        registry.get_template("Wayne Enterprises Format")
