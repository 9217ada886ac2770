from services.event_validation import validate_cash_flow_event


def _payload(**overrides):
    payload = {
        "name": "Rent",
        "amount": 1200.0,
        "category": "expense",
        "type": "monthly",
        "start_date": "2025-01-01",
        "monthly_day": 1,
    }
    payload.update(overrides)
    return payload


def test_valid_events_pass():
    assert validate_cash_flow_event(_payload()) == []
    assert validate_cash_flow_event(_payload(type="once", once_date="2025-03-01")) == []
    assert validate_cash_flow_event(_payload(type="yearly", yearly_month=2, yearly_day=29)) == []
    assert validate_cash_flow_event(_payload(end_date="2025-01-01")) == []


def test_required_fields():
    errors = validate_cash_flow_event({})

    assert "Event name must not be empty" in errors
    assert "Amount must be greater than 0" in errors
    assert "Category must be income or expense" in errors
    assert "Recurrence type must be once, monthly or yearly" in errors
    assert "Start date must be a valid YYYY-MM-DD date" in errors


def test_amount_must_be_positive_number():
    assert validate_cash_flow_event(_payload(amount=0)) == ["Amount must be greater than 0"]
    assert validate_cash_flow_event(_payload(amount=-5)) == ["Amount must be greater than 0"]
    assert validate_cash_flow_event(_payload(amount=float("inf"))) == ["Amount must be greater than 0"]
    assert validate_cash_flow_event(_payload(amount="10")) == ["Amount must be greater than 0"]


def test_dates():
    assert validate_cash_flow_event(_payload(start_date="2025-02-30")) == [
        "Start date must be a valid YYYY-MM-DD date"
    ]
    assert validate_cash_flow_event(_payload(end_date="2024-12-31")) == [
        "End date must not be before start date"
    ]
    assert validate_cash_flow_event(_payload(end_date="12/31/2025")) == [
        "End date must be a valid YYYY-MM-DD date"
    ]


def test_kind_specific_fields():
    assert validate_cash_flow_event(_payload(monthly_day=32)) == [
        "Monthly events need a day between 1 and 31"
    ]
    assert validate_cash_flow_event(_payload(type="once")) == ["One-off events need a valid date"]
    assert validate_cash_flow_event(_payload(type="yearly", yearly_month=13, yearly_day=0)) == [
        "Yearly events need a month between 1 and 12",
        "Yearly events need a day between 1 and 31",
    ]
