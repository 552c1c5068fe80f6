from lunaris_api.models.interest_form import InterestFormPayload
from lunaris_api.models.sponsorship_form import SponsorshipFormPayload


def test_payload_missing_fields_lists_blank_entries():
    payload = InterestFormPayload.model_validate({"firstName": "Ada", "lastName": " ", "email": 42})

    assert payload.email == "42"
    assert payload.missing_fields() == ["last_name", "program"]


def test_payload_ignores_unknown_keys_and_nested_values():
    payload = SponsorshipFormPayload.model_validate(
        {
            "name": "Grace",
            "email": "g@example.com",
            "phoneNumber": ["555"],
            "comment": "Hi",
            "company": "Acme",
        }
    )

    assert payload.phone_number is None
    assert payload.missing_fields() == ["phone_number"]
    assert "company" not in payload.field_values()
