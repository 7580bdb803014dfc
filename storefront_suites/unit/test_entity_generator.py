import re
from datetime import date

import pytest

from storefront_tools.data_generator import (
    ContactMessage,
    PaymentCard,
    User,
    generate_contact_form,
    generate_credit_card,
    generate_date,
    generate_email,
    generate_password,
    generate_product,
    generate_random_number,
    generate_random_string,
    generate_user,
)
from storefront_tools.data_generator.entity_generator import (
    MIN_PASSWORD_LENGTH,
    SUPPORTED_COUNTRIES,
)


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@pytest.mark.parametrize("length", [0, 1, 10, 64])
def test_random_string_length_and_charset(length):
    value = generate_random_string(length)
    assert len(value) == length
    assert value.isalnum() or value == ""


def test_random_string_rejects_negative_length():
    with pytest.raises(ValueError):
        generate_random_string(-1)


def test_random_number_bounds():
    values = {generate_random_number(3, 5) for _ in range(200)}
    assert values <= {3, 4, 5}
    assert generate_random_number(7, 7) == 7


def test_random_number_rejects_inverted_range():
    with pytest.raises(ValueError):
        generate_random_number(10, 1)


def test_generated_date_is_in_the_future():
    value = generate_date()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", value)
    assert date.fromisoformat(value) > date.today()


def test_emails_are_valid_and_distinct():
    emails = [generate_email() for _ in range(50)]
    assert all(EMAIL_PATTERN.match(email) for email in emails)
    assert len(set(emails)) == len(emails)


@pytest.mark.parametrize("requested", [4, MIN_PASSWORD_LENGTH, 20])
def test_password_minimum_length(requested):
    assert len(generate_password(requested)) >= MIN_PASSWORD_LENGTH


def test_generate_user():
    user = generate_user()

    assert isinstance(user, User)
    assert EMAIL_PATTERN.match(user.email)
    assert len(user.password) >= MIN_PASSWORD_LENGTH
    assert user.country in SUPPORTED_COUNTRIES
    assert user.mobile_number.isdigit()
    assert user.name == f"{user.first_name} {user.last_name}"
    assert generate_user().email != user.email


def test_account_payload_carries_user_fields():
    user = generate_user()
    payload = user.to_account_payload(title="Mrs", birth_year="1985")

    assert payload["email"] == user.email
    assert payload["password"] == user.password
    assert payload["firstname"] == user.first_name
    assert payload["lastname"] == user.last_name
    assert payload["title"] == "Mrs"
    assert payload["birth_year"] == "1985"
    assert all(isinstance(value, str) for value in payload.values())


def test_contact_form_fields_are_non_empty():
    contact = generate_contact_form()
    assert isinstance(contact, ContactMessage)
    assert all(contact.to_dict().values())
    assert EMAIL_PATTERN.match(contact.email)


def test_credit_card_expires_in_the_future():
    card = generate_credit_card()
    assert isinstance(card, PaymentCard)
    assert card.card_number.isdigit()
    assert card.cvc.isdigit()
    assert 1 <= int(card.expiry_month) <= 12
    assert int(card.expiry_year) > date.today().year


def test_generate_product():
    product = generate_product()
    assert product.name
    assert " > " in product.category
    assert re.fullmatch(r"Rs\. \d+", product.price)
    assert product.to_dict()["description"] == product.description
