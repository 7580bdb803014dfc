"""
================================================================================
Storefront Entity Generator
================================================================================

Faker-backed generation of realistic synthetic entities for UI and API tests.

Every call returns a freshly randomized value. The Faker instance is never
seeded, so runs are not reproducible; the server stays the only judge of
whether a generated value is accepted.

Entities:
- User: signup/account data (also renders the /createAccount payload)
- ContactMessage: contact-us form payload
- PaymentCard: card details with an expiry in the future
- Product: catalog-like product record

================================================================================
"""

import string
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict

from faker import Faker
from loguru import logger


_faker = Faker("en_US")

MIN_PASSWORD_LENGTH = 12
ALPHANUMERIC = string.ascii_letters + string.digits

# Countries offered by the storefront signup form
SUPPORTED_COUNTRIES = [
    "India",
    "United States",
    "Canada",
    "Australia",
    "Israel",
    "New Zealand",
    "Singapore",
]

PRODUCT_CATEGORIES = ["Women", "Men", "Kids"]
PRODUCT_TYPES = ["Dress", "Top", "Tshirt", "Jeans", "Saree", "Blouse"]


# ================================================================================
# Entity Models
# ================================================================================

@dataclass(frozen=True)
class User:
    """Registrable storefront user."""
    first_name: str
    last_name: str
    email: str
    password: str
    company: str
    address1: str
    address2: str
    city: str
    state: str
    zipcode: str
    country: str
    mobile_number: str

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_account_payload(
        self,
        title: str = "Mr",
        birth_date: str = "1",
        birth_month: str = "January",
        birth_year: str = "1990",
    ) -> Dict[str, str]:
        """Render the form fields expected by POST /createAccount."""
        return {
            "name": self.first_name,
            "email": self.email,
            "password": self.password,
            "title": title,
            "birth_date": birth_date,
            "birth_month": birth_month,
            "birth_year": birth_year,
            "firstname": self.first_name,
            "lastname": self.last_name,
            "company": self.company,
            "address1": self.address1,
            "address2": self.address2,
            "country": self.country,
            "zipcode": self.zipcode,
            "state": self.state,
            "city": self.city,
            "mobile_number": self.mobile_number,
        }


@dataclass(frozen=True)
class ContactMessage:
    """Contact-us form payload."""
    name: str
    email: str
    subject: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PaymentCard:
    """Payment card details; expiry is always after the generation date."""
    name_on_card: str
    card_number: str
    cvc: str
    expiry_month: str
    expiry_year: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Product:
    """Catalog-like product record."""
    name: str
    category: str
    price: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ================================================================================
# Generic Helpers
# ================================================================================

def generate_random_string(length: int = 10) -> str:
    """Random alphanumeric string of exactly `length` characters."""
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return _faker.lexify("?" * length, letters=ALPHANUMERIC)


def generate_random_number(min_value: int = 1, max_value: int = 100) -> int:
    """Random integer in the inclusive range [min_value, max_value]."""
    if min_value > max_value:
        raise ValueError(f"min_value ({min_value}) is greater than max_value ({max_value})")
    return _faker.random_int(min=min_value, max=max_value)


def generate_date() -> str:
    """ISO calendar date (YYYY-MM-DD) strictly after today."""
    return _faker.date_between(start_date="+1d", end_date="+1y").isoformat()


def generate_email() -> str:
    """Syntactically valid address, salted to avoid colliding with real accounts."""
    local_part = f"{_faker.user_name()}.{generate_random_string(6).lower()}"
    return f"{local_part}@{_faker.free_email_domain()}"


def generate_password(length: int = MIN_PASSWORD_LENGTH) -> str:
    """Mixed-character password, never shorter than MIN_PASSWORD_LENGTH."""
    return _faker.password(
        length=max(length, MIN_PASSWORD_LENGTH),
        special_chars=True,
        digits=True,
        upper_case=True,
        lower_case=True,
    )


# ================================================================================
# Entity Generators
# ================================================================================

def generate_user() -> User:
    """Generate a registrable user with a unique email."""
    user = User(
        first_name=_faker.first_name(),
        last_name=_faker.last_name(),
        email=generate_email(),
        password=generate_password(),
        company=_faker.company(),
        address1=_faker.street_address(),
        address2=_faker.secondary_address(),
        city=_faker.city(),
        state=_faker.state(),
        zipcode=_faker.zipcode(),
        country=_faker.random_element(SUPPORTED_COUNTRIES),
        mobile_number=_faker.numerify("##########"),
    )
    logger.debug(f"Generated user: {user.email}")
    return user


def generate_contact_form() -> ContactMessage:
    """Generate a contact message; every field is non-empty."""
    return ContactMessage(
        name=_faker.name(),
        email=generate_email(),
        subject=_faker.sentence(nb_words=6),
        message="\n".join(_faker.paragraphs(nb=2)),
    )


def generate_credit_card() -> PaymentCard:
    """Generate card details whose expiry year is after the current year."""
    expiry_year = date.today().year + _faker.random_int(min=1, max=5)
    return PaymentCard(
        name_on_card=_faker.name(),
        card_number=_faker.credit_card_number(),
        cvc=_faker.credit_card_security_code(),
        expiry_month=f"{_faker.random_int(min=1, max=12):02d}",
        expiry_year=str(expiry_year),
    )


def generate_product() -> Product:
    """Generate a product resembling the storefront catalog."""
    category = _faker.random_element(PRODUCT_CATEGORIES)
    product_type = _faker.random_element(PRODUCT_TYPES)
    return Product(
        name=f"{_faker.color_name()} {_faker.word().title()} {product_type}",
        category=f"{category} > {product_type}",
        price=f"Rs. {_faker.random_int(min=100, max=5000)}",
        description=_faker.sentence(nb_words=12),
    )


__all__ = [
    "User",
    "ContactMessage",
    "PaymentCard",
    "Product",
    "MIN_PASSWORD_LENGTH",
    "SUPPORTED_COUNTRIES",
    "generate_random_string",
    "generate_random_number",
    "generate_date",
    "generate_email",
    "generate_password",
    "generate_user",
    "generate_contact_form",
    "generate_credit_card",
    "generate_product",
]
