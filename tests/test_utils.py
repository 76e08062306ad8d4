import pytest

from app.core.utils import generate_slug, generate_verification_code, is_valid_phone, slugify


def test_verification_code_is_six_digits():
    for _ in range(200):
        code = generate_verification_code()
        assert len(code) == 6
        assert 100000 <= int(code) <= 999999


@pytest.mark.parametrize("phone", ["+14155550123", "14155550123", "+447911123456", "1234567890"])
def test_valid_phones(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize("phone", ["", "+04155550123", "415555", "+1415555012345678", "+1 415 555 0123", "phone", "+1٤١٥٥٥٥٠١٢٣"])
def test_invalid_phones(phone):
    assert not is_valid_phone(phone)


def test_slugify():
    assert slugify("Ball Pythons & Boas") == "ball-pythons-boas"
    assert slugify("  Crested   Geckos ") == "crested-geckos"
    assert slugify("Caméléons") == "cameleons"


def test_generate_slug_adds_suffix():
    slug = generate_slug("Banana Ball Python")
    assert slug.startswith("banana-ball-python-")
    assert slug.rsplit("-", 1)[1].isdigit()
