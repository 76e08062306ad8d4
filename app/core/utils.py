import re
import secrets
import string
import unicodedata
from datetime import datetime, timezone

# ASCII digits only; \d would also accept other scripts' digits
PHONE_REGEX = r"^\+?[1-9][0-9]{9,14}$"

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def is_valid_phone(phone: str) -> bool:
    return bool(re.fullmatch(PHONE_REGEX, phone or ""))

def generate_verification_code() -> str:
    # uniform over 100000..999999
    return str(100000 + secrets.randbelow(900000))

def slugify(value: str) -> str:
    # Fold accents to ASCII and lowercase
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = value.lower()
    # Remove special characters
    slug = re.sub(r'[^a-z0-9\s_-]', '', slug)
    # Collapse spaces, underscores and repeated hyphens
    slug = re.sub(r'[\s_-]+', '-', slug)
    return slug.strip('-')

def generate_slug(name: str) -> str:
    slug = slugify(name)
    # Add random suffix to ensure uniqueness
    suffix = ''.join(secrets.choice(string.digits) for i in range(4))
    return f"{slug}-{suffix}" if slug else suffix
