"""Email address normalisation and structural validation."""

from protean.exceptions import ValidationError

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    """Emails are compared and stored lower-cased, without surrounding blanks."""
    return (email or "").strip().lower()


def validate_email(email: str) -> None:
    """Raise ``ValidationError`` unless ``email`` has a sane ``local@domain`` shape."""
    invalid = ValidationError({"email": [f"Invalid email address: {email!r}"]})

    if not email or any(blank in email for blank in (" ", "\t", "\n")):
        raise invalid

    if email.count("@") != 1:
        raise invalid

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise invalid

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise invalid

    if "." not in domain_part:
        raise invalid

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise invalid

    if ".." in local_part or ".." in domain_part:
        raise invalid

    if any(forbidden in email for forbidden in _FORBIDDEN_CHARACTERS):
        raise invalid
