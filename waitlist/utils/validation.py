"""
Validation utilities for waitlist submissions
"""
import email_validator
from email_validator import EmailNotValidError, validate_email

# Syntax only: reserved names such as localhost or *.test are still well-formed addresses
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def is_valid_email(email: str) -> bool:
    """Syntax-only address check; no DNS, deliverability or reserved-domain policy.

    Quoted local parts and domain literals are accepted, display-name forms
    ("Name <a@b.c>") are not.
    """
    if not email:
        return False
    try:
        validate_email(
            email,
            check_deliverability=False,
            globally_deliverable=False,
            allow_quoted_local=True,
            allow_domain_literal=True,
        )
    except EmailNotValidError:
        return False
    return True
