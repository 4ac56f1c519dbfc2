import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from waitlist.core.exceptions import DuplicateError, StorageError, ValidationError
from waitlist.models.honeypot_entry import HoneypotEntry
from waitlist.models.waitlist_entry import WaitlistEntry
from waitlist.utils.audit import audit
from waitlist.utils.validation import is_valid_email

logger = logging.getLogger(__name__)

ACCEPTED_MESSAGE = "email accepted for waitlist"
INTERNAL_ERROR_MESSAGE = "internal server error"


def is_unique_violation(error: IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(error.orig)


class WaitlistService:
    """Validate signups and store them, one insert per submission.

    Duplicate detection is left to the table's unique constraint, so
    concurrent submissions of the same address need no locking here.
    """

    def __init__(self, db: Session):
        self.db = db

    def submit(self, email: str, trap_value: str = "") -> str:
        """Store a submission and return the message for the client.

        Raises ValidationError, DuplicateError or StorageError.
        """
        email = (email or "").strip()
        trap_value = (trap_value or "").strip()

        if trap_value:
            # Answer bots exactly like a real signup so they can't tell they were caught
            self.add_honeypot(email, trap_value)
            audit("waitlist.honeypot", email=email)
            return ACCEPTED_MESSAGE

        if not email:
            raise ValidationError("email is required")
        if not is_valid_email(email):
            raise ValidationError("invalid email address")

        self.add_entry(email)
        audit("waitlist.signup", email=email)
        return ACCEPTED_MESSAGE

    def add_entry(self, email: str) -> WaitlistEntry:
        entry = WaitlistEntry(email=email)
        self._insert(entry, "email")
        return entry

    def add_honeypot(self, email: str, trap_value: str) -> HoneypotEntry:
        entry = HoneypotEntry(email=email, trap_value=trap_value)
        self._insert(entry, "honeypot entry")
        return entry

    def _insert(self, entry, label: str) -> None:
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise DuplicateError("email already registered", details=str(e.orig)) from e
            logger.exception("failed to insert %s", label)
            raise StorageError(INTERNAL_ERROR_MESSAGE, details=str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("failed to insert %s", label)
            raise StorageError(INTERNAL_ERROR_MESSAGE, details=str(e)) from e
