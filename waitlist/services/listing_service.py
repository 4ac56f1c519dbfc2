import os
from typing import List, TextIO

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from waitlist.core.database import create_db_engine, init_database, is_plain_file_path
from waitlist.core.exceptions import StorageError
from waitlist.models.honeypot_entry import HoneypotEntry
from waitlist.models.waitlist_entry import WaitlistEntry
from waitlist.utils.table import render_table

WAITLIST_HEADER = ["ID", "Email", "Created At"]
HONEYPOT_HEADER = ["ID", "Email", "Trap Value", "Created At"]


def _format_timestamp(value) -> str:
    return "" if value is None else str(value)


def fetch_rows(session: Session, honeypot: bool = False) -> List[List[str]]:
    """Entries as table cells, oldest first; id breaks ties between equal timestamps."""
    if honeypot:
        stmt = select(HoneypotEntry).order_by(HoneypotEntry.created_at.asc(), HoneypotEntry.id.asc())
        return [
            [str(e.id), e.email, e.trap_value, _format_timestamp(e.created_at)]
            for e in session.scalars(stmt)
        ]
    stmt = select(WaitlistEntry).order_by(WaitlistEntry.created_at.asc(), WaitlistEntry.id.asc())
    return [
        [str(e.id), e.email, _format_timestamp(e.created_at)]
        for e in session.scalars(stmt)
    ]


def render_entries(rows: List[List[str]], honeypot: bool = False) -> str:
    header = HONEYPOT_HEADER if honeypot else WAITLIST_HEADER
    if not rows:
        placeholder = "(no honeypot entries)" if honeypot else "(no entries)"
        rows = [[placeholder] + [""] * (len(header) - 1)]
    return render_table([header] + rows)


def list_entries(db_path: str, out: TextIO, honeypot: bool = False) -> None:
    """Write the waitlist (or the honeypot catches) as an aligned table to out."""
    if is_plain_file_path(db_path) and not os.path.exists(db_path):
        raise FileNotFoundError(f"database file {db_path!r} not found")

    engine: Engine = create_db_engine(db_path)
    try:
        init_database(engine)
        label = "honeypot" if honeypot else "waitlist"
        try:
            with Session(engine) as session:
                rows = fetch_rows(session, honeypot=honeypot)
        except SQLAlchemyError as e:
            raise StorageError(f"query {label} failed", details=str(e)) from e
        out.write(render_entries(rows, honeypot=honeypot))
    finally:
        engine.dispose()
