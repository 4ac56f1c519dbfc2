import os

import pytest
from sqlalchemy.orm import Session

from waitlist import cli
from waitlist.core.database import setup_database
from waitlist.models import WaitlistEntry


@pytest.fixture
def seeded_db(db_path):
    engine = setup_database(db_path)
    with Session(engine) as session:
        session.add(WaitlistEntry(email="cli@example.com"))
        session.commit()
    engine.dispose()
    return db_path


@pytest.fixture
def served(monkeypatch):
    """Replace uvicorn.run and record what would have been served."""
    calls = []

    def fake_run(app, host, port, log_level):
        calls.append({"app": app, "host": host, "port": port})
        app.state.engine.dispose()

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    return calls


def test_list_prints_entries(seeded_db, capsys):
    assert cli.main(["list", "-f", seeded_db]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].split() == ["ID", "Email", "Created", "At"]
    assert "cli@example.com" in out


def test_list_honeypot_flag(seeded_db, capsys):
    assert cli.main(["list", "-f", seeded_db, "--honeypot"]) == 0
    out = capsys.readouterr().out
    assert "Trap Value" in out
    assert "(no honeypot entries)" in out
    assert "cli@example.com" not in out


def test_list_uses_database_path_env(seeded_db, monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_PATH", seeded_db)
    assert cli.main(["list"]) == 0
    assert "cli@example.com" in capsys.readouterr().out


def test_list_missing_database_fails(tmp_path, caplog):
    assert cli.main(["list", "-f", str(tmp_path / "absent.db")]) == 1
    assert "list failed" in caplog.text


def test_no_command_prints_usage(capsys):
    assert cli.main([]) == 1
    assert "usage:" in capsys.readouterr().err


def test_unknown_command_exits_nonzero(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["bogus"])
    assert exc.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_help_lists_commands(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    for command in ("serve", "list", "demo"):
        assert command in out


def test_serve_uses_port_env(db_path, served, monkeypatch):
    monkeypatch.setenv("PORT", "9001")
    assert cli.main(["serve", "-f", db_path]) == 0
    assert served[0]["port"] == 9001
    assert served[0]["app"].state.database_path == db_path
    assert os.path.exists(db_path)


def test_serve_default_port(db_path, served, monkeypatch):
    monkeypatch.setenv("PORT", "")
    assert cli.main(["serve", "-f", db_path]) == 0
    assert served[0]["port"] == 8080


def test_serve_database_setup_failure(tmp_path, served, caplog):
    assert cli.main(["serve", "-f", str(tmp_path / "no-such-dir" / "w.db")]) == 1
    assert served == []
    assert "database setup failed" in caplog.text


def test_demo_creates_fresh_database(tmp_path, served):
    demo_dir = tmp_path / "demo"
    assert cli.main(["demo", "-dir", str(demo_dir)]) == 0
    created = list(demo_dir.iterdir())
    assert len(created) == 1
    assert created[0].name.startswith("waitlist-demo-")
    assert created[0].suffix == ".db"
    assert served[0]["app"].state.database_path == str(created[0])


def test_create_demo_database_unique_names(tmp_path):
    first = cli.create_demo_database(str(tmp_path))
    second = cli.create_demo_database(str(tmp_path))
    assert first != second
    assert os.path.getsize(first) == 0
