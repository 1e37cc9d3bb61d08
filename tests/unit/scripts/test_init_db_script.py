"""
Tests for scripts/init_db.py.
"""

from sqlalchemy import create_engine, inspect

from scripts.init_db import main


def test_init_db_creates_table_then_reports_existing(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'fresh.db'}"

    assert main(url) is False
    assert "Created table 'applications'" in capsys.readouterr().out

    assert main(url) is True
    assert "already exists" in capsys.readouterr().out

    engine = create_engine(url)
    columns = {c["name"] for c in inspect(engine).get_columns("applications")}
    engine.dispose()
    assert {
        "id", "full_name", "email", "phone", "gender", "dob", "bio", "resume_path",
        "razorpay_order_id", "razorpay_payment_id", "payment_status", "created_at",
    } <= columns
