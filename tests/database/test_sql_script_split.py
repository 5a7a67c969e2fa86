from __future__ import annotations

from src.workforce_hub.workforce_hub.database.bootstrap import iter_sql_statements


def test_splits_on_semicolons_outside_quotes():
    sql = """
    CREATE TABLE `a;b` (id INT);
    INSERT INTO activities (name) VALUES ('Safety; Day'), ("it\\'s; fine");
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 3
    assert statements[0] == "CREATE TABLE `a;b` (id INT)"
    assert "'Safety; Day'" in statements[1]
    assert statements[2] == "SELECT 1"


def test_blank_statements_are_skipped():
    assert list(iter_sql_statements(" ; ;\n")) == []
