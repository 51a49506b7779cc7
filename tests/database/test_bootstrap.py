from src.punchboard.punchboard.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use


def test_splitter_keeps_semicolons_inside_quotes():
    sql = """
    INSERT INTO employees (employee_id, name) VALUES ('a', 'Smith; Jr.');
    INSERT INTO employees (employee_id, name) VALUES ("b", 'O\\'Brien');
    SELECT 1
    """

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 3
    assert statements[0].endswith("'Smith; Jr.')")
    assert "O\\'Brien" in statements[1]
    assert statements[2] == "SELECT 1"


def test_splitter_skips_empty_statements():
    assert list(_iter_sql_statements(";;  ;\n")) == []


def test_strip_create_database_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS punchboard_db;\nUSE punchboard_db;\nCREATE TABLE t (id INT);\n"

    stripped = _strip_create_db_and_use(sql)

    assert "CREATE DATABASE" not in stripped
    assert "USE punchboard_db" not in stripped
    assert list(_iter_sql_statements(stripped)) == ["CREATE TABLE t (id INT)"]
