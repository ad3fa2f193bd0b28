from class_attendance.database.bootstrap import SCHEMA_PATH, iter_sql_statements


def test_splitter_skips_comments_and_keeps_quoted_semicolons():
    sql = "-- header\nCREATE TABLE a (x INT);\nINSERT INTO a VALUES ('a;b');\n"

    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (x INT)", "INSERT INTO a VALUES ('a;b')"]


def test_schema_defines_all_tables():
    sql = SCHEMA_PATH.read_text(encoding="utf-8")

    for table in ("users", "classes", "enrollments", "attendance_logs", "notifications_sent"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in sql
