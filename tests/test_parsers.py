"""Pure unit tests for tomcat_log_analyzer.services.parsers — no files required."""
from datetime import datetime

import pytest

from tomcat_log_analyzer.schemas.log_entry import LogLevel, format_timestamp
from tomcat_log_analyzer.services.parsers import iter_entries, parse_line, parse_timestamp


class TestTomcatLine:
    def test_full_parse(self):
        entry = parse_line("10-Jan-2024 10:00:05.500 ERROR [main] com.app.Boot: crash")
        assert entry is not None
        assert entry.timestamp == datetime(2024, 1, 10, 10, 0, 5, 500000)
        assert entry.level == LogLevel.ERROR
        assert entry.thread == "main"
        assert entry.logger == "com.app.Boot"
        assert entry.message == "crash"

    def test_dash_separator(self):
        entry = parse_line("10-Jan-2024 10:00:04.004 SEVERE [http-nio-8080-exec-2] com.app.db.Pool - Connection refused")
        assert entry.level == LogLevel.SEVERE
        assert entry.thread == "http-nio-8080-exec-2"
        assert entry.logger == "com.app.db.Pool"
        assert entry.message == "Connection refused"

    def test_no_separator(self):
        line = (
            "10-Jan-2024 10:00:00.000 INFO [main] "
            "org.apache.catalina.startup.Catalina.start Server startup in [1880] milliseconds"
        )
        entry = parse_line(line)
        assert entry.logger == "org.apache.catalina.startup.Catalina.start"
        assert entry.message == "Server startup in [1880] milliseconds"

    def test_empty_message(self):
        entry = parse_line("10-Jan-2024 10:00:07.250 TRACE [Catalina-utility-1] org.apache.Foo")
        assert entry is not None
        assert entry.logger == "org.apache.Foo"
        assert entry.message == ""

    def test_thread_with_spaces(self):
        entry = parse_line("10-Jan-2024 10:00:00.000 WARNING [pool 1 / worker 2] a.b.C: slow")
        assert entry.thread == "pool 1 / worker 2"
        assert entry.message == "slow"

    def test_trailing_newline_stripped(self):
        entry = parse_line("10-Jan-2024 10:00:00.000 DEBUG [main] a.B: hello\r\n")
        assert entry.message == "hello"

    @pytest.mark.parametrize("level", [lvl.value for lvl in LogLevel])
    def test_every_level(self, level):
        entry = parse_line(f"01-Mar-2024 00:00:00.001 {level} [t] x.Y: m")
        assert entry.level.value == level

    def test_fields_recovered_as_written(self):
        fields = ("29-Feb-2024 23:59:59.999", "WARNING", "exec-7", "org.acme.Service_2", "disk: 91% used - check")
        entry = parse_line("{} {} [{}] {}: {}".format(*fields))
        assert (
            format_timestamp(entry.timestamp), entry.level.value, entry.thread, entry.logger, entry.message
        ) == fields


class TestRejectedLines:
    @pytest.mark.parametrize("line", [
        None,
        "",
        "   ",
        "\n",
        "java.sql.SQLException: Connection refused",
        "\tat com.app.db.Pool.acquire(Pool.java:88)",
        "10-Jan-2024 10:00:00.000 info [main] com.app.Boot: lowercase level",
        "10-Jan-2024 10:00:00.000 WARN [main] com.app.Boot: unknown level",
        "10-Jan-2024 10:00:00.000 INFO main com.app.Boot: thread not bracketed",
        "10-Jan-2024 10:00:00.000 INFO [] com.app.Boot: empty thread",
        "10-Jan-2024 10:00:00 INFO [main] com.app.Boot: no millis",
        "2024-01-10 10:00:00.000 INFO [main] com.app.Boot: iso date",
        "10-Jan-2024 10:00:00.000 INFO [main]",
    ])
    def test_returns_none(self, line):
        assert parse_line(line) is None

    def test_impossible_date(self):
        assert parse_line("31-Feb-2024 10:00:00.000 INFO [main] a.B: x") is None

    def test_unknown_month(self):
        assert parse_line("10-Foo-2024 10:00:00.000 INFO [main] a.B: x") is None

    def test_month_is_case_exact(self):
        assert parse_line("10-JAN-2024 10:00:00.000 INFO [main] a.B: x") is None


class TestTimestamp:
    def test_millisecond_precision(self):
        assert parse_timestamp("05-Dec-2023 07:08:09.042") == datetime(2023, 12, 5, 7, 8, 9, 42000)

    def test_hour_out_of_range(self):
        assert parse_timestamp("05-Dec-2023 24:00:00.000") is None

    def test_format_pads_fields(self):
        assert format_timestamp(datetime(2024, 3, 1, 4, 5, 6, 7000)) == "01-Mar-2024 04:05:06.007"


class TestIterEntries:
    def test_skips_noise(self, sample_log_file):
        with open(sample_log_file, encoding="utf-8") as f:
            entries = list(iter_entries(f))
        assert len(entries) == 9
        assert all(e.message != "java.sql.SQLException: Connection refused" for e in entries)
