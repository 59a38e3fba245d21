"""
Unit tests for the local.properties store.
"""

from androidsdkkit.core.properties import (
    HEADER_COMMENT,
    LocalProperties,
    parse_properties,
)


class TestParseProperties:
    """Test Java properties parsing."""

    def test_basic_pairs(self):
        """Test '=', ':' and whitespace separators."""
        content = "a=1\nb: 2\nc 3\n"
        assert parse_properties(content) == {"a": "1", "b": "2", "c": "3"}

    def test_comments_and_blank_lines_ignored(self):
        """Test '#' and '!' comments are skipped."""
        content = "# comment\n! other\n\nkey=value\n"
        assert parse_properties(content) == {"key": "value"}

    def test_last_duplicate_wins(self):
        """Test duplicate keys resolve to the last occurrence."""
        content = "sdk.dir=/old\nsdk.dir=/new\n"
        assert parse_properties(content)["sdk.dir"] == "/new"

    def test_escaped_backslashes(self):
        """Test Windows paths written with doubled separators."""
        content = "sdk.dir=C\\:\\\\Users\\\\me\\\\sdk\n"
        assert parse_properties(content)["sdk.dir"] == "C:\\Users\\me\\sdk"

    def test_line_continuation(self):
        """Test a trailing backslash joins the next line."""
        content = "key=first \\\n    second\n"
        assert parse_properties(content)["key"] == "first second"

    def test_unicode_escape(self):
        """Test \\uXXXX escapes."""
        assert parse_properties("key=caf\\u00e9\n")["key"] == "café"

    def test_crlf_line_endings(self):
        """Test CRLF files parse without stray carriage returns."""
        assert parse_properties("a=1\r\nb=2\r\n") == {"a": "1", "b": "2"}


class TestLocalProperties:
    """Test LocalProperties reads and writes."""

    def test_missing_file(self, tmp_path):
        """Test reading a build root without local.properties."""
        props = LocalProperties(tmp_path)
        assert not props.exists()
        assert props.read() == {}
        assert props.sdk_dir() is None

    def test_write_creates_file_with_header(self, tmp_path):
        """Test first write adds provenance comment and sdk.dir."""
        props = LocalProperties(tmp_path)
        props.write_sdk_dir("/opt/android-sdk")

        content = props.path.read_text()
        assert content == HEADER_COMMENT + "sdk.dir=/opt/android-sdk\n"
        assert props.sdk_dir() == "/opt/android-sdk"

    def test_write_appends_to_existing_file(self, tmp_path):
        """Test existing unrelated lines are preserved."""
        path = tmp_path / "local.properties"
        path.write_text("ndk.dir=/opt/ndk\n")

        LocalProperties(tmp_path).write_sdk_dir("/opt/android-sdk")

        assert path.read_text() == "ndk.dir=/opt/ndk\nsdk.dir=/opt/android-sdk\n"

    def test_write_adds_missing_trailing_newline(self, tmp_path):
        """Test appending to a file without a final newline."""
        path = tmp_path / "local.properties"
        path.write_text("ndk.dir=/opt/ndk")

        LocalProperties(tmp_path).write_sdk_dir("/sdk")

        assert path.read_text() == "ndk.dir=/opt/ndk\nsdk.dir=/sdk\n"

    def test_write_replaces_stale_entries(self, tmp_path):
        """Test rewriting leaves exactly one sdk.dir and keeps other lines."""
        path = tmp_path / "local.properties"
        path.write_text(
            "# keep me\nsdk.dir=/stale\nndk.dir=/opt/ndk\nsdk.dir = /older\n"
        )

        LocalProperties(tmp_path).write_sdk_dir("/fresh")

        lines = path.read_text().splitlines()
        assert [line for line in lines if line.startswith("sdk.dir")] == [
            "sdk.dir=/fresh"
        ]
        assert "# keep me" in lines
        assert "ndk.dir=/opt/ndk" in lines

    def test_write_replaces_continued_entry(self, tmp_path):
        """Test a stale entry spanning several lines is removed whole."""
        path = tmp_path / "local.properties"
        path.write_text("sdk.dir=/very/\\\n  long/path\nother=1\n")

        LocalProperties(tmp_path).write_sdk_dir("/sdk")

        assert path.read_text() == "other=1\nsdk.dir=/sdk\n"

    def test_windows_paths_are_escaped(self, tmp_path):
        """Test separators are doubled and read back intact."""
        props = LocalProperties(tmp_path)
        props.write_sdk_dir("C:\\Users\\me\\.android-sdk")

        assert "sdk.dir=C:\\\\Users\\\\me\\\\.android-sdk\n" in props.path.read_text()
        assert props.sdk_dir() == "C:\\Users\\me\\.android-sdk"

    def test_posix_paths_untouched(self, tmp_path):
        """Test escape_path leaves paths without backslashes alone."""
        props = LocalProperties(tmp_path)
        assert props.escape_path("/Users/me/sdk") == "/Users/me/sdk"

    def test_posix_backslash_survives_round_trip(self, tmp_path):
        """Test a literal backslash in a POSIX path reads back unchanged."""
        props = LocalProperties(tmp_path)
        props.write_sdk_dir("/tmp/a\\b")

        assert "sdk.dir=/tmp/a\\\\b\n" in props.path.read_text()
        assert props.sdk_dir() == "/tmp/a\\b"

    def test_get_other_key(self, tmp_path):
        """Test reading unrelated keys."""
        (tmp_path / "local.properties").write_text("ndk.dir=/opt/ndk\n")
        assert LocalProperties(tmp_path).get("ndk.dir") == "/opt/ndk"
