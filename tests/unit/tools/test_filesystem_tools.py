"""Unit tests for file_editor.tools.filesystem module.

Test suite covering:
1. read_file argument validation, ranges and line numbering
2. search_file match blocks and context
3. list_files output
4. search_directory recursion, include/exclude filters and warnings
"""

import re

import pytest

from file_editor.tools.filesystem import FileSystemTools, format_match_blocks
from tests.helpers import assert_error_response, assert_message_contains, assert_success_response
from tests.helpers.builders import build_test_settings, write_lines


@pytest.fixture
def fs_tools(default_settings):
    """FileSystemTools with default settings."""
    return FileSystemTools(default_settings)


# ============================================================================
# Test Class: Initialization
# ============================================================================


@pytest.mark.unit
@pytest.mark.tools
class TestFileSystemToolsInitialization:
    """Tests for FileSystemTools initialization."""

    def test_get_tools_returns_four_functions(self, fs_tools):
        """Test get_tools returns all read-only tool functions."""
        tools_list = fs_tools.get_tools()

        assert len(tools_list) == 4
        assert fs_tools.read_file in tools_list
        assert fs_tools.search_file in tools_list
        assert fs_tools.list_files in tools_list
        assert fs_tools.search_directory in tools_list

    def test_tools_have_docstrings(self, fs_tools):
        for tool in fs_tools.get_tools():
            assert tool.__doc__, f"{tool.__name__} has no docstring"


# ============================================================================
# Test Class: read_file
# ============================================================================


@pytest.mark.unit
@pytest.mark.tools
class TestReadFile:
    """Tests for read_file."""

    @pytest.mark.asyncio
    async def test_read_whole_file(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file))

        assert_success_response(response)
        assert response["message"] == "Line 1\nLine 2\nLine 3\nLine 4\nLine 5"
        assert response["result"]["total_lines"] == 5
        assert response["result"]["start_line"] == 1
        assert response["result"]["end_line"] == 5

    @pytest.mark.asyncio
    async def test_full_flag_reads_everything(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file), full=True)

        assert_success_response(response)
        assert response["message"].count("\n") == 4

    @pytest.mark.asyncio
    async def test_show_line_numbers(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file), show_line_numbers=True)

        assert response["message"].split("\n")[0] == "1 | Line 1"
        assert response["message"].split("\n")[-1] == "5 | Line 5"

    @pytest.mark.asyncio
    async def test_line_range_with_numbers(self, fs_tools, forty_line_file):
        response = await fs_tools.read_file(
            str(forty_line_file), show_line_numbers=True, start_line=10, end_line=12
        )

        assert_success_response(response)
        assert response["message"] == (
            "10 | Line 10: content\n11 | Line 11: content\n12 | Line 12: content"
        )
        assert response["result"]["start_line"] == 10
        assert response["result"]["end_line"] == 12
        assert response["result"]["total_lines"] == 40

    @pytest.mark.asyncio
    async def test_empty_file(self, fs_tools, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")

        response = await fs_tools.read_file(str(path))

        assert_success_response(response)
        assert response["message"] == ""

    @pytest.mark.asyncio
    async def test_blank_lines_round_trip(self, fs_tools, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text("\n\n\n")

        response = await fs_tools.read_file(str(path))

        assert response["message"] == "\n\n\n"
        assert response["result"]["total_lines"] == 4

    @pytest.mark.asyncio
    async def test_full_with_range_is_rejected(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(
            str(five_line_file), start_line=1, end_line=2, full=True
        )

        assert_error_response(response, "invalid_arguments")
        assert_message_contains(response, 'Cannot use "full" parameter')

    @pytest.mark.asyncio
    async def test_half_range_is_rejected(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file), start_line=2)

        assert_error_response(response, "invalid_arguments")

    @pytest.mark.asyncio
    async def test_inverted_range_is_rejected(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file), start_line=4, end_line=2)

        assert_error_response(response, "invalid_range")

    @pytest.mark.asyncio
    async def test_arguments_checked_before_path(self, fs_tools):
        response = await fs_tools.read_file("relative.txt", start_line=3, end_line=1)

        assert_error_response(response, "invalid_range")

    @pytest.mark.asyncio
    async def test_start_beyond_end_of_file(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file), start_line=6, end_line=8)

        assert_error_response(response, "line_out_of_range")
        assert response["message"] == "Start line 6 is beyond the file length (5 lines)."

    @pytest.mark.asyncio
    async def test_end_beyond_end_of_file(self, fs_tools, five_line_file):
        response = await fs_tools.read_file(str(five_line_file), start_line=3, end_line=8)

        assert_error_response(response, "line_out_of_range")
        assert response["message"] == "End line 8 is beyond the file length (5 lines)."

    @pytest.mark.asyncio
    async def test_relative_path(self, fs_tools):
        response = await fs_tools.read_file("five.txt")

        assert_error_response(response, "relative_path")

    @pytest.mark.asyncio
    async def test_file_too_large(self, tmp_path):
        tools = FileSystemTools(build_test_settings(max_read_bytes=10))
        path = write_lines(tmp_path / "big.txt", ["x" * 50])

        response = await tools.read_file(str(path))

        assert_error_response(response, "file_too_large")
        assert_message_contains(response, "50 bytes")

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, fs_tools, tmp_path):
        path = tmp_path / "binary.bin"
        path.write_bytes(b"\xff\xfe\x00bad")

        response = await fs_tools.read_file(str(path))

        assert_error_response(response, "file_access_error")
        assert response["message"].startswith(f'Error reading file "{path}":')


# ============================================================================
# Test Class: search_file
# ============================================================================


@pytest.mark.unit
@pytest.mark.tools
class TestSearchFile:
    """Tests for search_file."""

    @pytest.mark.asyncio
    async def test_single_match(self, fs_tools, five_line_file):
        response = await fs_tools.search_file(str(five_line_file), r"Line 3")

        assert_success_response(response)
        assert response["message"] == "Match at line 3:\n> 3 | Line 3"
        assert response["result"]["match_count"] == 1

    @pytest.mark.asyncio
    async def test_context_lines(self, fs_tools, five_line_file):
        response = await fs_tools.search_file(
            str(five_line_file), r"Line 3", lines_before=1, lines_after=1
        )

        assert response["message"] == (
            "Match at line 3:\n  2 | Line 2\n> 3 | Line 3\n  4 | Line 4"
        )

    @pytest.mark.asyncio
    async def test_context_is_clipped_at_file_edges(self, fs_tools, five_line_file):
        response = await fs_tools.search_file(
            str(five_line_file), r"Line [15]", lines_before=3, lines_after=3
        )

        first, second = response["message"].split("\n\n")
        assert first.split("\n")[1] == "> 1 | Line 1"
        assert second.split("\n")[-1] == "> 5 | Line 5"

    @pytest.mark.asyncio
    async def test_no_matches(self, fs_tools, five_line_file):
        response = await fs_tools.search_file(str(five_line_file), r"absent")

        assert_success_response(response)
        assert response["message"] == (
            f'No matches found for pattern "absent" in file "{five_line_file}".'
        )
        assert response["result"]["match_count"] == 0

    @pytest.mark.asyncio
    async def test_invalid_regex(self, fs_tools, five_line_file):
        response = await fs_tools.search_file(str(five_line_file), r"[unclosed")

        assert_error_response(response, "invalid_regex")
        assert_message_contains(response, 'Invalid regular expression "[unclosed"')

    @pytest.mark.asyncio
    async def test_missing_file(self, fs_tools, tmp_path):
        response = await fs_tools.search_file(str(tmp_path / "none.txt"), "x")

        assert_error_response(response, "not_found")


@pytest.mark.unit
@pytest.mark.tools
class TestFormatMatchBlocks:
    """Tests for the match block renderer."""

    def test_one_block_per_matching_line(self):
        blocks = format_match_blocks(["a", "b", "a"], re.compile("a"))
        assert blocks == ["Match at line 1:\n> 1 | a", "Match at line 3:\n> 3 | a"]

    def test_overlapping_context_is_repeated(self):
        blocks = format_match_blocks(["x", "x"], re.compile("x"), lines_after=1)
        assert blocks[0] == "Match at line 1:\n> 1 | x\n  2 | x"
        assert blocks[1] == "Match at line 2:\n> 2 | x"


# ============================================================================
# Test Class: list_files
# ============================================================================


@pytest.mark.unit
@pytest.mark.tools
class TestListFiles:
    """Tests for list_files."""

    @pytest.mark.asyncio
    async def test_lists_files_and_directories(self, fs_tools, sample_tree):
        response = await fs_tools.list_files(str(sample_tree))

        assert_success_response(response)
        lines = response["message"].split("\n")
        assert "[DIR] src" in lines
        assert f"[FILE] app.py ({(sample_tree / 'app.py').stat().st_size} bytes)" in lines
        assert len(lines) == 4

    @pytest.mark.asyncio
    async def test_entries_are_sorted(self, fs_tools, sample_tree):
        response = await fs_tools.list_files(str(sample_tree))

        names = [entry["name"] for entry in response["result"]["entries"]]
        assert names == ["app.py", "data.json", "notes.txt", "src"]

    @pytest.mark.asyncio
    async def test_entry_details(self, fs_tools, sample_tree):
        response = await fs_tools.list_files(str(sample_tree))

        entries = {entry["name"]: entry for entry in response["result"]["entries"]}
        assert entries["src"] == {"name": "src", "type": "directory", "size": None}
        assert entries["data.json"]["size"] == len('{"hello": 1}')

    @pytest.mark.asyncio
    async def test_empty_directory(self, fs_tools, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()

        response = await fs_tools.list_files(str(empty))

        assert_success_response(response)
        assert response["message"] == f'Directory "{empty}" is empty.'

    @pytest.mark.asyncio
    async def test_not_a_directory(self, fs_tools, five_line_file):
        response = await fs_tools.list_files(str(five_line_file))

        assert_error_response(response, "not_a_directory")

    @pytest.mark.asyncio
    async def test_relative_directory(self, fs_tools):
        response = await fs_tools.list_files("tree")

        assert_error_response(response, "relative_path")
        assert_message_contains(response, "directory_path must be an absolute path")


# ============================================================================
# Test Class: search_directory
# ============================================================================


@pytest.mark.unit
@pytest.mark.tools
class TestSearchDirectory:
    """Tests for search_directory."""

    @pytest.mark.asyncio
    async def test_top_level_only_by_default(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(str(sample_tree), "hello")

        assert_success_response(response)
        assert response["message"].startswith("Found 2 match(es) in 2 file(s):\n\n")
        assert response["result"]["files"] == [
            str(sample_tree / "app.py"),
            str(sample_tree / "data.json"),
        ]

    @pytest.mark.asyncio
    async def test_sections_name_each_file(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(str(sample_tree), "hello")

        assert f"File: {sample_tree / 'app.py'}\nMatch at line 2:" in response["message"]

    @pytest.mark.asyncio
    async def test_recursive(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(str(sample_tree), "hello", recursive=True)

        assert response["result"]["match_count"] == 4
        assert str(sample_tree / "src" / "cache" / "old.py") in response["result"]["files"]

    @pytest.mark.asyncio
    async def test_include_filter(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(
            str(sample_tree), "hello", recursive=True, include="*.py"
        )

        assert response["result"]["match_count"] == 3
        assert all(f.endswith(".py") for f in response["result"]["files"])

    @pytest.mark.asyncio
    async def test_exclude_prunes_directories(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(
            str(sample_tree), "hello", recursive=True, exclude="cache"
        )

        assert response["result"]["match_count"] == 3
        assert not any("cache" in f for f in response["result"]["files"])

    @pytest.mark.asyncio
    async def test_exclude_skips_files(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(
            str(sample_tree), "hello", recursive=True, exclude="*.json"
        )

        assert str(sample_tree / "data.json") not in response["result"]["files"]
        assert response["result"]["match_count"] == 3

    @pytest.mark.asyncio
    async def test_no_matches(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(str(sample_tree), "goodbye", recursive=True)

        assert_success_response(response)
        assert response["message"] == (
            f'No matches found for pattern "goodbye" in directory "{sample_tree}".'
        )

    @pytest.mark.asyncio
    async def test_unreadable_file_becomes_warning(self, fs_tools, sample_tree):
        (sample_tree / "blob.bin").write_bytes(b"\xff\xfehello")

        response = await fs_tools.search_directory(str(sample_tree), "hello")

        assert_success_response(response)
        assert len(response["result"]["warnings"]) == 1
        assert "Warning: Could not read file" in response["message"]
        assert response["result"]["match_count"] == 2

    @pytest.mark.asyncio
    async def test_invalid_regex(self, fs_tools, sample_tree):
        response = await fs_tools.search_directory(str(sample_tree), "(")

        assert_error_response(response, "invalid_regex")

    @pytest.mark.asyncio
    async def test_missing_directory(self, fs_tools, tmp_path):
        response = await fs_tools.search_directory(str(tmp_path / "gone"), "x")

        assert_error_response(response, "not_found")
