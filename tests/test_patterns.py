"""Tests for commitai.ignore.patterns module."""

import pytest

from commitai.ignore.patterns import (
    IgnorePatternError,
    PatternSet,
    add_ignore_pattern,
    compile_ignore_file,
    compile_patterns,
    find_ignore_files,
    get_ignore_patterns,
    load_pattern_set,
    remove_ignore_pattern,
)


class TestCompilePatterns:
    """Tests for compile_patterns function."""

    def test_skips_comments_and_blanks(self, temp_dir):
        """Test comment and blank lines are not patterns."""
        matcher = compile_patterns(["# comment", "", "   ", "*.log"], base_dir=temp_dir)
        assert matcher.patterns == ["*.log"]

    def test_glob_matches_in_any_directory(self, temp_dir):
        """Test a slash-free pattern matches at any depth."""
        matcher = compile_patterns(["*.log"], base_dir=temp_dir)
        assert matcher.matches("debug.log")
        assert matcher.matches("logs/deep/debug.log")
        assert not matcher.matches("app.go")

    def test_directory_pattern(self, temp_dir):
        """Test a trailing slash ignores everything below the directory."""
        matcher = compile_patterns(["build/"], base_dir=temp_dir)
        assert matcher.matches("build/out.js")
        assert not matcher.matches("src/build.py")

    def test_anchored_pattern(self, temp_dir):
        """Test a leading slash anchors to the ignore file's directory."""
        matcher = compile_patterns(["/vendor"], base_dir=temp_dir)
        assert matcher.matches("vendor/lib.go")
        assert not matcher.matches("src/vendor/lib.go")

    def test_negation_within_file(self, temp_dir):
        """Test later rules override earlier ones and ! re-includes."""
        matcher = compile_patterns(["*.log", "!keep.log"], base_dir=temp_dir)
        assert matcher.matches("debug.log")
        assert not matcher.matches("keep.log")

    def test_empty_matcher_never_matches(self, temp_dir):
        """Test a file with only comments hides nothing."""
        matcher = compile_patterns(["# nothing"], base_dir=temp_dir)
        assert not matcher.matches("anything.txt")

    @pytest.mark.parametrize("pattern", ["!", "foo\\"])
    def test_invalid_pattern_raises(self, temp_dir, pattern):
        """Test patterns the matcher rejects become IgnorePatternError."""
        with pytest.raises(IgnorePatternError) as exc_info:
            compile_patterns(["*.log", pattern], base_dir=temp_dir)
        assert "Invalid ignore pattern" in str(exc_info.value)


class TestMatchesUnder:
    """Tests for PatternMatcher.matches_under."""

    def test_scoped_to_own_directory(self, temp_dir):
        """Test a nested ignore file only applies below its directory."""
        matcher = compile_patterns(["*.txt"], base_dir=temp_dir / "sub")
        assert matcher.matches_under("sub/a.txt", temp_dir)
        assert not matcher.matches_under("a.txt", temp_dir)
        assert not matcher.matches_under("other/a.txt", temp_dir)


class TestFindIgnoreFiles:
    """Tests for find_ignore_files function."""

    def test_closest_first(self, temp_dir):
        """Test files are returned from the start directory upward."""
        nested = temp_dir / "a" / "b"
        nested.mkdir(parents=True)
        (temp_dir / ".caiignore").write_text("*.log\n")
        (nested / ".caiignore").write_text("*.tmp\n")

        found = find_ignore_files(nested, stop_at=temp_dir)

        assert found == [nested / ".caiignore", temp_dir / ".caiignore"]

    def test_stops_at_boundary(self, temp_dir):
        """Test the walk does not go above stop_at."""
        repo = temp_dir / "repo"
        repo.mkdir()
        (temp_dir / ".caiignore").write_text("*\n")

        assert find_ignore_files(repo, stop_at=repo) == []

    def test_custom_file_name(self, temp_dir):
        """Test a different ignore file name is honored."""
        (temp_dir / ".myignore").write_text("*.log\n")
        found = find_ignore_files(temp_dir, stop_at=temp_dir, file_name=".myignore")
        assert found == [temp_dir / ".myignore"]

    def test_ignores_directories_named_like_file(self, temp_dir):
        """Test a directory called .caiignore is not read."""
        (temp_dir / ".caiignore").mkdir()
        assert find_ignore_files(temp_dir, stop_at=temp_dir) == []


class TestLoadPatternSet:
    """Tests for load_pattern_set function."""

    def test_no_files_gives_empty_set(self, temp_dir):
        """Test an empty set when nothing is found."""
        pattern_set = load_pattern_set(temp_dir, stop_at=temp_dir)
        assert len(pattern_set) == 0
        assert not pattern_set

    def test_any_match_hides(self, temp_dir):
        """Test a closer file cannot re-include what an ancestor hides."""
        nested = temp_dir / "sub"
        nested.mkdir()
        (temp_dir / ".caiignore").write_text("*.log\n")
        (nested / ".caiignore").write_text("!*.log\n")

        pattern_set = load_pattern_set(nested, stop_at=temp_dir)

        assert pattern_set.sources == [nested / ".caiignore", temp_dir / ".caiignore"]
        assert pattern_set.matches("sub/debug.log")
        assert pattern_set.matching_matcher("sub/debug.log").source == temp_dir / ".caiignore"

    def test_paths_relative_to_root(self, temp_dir):
        """Test matching uses paths relative to the root directory."""
        nested = temp_dir / "pkg"
        nested.mkdir()
        (nested / ".caiignore").write_text("generated.py\n")

        pattern_set = load_pattern_set(nested, stop_at=temp_dir)

        assert pattern_set.matches("pkg/generated.py")
        assert not pattern_set.matches("generated.py")

    def test_fresh_each_call(self, temp_dir):
        """Test changes on disk are picked up by the next load."""
        assert not load_pattern_set(temp_dir, stop_at=temp_dir)
        (temp_dir / ".caiignore").write_text("*.log\n")
        assert load_pattern_set(temp_dir, stop_at=temp_dir).matches("a.log")

    @pytest.mark.parametrize("pattern", ["!", "foo\\"])
    def test_invalid_pattern_in_file(self, temp_dir, pattern):
        """Test a rejected pattern names the ignore file it came from."""
        (temp_dir / ".caiignore").write_text(f"*.log\n{pattern}\n")

        with pytest.raises(IgnorePatternError) as exc_info:
            load_pattern_set(temp_dir, stop_at=temp_dir)
        assert str(temp_dir / ".caiignore") in str(exc_info.value)

    def test_unreadable_file_raises(self, temp_dir):
        """Test a non-UTF-8 ignore file is a fatal error."""
        (temp_dir / ".caiignore").write_bytes(b"\xff\xfe\x00")
        with pytest.raises(IgnorePatternError):
            load_pattern_set(temp_dir, stop_at=temp_dir)


class TestPatternSet:
    """Tests for PatternSet class."""

    def test_without_root_uses_matcher_relative_paths(self, temp_dir):
        """Test a rootless set passes paths straight to each matcher."""
        pattern_set = PatternSet([compile_patterns(["*.md"], base_dir=temp_dir)])
        assert pattern_set.matches("docs/readme.md")
        assert list(pattern_set)[0].patterns == ["*.md"]


class TestIgnoreFileEditing:
    """Tests for get/add/remove_ignore_pattern functions."""

    def test_add_creates_file(self, temp_dir):
        """Test adding to a missing file creates it."""
        assert add_ignore_pattern(temp_dir, "*.log")
        assert (temp_dir / ".caiignore").read_text() == "*.log\n"

    def test_add_existing_pattern(self, temp_dir):
        """Test a duplicate pattern is not appended."""
        (temp_dir / ".caiignore").write_text("*.log")
        assert not add_ignore_pattern(temp_dir, "*.log")
        assert (temp_dir / ".caiignore").read_text() == "*.log"

    def test_add_appends_after_missing_newline(self, temp_dir):
        """Test a new line is started when the file lacks one."""
        (temp_dir / ".caiignore").write_text("# generated\n*.log")
        add_ignore_pattern(temp_dir, "dist/")
        assert (temp_dir / ".caiignore").read_text() == "# generated\n*.log\ndist/\n"

    def test_get_patterns(self, temp_dir):
        """Test reading patterns of one file."""
        (temp_dir / ".caiignore").write_text("# c\n*.log\n\nbuild/\n")
        assert get_ignore_patterns(temp_dir) == ["*.log", "build/"]
        assert get_ignore_patterns(temp_dir / "missing") == []

    def test_remove_keeps_other_lines(self, temp_dir):
        """Test removal leaves comments and other patterns."""
        (temp_dir / ".caiignore").write_text("# c\n*.log\nbuild/\n")
        assert remove_ignore_pattern(temp_dir, "*.log")
        assert (temp_dir / ".caiignore").read_text() == "# c\nbuild/\n"

    def test_remove_missing_pattern(self, temp_dir):
        """Test removing an unknown pattern reports False."""
        assert not remove_ignore_pattern(temp_dir, "*.log")
        (temp_dir / ".caiignore").write_text("build/\n")
        assert not remove_ignore_pattern(temp_dir, "*.log")
