"""Tests for commitai.cli.interactive and commitai.cli.utils modules."""

from unittest.mock import MagicMock

import pytest
import typer

from commitai.cli.interactive import EDIT_OPTIONS, EditMode, InteractiveEditor, run_interactive
from commitai.cli.utils import find_editor, mask_key, open_editor, version_text


def make_editor(choice=0, confirm=True, edited="edited message"):
    editor = MagicMock(spec=InteractiveEditor)
    editor.prompt_choice.return_value = choice
    editor.prompt_yes_no.return_value = confirm
    editor.edit_message.side_effect = lambda message, mode: message if mode == EditMode.NONE else edited
    return editor


class TestRunInteractive:
    """Tests for run_interactive function."""

    def test_commit_confirmed(self, capsys):
        """Test --commit commits the generated message after confirmation."""
        repo = MagicMock()
        editor = make_editor()

        final = run_interactive("feat: x", repo, edit=False, commit=True, editor=editor)

        assert final == "feat: x"
        repo.commit.assert_called_once_with("feat: x")
        assert "Committed successfully" in capsys.readouterr().out

    def test_commit_declined(self, capsys):
        """Test declining leaves the repository alone."""
        repo = MagicMock()

        run_interactive("feat: x", repo, edit=False, commit=True, editor=make_editor(confirm=False))

        repo.commit.assert_not_called()
        assert "Commit cancelled." in capsys.readouterr().out

    def test_edit_then_commit(self):
        """Test the edited message is shown again and committed."""
        repo = MagicMock()
        editor = make_editor(choice=EditMode.INLINE.value)

        final = run_interactive("feat: x", repo, edit=True, commit=True, editor=editor)

        assert final == "edited message"
        editor.prompt_choice.assert_called_once_with("How would you like to proceed?", EDIT_OPTIONS)
        editor.display_message.assert_any_call("Final Commit Message", "edited message")
        repo.commit.assert_called_once_with("edited message")

    def test_edit_only_prints_final(self, capsys):
        """Test --edit without --commit prints the final message."""
        repo = MagicMock()

        run_interactive("feat: x", repo, edit=True, commit=False, editor=make_editor(choice=0))

        repo.commit.assert_not_called()
        assert "Final message:\nfeat: x" in capsys.readouterr().out


class TestInteractiveEditor:
    """Tests for InteractiveEditor prompts."""

    def test_prompt_choice_is_zero_based(self, mocker):
        """Test the 1-based menu answer becomes an index."""
        mocker.patch("commitai.cli.interactive.typer.prompt", return_value=3)
        assert InteractiveEditor().prompt_choice("Pick", EDIT_OPTIONS) == 2

    def test_prompt_choice_asks_again_when_out_of_range(self, mocker):
        """Test an out-of-range answer is rejected and the prompt repeated."""
        prompt = mocker.patch("commitai.cli.interactive.typer.prompt", side_effect=[7, 0, 2])

        assert InteractiveEditor().prompt_choice("Pick", EDIT_OPTIONS) == 1
        assert prompt.call_count == 3

    def test_edit_inline_keeps_on_empty(self, mocker):
        """Test an empty inline answer keeps the message."""
        mocker.patch("commitai.cli.interactive.typer.prompt", return_value="  ")
        assert InteractiveEditor().edit_inline("feat: x") == "feat: x"

    def test_edit_inline_replaces(self, mocker):
        """Test a typed answer replaces the message."""
        mocker.patch("commitai.cli.interactive.typer.prompt", return_value="fix: y ")
        assert InteractiveEditor().edit_inline("feat: x") == "fix: y"

    def test_edit_with_editor(self, mocker):
        """Test the file content after the editor closes is returned."""

        def fake_editor(path):
            assert path.name == "COMMIT_EDITMSG"
            assert path.read_text() == "feat: x"
            path.write_text("feat: better\n")

        mocker.patch("commitai.cli.interactive.open_editor", side_effect=fake_editor)
        assert InteractiveEditor().edit_with_editor("feat: x") == "feat: better"

    def test_edit_with_editor_emptied(self, mocker):
        """Test clearing the file keeps the original message."""
        mocker.patch(
            "commitai.cli.interactive.open_editor",
            side_effect=lambda path: path.write_text(""),
        )
        assert InteractiveEditor().edit_with_editor("feat: x") == "feat: x"


class TestFindEditor:
    """Tests for find_editor function."""

    def test_editor_variable(self, monkeypatch):
        """Test $EDITOR is split into arguments."""
        monkeypatch.setenv("EDITOR", "code --wait")
        assert find_editor() == ["code", "--wait"]

    def test_visual_variable(self, monkeypatch):
        """Test $VISUAL is used when $EDITOR is unset."""
        monkeypatch.delenv("EDITOR", raising=False)
        monkeypatch.setenv("VISUAL", "gvim -f")
        assert find_editor() == ["gvim", "-f"]

    def test_fallback_on_path(self, monkeypatch, mocker):
        """Test the first fallback editor on PATH is chosen."""
        monkeypatch.delenv("EDITOR", raising=False)
        monkeypatch.delenv("VISUAL", raising=False)
        mocker.patch(
            "commitai.cli.utils.shutil.which",
            side_effect=lambda name: "/usr/bin/vim" if name == "vim" else None,
        )
        assert find_editor() == ["vim"]

    def test_none_found(self, monkeypatch, mocker):
        """Test None when nothing is available."""
        monkeypatch.delenv("EDITOR", raising=False)
        monkeypatch.delenv("VISUAL", raising=False)
        mocker.patch("commitai.cli.utils.shutil.which", return_value=None)
        assert find_editor() is None


class TestOpenEditor:
    """Tests for open_editor function."""

    def test_no_editor_exits(self, mocker, temp_dir):
        """Test a missing editor aborts with exit code 1."""
        mocker.patch("commitai.cli.utils.find_editor", return_value=None)
        with pytest.raises(typer.Exit) as exc_info:
            open_editor(temp_dir / "msg")
        assert exc_info.value.exit_code == 1

    def test_runs_editor(self, mocker, temp_dir):
        """Test the editor is run on the file."""
        mocker.patch("commitai.cli.utils.find_editor", return_value=["vim"])
        mock_run = mocker.patch("commitai.cli.utils.subprocess.run")
        mock_run.return_value.returncode = 0

        open_editor(temp_dir / "msg")

        mock_run.assert_called_once_with(["vim", str(temp_dir / "msg")], check=False)


class TestSmallHelpers:
    """Tests for mask_key and version_text."""

    def test_mask_key(self):
        """Test long keys keep their ends and short keys are hidden."""
        assert mask_key("sk-abcdefghijklmnop") == "sk-abcde...mnop"
        assert mask_key("short") == "***"

    def test_version_text(self):
        """Test the version line format."""
        assert version_text().startswith("commit-ai version ")
