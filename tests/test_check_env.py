"""Tests for the preppal-check-env command."""

from preppal.cli.check_env import main


def test_missing_env_file(tmp_path, capsys):
    assert main(["--env-file", str(tmp_path / ".env.local")]) == 1
    assert ".env.local file not found!" in capsys.readouterr().err


def test_missing_and_empty_variables_are_listed(tmp_path, capsys):
    env_file = tmp_path / ".env.local"
    env_file.write_text("SUPABASE_URL=\nOTHER=1\n")

    assert main(["--env-file", str(env_file)]) == 1
    err = capsys.readouterr().err
    assert "Missing required environment variables: SUPABASE_URL, SUPABASE_ANON_KEY" in err


def test_all_variables_present(tmp_path, capsys):
    env_file = tmp_path / ".env.local"
    env_file.write_text("SUPABASE_URL=https://x.supabase.co\nSUPABASE_ANON_KEY=anon\n")

    assert main(["--env-file", str(env_file)]) == 0
    assert "Environment variables look good!" in capsys.readouterr().out
