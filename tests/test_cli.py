import pytest

from flickrsync import cli
from flickrsync.models import RemoteItem

CONFIG = """\
[flickr]
oauth_client_key=key
oauth_client_secret=secret
oauth_token=token
oauth_token_secret=token-secret
"""


@pytest.fixture
def home(monkeypatch, tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def configured(home):
    (home / ".flickcurl.conf").write_text(CONFIG)
    return home


def test_missing_config_exits_1(home, folder, capsys):
    assert cli.main([str(folder)]) == 1
    err = capsys.readouterr().err
    assert ".flickcurl.conf" in err
    assert "oauth_client_key" in err


def test_missing_folder_argument_prints_help(configured, capsys):
    assert cli.main([]) == 1
    captured = capsys.readouterr()
    assert "usage: flickrsync" in captured.out
    assert "No folder given" in captured.err


def test_nonexistent_folder_exits_1(configured, tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_help_exits_0(configured, capsys):
    assert cli.main(["--help"]) == 0
    assert "--set-titles-by-date-taken" in capsys.readouterr().out


def test_unknown_option_exits_1(configured, folder, capsys):
    assert cli.main(["--bogus", str(folder)]) == 1
    assert "unrecognized arguments: --bogus" in capsys.readouterr().err


def test_options_from_args():
    args = cli.build_parser().parse_args(["-n", "-r", "-d", "-s", "-o", "folder"])
    options = cli.options_from_args(args)
    assert options.dry_run and options.remove and options.download_missing
    assert options.sort_by_title and options.set_titles_by_date_taken
    assert args.folder == "folder"


def test_runs_sync_with_credentials(configured, folder, touch, make_client, capsys):
    touch(folder, "x.jpg")
    client = make_client(sets=[{"id": "s1", "title": "Holiday"}],
                         items={"s1": [RemoteItem("1", "x"), RemoteItem("2", "y")]})
    seen = {}

    def factory(credentials):
        seen.update(credentials)
        return client

    assert cli.main(["--dry-run", "--remove", str(folder)], client_factory=factory) == 0

    assert seen["oauth_token"] == "token"
    assert client.mutating_calls() == []
    out = capsys.readouterr().out
    assert ("FlickrSync finished: Photos/videos in folder=1, Uploaded=0, Deleted=1, "
            "Downloaded=0, Photos/videos in Flickr set=1") in out
