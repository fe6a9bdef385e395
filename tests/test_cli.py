import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).parent.parent / "scripts"))

import suggest_titles  # noqa: E402

from title_suggest.errors import ConfigurationError  # noqa: E402


@pytest.fixture(autouse=True)
def quiet_logger(mocker):
    mocker.patch("suggest_titles.setup_logger")


def test_prints_one_title_per_line(mocker, capsys):
    run = mocker.patch(
        "suggest_titles.run_suggestion",
        new_callable=mocker.AsyncMock,
        return_value={"titles": ["First", "Second"]},
    )

    code = suggest_titles.main(["--description", "Camping in the rain", "--keywords", "tent, storm"])

    assert code == 0
    assert capsys.readouterr().out == "First\nSecond\n"
    req = run.await_args.args[0]
    assert req.keywords == ["tent", "storm"]
    assert run.await_args.kwargs == {"normalize": True}


def test_raw_mode_prints_parsed_json(mocker, capsys):
    mocker.patch(
        "suggest_titles.run_suggestion",
        new_callable=mocker.AsyncMock,
        return_value={"raw_text": '{"titles":"A"}', "parsed": {"titles": "A"}},
    )

    code = suggest_titles.main(["--description", "x", "--raw"])

    assert code == 0
    assert capsys.readouterr().out == '{\n  "titles": "A"\n}\n'


def test_raw_mode_prints_text_when_not_json(mocker, capsys):
    mocker.patch(
        "suggest_titles.run_suggestion",
        new_callable=mocker.AsyncMock,
        return_value={"raw_text": "plain words", "parsed": None},
    )

    suggest_titles.main(["--description", "x", "--raw"])

    assert capsys.readouterr().out == "plain words\n"


def test_error_exits_non_zero(mocker, capsys):
    mocker.patch(
        "suggest_titles.run_suggestion",
        new_callable=mocker.AsyncMock,
        side_effect=ConfigurationError("Missing GEMINI_API_KEY configuration"),
    )

    code = suggest_titles.main(["--description", "x"])

    assert code == 1
    assert capsys.readouterr().err == "error: Missing GEMINI_API_KEY configuration\n"
