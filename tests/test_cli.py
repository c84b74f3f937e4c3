from unittest.mock import patch

from main import main
from companyqa.providers.base import ProviderError
from companyqa.providers.mock import MockProvider
from tests.fakes import ScriptedProvider


def test_cli_streams_normalized_answer(capsys):
    provider = ScriptedProvider(
        answers=["Technology.", "Rockets."],
        fragments=["Acme builds ", "**rockets** [1]."],
    )
    with patch("main.get_provider", return_value=provider):
        code = main(["--question", "What does acme.com do?", "--domain", "acme.com"])

    assert code == 0
    assert capsys.readouterr().out == "Acme builds rockets.\n"
    assert provider.calls[-1][2] == "acme.com"


def test_cli_raw_mode_skips_cleanup(capsys):
    provider = ScriptedProvider(answers=["a", "b"], fragments=["**rockets** [1]"])
    with patch("main.get_provider", return_value=provider):
        code = main(["-q", "q", "-d", "acme.com", "--raw"])

    assert code == 0
    assert capsys.readouterr().out == "**rockets** [1]\n"


def test_cli_reports_provider_errors(capsys):
    provider = ScriptedProvider(answers=[ProviderError("upstream down"), ProviderError("upstream down")])
    with patch("main.get_provider", return_value=provider):
        code = main(["-q", "q", "-d", "acme.com"])

    assert code == 1
    assert "[!] Error: upstream down" in capsys.readouterr().err


def test_cli_works_offline_with_mock_provider(capsys):
    with patch("main.get_provider", return_value=MockProvider(response="Offline answer.")):
        code = main(["-q", "q", "-d", "acme.com"])

    assert code == 0
    assert capsys.readouterr().out == "Offline answer.\n"
