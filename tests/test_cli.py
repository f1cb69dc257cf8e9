from unittest.mock import patch

from paperscout import cli
from paperscout.core.exceptions import BrowserSessionError, ConfigurationError
from paperscout.core.models import EnumerationStatus, PaperRecord, SearchCriteria
from paperscout.pipeline.harvest import RunSummary


def test_parse_args_maps_flags():
    args = cli.parse_args(["--topic", "rl", "--year", "2023", "--max-results", "2", "--headed", "--json", "o.json"])
    assert args.topic == "rl"
    assert args.year == "2023"
    assert args.max_results == 2
    assert args.headed is True
    assert args.json_path == "o.json"
    assert args.html_path is None


def test_main_writes_outputs(tmp_path, monkeypatch):
    monkeypatch.setenv("CEREBRAS_API_KEY", "k")
    criteria = SearchCriteria(topic="rl", year="2023")
    summary = RunSummary(criteria=criteria, enumeration_status=EnumerationStatus.OK, processed=1, succeeded=1)
    records = [PaperRecord.failed("A paper")]
    seen = {}

    async def fake_harvest(settings):
        seen["settings"] = settings
        return records, summary

    json_path = tmp_path / "papers.json"
    html_path = tmp_path / "report.html"
    with patch.object(cli, "harvest", fake_harvest):
        code = cli.main(["--topic", "rl", "--year", "2023", "--headed", "--json", str(json_path), "--html", str(html_path)])

    assert code == 0
    assert seen["settings"].search.topic == "rl"
    assert seen["settings"].browser.headless is False
    assert json_path.exists()
    assert html_path.exists()


def test_main_reports_session_failure():
    async def broken(settings):
        raise BrowserSessionError("no browser")

    with patch.object(cli, "harvest", broken):
        assert cli.main(["--topic", "rl"]) == 1


def test_main_reports_configuration_error():
    with patch.object(cli, "load_settings", side_effect=ConfigurationError("bad")):
        assert cli.main([]) == 1
