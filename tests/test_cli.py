"""Tests for argument parsing and the CLI run."""

import json
import textwrap
from unittest.mock import MagicMock, patch

import pytest

import requirements_lint
from args import parse_args
from constants import Constants, ExitCodes


def galaxy_response(namespace, versions, status_code=200):
    res = MagicMock()
    res.status_code = status_code
    res.text = json.dumps({
        "count": 1,
        "results": [{
            "summary_fields": {
                "namespace": {"name": namespace},
                "versions": [{"name": v} for v in versions],
            }
        }],
    })
    return res


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "requirements.yml"
    path.write_text(textwrap.dedent("""
        roles:
          - name: ns.current
            version: v2.0.0
          - name: ns.stale
            version: v1.0.0
    """), encoding="utf-8")
    return str(path)


class TestArgParsing:
    """Tests for CLI argument parsing."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(Constants.ENV_GALAXY_URL, raising=False)
        ns = parse_args([])
        assert ns.REQUIREMENTS_FILE == "requirements.yml"
        assert ns.GALAXY_URL == "https://galaxy.ansible.com"
        assert ns.WORKERS == Constants.MAX_WORKERS
        assert ns.RETRIES == 0
        assert ns.OUTPUT_FORMAT is None
        assert ns.LOG_LEVEL == "INFO"
        assert not ns.ERROR_ON_WARNINGS
        assert not ns.QUIET

    def test_galaxy_url_from_environment(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_GALAXY_URL, "http://galaxy.internal")
        assert parse_args([]).GALAXY_URL == "http://galaxy.internal"

    def test_galaxy_url_flag_wins(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_GALAXY_URL, "http://galaxy.internal")
        ns = parse_args(["--galaxy-url", "http://other"])
        assert ns.GALAXY_URL == "http://other"

    def test_options(self):
        ns = parse_args([
            "-r", "roles.yml", "-w", "8", "--retries", "2", "-f", "JSON",
            "--loglevel", "debug", "--error-on-warnings", "-q",
        ])
        assert ns.REQUIREMENTS_FILE == "roles.yml"
        assert ns.WORKERS == 8
        assert ns.RETRIES == 2
        assert ns.OUTPUT_FORMAT == "json"
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.ERROR_ON_WARNINGS
        assert ns.QUIET

    @pytest.mark.parametrize("argv", [["-w", "0"], ["--retries", "9"], ["-f", "csv"]])
    def test_rejects_invalid(self, argv):
        with pytest.raises(SystemExit):
            parse_args(argv)


class TestMain:
    """Run the CLI end to end against a mocked Galaxy."""

    @patch('registry.galaxy.client.galaxy_pkg.safe_get')
    def test_outdated_role_is_reported(self, mock_safe_get, manifest, caplog):
        mock_safe_get.return_value = galaxy_response("ns", ["v2.0.0", "v1.0.0"])

        with pytest.raises(SystemExit) as exc_info:
            requirements_lint.main(["-r", manifest, "-w", "1"])

        assert exc_info.value.code == ExitCodes.SUCCESS.value
        assert "Role ns.stale is outdated: v2.0.0 is available (declared v1.0.0)." in caplog.text
        assert "ns.current is outdated" not in caplog.text

    @patch('registry.galaxy.client.galaxy_pkg.safe_get')
    def test_error_on_warnings(self, mock_safe_get, manifest):
        mock_safe_get.return_value = galaxy_response("ns", ["v2.0.0"])

        with pytest.raises(SystemExit) as exc_info:
            requirements_lint.main(["-r", manifest, "--error-on-warnings"])

        assert exc_info.value.code == ExitCodes.EXIT_WARNINGS.value

    @patch('registry.galaxy.client.galaxy_pkg.safe_get')
    def test_unresolved_sets_connection_error(self, mock_safe_get, manifest, caplog):
        mock_safe_get.return_value = galaxy_response("ns", [], status_code=503)

        with pytest.raises(SystemExit) as exc_info:
            requirements_lint.main(["-r", manifest])

        assert exc_info.value.code == ExitCodes.CONNECTION_ERROR.value
        assert "Unable to check role ns.stale" in caplog.text

    @patch('registry.galaxy.client.galaxy_pkg.safe_get')
    def test_json_output_file(self, mock_safe_get, manifest, tmp_path):
        mock_safe_get.return_value = galaxy_response("ns", ["v2.0.0"])
        out = tmp_path / "out.json"

        with pytest.raises(SystemExit):
            requirements_lint.main(["-r", manifest, "-o", str(out), "-q"])

        data = json.loads(out.read_text(encoding="utf-8"))
        assert [(d["name"], d["status"]) for d in data] == [
            ("ns.current", "up_to_date"),
            ("ns.stale", "outdated"),
        ]

    @patch('registry.galaxy.client.galaxy_pkg.safe_get')
    def test_custom_galaxy_url_is_used(self, mock_safe_get, manifest):
        mock_safe_get.return_value = galaxy_response("ns", ["v2.0.0"])

        with pytest.raises(SystemExit):
            requirements_lint.main(["-r", manifest, "--galaxy-url", "http://galaxy.local"])

        urls = [c.args[0] for c in mock_safe_get.call_args_list]
        assert urls and all(u.startswith("http://galaxy.local/api/v1/search/roles/") for u in urls)

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            requirements_lint.main(["-r", str(tmp_path / "nope.yml")])

        assert exc_info.value.code == ExitCodes.FILE_ERROR.value

    def test_unwritable_logfile(self, manifest, tmp_path, caplog):
        logfile = tmp_path / "no-such-dir" / "lint.log"

        with pytest.raises(SystemExit) as exc_info:
            requirements_lint.main(["-r", manifest, "--logfile", str(logfile)])

        assert exc_info.value.code == ExitCodes.FILE_ERROR.value
        assert "Log file couldn't be opened" in caplog.text
