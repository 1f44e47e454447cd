import io
import json
from typing import Any

from flask.testing import FlaskClient

from contact_quality.config.settings import Settings
from contact_quality.service.example_client_adapter import ExampleClientAdapter
from contact_quality.web.app import SESSION_KEY, create_app


def _upload(*files: tuple[str, bytes]) -> dict[str, Any]:
    return {"files": [(io.BytesIO(content), name) for name, content in files]}


def _state(client: FlaskClient) -> dict[str, Any]:
    return client.get("/api/state").get_json()


def _session_id(client: FlaskClient) -> str:
    with client.session_transaction() as session:
        return session[SESSION_KEY]


def _analyze(client: FlaskClient) -> None:
    response = client.post(
        "/analyze",
        data=_upload(
            ("a.csv", b"Name,Email\nJohn Smith,john@x.com"),
            ("b.csv", b"Name,Email\nSmith John,bad-email"),
        ),
        content_type="multipart/form-data",
    )
    assert response.status_code == 302


class TestUploadStep:
    def test_index_starts_on_upload(self, client: FlaskClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert b"Upload Contact Data Files" in response.data
        assert _state(client)["step"] == "upload"

    def test_select_files_rejects_other_types(self, client: FlaskClient) -> None:
        client.post(
            "/files",
            data=_upload(("a.csv", b"Name"), ("notes.txt", b"hi")),
            content_type="multipart/form-data",
        )
        state = _state(client)
        assert [f["name"] for f in state["files"]] == ["a.csv"]
        assert b"skipped: notes.txt" in client.get("/").data

    def test_file_name_with_spaces_is_kept(self, client: FlaskClient) -> None:
        client.post(
            "/analyze",
            data=_upload(("my contacts.csv", b"Name\nJane Doe")),
            content_type="multipart/form-data",
        )

        state = _state(client)
        assert [f["name"] for f in state["files"]] == ["my contacts.csv"]
        assert state["api_logs"][0]["request"]["input_data"] == ["File: my contacts.csv\nName\nJane Doe"]

    def test_non_ascii_file_name_is_accepted(self, client: FlaskClient) -> None:
        client.post(
            "/analyze",
            data=_upload(("контакты.csv", "Имя\nИван".encode())),
            content_type="multipart/form-data",
        )

        state = _state(client)
        assert state["step"] == "results"
        assert [f["name"] for f in state["files"]] == ["контакты.csv"]
        assert state["api_logs"][0]["request"]["input_data"] == ["File: контакты.csv\nИмя\nИван"]
        assert b"skipped" not in client.get("/").data

    def test_client_directory_is_stripped(self, client: FlaskClient) -> None:
        client.post(
            "/files",
            data=_upload(("exports/2024/leads.csv", b"Name")),
            content_type="multipart/form-data",
        )

        assert [f["name"] for f in _state(client)["files"]] == ["leads.csv"]

    def test_analyze_without_files_stays_on_upload(self, client: FlaskClient) -> None:
        client.post("/analyze", data={}, content_type="multipart/form-data")
        assert _state(client)["step"] == "upload"


class TestResults:
    def test_analyze_renders_issue_table(self, client: FlaskClient) -> None:
        _analyze(client)

        state = _state(client)
        assert state["step"] == "results"
        assert state["download_ready"]
        assert len(state["issues"]) == 2
        ingest = state["api_logs"][0]
        assert ingest["endpoint"] == "/input_data"
        assert ingest["request"]["input_data"] == [
            "File: a.csv\nName,Email\nJohn Smith,john@x.com",
            "File: b.csv\nName,Email\nSmith John,bad-email",
        ]
        page = client.get("/").data
        assert b"Data Quality Issues (2)" in page
        assert b"Download Corrected CSV" in page

    def test_sort_toggles_direction(self, client: FlaskClient) -> None:
        _analyze(client)

        client.get("/sort/row_number")
        assert _state(client)["sort"] == {"key": "row_number", "direction": "asc"}
        client.get("/sort/row_number")
        assert _state(client)["sort"] == {"key": "row_number", "direction": "desc"}
        client.get("/sort/field")
        assert _state(client)["sort"] == {"key": "field", "direction": "asc"}

    def test_sort_unknown_column_is_404(self, client: FlaskClient) -> None:
        assert client.get("/sort/explanation").status_code == 404

    def test_download_sends_csv(self, client: FlaskClient) -> None:
        _analyze(client)

        response = client.get("/download")

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert "corrected_contact_data.csv" in response.headers["Content-Disposition"]
        assert response.data.startswith(b"Name,Email,Office,Title\n")

    def test_download_before_results_is_404(self, client: FlaskClient) -> None:
        assert client.get("/download").status_code == 404

    def test_unparsed_issues_show_raw_text(self, client: FlaskClient, service: ExampleClientAdapter) -> None:
        service._outputs["quality_issues"] = "not json"
        _analyze(client)

        issues = _state(client)["issues"]
        assert len(issues) == 1
        assert "issue_type" not in issues[0]
        assert issues[0]["explanation"] == "not json"


class TestDebugPurgeReset:
    def test_debug_panel_lists_calls(self, client: FlaskClient) -> None:
        _analyze(client)
        client.post("/debug")

        page = client.get("/").data
        assert b"POST /input_data" in page
        assert b"GET /return_data/corrected_data" in page

    def test_purge_flashes_success(self, client: FlaskClient) -> None:
        _analyze(client)

        client.post("/purge")

        page = client.get("/").data
        assert b"All API objects deleted successfully" in page
        endpoints = [e["endpoint"] for e in _state(client)["api_logs"]]
        assert endpoints[-3:] == [
            "/objects/contact_data",
            "/objects/quality_issues",
            "/objects/corrected_data",
        ]

    def test_reset_returns_to_upload(self, client: FlaskClient) -> None:
        _analyze(client)

        client.post("/reset")

        state = _state(client)
        assert state["step"] == "upload"
        assert state["issues"] == []
        assert state["api_logs"] == []
        assert not state["download_ready"]

    def test_sessions_are_isolated(self, client: FlaskClient, app) -> None:  # type: ignore[no-untyped-def]
        _analyze(client)
        other = app.test_client()
        assert _state(other)["step"] == "upload"
        assert len(app.extensions["session_store"]) == 2

    def test_state_is_json(self, client: FlaskClient) -> None:
        response = client.get("/api/state")
        assert json.loads(response.data)["step"] == "upload"


class TestSessionStore:
    def test_reset_releases_the_session(self, app) -> None:  # type: ignore[no-untyped-def]
        store = app.extensions["session_store"]
        clients = [app.test_client() for _ in range(5)]
        for browser in clients:
            browser.get("/")
        assert len(store) == 5

        for browser in clients:
            browser.post("/reset")

        assert len(store) == 0

    def test_reset_then_visit_starts_fresh(self, client: FlaskClient) -> None:
        _analyze(client)
        first_id = _session_id(client)

        client.post("/reset")
        state = _state(client)

        assert state["step"] == "upload"
        assert _session_id(client) != first_id

    def test_controllers_share_client_and_reader(self, app, service: ExampleClientAdapter) -> None:  # type: ignore[no-untyped-def]
        store = app.extensions["session_store"]
        first = store.get("first")
        second = store.get("second")

        assert first._client is service
        assert second._client is service
        assert first._file_reader is second._file_reader

    def test_store_is_bounded(self) -> None:
        settings = Settings(secret_key="test", analysis_provider="example", max_sessions=2)
        app = create_app(settings, client=ExampleClientAdapter())
        store = app.extensions["session_store"]

        for _ in range(3):
            app.test_client().get("/")

        assert len(store) == 2
