import io
from collections.abc import Callable

from flask import (
    Flask,
    abort,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    session,
    url_for,
)
from flask.typing import ResponseReturnValue

from contact_quality.config.settings import Settings
from contact_quality.logging.logger import Log
from contact_quality.service.client_base import BaseAnalysisClient
from contact_quality.service.factory import AnalysisClientFactory
from contact_quality.web.session_store import SessionStore
from contact_quality.workflow import transitions
from contact_quality.workflow.controller import (
    WorkflowController,
    build_controller,
    build_file_reader,
)
from contact_quality.workflow.models import UploadedFile

ALLOWED_EXTENSIONS = frozenset({"csv", "pdf"})
SESSION_KEY = "workflow_id"
ISSUE_COLUMNS = (
    ("row_number", "Row"),
    ("field", "Field"),
    ("issue_type", "Issue Type"),
)


def upload_basename(filename: str) -> str:
    """Strip any client-side directory from an upload name.

    Uploads stay in memory, so the name is otherwise kept as typed: it is
    what the ingestion header and the extension check both see.
    """
    return filename.replace("\\", "/").rsplit("/", 1)[-1]


def _read_uploads() -> tuple[list[UploadedFile], list[str]]:
    accepted: list[UploadedFile] = []
    rejected: list[str] = []
    for storage in request.files.getlist("files"):
        if not storage or not storage.filename:
            continue
        name = upload_basename(storage.filename)
        uploaded = UploadedFile(
            name=name,
            content=storage.read(),
            media_type=storage.mimetype or "",
        )
        if uploaded.extension in ALLOWED_EXTENSIONS:
            accepted.append(uploaded)
        else:
            rejected.append(name)
    return accepted, rejected


def create_app(
    settings: Settings | None = None,
    client: BaseAnalysisClient | None = None,
    controller_factory: Callable[[], WorkflowController] | None = None,
) -> Flask:
    """Build the Flask app serving the upload -> results wizard.

    One analysis client and one file reader are shared by every session's
    controller.
    """
    settings = settings if settings is not None else Settings()
    Log.configure(settings.log_level)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_mb * 1024 * 1024

    if controller_factory is None:
        shared_client = client if client is not None else AnalysisClientFactory.create(settings)
        shared_reader = build_file_reader(settings)

        def shared_controller() -> WorkflowController:
            return build_controller(settings, client=shared_client, file_reader=shared_reader)

        controller_factory = shared_controller

    store = SessionStore(controller_factory, max_sessions=settings.max_sessions)
    app.extensions["session_store"] = store

    def current_controller() -> WorkflowController:
        session_id = session.get(SESSION_KEY)
        if session_id is None:
            session_id = store.new_session_id()
            session[SESSION_KEY] = session_id
        return store.get(session_id)

    @app.get("/")
    def index() -> ResponseReturnValue:
        controller = current_controller()
        state = controller.state
        return render_template(
            "index.html",
            state=state,
            issues=controller.sorted_issues(),
            columns=[
                (key, label, transitions.sort_indicator(state, key))
                for key, label in ISSUE_COLUMNS
            ],
        )

    @app.post("/files")
    def select_files() -> ResponseReturnValue:
        files, rejected = _read_uploads()
        if rejected:
            flash(f"Only .csv and .pdf files are accepted; skipped: {', '.join(rejected)}", "error")
        current_controller().select_files(files)
        return redirect(url_for("index"))

    @app.post("/analyze")
    def analyze() -> ResponseReturnValue:
        controller = current_controller()
        files, rejected = _read_uploads()
        if rejected:
            flash(f"Only .csv and .pdf files are accepted; skipped: {', '.join(rejected)}", "error")
        controller.run_analysis(files or None)
        return redirect(url_for("index"))

    @app.get("/sort/<column>")
    def sort(column: str) -> ResponseReturnValue:
        if column not in transitions.SORTABLE_COLUMNS:
            abort(404)
        current_controller().sort_issues(column)
        return redirect(url_for("index"))

    @app.get("/download")
    def download() -> ResponseReturnValue:
        controller = current_controller()
        if not controller.state.download_ready:
            abort(404)
        export = controller.download_corrected_data()
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.media_type,
            as_attachment=True,
            download_name=export.filename,
        )

    @app.post("/reset")
    def reset() -> ResponseReturnValue:
        session_id = session.pop(SESSION_KEY, None)
        if session_id is not None:
            store.discard(session_id)
        Log.info("Workflow reset")
        return redirect(url_for("index"))

    @app.post("/purge")
    def purge() -> ResponseReturnValue:
        report = current_controller().purge_remote_objects()
        flash(report.message, "info" if report.success else "error")
        return redirect(url_for("index"))

    @app.post("/debug")
    def toggle_debug() -> ResponseReturnValue:
        current_controller().toggle_raw_results()
        return redirect(url_for("index"))

    @app.get("/api/state")
    def state() -> ResponseReturnValue:
        return jsonify(current_controller().state.to_dict())

    return app
