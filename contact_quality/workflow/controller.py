from collections.abc import Iterable

from contact_quality.config.settings import Settings
from contact_quality.logging.logger import Log
from contact_quality.pdf.factory import PdfExtractorFactory
from contact_quality.service.audit import ApiLog, AuditedClient
from contact_quality.service.client_base import REMOTE_OBJECTS, BaseAnalysisClient
from contact_quality.service.factory import AnalysisClientFactory
from contact_quality.service.prompt_loader import load_prompt
from contact_quality.workflow import transitions
from contact_quality.workflow.file_reader import FileReader
from contact_quality.workflow.models import (
    CsvDownload,
    PurgeReport,
    QualityIssue,
    UploadedFile,
    WorkflowState,
)
from contact_quality.workflow.pipeline import Pipeline, PipelineContext
from contact_quality.workflow.steps import (
    AnalyzeIssuesStep,
    CorrectDataStep,
    FetchResultsStep,
    IngestStep,
    ParseIssuesStep,
    ReadFilesStep,
)

DOWNLOAD_FILENAME = "corrected_contact_data.csv"
DOWNLOAD_MEDIA_TYPE = "text/csv"


def build_pipeline(
    client: BaseAnalysisClient,
    file_reader: FileReader,
    issues_prompt: str,
    correction_prompt: str,
) -> Pipeline:
    """Stages in run order: read -> ingest -> analyze -> correct -> fetch -> parse."""
    return Pipeline(
        [
            ReadFilesStep(file_reader),
            IngestStep(client),
            AnalyzeIssuesStep(client, issues_prompt),
            CorrectDataStep(client, correction_prompt),
            FetchResultsStep(client),
            ParseIssuesStep(),
        ]
    )


class WorkflowController:
    """Owns one user's WorkflowState and drives the analysis run.

    Runs are not serialized: two overlapping ``run_analysis`` calls on the
    same controller both write ``state`` and the last one to finish wins.
    """

    def __init__(
        self,
        client: BaseAnalysisClient,
        file_reader: FileReader,
        *,
        issues_prompt: str,
        correction_prompt: str,
    ) -> None:
        self._client = client
        self._file_reader = file_reader
        self._issues_prompt = issues_prompt
        self._correction_prompt = correction_prompt
        self.state: WorkflowState = transitions.initial_state()

    def select_files(self, files: Iterable[UploadedFile]) -> WorkflowState:
        self.state = transitions.select_files(self.state, files)
        Log.info(f"Selected {len(self.state.files)} files")
        return self.state

    def run_analysis(self, files: Iterable[UploadedFile] | None = None) -> WorkflowState:
        """Send the selected files through the full pipeline.

        With no files selected this is a no-op. Otherwise the run always ends
        in the results step: any exception before the issues are parsed turns
        into a single "Processing Error" row with the download disabled.
        """
        if files is not None:
            self.select_files(files)
        if not self.state.files:
            return self.state

        self.state = transitions.start_processing(self.state)
        api_log = ApiLog()
        pipeline = build_pipeline(
            AuditedClient(self._client, api_log),
            self._file_reader,
            self._issues_prompt,
            self._correction_prompt,
        )
        context = PipelineContext(files=list(self.state.files))
        Log.info(f"Starting analysis of {len(context.files)} files: {pipeline.step_names}")
        try:
            context = pipeline.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            Log.exception(f"Analysis failed: {exc}")
            self.state = transitions.fail_run(self.state, context, api_log.entries)
            return self.state

        self.state = transitions.complete_run(self.state, context, api_log.entries)
        Log.info(f"Analysis complete: {len(self.state.issues)} issues")
        return self.state

    def sort_issues(self, column: str) -> list[QualityIssue]:
        self.state = transitions.toggle_sort(self.state, column)
        return transitions.sorted_issues(self.state)

    def sorted_issues(self) -> list[QualityIssue]:
        return transitions.sorted_issues(self.state)

    def toggle_raw_results(self) -> WorkflowState:
        self.state = transitions.toggle_raw_results(self.state)
        return self.state

    def download_corrected_data(self) -> CsvDownload:
        return CsvDownload(
            filename=DOWNLOAD_FILENAME,
            media_type=DOWNLOAD_MEDIA_TYPE,
            content=self.state.corrected_data.encode("utf-8"),
        )

    def purge_remote_objects(self) -> PurgeReport:
        """Delete every named object on the service.

        Response bodies are logged but not checked, so a delete the service
        rejected still counts as success. Only an exception fails the purge.
        """
        api_log = ApiLog(self.state.api_logs)
        client = AuditedClient(self._client, api_log)
        deleted: list[str] = []
        try:
            for name in REMOTE_OBJECTS:
                client.delete_object(name)
                deleted.append(name)
                Log.info(f"Deleted remote object '{name}'")
        except Exception as exc:
            Log.error(f"Error deleting objects: {exc}")
            return PurgeReport(
                success=False, message=f"Error deleting objects: {exc}", deleted=deleted
            )
        finally:
            self.state = self.state.evolve(api_logs=api_log.entries)
        return PurgeReport(
            success=True, message="All API objects deleted successfully", deleted=deleted
        )

    def reset(self) -> WorkflowState:
        self.state = transitions.reset()
        Log.info("Workflow reset")
        return self.state


def build_file_reader(settings: Settings) -> FileReader:
    return FileReader(
        PdfExtractorFactory.create(settings),
        max_workers=settings.file_read_workers,
    )


def build_controller(
    settings: Settings,
    client: BaseAnalysisClient | None = None,
    file_reader: FileReader | None = None,
) -> WorkflowController:
    """Build a WorkflowController with all required adapters.

    Pass ``client`` and ``file_reader`` to share them between controllers;
    otherwise fresh ones are built from ``settings``.
    """
    return WorkflowController(
        client if client is not None else AnalysisClientFactory.create(settings),
        file_reader if file_reader is not None else build_file_reader(settings),
        issues_prompt=load_prompt("quality_issues"),
        correction_prompt=load_prompt("corrected_data"),
    )
