from contact_quality.logging.logger import Log
from contact_quality.service.client_base import (
    CONTACT_DATA,
    CORRECTED_DATA,
    QUALITY_ISSUES,
    BaseAnalysisClient,
)
from contact_quality.workflow.exceptions import StageOrderError
from contact_quality.workflow.file_reader import FileReader
from contact_quality.workflow.issue_parser import parse_issues
from contact_quality.workflow.pipeline import PipelineContext, PipelineStep

COMBINE_EVENTS = "combine_events"


def _contact_data_input() -> list[dict[str, str]]:
    return [{"input_object_name": CONTACT_DATA, "mode": COMBINE_EVENTS}]


class ReadFilesStep(PipelineStep):
    name = "read_files"

    def __init__(self, file_reader: FileReader) -> None:
        self._file_reader = file_reader

    def run(self, context: PipelineContext) -> PipelineContext:
        context.file_texts = self._file_reader.read_all(context.files)
        Log.info(
            f"Read {len(context.file_texts)} files "
            f"({sum(len(f.content) for f in context.file_texts)} chars)"
        )
        return context


class IngestStep(PipelineStep):
    name = "ingest"

    def __init__(self, client: BaseAnalysisClient) -> None:
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.file_texts:
            raise StageOrderError("file texts must be read before ingestion")
        response = self._client.input_data(
            object_name=CONTACT_DATA,
            data_type="strings",
            input_data=[f.as_ingest_block() for f in context.file_texts],
        )
        context.raw_results["ingest"] = response
        Log.info(f"Ingested {len(context.file_texts)} files as '{CONTACT_DATA}'")
        return context


class ApplyPromptStep(PipelineStep):
    """Materializes ``output_object`` from the ingested contact data."""

    def __init__(
        self,
        client: BaseAnalysisClient,
        *,
        name: str,
        output_object: str,
        prompt: str,
        raw_key: str,
    ) -> None:
        self._client = client
        self.name = name
        self._output_object = output_object
        self._prompt = prompt
        self._raw_key = raw_key

    def run(self, context: PipelineContext) -> PipelineContext:
        if "ingest" not in context.raw_results:
            raise StageOrderError(f"'{CONTACT_DATA}' must be ingested before {self.name}")
        Log.debug(f"Prompt for '{self._output_object}':\n{self._prompt}")
        response = self._client.apply_prompt(
            created_object_names=[self._output_object],
            prompt_string=self._prompt,
            inputs=_contact_data_input(),
        )
        context.raw_results[self._raw_key] = response
        Log.info(f"Requested '{self._output_object}' from '{CONTACT_DATA}'")
        return context


class AnalyzeIssuesStep(ApplyPromptStep):
    def __init__(self, client: BaseAnalysisClient, prompt: str) -> None:
        super().__init__(
            client,
            name="analyze_issues",
            output_object=QUALITY_ISSUES,
            prompt=prompt,
            raw_key="issues",
        )


class CorrectDataStep(ApplyPromptStep):
    def __init__(self, client: BaseAnalysisClient, prompt: str) -> None:
        super().__init__(
            client,
            name="correct_data",
            output_object=CORRECTED_DATA,
            prompt=prompt,
            raw_key="correction",
        )


class FetchResultsStep(PipelineStep):
    name = "fetch_results"

    def __init__(self, client: BaseAnalysisClient) -> None:
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        issues_data = self._client.return_data(QUALITY_ISSUES)
        context.raw_results["issues_data"] = issues_data
        corrected = self._client.return_data(CORRECTED_DATA)
        context.raw_results["corrected_data_result"] = corrected

        context.issues_text = issues_data.get("text_value")
        corrected_text = corrected.get("text_value")
        context.corrected_text = corrected_text if isinstance(corrected_text, str) else ""
        Log.info(
            f"Fetched '{QUALITY_ISSUES}' and '{CORRECTED_DATA}' "
            f"({len(context.corrected_text)} chars of CSV)"
        )
        return context


class ParseIssuesStep(PipelineStep):
    name = "parse_issues"

    def run(self, context: PipelineContext) -> PipelineContext:
        context.parse_result = parse_issues(context.issues_text)
        Log.info(f"Parsed {len(context.parse_result.to_issues())} issues")
        return context
