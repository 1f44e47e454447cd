from pathlib import Path

from contact_quality.service.exceptions import AnalysisServiceError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(name: str, path: Path | None = None) -> str:
    """Load a prompt sent to the analysis service.

    Prompts reference ingested objects with ``{object_name}`` placeholders,
    which the service resolves; the text is sent without local formatting.

    Args:
        name: Bundled prompt name, e.g. ``"quality_issues"``.
        path: Explicit file to read instead of the bundled prompt.

    Raises:
        AnalysisServiceError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisServiceError(f"Failed to load prompt '{name}': {exc}") from exc
