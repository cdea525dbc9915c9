from typing import Optional

from codelens.constants import ANALYSIS_PROMPT, DEFAULT_DETAIL, DEFAULT_FOCUS
from codelens.models import AnalysisOptions


def build_prompt(code: str, options: Optional[AnalysisOptions] = None) -> str:
    """
    Render the review instructions for one code sample.

    The section markers in the template are what ``codelens.parsing`` looks
    for in the reply, so both must change together.
    """
    focus = (options.focus if options else None) or DEFAULT_FOCUS
    detail = (options.detail if options else None) or DEFAULT_DETAIL
    return ANALYSIS_PROMPT.format(focus=focus, detail=detail, code=code)
