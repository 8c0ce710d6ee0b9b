"""Progress table processor.

Turns the content of one ``<table-progress-tracking>`` tag into a table
with a leading checkbox column, or into an error box. Stages run in order
and each stops the whole invocation at its first failure::

    input guard -> render + parse -> column profile | row id validation
        -> mutate -> serialize

Nothing is ever raised past ``process()``.
"""

import html
from collections.abc import Mapping
from enum import Enum

from table_progress_tracking.core.logging_utils import get_logger
from table_progress_tracking.tables.arguments import TagArguments
from table_progress_tracking.tables.errors import ProcessingError
from table_progress_tracking.tables.guard import Clock, check_input_size
from table_progress_tracking.tables.limits import ProcessingLimits
from table_progress_tracking.tables.mutator import TableMutator
from table_progress_tracking.tables.parser import parse_table
from table_progress_tracking.tables.profiler import validate_unique_column_index
from table_progress_tracking.tables.render import RenderContext, Renderer
from table_progress_tracking.tables.row_ids import validate_row_identifiers

logger = get_logger(__name__)

TRACKING_CATEGORY = "tpt-tracking-category"


class ProcessingState(str, Enum):
    """Lifecycle of one processor invocation."""

    START = "start"
    INPUT_CHECKED = "input_checked"
    PARSED = "parsed"
    COLUMN_VALIDATED = "column_validated"
    ROW_IDS_VALIDATED = "row_ids_validated"
    MUTATED = "mutated"
    SERIALIZED = "serialized"
    ERRORED = "errored"


def render_error_box(message: str) -> str:
    """Render the host's block error message with ``message`` escaped."""
    return (
        '<div class="cdx-message cdx-message--block cdx-message--error">'
        '<span class="cdx-message__icon"></span>'
        f'<div class="cdx-message__content">{html.escape(message)}</div>'
        "</div>"
    )


class ProgressTableProcessor:
    """Processes one tag occurrence. Create a new instance per occurrence."""

    def __init__(
        self,
        raw_input: str,
        attributes: Mapping[str, str],
        renderer: Renderer,
        context: RenderContext,
        limits: ProcessingLimits,
        clock: Clock | None = None,
    ) -> None:
        self.raw_input = raw_input
        self.attributes = attributes
        self.renderer = renderer
        self.context = context
        self.limits = limits
        self.clock = clock or Clock(limits.max_processing_seconds)
        self.arguments: TagArguments | None = None
        self.row_ids: list[str] = []
        self.state = ProcessingState.START
        self.error: ProcessingError | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def process(self) -> str:
        """Return the augmented table HTML, or an escaped error box."""
        log = logger.with_context(
            article_id=self.context.article_id,
            table_id=self.attributes.get("table-id"),
        )
        try:
            output = self._run()
        except ProcessingError as e:
            self.state = ProcessingState.ERRORED
            self.error = e
            log.warning("TABLE_PROCESSING_FAILED", reason=e.reason.value, error=e.message)
            return render_error_box(e.message)
        except Exception as e:
            # Renderer and tree builder are external code; keep the page rendering.
            self.state = ProcessingState.ERRORED
            log.exception("TABLE_PROCESSING_CRASHED", error_type=type(e).__name__)
            return render_error_box(str(e) or type(e).__name__)

        log.info(
            "TABLE_PROCESSED",
            rows=len(self.row_ids),
            elapsed_ms=round(self.clock.elapsed() * 1000, 1),
        )
        return output

    def _run(self) -> str:
        check_input_size(self.raw_input, self.limits.max_input_size)
        self.arguments = TagArguments.from_attributes(self.attributes)
        self.state = ProcessingState.INPUT_CHECKED

        self.clock.start()
        parsed = parse_table(self.raw_input, self.renderer, self.context, self.limits, self.clock)
        self.state = ProcessingState.PARSED

        if self.arguments.unique_column_index is not None:
            validate_unique_column_index(
                parsed.table, self.arguments.unique_column_index, self.limits, self.clock
            )
            self.state = ProcessingState.COLUMN_VALIDATED
        else:
            validate_row_identifiers(parsed.table, self.limits, self.clock)
            self.state = ProcessingState.ROW_IDS_VALIDATED

        self.row_ids = TableMutator(parsed, self.arguments, self.limits, self.clock).apply()
        self.state = ProcessingState.MUTATED

        self.context.add_tracking_category(TRACKING_CATEGORY)
        output = parsed.serialize()
        self.state = ProcessingState.SERIALIZED
        return output
