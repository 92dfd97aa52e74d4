from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

from common.models import Query, Row

if TYPE_CHECKING:
    from presentation.formats import OutputFormat
    from presentation.models import RenderedContent


@runtime_checkable
class Component(Protocol):
    """Protocol for a renderer turning query rows into report content."""

    def render(
        self, query: Query, rows: List[Row], format: "OutputFormat"
    ) -> "RenderedContent":
        """Render ``rows`` of ``query`` for the given output format.

        Raises:
            RenderError: If the rows cannot be rendered in this format.
        """
        ...
