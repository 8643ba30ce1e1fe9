"""Status command for a read-only overview."""

from ..config import DeployConfig
from ..core import StatusReporter
from ..output import get_output_context


def show_status(config: DeployConfig) -> None:
    """Report checkout, container and resource state. Takes no lock."""
    ctx = get_output_context()
    reporter = StatusReporter(config)

    if ctx.json_mode:
        ctx.print_json(reporter.collect().model_dump(mode="json"))
        return
    reporter.report()
