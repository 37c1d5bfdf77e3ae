import logging

from citeproc_crosswalk.domain.models.diagnostics import DiagnosticsCollector
from citeproc_crosswalk.infrastructure.logging import RunContextFilter, configure_logging, set_run_id


def test_filter_adds_run_id_and_default_code():
    set_run_id("run-1")
    record = logging.LogRecord("test", logging.WARNING, __file__, 1, "message", None, None)
    assert RunContextFilter().filter(record)
    assert record.run_id == "run-1"
    assert record.diagnostic_code == "-"


def test_diagnostics_logged_with_code(capsys):
    configure_logging(level=logging.WARNING)
    set_run_id("run-2")

    DiagnosticsCollector(logging.getLogger("citeproc_crosswalk.test")).warn(
        "unsplit-name", "Name Prince not split", field="author", value="Prince"
    )

    err = capsys.readouterr().err
    assert "run_id=run-2" in err
    assert "code=unsplit-name" in err
    assert "Name Prince not split" in err
