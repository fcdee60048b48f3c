from firstboot_installer.config import InstallerConfig
from firstboot_installer.models import Outcome, PackageContext, SoftwarePackage
from firstboot_installer.pipeline import run_pipeline


class Recorder:
    def __init__(self, step_id, *, outcome=None, exc=None):
        self.step_id = step_id
        self.title = step_id.title()
        self.failure_outcome = Outcome.EXTRACTION_FAILED
        self.outcome = outcome
        self.exc = exc

    def run(self, ctx):
        if self.exc is not None:
            raise self.exc
        if self.outcome is not None:
            ctx.outcome = self.outcome
        return ctx


def _ctx():
    return PackageContext(package=SoftwarePackage(), config=InstallerConfig())


def test_stops_at_first_terminal_outcome():
    steps = [Recorder("one"), Recorder("two", outcome=Outcome.ARCHIVE_MISSING), Recorder("three")]
    result = run_pipeline(ctx=_ctx(), steps=steps)
    assert result.ran_steps == ["one", "two"]
    assert result.ctx.outcome is Outcome.ARCHIVE_MISSING


def test_exception_maps_to_step_failure_outcome(caplog):
    steps = [Recorder("extract", exc=ValueError("bad header")), Recorder("after")]
    result = run_pipeline(ctx=_ctx(), steps=steps)
    assert result.ran_steps == ["extract"]
    assert result.ctx.outcome is Outcome.EXTRACTION_FAILED
    assert result.ctx.error == "bad header"
    assert "Extract failed for software.zip: bad header" in caplog.text


def test_exception_without_message_uses_type_name():
    result = run_pipeline(ctx=_ctx(), steps=[Recorder("x", exc=KeyError())])
    assert result.ctx.error == "KeyError"


def test_outcome_classes():
    assert Outcome.ARCHIVE_MISSING.is_staging_failure
    assert Outcome.NO_EXECUTABLE_FOUND.is_staging_failure
    assert not Outcome.INSTALL_SUCCEEDED.is_staging_failure
    assert Outcome.INSTALL_NONZERO_EXIT.is_install_failure
    assert not Outcome.EXTRACTION_FAILED.is_install_failure
