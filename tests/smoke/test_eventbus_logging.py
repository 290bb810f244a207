# tests/smoke/test_eventbus_logging.py
import json

from fleetctl.apps.bootstrap import init_ctx
from fleetctl.services.eventbus import emit
from fleetctl.services.settings import Settings


def test_emit_event_is_logged(tmp_path):
    settings = Settings.from_sources(env_file=None).with_overrides(home_dir=tmp_path / "home")
    ctx = init_ctx(settings)
    emit(ctx.bus, "demo.started", {"x": 1}, "smoke")

    logfile = tmp_path / "home" / "logs" / "fleetctl.log"
    assert logfile.exists()
    records = [json.loads(line) for line in logfile.read_text(encoding="utf-8").splitlines()]
    demo = [r for r in records if r.get("type") == "demo.started"]
    assert demo and demo[0]["payload"] == {"x": 1}
    assert demo[0]["source"] == "smoke"
