from core.telemetry.metrics import (
    generate_latest,
    get_dependency_updates_total,
    record_dependency_update,
)


def test_dependency_update_counter(monkeypatch):
    monkeypatch.setenv("METRICS_ENABLED", "1")
    counter = get_dependency_updates_total()
    before = counter.labels("rejected_cycle")._value.get()
    record_dependency_update("rejected_cycle")
    after = counter.labels("rejected_cycle")._value.get()
    assert after == before + 1
    assert b"dependency_updates_total" in generate_latest()


def test_dependency_update_counter_disabled(monkeypatch):
    monkeypatch.setenv("METRICS_ENABLED", "0")
    counter = get_dependency_updates_total()
    before = counter.labels("accepted")._value.get()
    record_dependency_update("accepted")
    assert counter.labels("accepted")._value.get() == before
