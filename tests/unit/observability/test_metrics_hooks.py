from prd_kit.observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook


def _exercise(hook: MetricsHook) -> None:
    hook.record_latency("latency", 12.5, labels={"stage": "parse"})
    hook.increment("count")
    hook.increment("count", 2)
    hook.record_gauge("ratio", 0.5)


def test_noop_hook_accepts_every_call() -> None:
    _exercise(NoOpMetricsHook())


def test_in_memory_hook_records_calls() -> None:
    hook = InMemoryMetricsHook()

    _exercise(hook)

    assert [r.kind for r in hook.records] == ["latency", "counter", "counter", "gauge"]
    assert hook.named("latency")[0].labels == {"stage": "parse"}
    assert hook.named("ratio")[0].labels == {}
    assert hook.total("count") == 3
    assert hook.total("missing") == 0
