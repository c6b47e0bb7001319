from ensemble_lab.observability.metrics import MetricRecorder


def test_metric_record():
    m = MetricRecorder(enabled=True)
    m.record("mushrooms.duplicates_removed", 16)

    assert m.metrics == {"mushrooms.duplicates_removed": 16}


def test_metric_overwrite_keeps_last():
    m = MetricRecorder()
    m.record("rmse", 1.0)
    m.record("rmse", 0.5)

    assert m.metrics["rmse"] == 0.5


def test_metric_disabled():
    m = MetricRecorder(enabled=False)
    m.record("x", 1)

    assert m.metrics == {}
